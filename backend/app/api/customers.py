"""Customer (resident) endpoints for CareBill."""

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.crud.crud_customer import customer_crud
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_user
from backend.app.models.customer import Customer
from backend.app.models.invoice import Invoice
from backend.app.models.user import User
from backend.app.schemas.customer import (
    CustomerActiveUpdate,
    CustomerCreate,
    CustomerNameSuggestion,
    CustomerNameUpdate,
    CustomerRead,
    CustomerUpdate,
)
from backend.app.schemas.invoice import InvoiceRead
from backend.app.services.customers import split_full_name

router = APIRouter(prefix="/customers", tags=["customers"])


def _get_customer_or_404(db: Session, customer_id: int) -> Customer:
    customer = customer_crud.get(db, customer_id=customer_id)
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return customer


@router.post("/", response_model=CustomerRead, status_code=status.HTTP_201_CREATED)
async def create_customer(customer_in: CustomerCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return customer_crud.create(db, obj_in=customer_in)


@router.get("/", response_model=List[CustomerRead])
async def list_customers(
    filter: Literal["all", "active", "inactive"] = "all",
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return customer_crud.get_multi(db, active=filter, search=search)


@router.get("/active", response_model=List[CustomerRead])
async def list_active_customers_for_invoicing(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return customer_crud.get_multi(db, active="active")


@router.get("/name-review", response_model=List[CustomerNameSuggestion])
async def review_customer_names(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    suggestions = []
    for customer in customer_crud.get_multi(db):
        has_split_name = bool(customer.first_name and customer.last_name)
        if has_split_name:
            first, middle, last = customer.first_name, customer.middle_name or "", customer.last_name
        else:
            first, middle, last = split_full_name(customer.name)
        suggestions.append(
            CustomerNameSuggestion(
                id=customer.id,
                name=customer.name,
                first_name=first,
                middle_name=middle,
                last_name=last,
                has_split_name=has_split_name,
            )
        )
    return suggestions


@router.get("/{customer_id}", response_model=CustomerRead)
async def get_customer(customer_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_customer_or_404(db, customer_id)


@router.patch("/{customer_id}", response_model=CustomerRead)
async def update_customer(
    customer_id: int,
    payload: CustomerUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    customer = _get_customer_or_404(db, customer_id)
    return customer_crud.update(db, db_obj=customer, obj_in=payload)


@router.post("/{customer_id}/toggle-active", response_model=CustomerRead)
async def toggle_customer_active(
    customer_id: int,
    payload: CustomerActiveUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    customer = _get_customer_or_404(db, customer_id)
    return customer_crud.set_active(db, db_obj=customer, is_active=payload.is_active)


@router.put("/{customer_id}/name", response_model=CustomerRead)
async def update_customer_name(
    customer_id: int,
    payload: CustomerNameUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    customer = _get_customer_or_404(db, customer_id)
    return customer_crud.update_name_fields(
        db,
        db_obj=customer,
        first_name=payload.first_name,
        middle_name=payload.middle_name,
        last_name=payload.last_name,
    )


@router.delete("/{customer_id}", response_model=CustomerRead)
async def delete_customer(customer_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    customer = _get_customer_or_404(db, customer_id)
    deleted = CustomerRead.model_validate(customer)
    customer_crud.delete(db, db_obj=customer)
    return deleted


@router.get("/{customer_id}/invoices", response_model=List[InvoiceRead])
async def list_customer_invoices(customer_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    _get_customer_or_404(db, customer_id)
    return (
        db.query(Invoice)
        .filter(Invoice.customer_id == customer_id)
        .order_by(Invoice.service_month.desc(), Invoice.id.desc())
        .all()
    )
