"""Invoice routes: generation, listing, status changes and print data."""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from backend.app.core.exceptions import CareBillError
from backend.app.core.time import today
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_user
from backend.app.models.facility_settings import FacilitySettings
from backend.app.models.invoice import Invoice
from backend.app.models.user import User
from backend.app.schemas.invoice import (
    InvoiceDefaults,
    InvoiceGenerateRequest,
    InvoiceGenerateResponse,
    InvoicePrintBatch,
    InvoiceRead,
    InvoiceStatus,
    InvoiceStatusUpdate,
    InvoiceUpdate,
    NextInvoiceNumber,
)
from backend.app.services.invoice_generation import calculate_invoice_dates, generate_invoices
from backend.app.services.invoice_numbers import preview_next_invoice_number
from backend.app.services.printing import build_print_invoice, format_date, format_month_year

router = APIRouter(prefix="/invoices", tags=["invoices"])


def _get_invoice_or_404(db: Session, invoice_id: int) -> Invoice:
    invoice = db.query(Invoice).filter(Invoice.id == invoice_id).first()
    if not invoice:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found")
    return invoice


@router.get("/", response_model=List[InvoiceRead])
async def list_invoices(
    status: InvoiceStatus | None = None,
    customer_id: int | None = None,
    service_month: date | None = None,
    skip: int = 0,
    limit: int = 100,
    sort_by: str = "service_month",
    sort_order: str = "desc",
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    query = db.query(Invoice)
    if status:
        query = query.filter(Invoice.status == status)
    if customer_id:
        query = query.filter(Invoice.customer_id == customer_id)
    if service_month:
        query = query.filter(Invoice.service_month == service_month.replace(day=1))

    supported_sort_fields = {
        "service_month": Invoice.service_month,
        "invoice_date": Invoice.invoice_date,
        "invoice_number": Invoice.invoice_number,
        "customer_name": Invoice.customer_name,
        "total_amount": Invoice.total_amount,
        "created_at": Invoice.created_at,
    }
    if sort_by not in supported_sort_fields:
        raise HTTPException(status_code=400, detail="Invalid sort_by value")
    sort_order_normalized = (sort_order or "desc").lower()
    if sort_order_normalized not in {"asc", "desc"}:
        raise HTTPException(status_code=400, detail="Invalid sort_order value")
    sort_column = supported_sort_fields[sort_by]
    if sort_order_normalized == "asc":
        order_by_clause = [sort_column.asc(), Invoice.id.asc()]
    else:
        order_by_clause = [sort_column.desc(), Invoice.id.desc()]

    query = query.order_by(*order_by_clause).offset(skip).limit(limit)
    return query.all()


@router.get("/defaults", response_model=InvoiceDefaults)
async def get_generation_defaults(reference_date: date | None = None, current_user: User = Depends(get_current_user)):
    dates = calculate_invoice_dates(reference_date or today())
    return InvoiceDefaults(
        **dates,
        service_month_label=format_month_year(dates["service_month"]),
        invoice_date_label=format_date(dates["invoice_date"]),
        due_date_label=format_date(dates["due_date"]),
    )


@router.get("/next-number", response_model=NextInvoiceNumber)
async def get_next_invoice_number(
    year: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    target_year = year or today().year
    return NextInvoiceNumber(year=target_year, invoice_number=preview_next_invoice_number(db, target_year))


@router.post("/generate", response_model=InvoiceGenerateResponse)
async def generate_monthly_invoices(
    payload: InvoiceGenerateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    defaults = calculate_invoice_dates(today())
    try:
        result = generate_invoices(
            db,
            service_month=payload.service_month or defaults["service_month"],
            invoice_date=payload.invoice_date or defaults["invoice_date"],
            due_date=payload.due_date or defaults["due_date"],
            customer_ids=payload.customer_ids,
        )
    except CareBillError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
    return InvoiceGenerateResponse(
        success=result.generated,
        count=result.count,
        message=result.message,
        service_month=result.service_month,
        invoice_numbers=[invoice.invoice_number for invoice in result.created],
        skipped_customer_ids=result.skipped_customer_ids,
        ignored_customer_ids=result.ignored_customer_ids,
    )


@router.get("/print", response_model=InvoicePrintBatch)
async def get_print_batch(
    ids: str = Query(default=""),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        invoice_ids = [int(part) for part in ids.split(",") if part.strip()]
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid invoice ids")
    if not invoice_ids:
        raise HTTPException(status_code=400, detail="No invoices selected for printing")
    invoices = (
        db.query(Invoice)
        .filter(Invoice.id.in_(invoice_ids))
        .order_by(Invoice.customer_name.asc(), Invoice.id.asc())
        .all()
    )
    facility = db.query(FacilitySettings).order_by(FacilitySettings.id.asc()).first()
    return {"facility": facility, "invoices": [build_print_invoice(invoice) for invoice in invoices]}


@router.get("/{invoice_id}", response_model=InvoiceRead)
async def get_invoice(invoice_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_invoice_or_404(db, invoice_id)


@router.patch("/{invoice_id}", response_model=InvoiceRead)
async def update_invoice(
    invoice_id: int,
    payload: InvoiceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    invoice = _get_invoice_or_404(db, invoice_id)
    update_data = payload.model_dump(exclude_unset=True)
    # status and due_date cannot be cleared; notes can
    for required in ("status", "due_date"):
        if update_data.get(required) is None:
            update_data.pop(required, None)
    for field, value in update_data.items():
        setattr(invoice, field, value)
    db.commit()
    db.refresh(invoice)
    return invoice


@router.put("/{invoice_id}/status", response_model=InvoiceRead)
async def update_invoice_status(
    invoice_id: int,
    payload: InvoiceStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    invoice = _get_invoice_or_404(db, invoice_id)
    invoice.status = payload.status
    db.commit()
    db.refresh(invoice)
    return invoice


@router.delete("/{invoice_id}", response_model=InvoiceRead)
async def delete_invoice(invoice_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    invoice = _get_invoice_or_404(db, invoice_id)
    deleted = InvoiceRead.model_validate(invoice)
    db.delete(invoice)
    db.commit()
    return deleted
