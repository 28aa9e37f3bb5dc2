"""CRUD operations for customers."""

from typing import List, Literal, Optional

from sqlalchemy.orm import Session

from backend.app.models.customer import Customer
from backend.app.schemas.customer import CustomerCreate, CustomerUpdate
from backend.app.services.customers import compose_full_name

ActiveFilter = Literal["all", "active", "inactive"]
# Columns that cannot be cleared through a partial update
REQUIRED_FIELDS = ("name", "monthly_rate", "is_active")


class CRUDCustomer:
    def create(self, db: Session, *, obj_in: CustomerCreate) -> Customer:
        obj = Customer(**obj_in.model_dump())
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj

    def get(self, db: Session, *, customer_id: int) -> Optional[Customer]:
        return db.query(Customer).filter(Customer.id == customer_id).first()

    def get_multi(self, db: Session, *, active: ActiveFilter = "all", search: Optional[str] = None) -> List[Customer]:
        query = db.query(Customer)
        if active == "active":
            query = query.filter(Customer.is_active.is_(True))
        elif active == "inactive":
            query = query.filter(Customer.is_active.is_(False))
        if search:
            query = query.filter(Customer.name.ilike(f"%{search.strip()}%"))
        return query.order_by(Customer.name.asc(), Customer.id.asc()).all()

    def update(self, db: Session, *, db_obj: Customer, obj_in: CustomerUpdate) -> Customer:
        update_data = obj_in.model_dump(exclude_unset=True)
        for required in REQUIRED_FIELDS:
            if update_data.get(required) is None:
                update_data.pop(required, None)
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def set_active(self, db: Session, *, db_obj: Customer, is_active: bool) -> Customer:
        db_obj.is_active = is_active
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update_name_fields(
        self,
        db: Session,
        *,
        db_obj: Customer,
        first_name: str,
        middle_name: Optional[str],
        last_name: str,
    ) -> Customer:
        middle = middle_name.strip() if middle_name and middle_name.strip() else None
        db_obj.first_name = first_name.strip()
        db_obj.middle_name = middle
        db_obj.last_name = last_name.strip()
        db_obj.name = compose_full_name(first_name, middle, last_name)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, *, db_obj: Customer) -> Customer:
        # Invoices are left untouched; they carry their own snapshot of the customer
        db.delete(db_obj)
        db.commit()
        return db_obj


customer_crud = CRUDCustomer()
