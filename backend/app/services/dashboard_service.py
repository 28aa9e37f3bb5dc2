"""Landing page counts for staff."""

from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from backend.app.models.customer import Customer
from backend.app.models.invoice import Invoice


def get_dashboard_summary(db: Session) -> dict:
    total_customers = db.query(Customer).count()
    active_customers = db.query(Customer).filter(Customer.is_active.is_(True)).count()
    total_invoices = db.query(Invoice).count()
    draft_invoices = db.query(Invoice).filter(Invoice.status == "draft").count()
    outstanding = (
        db.query(func.coalesce(func.sum(Invoice.total_amount), 0))
        .filter(Invoice.status != "paid")
        .scalar()
    )
    return {
        "total_customers": total_customers,
        "active_customers": active_customers,
        "total_invoices": total_invoices,
        "draft_invoices": draft_invoices,
        "outstanding_amount": Decimal(str(outstanding or 0)).quantize(Decimal("0.01")),
    }
