"""Invoice model: a frozen snapshot of a customer's billing at generation time."""

from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String, Text, UniqueConstraint

from backend.app.db.base_class import Base


class Invoice(Base):
    __tablename__ = "invoices"
    __table_args__ = (UniqueConstraint("customer_id", "service_month", name="uq_invoices_customer_service_month"),)

    id = Column(Integer, primary_key=True, index=True)
    invoice_number = Column(String(32), unique=True, nullable=False, index=True)
    # Not a foreign key: invoices outlive the customer row they were built from
    customer_id = Column(Integer, nullable=False, index=True)

    service_month = Column(Date, nullable=False, index=True)
    invoice_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)

    customer_name = Column(String(255), nullable=False)
    customer_address = Column(String(255), nullable=True)
    customer_city_state_zip = Column(String(255), nullable=True)

    monthly_rate = Column(Numeric(10, 2), nullable=False)
    daily_rate = Column(Numeric(10, 2), nullable=True)
    daily_rate_days = Column(Integer, nullable=True)
    daily_rate_total = Column(Numeric(10, 2), nullable=True)
    line_1_desc = Column(String(255), nullable=True)
    line_1_amount = Column(Numeric(10, 2), nullable=True)
    line_2_desc = Column(String(255), nullable=True)
    line_2_amount = Column(Numeric(10, 2), nullable=True)
    line_3_desc = Column(String(255), nullable=True)
    line_3_amount = Column(Numeric(10, 2), nullable=True)

    total_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(String, default="draft", nullable=False, index=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc), nullable=False)
