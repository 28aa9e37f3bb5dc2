"""Resident (customer) model with recurring billing configuration."""

from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String, Text

from backend.app.db.base_class import Base
from backend.app.core.time import utc_now


class Customer(Base):
    __tablename__ = "customers"
    # Ids must never be reused: invoices keep the id of deleted customers
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    first_name = Column(String(100), nullable=True)
    middle_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    responsible_first_name = Column(String(100), nullable=True)
    responsible_middle_name = Column(String(100), nullable=True)
    responsible_last_name = Column(String(100), nullable=True)
    address = Column(String(255), nullable=True)
    city_state_zip = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    monthly_rate = Column(Numeric(10, 2), nullable=False)
    daily_rate = Column(Numeric(10, 2), nullable=True)
    daily_rate_days = Column(Integer, nullable=True)
    additional_line_1_desc = Column(String(255), nullable=True)
    additional_line_1_amount = Column(Numeric(10, 2), nullable=True)
    additional_line_2_desc = Column(String(255), nullable=True)
    additional_line_2_amount = Column(Numeric(10, 2), nullable=True)
    additional_line_3_desc = Column(String(255), nullable=True)
    additional_line_3_amount = Column(Numeric(10, 2), nullable=True)

    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)
