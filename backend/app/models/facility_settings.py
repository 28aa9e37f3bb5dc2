"""Billing entity details printed on every invoice."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from backend.app.db.base_class import Base
from backend.app.core.time import utc_now


class FacilitySettings(Base):
    __tablename__ = "facility_settings"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    address = Column(String(255), nullable=False)
    city_state_zip = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    fax = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    website = Column(String(255), nullable=True)
    thank_you_note = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)
