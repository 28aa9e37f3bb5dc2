from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class FacilitySettingsBase(BaseModel):
    name: str
    address: str
    city_state_zip: str
    phone: Optional[str] = None
    fax: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    thank_you_note: Optional[str] = None


class FacilitySettingsRead(FacilitySettingsBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FacilitySettingsUpdate(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    city_state_zip: Optional[str] = None
    phone: Optional[str] = None
    fax: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    thank_you_note: Optional[str] = None
