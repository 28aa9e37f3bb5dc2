"""Customer schemas for CareBill."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from backend.app.services.customers import compose_full_name


class CustomerBase(BaseModel):
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    responsible_first_name: Optional[str] = None
    responsible_middle_name: Optional[str] = None
    responsible_last_name: Optional[str] = None
    address: Optional[str] = None
    city_state_zip: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool = True

    monthly_rate: Decimal = Field(ge=0)
    daily_rate: Optional[Decimal] = Field(default=None, ge=0)
    daily_rate_days: Optional[int] = Field(default=None, ge=0)
    additional_line_1_desc: Optional[str] = None
    additional_line_1_amount: Optional[Decimal] = None
    additional_line_2_desc: Optional[str] = None
    additional_line_2_amount: Optional[Decimal] = None
    additional_line_3_desc: Optional[str] = None
    additional_line_3_amount: Optional[Decimal] = None


class CustomerCreate(CustomerBase):
    name: Optional[str] = None

    @model_validator(mode="after")
    def fill_name(self):
        if not (self.name and self.name.strip()):
            composed = compose_full_name(self.first_name, self.middle_name, self.last_name)
            if not composed:
                raise ValueError("name or first_name/last_name is required")
            self.name = composed
        return self


class CustomerUpdate(BaseModel):
    name: Optional[str] = None
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    responsible_first_name: Optional[str] = None
    responsible_middle_name: Optional[str] = None
    responsible_last_name: Optional[str] = None
    address: Optional[str] = None
    city_state_zip: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None

    monthly_rate: Optional[Decimal] = Field(default=None, ge=0)
    daily_rate: Optional[Decimal] = Field(default=None, ge=0)
    daily_rate_days: Optional[int] = Field(default=None, ge=0)
    additional_line_1_desc: Optional[str] = None
    additional_line_1_amount: Optional[Decimal] = None
    additional_line_2_desc: Optional[str] = None
    additional_line_2_amount: Optional[Decimal] = None
    additional_line_3_desc: Optional[str] = None
    additional_line_3_amount: Optional[Decimal] = None


class CustomerRead(CustomerBase):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CustomerActiveUpdate(BaseModel):
    is_active: bool


class CustomerNameUpdate(BaseModel):
    first_name: str = Field(min_length=1)
    middle_name: Optional[str] = None
    last_name: str = Field(min_length=1)


class CustomerNameSuggestion(BaseModel):
    id: int
    name: str
    first_name: str
    middle_name: str
    last_name: str
    has_split_name: bool
