"""Invoice schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from backend.app.schemas.facility_settings import FacilitySettingsRead

InvoiceStatus = Literal["draft", "sent", "paid"]


class InvoiceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_number: str
    customer_id: int
    service_month: date
    invoice_date: date
    due_date: date

    customer_name: str
    customer_address: Optional[str] = None
    customer_city_state_zip: Optional[str] = None

    monthly_rate: Decimal
    daily_rate: Optional[Decimal] = None
    daily_rate_days: Optional[int] = None
    daily_rate_total: Optional[Decimal] = None
    line_1_desc: Optional[str] = None
    line_1_amount: Optional[Decimal] = None
    line_2_desc: Optional[str] = None
    line_2_amount: Optional[Decimal] = None
    line_3_desc: Optional[str] = None
    line_3_amount: Optional[Decimal] = None

    total_amount: Decimal
    status: str
    notes: Optional[str] = None

    created_at: datetime
    updated_at: datetime


class InvoiceUpdate(BaseModel):
    status: Optional[InvoiceStatus] = None
    due_date: Optional[date] = None
    notes: Optional[str] = None


class InvoiceStatusUpdate(BaseModel):
    status: InvoiceStatus


class InvoiceGenerateRequest(BaseModel):
    service_month: Optional[date] = None
    invoice_date: Optional[date] = None
    due_date: Optional[date] = None
    customer_ids: List[int] = []

    @field_validator("service_month")
    @classmethod
    def first_of_month(cls, value: Optional[date]) -> Optional[date]:
        if value is None:
            return value
        return value.replace(day=1)


class InvoiceGenerateResponse(BaseModel):
    success: bool
    count: int
    message: str
    service_month: date
    invoice_numbers: List[str] = []
    skipped_customer_ids: List[int] = []
    ignored_customer_ids: List[int] = []


class InvoiceDefaults(BaseModel):
    service_month: date
    invoice_date: date
    due_date: date
    service_month_label: str
    invoice_date_label: str
    due_date_label: str


class NextInvoiceNumber(BaseModel):
    year: int
    invoice_number: str


class InvoicePrintLine(BaseModel):
    description: str
    amount: Decimal
    amount_display: str


class InvoicePrintRead(BaseModel):
    invoice: InvoiceRead
    lines: List[InvoicePrintLine]
    total_display: str
    service_month_label: str
    invoice_date_label: str
    due_date_label: str


class InvoicePrintBatch(BaseModel):
    facility: Optional[FacilitySettingsRead] = None
    invoices: List[InvoicePrintRead]
