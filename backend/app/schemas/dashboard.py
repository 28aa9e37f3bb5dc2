"""Dashboard schemas for the staff landing page."""

from decimal import Decimal

from pydantic import BaseModel


class DashboardSummary(BaseModel):
    total_customers: int
    active_customers: int
    total_invoices: int
    draft_invoices: int
    outstanding_amount: Decimal
