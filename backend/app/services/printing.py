"""Print-ready invoice data: line items and display strings."""

from datetime import date
from decimal import Decimal

from backend.app.models.invoice import Invoice
from backend.app.services.rates import CENT

MONTHLY_LINE_DESCRIPTION = "Monthly Care Services"


def format_currency(amount: Decimal | float | int | None) -> str:
    value = Decimal(str(amount or 0)).quantize(CENT)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_date(value: date) -> str:
    return f"{value:%B} {value.day}, {value.year}"


def format_month_year(value: date) -> str:
    return f"{value:%B} {value.year}"


def build_print_lines(invoice: Invoice) -> list[dict]:
    """Printable lines, monthly charge first; extra lines need both a description and an amount."""
    lines = [{"description": MONTHLY_LINE_DESCRIPTION, "amount": invoice.monthly_rate}]
    if invoice.daily_rate_total:
        lines.append(
            {
                "description": f"Daily Care Services ({invoice.daily_rate_days} days @ {format_currency(invoice.daily_rate)})",
                "amount": invoice.daily_rate_total,
            }
        )
    for desc, amount in (
        (invoice.line_1_desc, invoice.line_1_amount),
        (invoice.line_2_desc, invoice.line_2_amount),
        (invoice.line_3_desc, invoice.line_3_amount),
    ):
        if desc and amount:
            lines.append({"description": desc, "amount": amount})
    for line in lines:
        line["amount_display"] = format_currency(line["amount"])
    return lines


def build_print_invoice(invoice: Invoice) -> dict:
    return {
        "invoice": invoice,
        "lines": build_print_lines(invoice),
        "total_display": format_currency(invoice.total_amount),
        "service_month_label": format_month_year(invoice.service_month),
        "invoice_date_label": format_date(invoice.invoice_date),
        "due_date_label": format_date(invoice.due_date),
    }
