"""Rate calculation for monthly resident invoices."""

from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def _to_decimal(value: Decimal | float | int | None) -> Decimal:
    if value is None:
        return ZERO
    return Decimal(str(value))


def calculate_daily_rate_total(daily_rate: Decimal | float | None, daily_rate_days: int | None) -> Decimal | None:
    """Return daily_rate x days rounded to cents, or None unless both are positive."""
    rate = _to_decimal(daily_rate)
    days = _to_decimal(daily_rate_days)
    if rate <= 0 or days <= 0:
        return None
    return (rate * days).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_invoice_total(
    monthly_rate: Decimal | float,
    line_1_amount: Decimal | float | None = None,
    line_2_amount: Decimal | float | None = None,
    line_3_amount: Decimal | float | None = None,
    daily_rate: Decimal | float | None = None,
    daily_rate_days: int | None = None,
) -> Decimal:
    daily_total = calculate_daily_rate_total(daily_rate, daily_rate_days) or ZERO
    total = (
        _to_decimal(monthly_rate)
        + daily_total
        + _to_decimal(line_1_amount)
        + _to_decimal(line_2_amount)
        + _to_decimal(line_3_amount)
    )
    return total.quantize(CENT, rounding=ROUND_HALF_UP)
