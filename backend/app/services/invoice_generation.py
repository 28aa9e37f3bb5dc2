"""Monthly invoice generation from stored customer billing configuration."""

import calendar
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Set, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.exceptions import InvoiceGenerationError, InvoiceNumberAllocationError
from backend.app.core.settings import get_settings
from backend.app.models.customer import Customer
from backend.app.models.invoice import Invoice
from backend.app.services.invoice_numbers import allocate_invoice_number
from backend.app.services.rates import calculate_daily_rate_total, calculate_invoice_total

logger = logging.getLogger(__name__)

NO_CUSTOMERS_SELECTED = "No active customers selected"
NO_ACTIVE_CUSTOMERS = "No active customers found"
ALL_INVOICES_EXIST = "All invoices already exist for this service month"

# One rebuild after a concurrent run inserts an invoice for the same month
MAX_BATCH_ATTEMPTS = 2


@dataclass
class InvoiceGenerationResult:
    service_month: date
    created: List[Invoice] = field(default_factory=list)
    skipped_customer_ids: List[int] = field(default_factory=list)
    ignored_customer_ids: List[int] = field(default_factory=list)
    message: str = ""

    @property
    def generated(self) -> bool:
        return bool(self.created)

    @property
    def count(self) -> int:
        return len(self.created)


def first_of_month(value: date) -> date:
    return value.replace(day=1)


def calculate_invoice_dates(reference_date: date) -> dict:
    """
    Default dates for a generation run started on ``reference_date``.

    Service month is the reference month, the invoice is dated on the reference
    date, and payment is due on the configured day of the following month.
    """
    settings = get_settings()
    year, month = (reference_date.year + 1, 1) if reference_date.month == 12 else (reference_date.year, reference_date.month + 1)
    due_day = min(settings.payment_due_day, calendar.monthrange(year, month)[1])
    return {
        "service_month": first_of_month(reference_date),
        "invoice_date": reference_date,
        "due_date": date(year, month, due_day),
    }


def build_invoice_snapshot(
    customer: Customer,
    *,
    invoice_number: str,
    service_month: date,
    invoice_date: date,
    due_date: date,
) -> Invoice:
    total = calculate_invoice_total(
        customer.monthly_rate,
        customer.additional_line_1_amount,
        customer.additional_line_2_amount,
        customer.additional_line_3_amount,
        customer.daily_rate,
        customer.daily_rate_days,
    )
    return Invoice(
        customer_id=customer.id,
        invoice_number=invoice_number,
        service_month=service_month,
        invoice_date=invoice_date,
        due_date=due_date,
        customer_name=customer.name,
        customer_address=customer.address,
        customer_city_state_zip=customer.city_state_zip,
        monthly_rate=customer.monthly_rate,
        daily_rate=customer.daily_rate,
        daily_rate_days=customer.daily_rate_days,
        daily_rate_total=calculate_daily_rate_total(customer.daily_rate, customer.daily_rate_days),
        line_1_desc=customer.additional_line_1_desc,
        line_1_amount=customer.additional_line_1_amount,
        line_2_desc=customer.additional_line_2_desc,
        line_2_amount=customer.additional_line_2_amount,
        line_3_desc=customer.additional_line_3_desc,
        line_3_amount=customer.additional_line_3_amount,
        total_amount=total,
        status="draft",
    )


def _build_batch(
    db: Session,
    customers: List[Customer],
    already_invoiced: Set[int],
    *,
    service_month: date,
    invoice_date: date,
    due_date: date,
) -> Tuple[List[Invoice], List[int]]:
    invoices: list[Invoice] = []
    skipped: list[int] = []
    try:
        for customer in customers:
            if customer.id in already_invoiced:
                skipped.append(customer.id)
                continue
            invoice_number = allocate_invoice_number(db, invoice_date.year)
            invoices.append(
                build_invoice_snapshot(
                    customer,
                    invoice_number=invoice_number,
                    service_month=service_month,
                    invoice_date=invoice_date,
                    due_date=due_date,
                )
            )
    except InvoiceNumberAllocationError:
        db.rollback()
        raise
    return invoices, skipped


def _find_invoiced_customer_ids(db: Session, customer_ids: Set[int], service_month: date) -> Set[int]:
    return {
        row.customer_id
        for row in db.query(Invoice.customer_id)
        .filter(Invoice.customer_id.in_(customer_ids), Invoice.service_month == service_month)
        .all()
    }


def generate_invoices(
    db: Session,
    *,
    service_month: date,
    invoice_date: date,
    due_date: date,
    customer_ids: Iterable[int],
) -> InvoiceGenerationResult:
    """
    Create one draft invoice per active customer for ``service_month``.

    Customers that already have an invoice for the month are skipped. Numbers
    are allocated for the invoice date's year inside the same transaction as
    the insert, so a failed batch leaves neither invoices nor used numbers.

    If another run stores an invoice for one of the customers between the
    duplicate check and the commit, the unique (customer, month) constraint
    rejects the batch. The batch is then rebuilt once with that customer
    skipped, so the remaining customers are still invoiced.
    """
    service_month = first_of_month(service_month)
    requested_ids = list(dict.fromkeys(customer_ids))
    result = InvoiceGenerationResult(service_month=service_month)

    if not requested_ids:
        result.message = NO_CUSTOMERS_SELECTED
        return result

    try:
        customers = (
            db.query(Customer)
            .filter(Customer.id.in_(requested_ids), Customer.is_active.is_(True))
            .order_by(Customer.name.asc(), Customer.id.asc())
            .all()
        )
        found_ids = {customer.id for customer in customers}
        already_invoiced = _find_invoiced_customer_ids(db, found_ids, service_month) if customers else set()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Loading customers for %s failed: %s", service_month.isoformat(), exc)
        raise InvoiceGenerationError(str(exc)) from exc

    result.ignored_customer_ids = [customer_id for customer_id in requested_ids if customer_id not in found_ids]
    if not customers:
        result.message = NO_ACTIVE_CUSTOMERS
        return result

    dates = {"service_month": service_month, "invoice_date": invoice_date, "due_date": due_date}
    for attempt in range(MAX_BATCH_ATTEMPTS):
        invoices, result.skipped_customer_ids = _build_batch(db, customers, already_invoiced, **dates)
        if not invoices:
            db.rollback()
            result.message = ALL_INVOICES_EXIST
            return result

        db.add_all(invoices)
        try:
            db.commit()
            break
        except IntegrityError as exc:
            db.rollback()
            if attempt + 1 == MAX_BATCH_ATTEMPTS:
                logger.error("Invoice batch for %s failed: %s", service_month.isoformat(), exc)
                raise InvoiceGenerationError(str(exc)) from exc
            logger.warning("Invoice batch for %s hit an existing invoice, rebuilding: %s", service_month.isoformat(), exc)
            try:
                already_invoiced = _find_invoiced_customer_ids(db, found_ids, service_month)
            except SQLAlchemyError as read_exc:
                db.rollback()
                raise InvoiceGenerationError(str(read_exc)) from read_exc
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Invoice batch for %s failed: %s", service_month.isoformat(), exc)
            raise InvoiceGenerationError(str(exc)) from exc

    for invoice in invoices:
        db.refresh(invoice)
    result.created = invoices
    result.message = f"Generated {len(invoices)} invoice(s)"
    logger.info(
        "Generated %d invoice(s) for %s, skipped %d already invoiced",
        len(invoices),
        service_month.isoformat(),
        len(result.skipped_customer_ids),
    )
    return result
