"""Per-year sequential invoice numbering."""

import logging

from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.exceptions import InvoiceNumberAllocationError
from backend.app.core.settings import get_settings
from backend.app.models.invoice_number_sequence import InvoiceNumberSequence

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO NOTHING
_INSERT_BY_DIALECT = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def format_invoice_number(year: int, sequence: int, prefix: str | None = None) -> str:
    if prefix is None:
        prefix = get_settings().invoice_number_prefix
    return f"{prefix}-{year:04d}-{sequence:03d}"


def ensure_sequence_row(db: Session, year: int) -> None:
    """Create the counter row for ``year`` at zero unless it already exists."""
    insert = _INSERT_BY_DIALECT.get(db.get_bind().dialect.name)
    if insert is None:
        exists = db.query(InvoiceNumberSequence.year).filter(InvoiceNumberSequence.year == year).first()
        if not exists:
            db.add(InvoiceNumberSequence(year=year, last_number=0))
            db.flush()
        return
    db.execute(
        insert(InvoiceNumberSequence)
        .values(year=year, last_number=0)
        .on_conflict_do_nothing(index_elements=[InvoiceNumberSequence.year])
    )


def allocate_invoice_number(db: Session, year: int) -> str:
    """
    Increment the counter for ``year`` and return the formatted invoice number.

    The counter row is created with an insert that ignores conflicts, so two
    callers opening a new year never collide on it. The increment is a single
    UPDATE evaluated by the database, so concurrent callers never read the same
    value. The change is flushed but not committed; the caller's transaction
    decides whether the number is kept.
    """
    try:
        ensure_sequence_row(db, year)
        db.query(InvoiceNumberSequence).filter(InvoiceNumberSequence.year == year).update(
            {InvoiceNumberSequence.last_number: InvoiceNumberSequence.last_number + 1}, synchronize_session=False
        )
        sequence = (
            db.query(InvoiceNumberSequence.last_number)
            .filter(InvoiceNumberSequence.year == year)
            .scalar()
        )
    except SQLAlchemyError as exc:
        logger.error("Invoice number allocation failed for %s: %s", year, exc)
        raise InvoiceNumberAllocationError(f"Failed to generate invoice number: {exc}") from exc
    return format_invoice_number(year, sequence)


def preview_next_invoice_number(db: Session, year: int) -> str:
    """Return the number the next allocation for ``year`` would hand out."""
    last_number = (
        db.query(InvoiceNumberSequence.last_number)
        .filter(InvoiceNumberSequence.year == year)
        .scalar()
    )
    return format_invoice_number(year, (last_number or 0) + 1)
