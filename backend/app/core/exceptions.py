"""Domain errors raised by billing services."""


class CareBillError(Exception):
    """Base class for errors surfaced to staff as-is."""
    pass


class InvoiceNumberAllocationError(CareBillError):
    """Raised when the per-year invoice counter cannot be incremented."""
    pass


class InvoiceGenerationError(CareBillError):
    """Raised when a generated invoice batch cannot be persisted."""
    pass
