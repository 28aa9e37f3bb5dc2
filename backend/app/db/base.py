from backend.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all in tests
from backend.app.models.user import User  # noqa: F401
from backend.app.models.customer import Customer  # noqa: F401
from backend.app.models.invoice import Invoice  # noqa: F401
from backend.app.models.invoice_number_sequence import InvoiceNumberSequence  # noqa: F401
from backend.app.models.facility_settings import FacilitySettings  # noqa: F401
