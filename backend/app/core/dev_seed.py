import logging
import os

from sqlalchemy.orm import Session

from backend.app.core.security import get_password_hash
from backend.app.models.facility_settings import FacilitySettings
from backend.app.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_DEV_PASSWORD = "Secret123!"
DEFAULT_DEV_USERS = [
    "staff@test.com",
]
DEFAULT_FACILITY = {
    "name": "Care Facility",
    "address": "123 Main Street",
    "city_state_zip": "Anytown, ST 00000",
    "thank_you_note": "Thank you for your prompt payment.",
}


def ensure_default_dev_data(db: Session) -> None:
    """
    Create a default staff user and the facility settings row for local development.
    Skips execution when running under pytest to avoid altering test expectations.
    """
    if os.getenv("PYTEST_CURRENT_TEST"):
        return

    created = False
    for email in DEFAULT_DEV_USERS:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            continue

        user = User(
            email=email,
            hashed_password=get_password_hash(DEFAULT_DEV_PASSWORD),
            is_active=True,
            is_admin=True,
        )
        db.add(user)
        created = True

    if db.query(FacilitySettings).first() is None:
        db.add(FacilitySettings(**DEFAULT_FACILITY))
        created = True

    if created:
        db.commit()
        logger.info("Seeded default development data")
