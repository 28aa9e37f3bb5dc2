"""Facility settings endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.dependencies.auth import get_current_user
from backend.app.db.session import get_db
from backend.app.models.facility_settings import FacilitySettings
from backend.app.models.user import User
from backend.app.schemas.facility_settings import FacilitySettingsRead, FacilitySettingsUpdate

router = APIRouter(prefix="/settings", tags=["settings"])


def _get_facility_settings(db: Session) -> FacilitySettings:
    settings = db.query(FacilitySettings).order_by(FacilitySettings.id.asc()).first()
    if not settings:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Facility settings not found")
    return settings


@router.get("/facility", response_model=FacilitySettingsRead)
async def get_facility_settings(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_facility_settings(db)


@router.put("/facility", response_model=FacilitySettingsRead)
async def update_facility_settings(
    payload: FacilitySettingsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    settings = _get_facility_settings(db)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None and field in ("name", "address", "city_state_zip"):
            continue
        setattr(settings, field, value)
    db.commit()
    db.refresh(settings)
    return settings
