"""Routes Disponibilités / Availability routes."""

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import ID_MAX, get_current_user, get_payload
from app.database import get_db
from app.schemas.auth import SessionUser
from app.schemas.schedule import AvailabilityResult
from app.services import schedule_service

router = APIRouter()


@router.post("/{schedule_id}/users/{user_id}/candidates/{candidate_id}", response_model=AvailabilityResult)
async def update_availability(
    schedule_id: str,
    user_id: int = Path(ge=0, le=ID_MAX),
    candidate_id: int = Path(ge=0, le=ID_MAX),
    user: SessionUser = Depends(get_current_user),
    payload: dict = Depends(get_payload),
    db: AsyncSession = Depends(get_db),
):
    """Enregistrer une disponibilite / Record an availability."""
    value = await schedule_service.upsert_availability(
        db, schedule_id, user_id, candidate_id, payload.get("availability")
    )
    return AvailabilityResult(availability=value)
