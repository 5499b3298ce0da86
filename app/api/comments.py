"""Routes Commentaires / Comment routes."""

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import ID_MAX, get_current_user, get_payload
from app.database import get_db
from app.schemas.auth import SessionUser
from app.schemas.schedule import CommentResult
from app.services import schedule_service

router = APIRouter()


@router.post("/{schedule_id}/users/{user_id}/comments", response_model=CommentResult)
async def update_comment(
    schedule_id: str,
    user_id: int = Path(ge=0, le=ID_MAX),
    user: SessionUser = Depends(get_current_user),
    payload: dict = Depends(get_payload),
    db: AsyncSession = Depends(get_db),
):
    """Enregistrer un commentaire / Record a comment."""
    comment = await schedule_service.upsert_comment(db, schedule_id, user_id, payload.get("comment"))
    return CommentResult(comment=comment)
