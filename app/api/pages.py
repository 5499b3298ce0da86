"""Page d'accueil / Home page."""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_optional_user
from app.database import get_db
from app.schemas.auth import SessionUser
from app.services.page_renderer import PageRenderer
from app.services.schedule_service import list_schedules_created_by

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def index(
    user: SessionUser | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """Accueil : plannings de l'utilisateur / Home: the user's schedules."""
    schedules = await list_schedules_created_by(db, user.user_id) if user else []
    return PageRenderer.index(user, schedules)
