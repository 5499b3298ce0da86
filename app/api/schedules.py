"""Routes Plannings / Schedule routes."""

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.exceptions import ValidationError
from app.schemas.auth import SessionUser
from app.services import schedule_service
from app.services.page_renderer import PageRenderer

router = APIRouter()


@router.get("/new", response_class=HTMLResponse)
async def new_schedule_form(user: SessionUser = Depends(get_current_user)):
    """Formulaire de creation / Creation form."""
    return PageRenderer.new_schedule(user)


@router.post("")
async def create_schedule(
    schedule_name: str = Form("", alias="scheduleName"),
    memo: str = Form(""),
    candidates: str = Form(""),
    user: SessionUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Créer un planning puis rediriger / Create a schedule then redirect."""
    try:
        schedule_id = await schedule_service.create_schedule(db, schedule_name, memo, candidates, user)
    except ValidationError as exc:
        return HTMLResponse(PageRenderer.new_schedule(user, exc.detail), status_code=exc.status_code)
    return RedirectResponse(f"/schedules/{schedule_id}", status_code=302)


@router.get("/{schedule_id}", response_class=HTMLResponse)
async def show_schedule(
    schedule_id: str,
    user: SessionUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Afficher le planning / Show the schedule."""
    view = await schedule_service.get_schedule_view(db, schedule_id, viewer=user)
    return PageRenderer.schedule(view, user)
