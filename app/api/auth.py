"""
Routes d'authentification / Authentication routes.
Login GitHub OAuth, logout, page de connexion.
"""

import secrets

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_optional_user
from app.config import settings
from app.database import get_db
from app.exceptions import Unauthenticated
from app.rate_limit import limiter
from app.schemas.auth import SessionUser
from app.services.github_oauth import authorize_url, fetch_github_user
from app.services.page_renderer import PageRenderer
from app.services.user_service import upsert_user
from app.utils.auth import create_session_token

router = APIRouter()

OAUTH_STATE_COOKIE = "oauth_state"
OAUTH_STATE_MAX_AGE = 600  # secondes / seconds


@router.get("/login", response_class=HTMLResponse)
async def login_page(user: SessionUser | None = Depends(get_optional_user)):
    """Page de connexion / Login page."""
    return PageRenderer.login(user)


@router.get("/logout")
async def logout():
    """Deconnexion / Logout."""
    response = RedirectResponse("/", status_code=302)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get("/auth/github")
async def github_login():
    """Rediriger vers GitHub / Redirect to GitHub."""
    state = secrets.token_urlsafe(16)
    response = RedirectResponse(authorize_url(state), status_code=302)
    response.set_cookie(
        OAUTH_STATE_COOKIE, state, max_age=OAUTH_STATE_MAX_AGE, httponly=True, samesite="lax",
    )
    return response


@router.get("/auth/github/callback")
@limiter.limit(settings.RATE_LIMIT_LOGIN)
async def github_callback(
    request: Request,
    code: str = "",
    state: str = "",
    db: AsyncSession = Depends(get_db),
):
    """Retour OAuth : upsert utilisateur + cookie de session / OAuth return: user upsert + session cookie."""
    expected_state = request.cookies.get(OAUTH_STATE_COOKIE)
    if not code or not expected_state or not secrets.compare_digest(state, expected_state):
        raise Unauthenticated("Invalid OAuth state")

    github_user = await fetch_github_user(code)
    await upsert_user(db, github_user.id, github_user.login)

    response = RedirectResponse("/", status_code=302)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        create_session_token(github_user.id, github_user.login),
        max_age=settings.SESSION_EXPIRE_DAYS * 24 * 3600,
        httponly=True,
        samesite="lax",
        secure=not settings.DEBUG,
    )
    response.delete_cookie(OAUTH_STATE_COOKIE)
    return response
