"""
Dépendances d'authentification / Authentication dependencies.
Injectées dans les routes via Depends().

L'identite est resolue ici, une fois par requete, puis passee explicitement au service.
Identity is resolved here once per request, then passed explicitly to the service.
"""

import json

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import settings
from app.exceptions import Unauthenticated
from app.schemas.auth import SessionUser
from app.utils.auth import session_user_from_token

# Plus grand identifiant entier stockable (BIGINT signe) / Largest storable integer id (signed BIGINT)
ID_MAX = 2**63 - 1

security = HTTPBearer(auto_error=False)


async def get_optional_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> SessionUser | None:
    """Cookie de session, sinon header Bearer / Session cookie, else Bearer header."""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token and credentials is not None:
        token = credentials.credentials
    if not token:
        return None
    return session_user_from_token(token)


async def get_current_user(user: SessionUser | None = Depends(get_optional_user)) -> SessionUser:
    """Exiger une identite resolue / Require a resolved identity."""
    if user is None:
        raise Unauthenticated()
    return user


async def get_payload(request: Request) -> dict:
    """Corps JSON ou formulaire, {} si illisible / JSON or form body, {} when unreadable."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        return dict(form)

    body = await request.body()
    if not body:
        return {}
    try:
        data = json.loads(body)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
