"""
Utilitaires d'authentification / Authentication utilities.
Gestion des tokens de session JWT / Session JWT token management.
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from app.config import settings
from app.schemas.auth import SessionUser


def create_session_token(user_id: int, username: str) -> str:
    """Créer un token de session JWT / Create a JWT session token."""
    expire = datetime.now(timezone.utc) + timedelta(days=settings.SESSION_EXPIRE_DAYS)
    payload = {"sub": str(user_id), "name": username, "type": "session", "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict | None:
    """Décoder un token JWT / Decode a JWT token. Returns None if invalid."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


def session_user_from_token(token: str) -> SessionUser | None:
    """Identite portee par un token de session / Identity carried by a session token."""
    payload = decode_token(token)
    if payload is None or payload.get("type") != "session":
        return None
    try:
        return SessionUser(user_id=int(payload["sub"]), username=payload["name"])
    except (KeyError, TypeError, ValueError):
        return None
