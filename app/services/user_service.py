"""
Service Utilisateur / User service.
Upsert idempotent a la connexion / Idempotent upsert on login.
"""

import logging

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import upsert_insert
from app.models.user import User

log = logging.getLogger(__name__)


async def upsert_user(db: AsyncSession, user_id: int, username: str) -> None:
    """Creer ou renommer l'utilisateur / Create or rename the user."""
    stmt = upsert_insert(db, User).values(user_id=user_id, username=username)
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id"],
        set_={"username": stmt.excluded.username, "updated_at": func.now()},
    )
    await db.execute(stmt)
    await db.commit()
    log.info("User %s (%s) upserted", user_id, username)
