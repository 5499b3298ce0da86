"""Modèle Planning / Schedule model."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


def _new_schedule_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    # Microsecondes : CURRENT_TIMESTAMP SQLite s'arrete a la seconde / SQLite CURRENT_TIMESTAMP stops at seconds
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Schedule(Base):
    """Sondage de planification, racine de l'agregat / Scheduling poll, aggregate root.

    Pas de cascade : la suppression passe par delete_schedule_aggregate.
    No cascade: deletion goes through delete_schedule_aggregate.
    """

    __tablename__ = "schedules"

    schedule_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_schedule_id)
    schedule_name: Mapped[str] = mapped_column(String(255), nullable=False)
    memo: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_by: Mapped[int] = mapped_column(ForeignKey("users.user_id"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, server_default=func.now())

    # Relations
    candidates: Mapped[list["Candidate"]] = relationship(
        back_populates="schedule", order_by="Candidate.display_order"
    )

    def __repr__(self) -> str:
        return f"<Schedule {self.schedule_id} - {self.schedule_name}>"
