"""Modèle Disponibilité / Availability model."""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Availability(Base):
    """Reponse d'un utilisateur pour un creneau / One user's answer for one candidate.

    Cle composite (candidate_id, user_id) : candidate_id determine deja schedule_id.
    Composite key (candidate_id, user_id): candidate_id already determines schedule_id.
    """

    __tablename__ = "availabilities"

    candidate_id: Mapped[int] = mapped_column(ForeignKey("candidates.candidate_id"), primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.user_id"), primary_key=True)
    schedule_id: Mapped[str] = mapped_column(ForeignKey("schedules.schedule_id"), nullable=False, index=True)
    availability: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Availability candidate={self.candidate_id} user={self.user_id} value={self.availability}>"
