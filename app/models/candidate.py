"""Modèle Créneau candidat / Candidate slot model."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Candidate(Base):
    __tablename__ = "candidates"

    candidate_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    schedule_id: Mapped[str] = mapped_column(ForeignKey("schedules.schedule_id"), nullable=False, index=True)
    candidate_name: Mapped[str] = mapped_column(String(255), nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False)  # ordre de saisie / input order

    # Relations
    schedule: Mapped["Schedule"] = relationship(back_populates="candidates")

    def __repr__(self) -> str:
        return f"<Candidate {self.candidate_id} schedule={self.schedule_id} order={self.display_order}>"
