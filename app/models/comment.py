"""Modèle Commentaire / Comment model."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Comment(Base):
    __tablename__ = "comments"

    schedule_id: Mapped[str] = mapped_column(ForeignKey("schedules.schedule_id"), primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.user_id"), primary_key=True)
    comment: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Comment schedule={self.schedule_id} user={self.user_id}>"
