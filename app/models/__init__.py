"""
Modèles SQLAlchemy / SQLAlchemy models.
Importer tous les modèles ici pour qu'ils soient enregistrés sur Base.metadata.
Import all models here so they are registered on Base.metadata.
"""

from app.models.user import User
from app.models.schedule import Schedule
from app.models.candidate import Candidate
from app.models.availability import Availability
from app.models.comment import Comment

__all__ = [
    "User",
    "Schedule",
    "Candidate",
    "Availability",
    "Comment",
]
