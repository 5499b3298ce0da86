"""Schémas Planning / Schedule schemas."""

from pydantic import BaseModel


class AvailabilityResult(BaseModel):
    """Valeur enregistree renvoyee au client / Committed value echoed to the client."""
    status: str = "OK"
    availability: int


class CommentResult(BaseModel):
    """Commentaire enregistre renvoye au client / Committed comment echoed to the client."""
    status: str = "OK"
    comment: str
