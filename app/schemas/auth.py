"""
Schémas d'authentification / Authentication schemas.
Identite de session resolue par la couche d'authentification.
"""

from pydantic import BaseModel, ConfigDict


class SessionUser(BaseModel):
    """Identite resolue pour la requete courante / Resolved identity for the current request."""
    model_config = ConfigDict(frozen=True)
    user_id: int
    username: str


class GitHubUser(BaseModel):
    """Profil renvoye par l'API GitHub / Profile returned by the GitHub API."""
    id: int
    login: str
