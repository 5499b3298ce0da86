"""
Erreurs metier / Domain errors.
Levees par les services, converties en reponses HTTP dans app.main.
"""


class ScheduleError(Exception):
    """Erreur de base du domaine / Base domain error."""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(ScheduleError):
    """Entree invalide ou manquante / Malformed or missing input."""
    status_code = 400


class NotFoundError(ScheduleError):
    """Ressource inexistante / Referenced resource does not exist."""
    status_code = 404


class ConstraintViolation(ScheduleError):
    """Violation de contrainte en base (FK, unicite) / Storage constraint failure."""
    status_code = 409


class Unauthenticated(ScheduleError):
    """Aucune identite resolue / No resolved identity."""
    status_code = 401

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(detail)
