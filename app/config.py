"""
Configuration de l'application / Application configuration.
Utilise pydantic-settings pour charger depuis .env ou variables d'environnement.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Schedule Poll"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True

    # Database - SQLite par défaut pour le développement
    # Database - SQLite by default for development
    DATABASE_URL: str = "sqlite+aiosqlite:///./schedule_poll.db"

    # Session (JWT signé dans un cookie) / Session (signed JWT in a cookie)
    SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = "session"
    SESSION_EXPIRE_DAYS: int = 7

    # GitHub OAuth
    GITHUB_CLIENT_ID: str = ""
    GITHUB_CLIENT_SECRET: str = ""
    GITHUB_CALLBACK_URL: str = "http://localhost:8000/auth/github/callback"

    # Rate Limiting
    RATE_LIMIT_LOGIN: str = "5/minute"

    # Valeurs de disponibilité : 0 inconnu, 1 absent, 2 présent
    # Availability values: 0 unknown, 1 absent, 2 present
    AVAILABILITY_MIN: int = 0
    AVAILABILITY_MAX: int = 2

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
