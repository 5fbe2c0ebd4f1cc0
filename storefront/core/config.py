from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Every value has a demo-friendly default, so the service starts
    without a .env file.

    Storage:
      - STORAGE_URL: SQLAlchemy URL of the key/value store (SQLite by default)
      - STORAGE_KEY_PREFIX: prefix of every persisted key ("stylehive_orders", ...)

    Demo admin credential (placeholder, NOT a security mechanism):
      - ADMIN_EMAIL / ADMIN_PASSWORD

    Checkout collaborators:
      - VERIFICATION_DELAY_SECONDS: simulated receipt check latency
      - VERIFICATION_TIMEOUT_SECONDS: upper bound on one verification call
      - NOTIFIER_BACKEND: "log" (console email) or "smtp" (see email_client)
    """

    PROJECT_NAME: str = "StyleHive Storefront"
    API_V1_STR: str = "/api/v1"

    STORAGE_URL: str = "sqlite:///./storefront.db"
    STORAGE_KEY_PREFIX: str = "stylehive"

    ADMIN_EMAIL: str = "admin@geezshirts.com"
    ADMIN_PASSWORD: str = "admin123"
    ADMIN_NAME: str = "Ge'ez Admin"

    VERIFICATION_DELAY_SECONDS: float = 2.0
    VERIFICATION_TIMEOUT_SECONDS: float = 30.0

    NOTIFIER_BACKEND: Literal["log", "smtp"] = "log"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
