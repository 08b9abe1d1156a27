"""
Roomadmin configuration.

Settings are read once from the environment (or a .env file) using Pydantic Settings.

Store connection:
-----------------
- SUPABASE_URL: hosted store endpoint
- SUPABASE_ANON_KEY: hosted store access key
- STORE_BACKEND: "remote" (hosted REST store) or "local" (SQLAlchemy store)
- DATABASE_URL: SQLAlchemy URL used by the local backend
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=True,
    )

    LOG_LEVEL: str = "INFO"

    # Hosted store
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None
    STORE_BACKEND: str = "remote"
    STORE_TIMEOUT_SECONDS: float = 10.0

    # Local store
    DATABASE_URL: str = "sqlite:///./data/roomadmin.db"

    # Sessions
    SESSION_TIMEZONE: str = "UTC"
    ROOM_REFRESH_SECONDS: int = 30
    OCCUPANCY_ATOMIC: bool = True

    # Change webhooks
    WEBHOOK_SECRET: Optional[str] = None

    STATUS_MESSAGE_MAX_LENGTH: int = 100
    NOTIFICATION_TTL_SECONDS: int = 5

    @property
    def store_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_ANON_KEY)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
