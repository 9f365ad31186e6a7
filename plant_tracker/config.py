"""Application settings loaded from environment variables via pydantic-settings."""

from enum import StrEnum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageBackend(StrEnum):
    file = "file"
    redis = "redis"
    memory = "memory"


class LogFormat(StrEnum):
    json = "json"
    console = "console"


class Settings(BaseSettings):
    """Central configuration — all values sourced from env vars or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PLANT_TRACKER_",
        case_sensitive=False,
    )

    # ── Storage ─────────────────────────────────────────────────────────────
    storage_backend: StorageBackend = StorageBackend.file
    storage_path: str = "plants.json"
    redis_url: str = "redis://localhost:6379/0"
    storage_key: str = "plants"

    # ── Plant defaults ──────────────────────────────────────────────────────
    default_image: str = "/placeholder.svg?height=100&width=100"

    # ── Notifications ───────────────────────────────────────────────────────
    notification_history_size: int = 50

    # ── Simulated sensor ────────────────────────────────────────────────────
    moisture_sensor_seed: int | None = None

    # ── Observability ───────────────────────────────────────────────────────
    log_level: str = "info"
    log_format: LogFormat = LogFormat.json

    # ── Server ──────────────────────────────────────────────────────────────
    host: str = "127.0.0.1"
    port: int = 8000


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance (cached after first call)."""
    return Settings()
