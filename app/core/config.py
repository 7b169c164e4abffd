from __future__ import annotations

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.errors import ConfigError

VERSION = "1.0.0"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    ``PORT`` and ``ENV`` have no defaults: the service refuses to start
    without them.
    """

    # Web server
    PORT: int
    ENV: str = Field(min_length=1)
    KEEP_ALIVE_TIMEOUT: int = 60
    CORS_ALLOWED_ORIGINS: list[str] = ["*"]

    # Request bodies
    MAX_BODY_BYTES: int = 1_048_576

    LOG_LEVEL: str = "info"

    # Log file output and rotation
    LOG_TO_FILE: bool = False
    LOG_FILE_PATH: str = "logs/app.log"
    LOG_ROTATION_POLICY: str = "time"  # "time" or "size"
    LOG_ROTATION_WHEN: str = "D"  # TimedRotatingFileHandler
    LOG_ROTATION_INTERVAL: int = 1
    LOG_BACKUP_COUNT: int = 7
    LOG_MAX_BYTES: int = 10 * 1024 * 1024  # RotatingFileHandler

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


def _describe(error: dict) -> str:
    name = ".".join(str(part) for part in error["loc"]) or "settings"
    if error["type"] == "missing":
        return f"missing required environment variable {name}"
    if error["type"] == "string_too_short":
        return f"environment variable {name} must not be empty"
    return f"invalid environment variable {name}: {error['msg']}"


def load_settings() -> Settings:
    """Build settings, turning validation failures into a ``ConfigError``."""
    try:
        return Settings()
    except ValidationError as exc:
        problems = "; ".join(_describe(err) for err in exc.errors())
        raise ConfigError(f"error reading environment variables: {problems}") from exc


settings = load_settings()
