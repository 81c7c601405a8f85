"""Application configuration loaded via Pydantic settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATA_DIR: Path = Field(default=Path("data"))
    DATA_FILE: Path | None = Field(default=None)
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=5000)

    # bcrypt work factor for admin and user passwords
    BCRYPT_ROUNDS: int = Field(default=10, ge=4, le=31)

    SESSION_TTL_DAYS: int = Field(default=30, ge=1)
    SESSION_SWEEP_INTERVAL_SECONDS: float = Field(default=3600.0, gt=0)

    # First-boot admin; rotate with `vicat-keys admin reset` right after deploy.
    DEFAULT_ADMIN_USERNAME: str = Field(default="Meo73preb")
    DEFAULT_ADMIN_PASSWORD: str = Field(default="1102cuhp@oeM")

    PUBLIC_DIR: Path | None = Field(default=Path("public"))

    VICAT_LOG_LEVEL: str = Field(default="info")
    VICAT_LOG_DIR: Path | None = Field(default=None)

    def data_file_path(self) -> Path:
        """Return the JSON document path, honoring an explicit DATA_FILE."""
        if self.DATA_FILE is not None:
            return self.DATA_FILE
        return self.DATA_DIR / "data.json"


settings = Settings()
config = settings  # Alias used by modules that read settings at call time


__all__ = ["Settings", "settings", "config"]
