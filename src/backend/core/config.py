"""
Application configuration using Pydantic Settings.

All configuration is loaded from environment variables or a local .env file.
"""

import json
from functools import lru_cache
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Likert Forms"
    APP_ENV: str = "development"
    DEBUG: bool = False
    SECRET_KEY: str = ""  # Required - loaded from environment

    # Respondent fingerprinting
    # Falls back to SECRET_KEY so a single secret is enough for local setups.
    # Changing either value re-keys every fingerprint and disables duplicate
    # detection against existing respondents.
    FINGERPRINT_SALT: str | None = None

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./likert_forms.db"
    DATABASE_ECHO: bool = False
    SQLITE_BUSY_TIMEOUT_SECONDS: float = 30.0

    # Field-Level PII Encryption
    # Base64-encoded 256-bit AES key for encrypting respondent name and email
    # Generate with: python -c "from core.encryption import generate_encryption_key; print(generate_encryption_key())"
    FIELD_ENCRYPTION_KEY: str | None = None

    # Admin access (stand-in until the admin auth service is wired in)
    ADMIN_API_KEY: str = "change-me"

    # CORS - stored as comma-separated string to avoid pydantic-settings JSON parsing issues
    CORS_ORIGINS: str = "http://localhost:5173"

    # Submissions
    SUBMISSION_MAX_ATTEMPTS: int = 3
    MAX_NAME_LENGTH: int = 255
    MAX_EMAIL_LENGTH: int = 254
    MAX_ROLE_LENGTH: int = 100
    MAX_ANSWER_TEXT_LENGTH: int = 10000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    @field_validator("SECRET_KEY")
    @classmethod
    def validate_required_secrets(cls, v: str, info: Any) -> str:
        """Validate that required secrets are set."""
        if not v:
            raise ValueError(f"{info.field_name} must be set in environment")
        return v

    @field_validator("SUBMISSION_MAX_ATTEMPTS")
    @classmethod
    def validate_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("SUBMISSION_MAX_ATTEMPTS must be at least 1")
        return v

    @property
    def fingerprint_salt(self) -> str:
        """Salt mixed into every respondent fingerprint."""
        return self.FINGERPRINT_SALT or self.SECRET_KEY

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        try:
            return json.loads(self.CORS_ORIGINS)
        except json.JSONDecodeError:
            return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
