# /healthlens/config/settings.py

from typing import Annotated, List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", protected_namespaces=()
    )

    # Gemini
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.0-flash"
    gemini_image_model: str = "gemini-2.0-flash-exp"

    # Model call behaviour
    model_timeout_seconds: float = Field(default=60.0, gt=0)
    model_max_retries: int = 0
    model_temperature: float = Field(default=0.2, ge=0, le=2)

    # Deployment
    environment: str = "production"
    api_version: str = "v1"
    workers: int = 1
    log_level: str = "INFO"

    # Security
    api_key: str | None = None

    cors_allowed_origins: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["http://localhost:3000"])

    # ---------------- Validators ---------------- #

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def parse_cors_allowed_origins(cls, v):
        """Accept both a comma-separated string and a list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("model_max_retries")
    @classmethod
    def at_most_one_retry(cls, v: int) -> int:
        if v not in (0, 1):
            raise ValueError("MODEL_MAX_RETRIES must be 0 or 1")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


def validate_environment(settings_obj: Settings) -> Settings:
    """Checks the settings needed to talk to the model endpoint."""
    if settings_obj.environment not in ("development", "test") and not settings_obj.gemini_api_key:
        raise ValueError("GEMINI_API_KEY is required outside development and test")
    return settings_obj


settings = Settings()
