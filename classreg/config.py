"""Application configuration via environment variables."""
import pytz
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment.

    DATABASE_URL, STRIPE_SECRET_KEY and PUBLIC_BASE_URL have no defaults:
    a missing value fails at startup instead of producing broken redirect URLs.
    """

    DATABASE_URL: str
    STRIPE_SECRET_KEY: str
    PUBLIC_BASE_URL: str
    CORS_ORIGINS: str = "http://localhost:3000"
    SITE_TIMEZONE: str = "America/Detroit"
    LOG_LEVEL: str = "INFO"

    @field_validator("DATABASE_URL", "STRIPE_SECRET_KEY")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("PUBLIC_BASE_URL")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("PUBLIC_BASE_URL must be an absolute http(s) URL")
        return v.rstrip("/")

    @field_validator("SITE_TIMEZONE")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            pytz.timezone(v)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown timezone: {v}")
        return v

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()

