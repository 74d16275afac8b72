from typing import List, Union

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_FALLBACK_SENDER = "PacNW Studio <onboarding@resend.dev>"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Configuration
    api_title: str = Field(default="PacNW Studio API")
    api_version: str = Field(default="1.0.0")
    port: int = Field(default=8000)
    log_level: str = Field(default="")

    # Environment ("production" gates debug payloads and dev email logging)
    environment: str = Field(default="development")

    # Transactional email provider (Resend-compatible HTTP API)
    email_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("EMAIL_API_KEY", "RESEND_API_KEY"),
    )
    email_api_url: str = Field(default="https://api.resend.com/emails")
    email_timeout_seconds: float = Field(default=10.0, gt=0)

    # Contact form routing
    contact_to_email: str = Field(default="")
    contact_from_email: str = Field(default=DEFAULT_FALLBACK_SENDER)
    contact_fallback_from_email: str = Field(default=DEFAULT_FALLBACK_SENDER)
    studio_name: str = Field(default="PacNW Studio")

    # Contact anti-abuse
    contact_min_fill_ms: int = Field(default=2500, ge=0)
    contact_short_window_ms: int = Field(default=60_000, gt=0)
    contact_short_window_max: int = Field(default=5, gt=0)
    contact_long_window_ms: int = Field(default=60 * 60_000, gt=0)
    contact_long_window_max: int = Field(default=20, gt=0)
    rate_limit_sweep_threshold: int = Field(default=10_000, gt=0)

    # CORS
    cors_origins: Union[str, List[str]] = Field(default="http://localhost:3000")
    cors_allow_credentials: bool = Field(default=False)

    # App-wide rate limiting (slowapi, per client per minute)
    rate_limit_requests: int = Field(default=100)

    # Sentry, disabled if empty
    sentry_dsn: str = Field(default="")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, v):
        if isinstance(v, str):
            return v.strip().lower() or "development"
        return v

    @field_validator("contact_from_email", mode="before")
    @classmethod
    def default_blank_sender(cls, v):
        # An empty CONTACT_FROM_EMAIL means "use the known-good sender"
        if isinstance(v, str) and not v.strip():
            return DEFAULT_FALLBACK_SENDER
        return v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            # Handle comma-separated string
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("cors_origins", mode="after")
    @classmethod
    def ensure_cors_is_list(cls, v):
        if isinstance(v, str):
            return [v]
        return v


settings = Settings()
