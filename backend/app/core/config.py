from pathlib import Path
import secrets

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]
ENV_FILE = BASE_DIR / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_FILE, env_file_encoding="utf-8", extra="ignore")

    app_env: str = "dev"
    app_secret_key: str | None = None
    auth_access_token_expire_days: int = 14
    log_level: str = "INFO"

    database_url_override: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "DATABASE_URL_OVERRIDE"),
    )
    database_pool_timeout_seconds: int = 10

    postgres_db: str = "stock_watchlist"
    postgres_user: str = "stock_watchlist"
    postgres_password: str = "stock_watchlist"
    postgres_host: str = "localhost"
    postgres_port: int = 5432

    redis_url: str = "redis://localhost:6379/0"

    finnhub_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("FINNHUB_API_KEY", "NEXT_PUBLIC_FINNHUB_API_KEY"),
    )
    finnhub_base_url: str = "https://finnhub.io/api/v1"
    market_data_timeout_seconds: float = 5.0

    recommendation_popular_ttl_seconds: int = 60
    recommendation_personal_ttl_seconds: int = 300
    recommendation_cache_max_entries: int = 1024

    activity_retention_days: int = Field(
        default=90,
        validation_alias=AliasChoices("ACTIVITY_RETENTION_DAYS", "USER_ACTIVITY_RETENTION_DAYS"),
    )

    password_reset_token_ttl_minutes: int = 60
    password_reset_url_base: str = "http://localhost:3000/reset-password"

    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    smtp_timeout_seconds: float = 10.0
    email_from: str | None = None

    cors_allow_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    @model_validator(mode="after")
    def _validate_app_secret_key(self) -> "Settings":
        normalized = (self.app_secret_key or "").strip()
        insecure_placeholders = {
            "change-me",
            "changeme",
            "replace-me",
            "replace-with-strong-random-secret",
        }
        is_prod = self.app_env.lower() in {"prod", "production"}

        if not normalized:
            if is_prod:
                raise ValueError("APP_SECRET_KEY is required in production")
            normalized = secrets.token_urlsafe(48)

        if normalized.lower() in insecure_placeholders:
            if is_prod:
                raise ValueError("APP_SECRET_KEY must be replaced with a strong random secret in production")
            normalized = secrets.token_urlsafe(48)

        if len(normalized) < 32:
            raise ValueError("APP_SECRET_KEY must be at least 32 characters")

        self.app_secret_key = normalized
        return self

    @model_validator(mode="after")
    def _validate_recommendation_cache(self) -> "Settings":
        if self.recommendation_popular_ttl_seconds < 1 or self.recommendation_personal_ttl_seconds < 1:
            raise ValueError("Recommendation cache TTLs must be positive")
        if self.recommendation_cache_max_entries < 1:
            raise ValueError("RECOMMENDATION_CACHE_MAX_ENTRIES must be at least 1")
        return self

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+psycopg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
