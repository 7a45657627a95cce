"""Application configuration from environment variables."""

from functools import lru_cache
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Grove Fitness API"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"

    # Database (PostgreSQL)
    database_host: str = "localhost"
    database_port: int = 5432
    database_user: str = "grove"
    database_password: str = ""  # Set in .env - never commit
    database_name: str = "grove"
    database_ssl_mode: str = "disable"

    # Pool (production tuning)
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # CORS: comma-separated list of allowed origins in production
    cors_origins: str = ""

    # Auth
    jwt_secret: str = "change-me"
    jwt_refresh_secret: str = "change-me-too"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 15
    refresh_token_expire_days: int = 30

    # AI coach (Groq completion API)
    groq_api_key: str | None = None
    groq_model: str = "llama-3.3-70b-versatile"

    # Day/week boundaries for streaks and weekly counts
    stats_timezone: str = "UTC"

    @property
    def allowed_origins(self) -> list[str]:
        """Everything in debug, the Expo dev servers in development, CORS_ORIGINS otherwise."""
        if self.debug:
            return ["*"]
        if self.environment == "development":
            return [
                "http://localhost:8081",
                "http://127.0.0.1:8081",
                "http://localhost:19006",
            ]
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def _build_db_url(self, scheme: str = "postgresql", ssl_query: str = "sslmode=require") -> str:
        user = quote_plus(self.database_user)
        password = quote_plus(self.database_password)
        return (
            f"{scheme}://{user}:{password}@{self.database_host}:{self.database_port}"
            f"/{self.database_name}?{ssl_query}"
        )

    @property
    def database_url(self) -> str:
        """Synchronous URL for Alembic and tooling."""
        return self._build_db_url(scheme="postgresql", ssl_query=f"sslmode={self.database_ssl_mode}")

    @property
    def async_database_url(self) -> str:
        """Async URL for FastAPI (asyncpg driver)."""
        ssl = "require" if self.database_ssl_mode != "disable" else "disable"
        return self._build_db_url(scheme="postgresql+asyncpg", ssl_query=f"ssl={ssl}")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
