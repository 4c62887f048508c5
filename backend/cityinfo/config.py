"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in deployments)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from cityinfo.core.pagination import DEFAULT_CITIES_PAGE_SIZE, MAX_CITIES_PAGE_SIZE

SERVICE_NAME = "cityinfo-api"
API_VERSION = "2.0.0"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://cityinfo:cityinfo@db:5432/cityinfo"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Paging
    max_cities_page_size: int = MAX_CITIES_PAGE_SIZE
    default_cities_page_size: int = DEFAULT_CITIES_PAGE_SIZE

    # Bearer tokens
    jwt_secret_key: str = "change-me-cityinfo-development-secret"
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "https://localhost:7169"
    jwt_audience: str = "cityinfoapi"
    access_token_expire_minutes: int = 60

    # Mail
    mail_to_address: str = "admin@mycompany.com"
    mail_from_address: str = "noreply@mycompany.com"

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
