"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - base_url never ends with "/" (locality checks use prefix matching)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://gateway:gateway@db:5432/gateway"
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

    # Instance identity
    base_url: str = "http://localhost"
    site_hostname: str = "localhost"
    site_name: str = "Friendica Social Network"
    admin_email: str = ""
    logo_path: str = "/images/friendica-64.png"

    @field_validator("base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # Site policy (statusnet/config)
    register_closed: bool = False
    block_public: bool = False
    have_ssl: bool = False
    text_limit: int = 200_000

    # Legacy API
    api_version: str = "0.9.7"
    platform_name: str = "Friendica"
    platform_version: str = "2021.03"
    rate_limit_hourly: int = 150
    default_page_count: int = 20
    max_page_count: int = 200
    network_lookup_enabled: bool = True
    network_lookup_timeout_seconds: float = 3.0

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
