"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - The upstream API key comes from the environment (API_KEY), never hardcoded
    - get_settings() is cached (lru_cache), one instance per process
    - upstream_base_url never ends with "/"

Design Decisions:
    - pydantic-settings over raw os.environ: type coercion and .env file support
    - Defaults for every non-secret setting so the gateway runs out of the box
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_UPSTREAM_BASE_URL = "https://lereacteur-marvel-api.herokuapp.com"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Upstream search API
    api_key: str = ""
    upstream_base_url: str = DEFAULT_UPSTREAM_BASE_URL
    upstream_timeout_seconds: float = 30.0

    @field_validator("upstream_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 3000

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
