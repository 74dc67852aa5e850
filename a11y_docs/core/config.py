"""
A11y Docs Service - Application Configuration

Patterns Applied:
- Pydantic Settings with SettingsConfigDict
- Environment variable prefix A11Y_DOCS_ for the service

The remote collection defaults to the e11y-mcp documentation repository.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_REPOSITORY = "vltansky/e11y-mcp"
DEFAULT_BRANCH = "master"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables with A11Y_DOCS_ prefix.
    Example: A11Y_DOCS_PORT=8090, A11Y_DOCS_CACHE_MAX_ENTRIES=500
    """

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8090

    # Application metadata
    service_name: str = "a11y-docs-service"
    version: str = "0.1.0"
    environment: str = "development"

    # Logging configuration
    log_level: str = "INFO"
    log_json: bool = True

    # Remote documentation repository
    index_url: str = (
        f"https://raw.githubusercontent.com/{DEFAULT_REPOSITORY}/{DEFAULT_BRANCH}/docs/index.json"
    )
    raw_base_url: str = f"https://raw.githubusercontent.com/{DEFAULT_REPOSITORY}/{DEFAULT_BRANCH}"
    browse_base_url: str = f"https://github.com/{DEFAULT_REPOSITORY}/blob/{DEFAULT_BRANCH}"
    request_timeout: float = 30.0

    # Content cache: None means unbounded / never expires
    cache_max_entries: int | None = None
    cache_ttl_seconds: float | None = None
    cache_failures: bool = True

    # Tracing configuration
    tracing_enabled: bool = False
    tracing_console_export: bool = True

    model_config = SettingsConfigDict(
        env_prefix="A11Y_DOCS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("index_url", "raw_base_url", "browse_base_url")
    @classmethod
    def _require_http_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"expected an http(s) URL, got {value!r}")
        return value.rstrip("/")


def get_settings() -> Settings:
    """Get application settings instance.

    Returns:
        Settings instance with values from environment
    """
    return Settings()
