"""
Search Public API Client - Configuration

Patterns Applied:
- Pydantic Settings with SettingsConfigDict
- Environment variable prefix ALSEARCH_ for the search client

All values can be overridden via environment variables or a local .env file.
Example: ALSEARCH_BASE_URL=https://api.example.com, ALSEARCH_TTL=1
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables.

    Pattern: Pydantic Settings, one instance per application
    """

    # Remote API
    base_url: str | None = None
    auth_token: str | None = None
    service_name: str = "search"
    api_version: str = "v1"

    # Cache-control hint forwarded on fetch/status requests.
    # 0 asks for revalidation, n > 0 allows a response up to n seconds old.
    ttl: int = 0

    # Transport configuration
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0
    retry_methods: list[str] = ["GET"]

    # Logging configuration, applied only when configure_logging is set.
    # Left to the host application by default.
    configure_logging: bool = False
    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(
        env_prefix="ALSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get client settings instance.

    Returns:
        Settings instance with values from environment
    """
    return Settings()
