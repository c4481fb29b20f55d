"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    service_name: str = "product-catalog"
    api_version: str = "1.0.0"
    debug: bool = False

    # Storage (empty = in-memory store)
    database_url: str = ""

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = {
        "env_prefix": "CATALOG_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def uses_database(self) -> bool:
        """Whether products are persisted through SQLAlchemy."""
        return bool(self.database_url)


settings = Settings()
