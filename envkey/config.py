"""
Configuration management using pydantic-settings.
"""
from pathlib import Path
from functools import lru_cache

from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).parent


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Remote cursor store (MongoDB)
    db_username: str = ""
    db_password: str = ""
    db_name: str = "defaultDbName"
    db_cluster: str = "defaultClusterName"
    db_collection: str = "fileIndex"

    # Connection retry: delay after attempt k is k * backoff
    db_connect_attempts: int = 5
    db_connect_backoff_seconds: float = 1.0
    db_server_selection_timeout_ms: int = 5000

    # File cursor store, empty means alongside the package
    env_cache_dir: str = ""

    # Backend used when the caller does not pick one
    env_key_storage: str = "DATABASE"

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Rotation candidates live in the same .env

    @property
    def has_db_credentials(self) -> bool:
        return bool(self.db_username and self.db_password and self.db_name)

    @property
    def cache_dir(self) -> Path:
        """Directory holding File cursors."""
        if self.env_cache_dir:
            return Path(self.env_cache_dir)
        return PACKAGE_DIR


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience access
settings = get_settings()
