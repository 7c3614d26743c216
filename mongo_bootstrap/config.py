"""
Bootstrap configuration loaded from environment variables.
"""
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mongo_bootstrap.database.databases import admin_db, service_db


class Settings(BaseSettings):
    """Bootstrap settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_server_selection_timeout_ms: int = 5000

    # Admin user (used by tools like mongo-express)
    admin_username: str = admin_db.DEFAULT_USERNAME
    admin_password: str = "password"

    # Application user for the service database
    service_db_name: str = service_db.DEFAULT_DB_NAME
    service_username: str = service_db.DEFAULT_USERNAME
    service_password: str = "password"
    service_role: str = service_db.DEFAULT_ROLE
    service_collections: list[str] = Field(default_factory=lambda: [service_db.Collections.USER])

    # Bootstrap behaviour
    bootstrap_plan_file: Optional[str] = None
    bootstrap_conflict_policy: Literal["as_no_op", "fatal"] = "as_no_op"

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
