"""
blogapi.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the HTTP surface and the storage gateway.
- Build the storage endpoint string from host/port (or take a full URL).
- Hide secrets from repr/logging (e.g., DB password).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    - Strict env-driven configuration (prefix `BLOG_`)
    - Defaults safe for local dev
    - Single settings object injected across layers
    """

    model_config = SettingsConfigDict(env_prefix="BLOG_", case_sensitive=False)

    # Environment controls toggle behavior like auto-creating the blogs table.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "blogapi"
    log_level: str = "INFO"
    log_json: bool = True

    api_host: str = "localhost"
    api_port: int = 8081

    # Storage
    db_driver: str = "sqlite+aiosqlite"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "mydb"
    db_user: str | None = None
    db_password: str | None = Field(default=None, repr=False)
    # A full URL overrides every other db_* field.
    database_url: str | None = Field(default=None, repr=False)
    db_connect_timeout_seconds: float = 30.0

    # Deadline applied to calls that do not carry their own.
    request_timeout_seconds: float = 10.0

    @property
    def database_endpoint(self) -> str:
        if self.database_url:
            return self.database_url
        if self.db_driver.startswith("sqlite"):
            # File-backed sqlite has no network endpoint; the db name picks the file.
            return f"{self.db_driver}:///./{self.db_name}.db"
        credentials = ""
        if self.db_user:
            credentials = self.db_user
            if self.db_password:
                credentials += f":{self.db_password}"
            credentials += "@"
        return f"{self.db_driver}://{credentials}{self.db_host}:{self.db_port}/{self.db_name}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Only the db_* fields (or database_url) reach the persistence gateway; api_* belong
# to the process entrypoint.
