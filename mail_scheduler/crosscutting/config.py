"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match current behavior

Collaborators:
  - container.py: reads settings to build repositories and clients
  - infrastructure/db/pool.py: statement timeout and pool sizes
  - crosscutting/logger.py: log level and format

Constraints:
  - Lives in the infrastructure layer, NOT in domain/application
  - No business logic, only configuration

Notes:
  - Singleton via lru_cache
  - database_url is optional so the in-memory adapters work without Postgres
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        database_url: PostgreSQL connection string (empty => in-memory adapters)
        app_env: Application environment (development/test/production)
        db_pool_min_size: Minimum pooled connections
        db_pool_max_size: Maximum pooled connections
        db_statement_timeout_ms: Server-side statement timeout
        db_pool_timeout_seconds: Max wait to acquire a pooled connection
        auth_base_url: Base URL of the hosted auth service (GoTrue)
        auth_api_key: Project API key sent as `apikey` header
        auth_timeout_seconds: HTTP timeout for auth calls
        audit_default_limit: Default page size for audit listings (100)
        audit_max_limit: Hard cap for audit listings (500)
        history_default_limit: Default page size for email history
        smtp_probe_timeout_seconds: Socket timeout for SMTP connection probes
        log_level: Logging level
        log_json: Emit JSON logs
    """

    database_url: str = ""

    # Environment
    app_env: str = "development"

    # Database - Connection Pool
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 15000
    db_pool_timeout_seconds: float = 10.0

    # Auth service
    auth_base_url: str = "http://localhost:54321"
    auth_api_key: str = ""
    auth_timeout_seconds: float = 10.0

    # Listing bounds
    audit_default_limit: int = 100
    audit_max_limit: int = 500
    history_default_limit: int = 200

    # SMTP probe
    smtp_probe_timeout_seconds: float = 10.0

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    @field_validator("audit_default_limit", "audit_max_limit", "history_default_limit")
    @classmethod
    def limits_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("listing limits must be greater than 0")
        return v

    @field_validator("db_pool_min_size", "db_pool_max_size")
    @classmethod
    def pool_sizes_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("pool sizes must be greater than 0")
        return v

    @field_validator("auth_timeout_seconds", "smtp_probe_timeout_seconds")
    @classmethod
    def timeouts_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be greater than 0")
        return v

    @model_validator(mode="after")
    def validate_limits(self):
        if self.audit_default_limit > self.audit_max_limit:
            raise ValueError(
                f"audit_default_limit ({self.audit_default_limit}) must not exceed "
                f"audit_max_limit ({self.audit_max_limit})"
            )
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError("db_pool_min_size must not exceed db_pool_max_size")
        return self

    @model_validator(mode="after")
    def validate_production_requirements(self):
        if not self.is_production():
            return self
        if not self.database_url.strip():
            raise ValueError("DATABASE_URL is required in production")
        if not self.auth_api_key.strip():
            raise ValueError("AUTH_API_KEY is required in production")
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in {"test", "testing", "ci"}

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
