"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. ESCOLAR_ENV_FILE environment variable (absolute path to .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / ".git").is_dir():
            return parent
        if parent == Path("/app"):
            return parent

    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. ESCOLAR_ENV_FILE env var (full path)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("ESCOLAR_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Security (MUST be set - app fails without it)
    jwt_secret_key: SecretStr

    # Application
    app_name: str = "ABC Escolar"
    debug: bool = False

    # Database (POSTGRES_ prefix)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: SecretStr = SecretStr("")
    postgres_db: str = "escolar"
    database_url_override: str | None = None

    # API (API_ prefix)
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_cors_origins: str = ""  # Empty = no CORS allowed (secure default)

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _validate_cors_origins(cls, v: Any) -> str:
        """Ensure cors_origins is stored as comma-separated string."""
        if isinstance(v, list):
            return ",".join(v)
        return str(v) if v else ""

    # JWT
    jwt_access_token_expire_hours: int = 8

    # Auth provider
    auth_backend: Literal["local", "supabase"] = "local"
    supabase_url: str = ""
    supabase_service_role_key: SecretStr | None = None
    auth_provider_timeout_seconds: float = 10.0

    # Self-service school registration
    school_registration: Literal["open", "closed"] = "open"

    # Identity provisioning policy
    synthetic_email_domain: str = "abcescolar.com"
    identifier_max_attempts: int = Field(default=5, ge=1)
    password_min_length: int = Field(default=8, ge=1)
    password_min_strength: float = Field(default=60.0, ge=0.0, le=100.0)

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    # Computed properties
    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Construct the database URL from components."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.postgres_user}:"
            f"{self.postgres_password.get_secret_value()}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [o.strip() for o in self.api_cors_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    The required field (jwt_secret_key) must be provided via environment
    variables or .env file.
    """
    return Settings()  # type: ignore[call-arg]  # pydantic-settings loads from env


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
