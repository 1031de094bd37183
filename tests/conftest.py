"""Root pytest configuration.

Test Structure:
    tests/
    ├── escolar_identity/      # Identity core
    │   ├── unit/              # Fast, isolated tests with mocked collaborators
    │   └── integration/       # Repositories and providers on in-memory SQLite
    └── escolar/               # HTTP API and CLI
        ├── unit/
        └── integration/

Settings are read from config/.env.dev when present. A throwaway JWT
secret is provided otherwise so the application can be imported.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")
elif (CONFIG_DIR / ".env").exists():
    load_dotenv(CONFIG_DIR / ".env")

os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-for-testing-only")
os.environ.setdefault("AUTH_BACKEND", "local")

from escolar_config import clear_settings_cache  # noqa: E402


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that run against an in-memory SQLite database",
    )


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Start the session with fresh settings built from the test env."""
    clear_settings_cache()
    yield
    clear_settings_cache()
