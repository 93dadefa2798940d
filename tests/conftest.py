"""Root pytest configuration for test discovery and auto-skip behavior.

All tests stay visible to test explorers; tests that need Docker are
auto-skipped unless explicitly enabled via environment variables or
pytest options.

Test Structure:
    tests/
    ├── users_auth/            # Password hashing and JWT primitives
    ├── users_config/          # Settings loading
    ├── users_identity/        # Identity core
    │   ├── unit/              # Fast, isolated tests with mocked collaborators
    │   └── integration/       # SQLAlchemy repositories and full flows
    ├── users_api/             # HTTP endpoints via httpx + ASGITransport
    └── shared/                # Shared fixtures and utilities

Environment Variables:
    RUN_INTEGRATION=1    Run @pytest.mark.integration tests (PostgreSQL)
    RUN_ALL_TESTS=1      Run all tests (overrides other settings)

Pytest Options:
    --run-integration    Run integration tests
    --run-all            Run all tests
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from users_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")
elif (CONFIG_DIR / ".env").exists():
    load_dotenv(CONFIG_DIR / ".env")

# Settings require a signing secret; provide one when no .env is present
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-for-testing-only")


def _flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run tests marked with @pytest.mark.integration",
    )
    parser.addoption(
        "--run-all",
        action="store_true",
        default=False,
        help="Run all tests regardless of markers",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that need PostgreSQL via Docker (auto-skipped)",
    )


def pytest_collection_modifyitems(config, items):
    """Auto-skip integration tests unless explicitly enabled."""
    if config.getoption("--run-all") or _flag("RUN_ALL_TESTS"):
        return

    if config.getoption("--run-integration") or _flag("RUN_INTEGRATION"):
        return

    skip_integration = pytest.mark.skip(
        reason="Integration test - run with --run-integration or RUN_INTEGRATION=1",
    )

    for item in items:
        # Explicit marker only, not folder name
        item_markers = {mark.name for mark in item.iter_markers()}
        if "integration" in item_markers:
            item.add_marker(skip_integration)


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Ensure every test session starts from freshly loaded settings."""
    clear_settings_cache()
    yield
    clear_settings_cache()
