"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or remote instance
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("BASE_URL", "http://localhost")
os.environ.setdefault("SITE_HOSTNAME", "localhost")
os.environ.setdefault("NETWORK_LOOKUP_ENABLED", "false")
