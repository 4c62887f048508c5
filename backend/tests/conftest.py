"""Root conftest — shared test configuration."""

import os

# Settings are cached on first import; pin test values before that happens
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("JWT_SECRET_KEY", "cityinfo-test-secret")
os.environ.setdefault("LOG_FORMAT", "text")
