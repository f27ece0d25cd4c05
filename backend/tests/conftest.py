"""Root conftest: shared test configuration."""

import os

# Ensure tests never reach a real database or a production secret
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("HASHING_SECRET", "test-hashing-secret")
os.environ.setdefault("LOG_FORMAT", "text")
