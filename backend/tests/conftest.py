"""Root conftest - shared test configuration."""

import os

# Settings are read at import time by campaign_hub.main; never point tests at Postgres
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("LOG_FORMAT", "text")
