"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str | None) -> bool:
    return (value or "").strip().lower() == "true"


# ── PostgreSQL ────────────────────────────────────────────
POSTGRES_URL: str = os.getenv("POSTGRES_URL", "")
POSTGRES_SSLMODE: str = os.getenv("POSTGRES_SSLMODE", "require")

DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "10"))

# Fixed pool timings (seconds)
DB_IDLE_TIMEOUT: int = 30
DB_CONNECT_TIMEOUT: int = 30
DB_MAX_LIFETIME: int = 60

# ── Build / runtime guard ─────────────────────────────────
# Static build steps have no database credentials: every query returns its default.
SKIP_DB: bool = _as_bool(os.getenv("SKIP_DB"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
