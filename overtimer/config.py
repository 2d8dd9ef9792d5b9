"""Process configuration read from the environment (and a ``.env`` file).

Desktop preferences live in :mod:`overtimer.settings`; this module covers
what both entry points need before any window exists: where the
database is, where the HTTP service listens, and how loudly to log.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ── paths ─────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path(
    os.getenv(
        "OVERTIMER_HOME",
        str(Path.home() / "Library" / "Application Support" / "Overtimer"),
    )
)
DB_PATH = APP_SUPPORT_DIR / "timer_sessions.db"

# ── database ──────────────────────────────────────────────────────────

DATABASE_URL = os.getenv("OVERTIMER_DATABASE_URL", f"sqlite:///{DB_PATH}")

# ── HTTP service ──────────────────────────────────────────────────────

API_PREFIX = "/api"
HOST = os.getenv("OVERTIMER_HOST", "127.0.0.1")
PORT = int(os.getenv("OVERTIMER_PORT", "8000"))

# ── logging ───────────────────────────────────────────────────────────

LOG_LEVEL = os.getenv("OVERTIMER_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
