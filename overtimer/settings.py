"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/Overtimer/settings.json
(or under ``$OVERTIMER_HOME`` when set).

Usage::

    settings = load_settings()
    settings.skin = "midnight"
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields

from .config import APP_SUPPORT_DIR
from .timer.clock import DEFAULT_TARGET_SECONDS, WARNING_THRESHOLD_SECONDS, clamp_custom_time

logger = logging.getLogger(__name__)

SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

_JSON_TYPES = {"int": int, "str": str}


@dataclass
class Settings:
    """Desktop preferences.  Every field has a default."""

    # ── timer ─────────────────────────────────────────────────────────
    target_minutes: int = DEFAULT_TARGET_SECONDS // 60
    target_seconds: int = DEFAULT_TARGET_SECONDS % 60
    warning_seconds: int = WARNING_THRESHOLD_SECONDS
    session_name: str = ""                 # blank → today's date

    # ── history ───────────────────────────────────────────────────────
    server_url: str | None = None          # None → local database
    show_history: bool = False

    # ── window ────────────────────────────────────────────────────────
    skin: str = "classic"
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 560
    window_height: int = 720

    @property
    def target_total_seconds(self) -> int:
        minutes, seconds = clamp_custom_time(self.target_minutes, self.target_seconds)
        return minutes * 60 + seconds


def _accepts(annotation: str, value) -> bool:
    """Check a JSON value against a field annotation such as ``"int | None"``."""
    names = {part.strip() for part in annotation.split("|")}
    if value is None:
        return "None" in names
    if isinstance(value, bool):
        return "bool" in names
    return any(
        isinstance(value, _JSON_TYPES[name]) for name in names if name in _JSON_TYPES
    )


def load_settings() -> Settings:
    """Read settings.json, or return defaults when it is missing or unreadable.

    Values of the wrong type are replaced by the field default.
    """
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            kept = {}
            # keys this version does not know are dropped
            for f in fields(Settings):
                if f.name not in data:
                    continue
                value = data[f.name]
                if _accepts(f.type, value):
                    kept[f.name] = value
                else:
                    logger.warning(
                        "Ignoring setting %s=%r in %s, using the default",
                        f.name, value, SETTINGS_PATH,
                    )
            return Settings(**kept)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
