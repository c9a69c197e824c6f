"""Runtime settings from the environment (.env is loaded by the entry points)."""

import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

logger = logging.getLogger(__name__)

_DEFAULT_STAGES_PATH = Path.home() / ".netzclock" / "stages.json"


@dataclass(frozen=True)
class Settings:
    stages_path: Path
    tick_seconds: float = 1.0  # Tick cadence; also the crossing window
    http_timeout: float = 10.0
    lang: str = "he"

    @property
    def window(self) -> timedelta:
        return timedelta(seconds=self.tick_seconds)


def _positive_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Non-positive %s=%r, using %s", name, raw, default)
        return default
    return value


def load_settings() -> Settings:
    """Build Settings from NETZCLOCK_* environment variables."""
    stages_path = os.getenv("NETZCLOCK_STAGES_PATH")
    lang = os.getenv("NETZCLOCK_LANG", "he").strip().lower()
    if lang not in ("he", "en"):
        logger.warning("Unsupported NETZCLOCK_LANG=%r, using 'he'", lang)
        lang = "he"
    return Settings(
        stages_path=Path(stages_path).expanduser() if stages_path else _DEFAULT_STAGES_PATH,
        tick_seconds=_positive_float("NETZCLOCK_TICK_SECONDS", 1.0),
        http_timeout=_positive_float("NETZCLOCK_HTTP_TIMEOUT", 10.0),
        lang=lang,
    )
