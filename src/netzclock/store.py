"""Stage definition persistence in a JSON key-value file."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from netzclock.models import StageDefinition
from netzclock.schedule import DEFAULT_STAGES, validate_stages

logger = logging.getLogger(__name__)

STAGES_KEY = "zmanim_stages"


def _read_document(path: Path) -> dict:
    with path.open(encoding="utf-8") as f:
        document = json.load(f)
    if not isinstance(document, dict):
        raise ValueError("Store root must be an object")
    return document


def load_stages(path: Path) -> tuple[StageDefinition, ...]:
    """Read the saved stage list, or the built-in defaults if absent or corrupt."""
    if not path.exists():
        return DEFAULT_STAGES
    try:
        raw = _read_document(path).get(STAGES_KEY)
        if raw is None:
            return DEFAULT_STAGES
        if not isinstance(raw, list):
            raise ValueError(f"{STAGES_KEY} must be a list")
        return validate_stages(StageDefinition.from_dict(item) for item in raw)
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.warning("Failed to load stages from %s, using defaults: %s", path, e)
        return DEFAULT_STAGES


def save_stages(path: Path, stages: Iterable[StageDefinition]) -> None:
    """Write the stage list under STAGES_KEY, keeping any other keys in the file."""
    document: dict = {}
    if path.exists():
        try:
            document = _read_document(path)
        except (OSError, ValueError) as e:
            logger.warning("Overwriting unreadable store %s: %s", path, e)
    document[STAGES_KEY] = [stage.to_dict() for stage in stages]
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8")
    except OSError as e:
        logger.error("Failed to save stages to %s: %s", path, e)
