"""
Set metadata persisted in set.json.

The metadata file outlives any single compile: the compiler reads it, drops
a legacy "cards" key, and writes every other field back untouched. It is
never derived from the CSV.
"""

import json
import logging
from pathlib import Path
from typing import Any

from setforge.config import JSON_INDENT

logger = logging.getLogger(__name__)

# Legacy layouts stored the card list inside set.json
CARDS_KEY = "cards"


def load_set_metadata(path: Path) -> dict[str, Any]:
    """
    Load set metadata, dropping any "cards" key.

    Returns:
        Metadata dict. Empty if the file is absent, empty, not valid JSON,
        or not a JSON object; the last two are logged as warnings.
    """
    if not path.exists():
        return {}

    # Undecodable bytes become U+FFFD, so a corrupt file fails as bad JSON
    content = path.read_text(encoding="utf-8", errors="replace").strip()
    if not content:
        return {}

    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as e:
        logger.warning("Could not parse existing %s: %s", path.name, e)
        return {}

    if not isinstance(parsed, dict):
        logger.warning("Ignoring %s: expected a JSON object, got %s", path.name, type(parsed).__name__)
        return {}

    parsed.pop(CARDS_KEY, None)
    return parsed


def current_set_number(metadata: dict[str, Any]) -> int | None:
    """The integer setNumber of the metadata, or None if absent or not an integer."""
    value = metadata.get("setNumber")
    if value is None:
        return None

    if isinstance(value, bool) or not isinstance(value, int):
        logger.warning("Ignoring non-integer setNumber: %r", value)
        return None

    return value


def set_title(metadata: dict[str, Any], set_name: str) -> str:
    """Display title: title, then alternateTitle, then the upper-cased set name."""
    return metadata.get("title") or metadata.get("alternateTitle") or set_name.upper()


def dump_set_metadata(metadata: dict[str, Any]) -> str:
    """Serialize metadata for set.json; a "cards" key is never written."""
    preserved = {key: value for key, value in metadata.items() if key != CARDS_KEY}
    return json.dumps(preserved, indent=JSON_INDENT, ensure_ascii=False)


def write_set_metadata(path: Path, metadata: dict[str, Any]) -> None:
    """Write metadata to set.json."""
    path.write_text(dump_set_metadata(metadata), encoding="utf-8")
