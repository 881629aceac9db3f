import json
from typing import Any


def safe_parse_json(raw: str | None) -> dict:
    """Parse JSON string to dict, returning empty dict on failure."""
    if not raw:
        return {}
    try:
        value = json.loads(raw)
        return value if isinstance(value, dict) else {}
    except (json.JSONDecodeError, TypeError):
        return {}


def safe_parse_json_list(raw: str | None) -> list:
    if not raw:
        return []
    try:
        value = json.loads(raw)
        return value if isinstance(value, list) else []
    except (json.JSONDecodeError, TypeError):
        return []


def parse_json_or_text(raw: str | None) -> Any:
    """Return the decoded JSON value, or the raw text when it is not JSON."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return raw


def dumps_or_none(value: Any) -> str | None:
    return json.dumps(value) if value is not None else None
