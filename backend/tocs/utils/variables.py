"""``{{key}}`` placeholder handling for request execution."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

_PLACEHOLDER = re.compile(r"\{\{\s*([^}]+?)\s*\}\}")


class KeyValue(Protocol):
    key: str
    value: str


def _as_mapping(variables: Mapping[str, str] | Iterable[KeyValue]) -> dict[str, str]:
    if isinstance(variables, Mapping):
        return dict(variables)
    # First definition of a key wins.
    resolved: dict[str, str] = {}
    for variable in variables:
        resolved.setdefault(variable.key, variable.value)
    return resolved


def interpolate_variables(text: str | None, variables: Mapping[str, str] | Iterable[KeyValue]) -> str | None:
    """Replace ``{{ key }}`` with the variable value; unknown keys are left untouched."""
    if not text:
        return text
    values = _as_mapping(variables)
    if not values:
        return text

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1).strip()
        return values[key] if key in values else match.group(0)

    return _PLACEHOLDER.sub(_replace, text)


def interpolate_value(value: Any, variables: Mapping[str, str] | Iterable[KeyValue]) -> Any:
    """Interpolate strings nested anywhere inside dicts and lists."""
    values = _as_mapping(variables)
    if isinstance(value, str):
        return interpolate_variables(value, values)
    if isinstance(value, dict):
        return {
            interpolate_variables(k, values) if isinstance(k, str) else k: interpolate_value(v, values)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [interpolate_value(item, values) for item in value]
    return value


def extract_variables(text: str | None) -> list[str]:
    if not text:
        return []
    return [match.strip() for match in _PLACEHOLDER.findall(text)]


def has_variables(text: str | None) -> bool:
    return bool(text) and _PLACEHOLDER.search(text) is not None
