"""Dotted-path access into loaded locale trees (e.g. ``index.app.name``)."""
from __future__ import annotations

from typing import Any, Mapping


def get_item(data: Mapping[str, Any], name: str) -> Any:
    """Return the value at ``name``; raise KeyError if any segment is missing."""
    value: Any = data
    for part in name.split("."):
        if not isinstance(value, Mapping) or part not in value:
            raise KeyError(f"'{name}' not found")
        value = value[part]
    return value


def has_item(data: Mapping[str, Any], name: str) -> bool:
    try:
        get_item(data, name)
    except KeyError:
        return False
    return True


def translate(data: Mapping[str, Any], name: str, default: Any = "") -> Any:
    """Like get_item() but returns ``default`` for a missing key."""
    try:
        return get_item(data, name)
    except KeyError:
        return default
