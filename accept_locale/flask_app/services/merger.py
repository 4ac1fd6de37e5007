"""Deep merge of nested locale/config mappings."""
from __future__ import annotations

import copy
from typing import Any, Dict, List, Mapping, Optional


def merge(base: Optional[Mapping[str, Any]], override: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """Merge ``override`` on top of ``base`` into a fresh dict.

    Nested mappings present on both sides are merged recursively; everywhere
    else the value applied last (``override``) wins, including a terminal
    value replacing a whole subtree. Neither input is modified.

    Returns None only when both inputs are None.
    """
    if base is None and override is None:
        return None

    result: Dict[str, Any] = {}
    if base is not None:
        _merge_into(result, base)
    if override is not None:
        _merge_into(result, override)
    return result


def _merge_into(dest: Dict[str, Any], source: Mapping[str, Any], keys: Optional[List[str]] = None) -> None:
    keys = keys or []
    for key, value in source.items():
        path = keys + [key]
        if isinstance(value, Mapping):
            _walk(dest, path)
            _merge_into(dest, value, path)
        else:
            _set(dest, path, copy.deepcopy(value))


def _walk(dest: Dict[str, Any], keys: List[str]) -> Dict[str, Any]:
    # Terminals along the way are replaced by fresh nodes.
    node = dest
    for key in keys:
        child = node.get(key)
        if not isinstance(child, dict):
            child = node[key] = {}
        node = child
    return node


def _set(dest: Dict[str, Any], keys: List[str], value: Any) -> None:
    _walk(dest, keys[:-1])[keys[-1]] = value
