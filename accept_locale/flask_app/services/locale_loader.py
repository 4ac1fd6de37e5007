"""Loader for directories of locale JSON files."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

from flask import current_app


class LoadError(Exception):
    """A locale file (or the locale directory itself) could not be loaded."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"{name}: {reason}")
        self.name = name


def _read_tree(path: Path, name: str) -> Dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(name, str(exc)) from exc

    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise LoadError(name, str(exc)) from exc
    if not isinstance(payload, dict):
        raise LoadError(name, f"expected a JSON object, got {type(payload).__name__}")
    return payload


def load_locale_dir(root: Union[str, Path]) -> Dict[str, Dict[str, Any]]:
    """Load every ``*.json`` file below ``root``.

    Keys are the paths relative to ``root`` without the extension, joined
    with ``/`` (``hello/world/ja.json`` -> ``hello/world/ja``). Any unreadable
    or malformed file aborts the whole load with LoadError.
    """
    root = Path(root)
    if not root.is_dir():
        raise LoadError(str(root), "locale directory not found")

    locales: Dict[str, Dict[str, Any]] = {}
    for path in sorted(root.rglob("*.json")):
        if not path.is_file():
            continue
        name = path.relative_to(root).with_suffix("").as_posix()
        locales[name] = _read_tree(path, name)

    current_app.logger.info(f"Loaded {len(locales)} locale files from {root}")
    return locales

