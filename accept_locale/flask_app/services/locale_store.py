"""Locale store: compiled language matcher plus loaded locale files."""
from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from flask import current_app

from .locale_loader import load_locale_dir
from .matcher import CompiledMatcher, compile_rules
from .merger import merge

Loader = Callable[[Union[str, Path]], Dict[str, Dict[str, Any]]]


class LocaleStore:
    """Negotiates languages and serves locale data loaded from ``locale_dir``.

    Nothing is compiled or loaded until create_locale() is called; after
    that the store is read-only and can be shared between request threads.
    """

    def __init__(
        self,
        default: str,
        langs: Optional[Mapping[str, Iterable[str]]] = None,
        aliases: Optional[Mapping[str, str]] = None,
        locale_dir: Optional[Union[str, Path]] = None,
        loader: Loader = load_locale_dir,
    ):
        self.default = default
        self.langs = {name: list(patterns) for name, patterns in (langs or {}).items()}
        self.aliases = dict(aliases or {})
        self.locale_dir = locale_dir
        self.loader = loader
        self._matcher: Optional[CompiledMatcher] = None
        self._locales: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    @property
    def is_ready(self) -> bool:
        return self._matcher is not None

    @property
    def names(self) -> List[str]:
        return sorted(self._locales)

    def create_locale(self) -> "LocaleStore":
        """Compile language patterns and load locale files (once)."""
        if self._matcher is not None:
            return self

        with self._lock:
            if self._matcher is not None:
                return self

            matcher = compile_rules(self.langs, self.aliases, self.default)
            locales: Dict[str, Dict[str, Any]] = {}
            if self.locale_dir:
                locales = self.loader(self.locale_dir)

            current_app.logger.info(
                f"Locale store ready: default={self.default}, "
                f"languages={list(matcher.languages)}, files={len(locales)}"
            )
            self._locales = locales
            self._matcher = matcher
        return self

    def lookup(self, accept_language: Optional[str]) -> str:
        """Negotiate an Accept-Language value; the default before create_locale()."""
        if self._matcher is None:
            return self.default
        return self._matcher.lookup(accept_language)

    def locale(self, name: str) -> Optional[Dict[str, Any]]:
        return self._locales.get(name)

    def has_language(self, name: str) -> bool:
        return name in self.langs

    def merged(self, base_name: str, override_name: str) -> Optional[Dict[str, Any]]:
        """Merge the locale ``override_name`` on top of ``base_name``."""
        return merge(self.locale(base_name), self.locale(override_name))
