"""Accept-Language negotiation against configured language tag patterns."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple


class PatternError(ValueError):
    """A configured tag pattern could not be compiled."""

    def __init__(self, language: str, pattern: str, reason: str):
        super().__init__(f"{language}: invalid pattern {pattern!r}: {reason}")
        self.language = language
        self.pattern = pattern


def _pattern_to_regex(pattern: str) -> str:
    # en-* => ^en\-.*$
    return "^" + pattern.replace("-", "\\-").replace("*", ".*") + "$"


@dataclass(frozen=True)
class CompiledMatcher:
    """Immutable result of compile_rules(); safe to share between threads."""

    default: str
    rules: Tuple[Tuple[str, Tuple[re.Pattern, ...]], ...] = ()
    aliases: Mapping[str, str] = field(default_factory=dict)

    @property
    def languages(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.rules)

    def lookup(self, value: Optional[str]) -> str:
        """Resolve an Accept-Language value to a language name or alias.

        Entries are tried left to right; ``q=`` parameters are discarded, so
        only position decides priority. Falls back to ``default``.
        """
        if not self.rules or not value:
            return self.default

        for entry in value.split(","):
            tag = entry.split(";", 1)[0].strip(" \t")
            for name, patterns in self.rules:
                for exp in patterns:
                    if exp.fullmatch(tag) is None:
                        continue
                    return self.aliases.get(name, name)
        return self.default


def compile_rules(
    rules: Optional[Mapping[str, Iterable[str]]],
    aliases: Optional[Mapping[str, str]] = None,
    default: str = "",
) -> CompiledMatcher:
    """Compile ``{"en": ["en", "en-*"], ...}`` into a CompiledMatcher.

    Rules keep the insertion order of ``rules``; patterns keep their list
    order. Raises PatternError on the first pattern that does not compile.
    """
    compiled = []
    for name, patterns in (rules or {}).items():
        expressions = []
        for raw in patterns:
            try:
                expressions.append(re.compile(_pattern_to_regex(raw)))
            except re.error as exc:
                raise PatternError(name, raw, str(exc)) from exc
        compiled.append((name, tuple(expressions)))

    alias_table: Mapping[str, str] = MappingProxyType(dict(aliases or {}))
    return CompiledMatcher(default=default, rules=tuple(compiled), aliases=alias_table)


def lookup(compiled: CompiledMatcher, value: Optional[str]) -> str:
    """Module-level form of CompiledMatcher.lookup."""
    return compiled.lookup(value)
