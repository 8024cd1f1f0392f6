# topmark:header:start
#
#   project      : ApiDelta
#   file         : patterns.py
#   file_relpath : src/apidelta/core/patterns.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Anchored wildcard patterns for dotted identifiers.

Filter and exclusion rules name namespaces, types and members either literally
(``MyLib.Internal``) or with wildcards:

* ``*`` matches any run of characters (including dots and none at all),
* ``?`` matches exactly one character.

Patterns are anchored to the whole identifier; every other character matches
itself literally. Identifiers are not paths, so gitignore-style semantics
(negation, directory separators, comments) do not apply here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from apidelta.core.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

WILDCARD_CHARS: frozenset[str] = frozenset("*?")


def is_wildcard(pattern: str) -> bool:
    """Return True if ``pattern`` contains a ``*`` or ``?`` wildcard."""
    return any(ch in WILDCARD_CHARS for ch in pattern)


def wildcard_to_regex(pattern: str) -> str:
    """Translate a wildcard pattern into an anchored regular expression source.

    Args:
        pattern (str): Wildcard pattern such as ``"MyLib.*.Internal?"``.

    Returns:
        str: Regular expression source, anchored with ``^`` and ``\\Z`` so a
        trailing newline never matches.
    """
    parts: list[str] = []
    for ch in pattern:
        if ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return "^" + "".join(parts) + r"\Z"


@dataclass(frozen=True, slots=True)
class WildcardPattern:
    """A single compiled literal-or-wildcard pattern.

    Attributes:
        text (str): The pattern as written in the configuration.
        ignore_case (bool): Whether matching is case-insensitive.
    """

    text: str
    ignore_case: bool = False
    _regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.text or not self.text.strip():
            raise ConfigurationError("empty pattern")
        flags: int = re.IGNORECASE if self.ignore_case else 0
        object.__setattr__(self, "_regex", re.compile(wildcard_to_regex(self.text), flags))

    @property
    def is_literal(self) -> bool:
        """True if the pattern contains no wildcard."""
        return not is_wildcard(self.text)

    def matches(self, identifier: str) -> bool:
        """Return True if ``identifier`` matches this pattern in full."""
        return self._regex.fullmatch(identifier) is not None


@dataclass(frozen=True, slots=True)
class PatternSet:
    """An ordered set of wildcard patterns; an identifier matches if any pattern does."""

    patterns: tuple[WildcardPattern, ...] = ()

    @classmethod
    def compile(
        cls,
        texts: Iterable[str],
        *,
        ignore_case: bool = False,
        key: str | None = None,
    ) -> PatternSet:
        """Compile pattern texts into a `PatternSet`.

        Args:
            texts (Iterable[str]): Literal names and/or wildcard patterns.
            ignore_case (bool): Whether matching is case-insensitive.
            key (str | None): Configuration key, used to locate errors.

        Returns:
            PatternSet: The compiled set (duplicates removed, order kept).

        Raises:
            ConfigurationError: If a pattern is empty or whitespace-only.
        """
        seen: set[str] = set()
        compiled: list[WildcardPattern] = []
        for text in texts:
            if text in seen:
                continue
            seen.add(text)
            try:
                compiled.append(WildcardPattern(text, ignore_case=ignore_case))
            except ConfigurationError as exc:
                raise ConfigurationError(str(exc), key=key) from exc
        return cls(tuple(compiled))

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)

    def __iter__(self) -> Iterator[WildcardPattern]:
        return iter(self.patterns)

    def matches(self, identifier: str) -> bool:
        """Return True if any pattern in the set matches ``identifier``."""
        return any(p.matches(identifier) for p in self.patterns)

    def first_match(self, identifier: str) -> WildcardPattern | None:
        """Return the first pattern matching ``identifier``, or None."""
        for p in self.patterns:
            if p.matches(identifier):
                return p
        return None
