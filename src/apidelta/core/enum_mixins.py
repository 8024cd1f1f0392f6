# topmark:header:start
#
#   project      : ApiDelta
#   file         : enum_mixins.py
#   file_relpath : src/apidelta/core/enum_mixins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generic Enum utilities for ApiDelta (typing-friendly, UI-agnostic).

Provided:
    - ``normalize_token(s)``:
        Canonical form used to compare user-supplied tokens with enum keys.
    - ``KeyedStrEnum``:
        A ``str`` enum whose ``.value`` is a stable machine key, with a human
        ``label`` and parse ``aliases``.
    - ``parse_enum(enum_cls, raw, *, key)``:
        Strict parsing that raises `ConfigurationError` on unknown tokens.

Example:
    ```python
    class ReportFormat(KeyedStrEnum):
        JSON = ("json", "JSON document")

    assert ReportFormat.parse("JSON") is ReportFormat.JSON
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, TypeVar

from apidelta.core.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable

_KS = TypeVar("_KS", bound="KeyedStrEnum")


def normalize_token(s: str) -> str:
    """Normalize an identifier-like string to match config keys and aliases.

    Case is ignored and ``-``, `` `` and ``_`` are treated alike, so
    ``"ProtectedInternal"``, ``"protected-internal"`` and ``"protected_internal"``
    normalize to the same token.
    """
    return s.strip().lower().replace("-", "").replace(" ", "").replace("_", "")


class KeyedStrEnum(str, Enum):
    """Enum where `.value` is a stable machine key; metadata lives on attributes.

    Attributes:
        label (str): Human-readable label for the member.
        aliases (tuple[str, ...]): Alternative tokens accepted by `parse()`.
    """

    label: str
    aliases: tuple[str, ...]

    def __new__(
        cls: type[_KS],
        key: str,
        label: str,
        aliases: Iterable[str] = (),
    ) -> _KS:
        """Create a new KeyedStrEnum member with key, label, and optional aliases.

        Args:
            key (str): The stable machine key (stored as `.value`).
            label (str): The human-readable label for the enum member.
            aliases (Iterable[str]): Optional aliases for parsing. Defaults to empty.

        Returns:
            _KS: The newly created enum member.
        """
        obj: _KS = str.__new__(cls, key)
        obj._value_ = key
        obj.label = label
        obj.aliases = tuple(aliases)
        return obj

    def __str__(self) -> str:
        return self.value

    @property
    def key(self) -> str:
        """Stable machine key (same as `.value`)."""
        return self.value

    @classmethod
    def parse(cls: type[_KS], raw: str | None) -> _KS | None:
        """Parse a token into an enum member.

        Matches against the stable key (`.value`), the member name (`.name`) and
        any configured aliases, case-insensitively via `normalize_token()`.
        """
        if raw is None:
            return None
        token: str = normalize_token(raw)

        for m in cls:
            if token == normalize_token(m.value):
                return m
            if token == normalize_token(m.name):
                return m
            for a in m.aliases:
                if token == normalize_token(a):
                    return m
        return None


def parse_enum(enum_cls: type[_KS], raw: object, *, key: str) -> _KS:
    """Parse ``raw`` into a member of ``enum_cls`` or raise.

    Args:
        enum_cls (type[_KS]): The keyed enum to parse into.
        raw (object): The raw value (usually a string read from a config document).
        key (str): Configuration key used in the error message.

    Returns:
        _KS: The parsed member.

    Raises:
        ConfigurationError: If ``raw`` is not a string or names no member.
    """
    if isinstance(raw, enum_cls):
        return raw
    member: _KS | None = enum_cls.parse(raw) if isinstance(raw, str) else None
    if member is None:
        choices: str = ", ".join(m.value for m in enum_cls)
        raise ConfigurationError(f"unknown value {raw!r} (expected one of: {choices})", key=key)
    return member
