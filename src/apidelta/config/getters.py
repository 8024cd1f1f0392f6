# topmark:header:start
#
#   project      : ApiDelta
#   file         : getters.py
#   file_relpath : src/apidelta/config/getters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Checked value getters for configuration tables.

Configuration documents are parsed into plain ``dict`` structures (JSON via the
standard library, TOML via tomlkit). These helpers extract typed values and
raise `ConfigurationError` with the dotted key of the offending entry when a
value has the wrong shape, so configuration mistakes fail fast instead of being
silently defaulted.

A missing key always yields ``None`` so that the mutable builders can tell
"unset" from an explicit value.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from apidelta.config.logging import get_logger
from apidelta.core.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from apidelta.config.logging import ApiDeltaLogger

ConfigTable = dict[str, Any]

logger: ApiDeltaLogger = get_logger(__name__)


def _path(section: str | None, key: str) -> str:
    return f"{section}.{key}" if section else key


def get_table(table: Mapping[str, Any], key: str, *, section: str | None = None) -> ConfigTable:
    """Return the sub-table ``key`` (empty when missing).

    Raises:
        ConfigurationError: If the value is present but not a table.
    """
    value: Any = table.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError("expected a table", key=_path(section, key))
    return dict(value)  # pyright: ignore[reportUnknownArgumentType]


def get_bool_or_none(table: Mapping[str, Any], key: str, *, section: str | None = None) -> bool | None:
    """Return a boolean value, or ``None`` when the key is missing.

    Raises:
        ConfigurationError: If the value is present but not a boolean.
    """
    if key not in table:
        return None
    value: Any = table[key]
    if not isinstance(value, bool):
        raise ConfigurationError(f"expected true/false, got {value!r}", key=_path(section, key))
    return value


def get_string_or_none(table: Mapping[str, Any], key: str, *, section: str | None = None) -> str | None:
    """Return a string value, or ``None`` when the key is missing or null.

    Raises:
        ConfigurationError: If the value is present but not a string.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"expected a string, got {value!r}", key=_path(section, key))
    return value


def get_string_list_or_none(
    table: Mapping[str, Any], key: str, *, section: str | None = None
) -> list[str] | None:
    """Return a list of strings, or ``None`` when the key is missing.

    Raises:
        ConfigurationError: If the value is not a list of strings.
    """
    if key not in table:
        return None
    value: Any = table[key]
    if not isinstance(value, (list, tuple)):
        raise ConfigurationError("expected a list of strings", key=_path(section, key))
    return _strings(value, key=_path(section, key))  # pyright: ignore[reportUnknownArgumentType]


def get_string_map_or_none(
    table: Mapping[str, Any], key: str, *, section: str | None = None
) -> dict[str, str] | None:
    """Return a ``str -> str`` mapping, or ``None`` when the key is missing.

    Raises:
        ConfigurationError: If the value is not a table of strings.
    """
    if key not in table:
        return None
    value: Any = table[key]
    if not isinstance(value, Mapping):
        raise ConfigurationError("expected a table of strings", key=_path(section, key))
    out: dict[str, str] = {}
    for k, v in value.items():  # pyright: ignore[reportUnknownVariableType]
        if not isinstance(v, str):
            raise ConfigurationError(
                f"expected a string, got {v!r}", key=f"{_path(section, key)}.{k}"
            )
        out[str(k)] = v  # pyright: ignore[reportUnknownArgumentType]
    return out


def get_string_list_map_or_none(
    table: Mapping[str, Any], key: str, *, section: str | None = None
) -> dict[str, list[str]] | None:
    """Return a ``str -> list[str]`` mapping, or ``None`` when the key is missing.

    A plain string value is accepted as a one-element list.

    Raises:
        ConfigurationError: If the value is not a table of string lists.
    """
    if key not in table:
        return None
    value: Any = table[key]
    if not isinstance(value, Mapping):
        raise ConfigurationError("expected a table of string lists", key=_path(section, key))
    out: dict[str, list[str]] = {}
    for k, v in value.items():  # pyright: ignore[reportUnknownVariableType]
        entry_key: str = f"{_path(section, key)}.{k}"
        if isinstance(v, str):
            out[str(k)] = [v]  # pyright: ignore[reportUnknownArgumentType]
        elif isinstance(v, (list, tuple)):
            out[str(k)] = _strings(v, key=entry_key)  # pyright: ignore[reportUnknownArgumentType]
        else:
            raise ConfigurationError("expected a list of strings", key=entry_key)
    return out


def _strings(values: Iterable[Any], *, key: str) -> list[str]:
    out: list[str] = []
    for index, item in enumerate(values):
        if not isinstance(item, str):
            raise ConfigurationError(f"item #{index} is not a string: {item!r}", key=key)
        out.append(item)
    return out


def check_unknown_keys(
    table: Mapping[str, Any], known: Iterable[str], *, section: str | None = None
) -> None:
    """Raise if ``table`` contains keys outside ``known``.

    Raises:
        ConfigurationError: Naming the first unknown key (in document order).
    """
    allowed: set[str] = set(known)
    for key in table:
        if key not in allowed:
            logger.debug("Unknown configuration key %r (allowed: %s)", key, sorted(allowed))
            raise ConfigurationError("unknown configuration key", key=_path(section, key))
