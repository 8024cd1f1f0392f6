# topmark:header:start
#
#   project      : ApiDelta
#   file         : io.py
#   file_relpath : src/apidelta/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Read and write ApiDelta configuration documents.

Configuration documents may be written in JSON or TOML; both use the same
camelCase keys. The document format is chosen by file suffix (``.json`` or
``.toml``). TOML is parsed and rendered with `tomlkit`, JSON with the standard
library. Parsed documents are returned as plain ``dict`` structures.

The bundled annotated template ``apidelta-default.toml`` documents every key
with its default; `load_default_template_text` returns it for
``apidelta config defaults``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from importlib.resources import files
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from apidelta.config.getters import ConfigTable
from apidelta.config.logging import get_logger
from apidelta.config.model import ComparisonConfiguration, MutableComparisonConfiguration
from apidelta.constants import (
    DEFAULT_TOML_CONFIG_NAME,
    DEFAULT_TOML_CONFIG_PACKAGE,
    HEADER_END_MARKER,
)
from apidelta.core.enum_mixins import KeyedStrEnum
from apidelta.core.errors import ConfigurationError

if TYPE_CHECKING:
    from apidelta.config.logging import ApiDeltaLogger

logger: ApiDeltaLogger = get_logger(__name__)


class DocumentFormat(KeyedStrEnum):
    """Serialization format of a configuration document."""

    JSON = ("json", "JSON document")
    TOML = ("toml", "TOML document")

    @classmethod
    def for_path(cls, path: Path) -> DocumentFormat:
        """Return the document format implied by ``path``'s suffix.

        Raises:
            ConfigurationError: For suffixes other than ``.json`` and ``.toml``.
        """
        fmt: DocumentFormat | None = cls.parse(path.suffix.lstrip("."))
        if fmt is None:
            raise ConfigurationError(
                f"unsupported configuration file type {path.suffix!r} (expected .json or .toml)",
                key=str(path),
            )
        return fmt


# --- parsing ---


def parse_document(text: str, fmt: DocumentFormat, *, source: str = "<string>") -> ConfigTable:
    """Parse configuration ``text`` into a plain dict.

    Args:
        text (str): Document text.
        fmt (DocumentFormat): Document format.
        source (str): Name used in error messages.

    Returns:
        ConfigTable: The parsed document (top level must be a table).

    Raises:
        ConfigurationError: If the text cannot be parsed or is not a table.
    """
    data: object
    if fmt == DocumentFormat.JSON:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"invalid JSON: {exc}", key=source) from exc
    else:
        try:
            data = tomlkit.parse(text).unwrap()
        except TomlkitParseError as exc:
            raise ConfigurationError(f"invalid TOML: {exc}", key=source) from exc

    if not isinstance(data, Mapping):
        raise ConfigurationError("configuration document must be a table/object", key=source)
    logger.trace("Parsed %s document %s: %r", fmt.value, source, data)
    return dict(cast("Mapping[str, Any]", data))


def load_document(path: Path) -> ConfigTable:
    """Read and parse the configuration document at ``path``.

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    fmt: DocumentFormat = DocumentFormat.for_path(path)
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"cannot read configuration file: {exc}", key=str(path)) from exc
    logger.debug("Loading %s configuration from %s", fmt.value, path)
    return parse_document(text, fmt, source=str(path))


def load_configuration(path: Path) -> MutableComparisonConfiguration:
    """Load one configuration layer from ``path``.

    Returns:
        MutableComparisonConfiguration: The layer (call ``freeze()`` after merging).

    Raises:
        ConfigurationError: If the file cannot be read, parsed or interpreted.
    """
    return MutableComparisonConfiguration.from_dict(load_document(path))


def load_frozen_configuration(path: Path | None) -> ComparisonConfiguration:
    """Load, validate and freeze a configuration (defaults when ``path`` is None)."""
    if path is None:
        return ComparisonConfiguration.default()
    return load_configuration(path).freeze()


# --- rendering ---


def _strip_none(value: object) -> object:
    """Remove `None` from mappings/lists (TOML has no `null`)."""
    if isinstance(value, Mapping):
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        return {str(k): _strip_none(v) for k, v in m.items() if v is not None}
    if isinstance(value, list):
        seq: list[object] = cast("list[object]", value)
        return [_strip_none(v) for v in seq if v is not None]
    return value


def to_toml(data: Mapping[str, Any]) -> str:
    """Serialize a configuration mapping to TOML text."""
    cleaned: Any = _strip_none(data)
    return cast("str", cast("Any", tomlkit).dumps(cleaned))


def to_json(data: Mapping[str, Any]) -> str:
    """Serialize a configuration mapping to pretty-printed JSON text."""
    return json.dumps(data, indent=2)


def render_configuration(config: ComparisonConfiguration, fmt: DocumentFormat) -> str:
    """Render the effective configuration in ``fmt``."""
    data: dict[str, Any] = config.to_dict()
    return to_json(data) if fmt == DocumentFormat.JSON else to_toml(data)


# --- bundled template ---


def load_default_template_text() -> str:
    """Return the bundled annotated defaults template as TOML text.

    The file header block is stripped so the output starts at the template
    content. If the packaged template cannot be read, a document generated from
    the runtime defaults is returned instead (and a warning is logged).
    """
    resource = files(DEFAULT_TOML_CONFIG_PACKAGE).joinpath(DEFAULT_TOML_CONFIG_NAME)
    try:
        toml_text: str = resource.read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning("Cannot read packaged default config template %s: %s", resource, exc)
        return to_toml(ComparisonConfiguration.default().to_dict())

    lines: list[str] = toml_text.splitlines(keepends=True)
    for i, line in enumerate(lines):
        if line.strip() == f"# {HEADER_END_MARKER}":
            return "".join(lines[i + 1 :]).lstrip("\n")
    return toml_text
