# topmark:header:start
#
#   project      : ApiDelta
#   file         : mapping.py
#   file_relpath : src/apidelta/config/mapping.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Identity-mapping configuration (namespace and type renames).

Document mapping:

    [mappings]
    autoMapSameNameTypes = false
    ignoreCase = false

    [mappings.namespaceMappings]
    "MyLib.Legacy" = ["MyLib.Core", "MyLib.Compat"]

    [mappings.typeMappings]
    "MyLib.OldValue" = "MyLib.NewValue"

Validity:
    * no empty (or whitespace-only) keys or values,
    * every namespace mapping has at least one target and no duplicate targets,
    * the namespace-mapping relation is acyclic (``A → B → A`` is rejected, as
      is ``A → A``).

``MappingConfig.validate()`` raises `ConfigurationError` for the first
violation found; the identity mapper validates again at construction so that
programmatically built configurations cannot bypass the checks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from apidelta.config.getters import (
    check_unknown_keys,
    get_bool_or_none,
    get_string_list_map_or_none,
    get_string_map_or_none,
)
from apidelta.config.keys import Keys
from apidelta.core.errors import ConfigurationError
from apidelta.core.graph import find_cycle

if TYPE_CHECKING:
    from collections.abc import Mapping

_SECTION: str = Keys.SECTION_MAPPINGS
_NS_KEY: str = f"{_SECTION}.{Keys.NAMESPACE_MAPPINGS}"
_TYPE_KEY: str = f"{_SECTION}.{Keys.TYPE_MAPPINGS}"


@dataclass(frozen=True)
class MappingConfig:
    """Immutable identity-mapping configuration.

    Attributes:
        namespace_mappings (Mapping[str, tuple[str, ...]]): Source namespace →
            ordered target namespaces (order matters: first match wins).
        type_mappings (Mapping[str, str]): Source full type name → target full type name.
        auto_map_same_name_types (bool): Enable the same-simple-name heuristic.
        ignore_case (bool): Compare names case-insensitively.
    """

    namespace_mappings: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    type_mappings: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    auto_map_same_name_types: bool = False
    ignore_case: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "namespace_mappings",
            MappingProxyType({k: tuple(v) for k, v in self.namespace_mappings.items()}),
        )
        object.__setattr__(self, "type_mappings", MappingProxyType(dict(self.type_mappings)))

    def validate(self) -> None:
        """Check the configuration invariants.

        Raises:
            ConfigurationError: For empty keys/values, empty or duplicate target
                lists, or a namespace-mapping cycle.
        """
        for source, targets in self.namespace_mappings.items():
            if not source.strip():
                raise ConfigurationError("empty source namespace", key=_NS_KEY)
            if not targets:
                raise ConfigurationError("no target namespaces", key=f"{_NS_KEY}.{source}")
            if any(not t.strip() for t in targets):
                raise ConfigurationError("empty target namespace", key=f"{_NS_KEY}.{source}")
            if len({self.normalize(t) for t in targets}) != len(targets):
                raise ConfigurationError("duplicate target namespace", key=f"{_NS_KEY}.{source}")

        for source, target in self.type_mappings.items():
            if not source.strip():
                raise ConfigurationError("empty source type", key=_TYPE_KEY)
            if not target.strip():
                raise ConfigurationError("empty target type", key=f"{_TYPE_KEY}.{source}")

        graph: dict[str, list[str]] = {
            self.normalize(source): [self.normalize(t) for t in targets]
            for source, targets in self.namespace_mappings.items()
        }
        cycle: list[str] | None = find_cycle(graph)
        if cycle is not None:
            raise ConfigurationError(
                f"circular namespace mapping: {' -> '.join(cycle)}", key=_NS_KEY
            )

    def normalize(self, name: str) -> str:
        """Return ``name`` in the comparison form implied by ``ignore_case``."""
        return name.casefold() if self.ignore_case else name

    @property
    def has_explicit_mappings(self) -> bool:
        """True if any namespace or type mapping is configured."""
        return bool(self.namespace_mappings or self.type_mappings)

    def thaw(self) -> MutableMappingConfig:
        """Return a mutable builder initialized from this configuration."""
        return MutableMappingConfig(
            namespace_mappings={k: list(v) for k, v in self.namespace_mappings.items()},
            type_mappings=dict(self.type_mappings),
            auto_map_same_name_types=self.auto_map_same_name_types,
            ignore_case=self.ignore_case,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the document form (camelCase keys)."""
        return {
            Keys.NAMESPACE_MAPPINGS: {k: list(v) for k, v in self.namespace_mappings.items()},
            Keys.TYPE_MAPPINGS: dict(self.type_mappings),
            Keys.AUTO_MAP_SAME_NAME_TYPES: self.auto_map_same_name_types,
            Keys.IGNORE_CASE: self.ignore_case,
        }


@dataclass
class MutableMappingConfig:
    """Mutable builder for `MappingConfig`.

    Mapping tables merge per key (a later layer replaces the target list of a
    namespace it names); booleans are tri-state and merge last-wins.
    """

    namespace_mappings: dict[str, list[str]] = field(default_factory=lambda: {})
    type_mappings: dict[str, str] = field(default_factory=lambda: {})
    auto_map_same_name_types: bool | None = None
    ignore_case: bool | None = None

    def merge_with(self, other: MutableMappingConfig) -> MutableMappingConfig:
        """Return a new builder by applying ``other`` over ``self`` (last-wins)."""
        return MutableMappingConfig(
            namespace_mappings={**self.namespace_mappings, **other.namespace_mappings},
            type_mappings={**self.type_mappings, **other.type_mappings},
            auto_map_same_name_types=(
                self.auto_map_same_name_types
                if other.auto_map_same_name_types is None
                else other.auto_map_same_name_types
            ),
            ignore_case=self.ignore_case if other.ignore_case is None else other.ignore_case,
        )

    def freeze(self) -> MappingConfig:
        """Freeze and validate.

        Raises:
            ConfigurationError: If the resulting configuration is invalid.
        """
        frozen = MappingConfig(
            namespace_mappings={k: tuple(v) for k, v in self.namespace_mappings.items()},
            type_mappings=dict(self.type_mappings),
            auto_map_same_name_types=bool(self.auto_map_same_name_types),
            ignore_case=bool(self.ignore_case),
        )
        frozen.validate()
        return frozen

    @classmethod
    def from_table(cls, tbl: Mapping[str, Any] | None) -> MutableMappingConfig:
        """Create a builder from a ``mappings`` table.

        Raises:
            ConfigurationError: On unknown keys or malformed values.
        """
        if not tbl:
            return cls()
        check_unknown_keys(
            tbl,
            (
                Keys.NAMESPACE_MAPPINGS,
                Keys.TYPE_MAPPINGS,
                Keys.AUTO_MAP_SAME_NAME_TYPES,
                Keys.IGNORE_CASE,
            ),
            section=_SECTION,
        )
        return cls(
            namespace_mappings=get_string_list_map_or_none(
                tbl, Keys.NAMESPACE_MAPPINGS, section=_SECTION
            )
            or {},
            type_mappings=get_string_map_or_none(tbl, Keys.TYPE_MAPPINGS, section=_SECTION) or {},
            auto_map_same_name_types=get_bool_or_none(
                tbl, Keys.AUTO_MAP_SAME_NAME_TYPES, section=_SECTION
            ),
            ignore_case=get_bool_or_none(tbl, Keys.IGNORE_CASE, section=_SECTION),
        )
