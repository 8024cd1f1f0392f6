# topmark:header:start
#
#   project      : ApiDelta
#   file         : filters.py
#   file_relpath : src/apidelta/config/filters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scope filter and exclusion configuration.

Two different questions are configured here:

* **filters** decide which descriptors take part in a comparison at all
  (``FilterConfig``, consumed by `apidelta.scope.ScopeFilter`);
* **exclusions** decide which *missing* elements are intentional and must not
  be reported as removals (``ExclusionConfig``, consumed by
  `apidelta.exclusions.ExclusionRegistry`).

Document mapping:

    [filters]
    includeNamespaces = ["MyLib", "MyLib.*"]
    excludeNamespaces = ["MyLib.Internal*"]
    includeTypes = []
    excludeTypes = ["*Tests"]
    includeInternals = false
    includeCompilerGenerated = false

    [exclusions]
    excludedTypes = ["MyLib.Legacy.Widget"]
    excludedMembers = ["MyLib.Parser.Reset"]
    excludedTypePatterns = ["MyLib.Experimental.*"]
    excludedMemberPatterns = ["*.DebugDump"]
    excludeObsolete = false

List-valued settings accumulate across layers (order kept, duplicates dropped);
booleans are tri-state and merge last-wins.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from apidelta.config.getters import check_unknown_keys, get_bool_or_none, get_string_list_or_none
from apidelta.config.keys import Keys
from apidelta.core.patterns import PatternSet

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


def merge_lists(*layers: Iterable[str]) -> list[str]:
    """Concatenate ``layers`` keeping first occurrences only."""
    out: list[str] = []
    seen: set[str] = set()
    for layer in layers:
        for item in layer:
            if item not in seen:
                seen.add(item)
                out.append(item)
    return out


def _pick(current: bool | None, override: bool | None) -> bool | None:
    return override if override is not None else current


# --- filters ---


@dataclass(frozen=True, slots=True)
class FilterConfig:
    """Immutable scope-filter configuration.

    Attributes:
        include_namespaces (tuple[str, ...]): Namespace names/patterns to keep
            (empty keeps everything).
        exclude_namespaces (tuple[str, ...]): Namespace names/patterns to drop.
        include_types (tuple[str, ...]): Type full names/patterns to keep
            (empty keeps everything).
        exclude_types (tuple[str, ...]): Type full names/patterns to drop.
        include_internals (bool): Keep elements that are not externally visible.
        include_compiler_generated (bool): Keep compiler-generated elements.
    """

    include_namespaces: tuple[str, ...] = ()
    exclude_namespaces: tuple[str, ...] = ()
    include_types: tuple[str, ...] = ()
    exclude_types: tuple[str, ...] = ()
    include_internals: bool = False
    include_compiler_generated: bool = False

    def validate(self) -> None:
        """Compile every pattern once so malformed patterns fail fast.

        Raises:
            ConfigurationError: If a pattern is empty.
        """
        section: str = Keys.SECTION_FILTERS
        PatternSet.compile(self.include_namespaces, key=f"{section}.{Keys.INCLUDE_NAMESPACES}")
        PatternSet.compile(self.exclude_namespaces, key=f"{section}.{Keys.EXCLUDE_NAMESPACES}")
        PatternSet.compile(self.include_types, key=f"{section}.{Keys.INCLUDE_TYPES}")
        PatternSet.compile(self.exclude_types, key=f"{section}.{Keys.EXCLUDE_TYPES}")

    def thaw(self) -> MutableFilterConfig:
        """Return a mutable builder initialized from this configuration."""
        return MutableFilterConfig(
            include_namespaces=list(self.include_namespaces),
            exclude_namespaces=list(self.exclude_namespaces),
            include_types=list(self.include_types),
            exclude_types=list(self.exclude_types),
            include_internals=self.include_internals,
            include_compiler_generated=self.include_compiler_generated,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the document form (camelCase keys)."""
        return {
            Keys.INCLUDE_NAMESPACES: list(self.include_namespaces),
            Keys.EXCLUDE_NAMESPACES: list(self.exclude_namespaces),
            Keys.INCLUDE_TYPES: list(self.include_types),
            Keys.EXCLUDE_TYPES: list(self.exclude_types),
            Keys.INCLUDE_INTERNALS: self.include_internals,
            Keys.INCLUDE_COMPILER_GENERATED: self.include_compiler_generated,
        }


@dataclass
class MutableFilterConfig:
    """Mutable builder for `FilterConfig`."""

    include_namespaces: list[str] = field(default_factory=lambda: [])
    exclude_namespaces: list[str] = field(default_factory=lambda: [])
    include_types: list[str] = field(default_factory=lambda: [])
    exclude_types: list[str] = field(default_factory=lambda: [])
    include_internals: bool | None = None
    include_compiler_generated: bool | None = None

    def merge_with(self, other: MutableFilterConfig) -> MutableFilterConfig:
        """Return a new builder combining ``self`` and ``other`` (``other`` wins for booleans)."""
        return MutableFilterConfig(
            include_namespaces=merge_lists(self.include_namespaces, other.include_namespaces),
            exclude_namespaces=merge_lists(self.exclude_namespaces, other.exclude_namespaces),
            include_types=merge_lists(self.include_types, other.include_types),
            exclude_types=merge_lists(self.exclude_types, other.exclude_types),
            include_internals=_pick(self.include_internals, other.include_internals),
            include_compiler_generated=_pick(
                self.include_compiler_generated, other.include_compiler_generated
            ),
        )

    def freeze(self) -> FilterConfig:
        """Freeze and validate.

        Raises:
            ConfigurationError: If a pattern is malformed.
        """
        frozen = FilterConfig(
            include_namespaces=tuple(self.include_namespaces),
            exclude_namespaces=tuple(self.exclude_namespaces),
            include_types=tuple(self.include_types),
            exclude_types=tuple(self.exclude_types),
            include_internals=bool(self.include_internals),
            include_compiler_generated=bool(self.include_compiler_generated),
        )
        frozen.validate()
        return frozen

    @classmethod
    def from_table(cls, tbl: Mapping[str, Any] | None) -> MutableFilterConfig:
        """Create a builder from a ``filters`` table.

        Raises:
            ConfigurationError: On unknown keys or malformed values.
        """
        if not tbl:
            return cls()
        section: str = Keys.SECTION_FILTERS
        check_unknown_keys(
            tbl,
            (
                Keys.INCLUDE_NAMESPACES,
                Keys.EXCLUDE_NAMESPACES,
                Keys.INCLUDE_TYPES,
                Keys.EXCLUDE_TYPES,
                Keys.INCLUDE_INTERNALS,
                Keys.INCLUDE_COMPILER_GENERATED,
            ),
            section=section,
        )
        return cls(
            include_namespaces=get_string_list_or_none(tbl, Keys.INCLUDE_NAMESPACES, section=section)
            or [],
            exclude_namespaces=get_string_list_or_none(tbl, Keys.EXCLUDE_NAMESPACES, section=section)
            or [],
            include_types=get_string_list_or_none(tbl, Keys.INCLUDE_TYPES, section=section) or [],
            exclude_types=get_string_list_or_none(tbl, Keys.EXCLUDE_TYPES, section=section) or [],
            include_internals=get_bool_or_none(tbl, Keys.INCLUDE_INTERNALS, section=section),
            include_compiler_generated=get_bool_or_none(
                tbl, Keys.INCLUDE_COMPILER_GENERATED, section=section
            ),
        )


# --- exclusions ---


@dataclass(frozen=True, slots=True)
class ExclusionConfig:
    """Immutable exclusion configuration.

    Literal lists and pattern lists behave identically at match time (a
    literal is simply a pattern without wildcards); they are kept apart
    because that is how users think about them.

    Attributes:
        excluded_types (tuple[str, ...]): Type full names excluded from removal reporting.
        excluded_members (tuple[str, ...]): Member full names excluded from removal reporting.
        excluded_type_patterns (tuple[str, ...]): Wildcard patterns over type full names.
        excluded_member_patterns (tuple[str, ...]): Wildcard patterns over member full names.
        exclude_obsolete (bool): Drop obsolete elements from the comparison scope.
    """

    excluded_types: tuple[str, ...] = ()
    excluded_members: tuple[str, ...] = ()
    excluded_type_patterns: tuple[str, ...] = ()
    excluded_member_patterns: tuple[str, ...] = ()
    exclude_obsolete: bool = False

    @property
    def is_empty(self) -> bool:
        """True if nothing is excluded."""
        return not (
            self.excluded_types
            or self.excluded_members
            or self.excluded_type_patterns
            or self.excluded_member_patterns
        )

    def validate(self) -> None:
        """Compile every pattern once so malformed patterns fail fast.

        Raises:
            ConfigurationError: If a literal or pattern is empty.
        """
        section: str = Keys.SECTION_EXCLUSIONS
        PatternSet.compile(self.excluded_types, key=f"{section}.{Keys.EXCLUDED_TYPES}")
        PatternSet.compile(self.excluded_members, key=f"{section}.{Keys.EXCLUDED_MEMBERS}")
        PatternSet.compile(
            self.excluded_type_patterns, key=f"{section}.{Keys.EXCLUDED_TYPE_PATTERNS}"
        )
        PatternSet.compile(
            self.excluded_member_patterns, key=f"{section}.{Keys.EXCLUDED_MEMBER_PATTERNS}"
        )

    def thaw(self) -> MutableExclusionConfig:
        """Return a mutable builder initialized from this configuration."""
        return MutableExclusionConfig(
            excluded_types=list(self.excluded_types),
            excluded_members=list(self.excluded_members),
            excluded_type_patterns=list(self.excluded_type_patterns),
            excluded_member_patterns=list(self.excluded_member_patterns),
            exclude_obsolete=self.exclude_obsolete,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the document form (camelCase keys)."""
        return {
            Keys.EXCLUDED_TYPES: list(self.excluded_types),
            Keys.EXCLUDED_MEMBERS: list(self.excluded_members),
            Keys.EXCLUDED_TYPE_PATTERNS: list(self.excluded_type_patterns),
            Keys.EXCLUDED_MEMBER_PATTERNS: list(self.excluded_member_patterns),
            Keys.EXCLUDE_OBSOLETE: self.exclude_obsolete,
        }


@dataclass
class MutableExclusionConfig:
    """Mutable builder for `ExclusionConfig`."""

    excluded_types: list[str] = field(default_factory=lambda: [])
    excluded_members: list[str] = field(default_factory=lambda: [])
    excluded_type_patterns: list[str] = field(default_factory=lambda: [])
    excluded_member_patterns: list[str] = field(default_factory=lambda: [])
    exclude_obsolete: bool | None = None

    def merge_with(self, other: MutableExclusionConfig) -> MutableExclusionConfig:
        """Return a new builder combining ``self`` and ``other`` (``other`` wins for booleans)."""
        return MutableExclusionConfig(
            excluded_types=merge_lists(self.excluded_types, other.excluded_types),
            excluded_members=merge_lists(self.excluded_members, other.excluded_members),
            excluded_type_patterns=merge_lists(
                self.excluded_type_patterns, other.excluded_type_patterns
            ),
            excluded_member_patterns=merge_lists(
                self.excluded_member_patterns, other.excluded_member_patterns
            ),
            exclude_obsolete=_pick(self.exclude_obsolete, other.exclude_obsolete),
        )

    def freeze(self) -> ExclusionConfig:
        """Freeze and validate.

        Raises:
            ConfigurationError: If a literal or pattern is empty.
        """
        frozen = ExclusionConfig(
            excluded_types=tuple(self.excluded_types),
            excluded_members=tuple(self.excluded_members),
            excluded_type_patterns=tuple(self.excluded_type_patterns),
            excluded_member_patterns=tuple(self.excluded_member_patterns),
            exclude_obsolete=bool(self.exclude_obsolete),
        )
        frozen.validate()
        return frozen

    @classmethod
    def from_table(cls, tbl: Mapping[str, Any] | None) -> MutableExclusionConfig:
        """Create a builder from an ``exclusions`` table.

        Raises:
            ConfigurationError: On unknown keys or malformed values.
        """
        if not tbl:
            return cls()
        section: str = Keys.SECTION_EXCLUSIONS
        check_unknown_keys(
            tbl,
            (
                Keys.EXCLUDED_TYPES,
                Keys.EXCLUDED_MEMBERS,
                Keys.EXCLUDED_TYPE_PATTERNS,
                Keys.EXCLUDED_MEMBER_PATTERNS,
                Keys.EXCLUDE_OBSOLETE,
            ),
            section=section,
        )
        return cls(
            excluded_types=get_string_list_or_none(tbl, Keys.EXCLUDED_TYPES, section=section) or [],
            excluded_members=get_string_list_or_none(tbl, Keys.EXCLUDED_MEMBERS, section=section)
            or [],
            excluded_type_patterns=get_string_list_or_none(
                tbl, Keys.EXCLUDED_TYPE_PATTERNS, section=section
            )
            or [],
            excluded_member_patterns=get_string_list_or_none(
                tbl, Keys.EXCLUDED_MEMBER_PATTERNS, section=section
            )
            or [],
            exclude_obsolete=get_bool_or_none(tbl, Keys.EXCLUDE_OBSOLETE, section=section),
        )
