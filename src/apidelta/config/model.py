# topmark:header:start
#
#   project      : ApiDelta
#   file         : model.py
#   file_relpath : src/apidelta/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Comparison configuration: immutable runtime view and mutable builder.

Notes:
    Build configurations using `MutableComparisonConfiguration` (mutable), then
    `freeze()` into a `ComparisonConfiguration` for the engine. ``freeze()``
    validates every section, so an invalid configuration fails *before* any
    comparison work is done.

    Layering is explicit and last-wins: defaults → configuration document →
    CLI overrides, each layer being a `MutableComparisonConfiguration` merged
    with ``merge_with``.

    Do **not** mutate a frozen `ComparisonConfiguration`; call ``thaw()``, edit
    the returned builder, then ``freeze()`` again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from apidelta.config.filters import (
    ExclusionConfig,
    FilterConfig,
    MutableExclusionConfig,
    MutableFilterConfig,
)
from apidelta.config.getters import (
    check_unknown_keys,
    get_bool_or_none,
    get_string_or_none,
    get_table,
)
from apidelta.config.keys import TOP_LEVEL_KEYS, Keys
from apidelta.config.logging import get_logger
from apidelta.config.mapping import MappingConfig, MutableMappingConfig
from apidelta.config.rules import BreakingChangeRules, MutableBreakingChangeRules
from apidelta.core.enum_mixins import parse_enum
from apidelta.core.formats import ReportFormat

if TYPE_CHECKING:
    from collections.abc import Mapping

    from apidelta.config.logging import ApiDeltaLogger

logger: ApiDeltaLogger = get_logger(__name__)


@dataclass(frozen=True)
class ComparisonConfiguration:
    """Immutable configuration threaded through one comparison.

    Attributes:
        mappings (MappingConfig): Namespace/type identity mappings.
        filters (FilterConfig): Scope filter.
        exclusions (ExclusionConfig): Intentional-removal exclusions.
        breaking_change_rules (BreakingChangeRules): Breaking-change policy.
        output_format (ReportFormat): Report format (presentation only).
        output_path (str | None): Report destination; ``None`` writes to stdout.
        fail_on_breaking_changes (bool): Whether breaking changes fail the run.
    """

    mappings: MappingConfig = field(default_factory=MappingConfig)
    filters: FilterConfig = field(default_factory=FilterConfig)
    exclusions: ExclusionConfig = field(default_factory=ExclusionConfig)
    breaking_change_rules: BreakingChangeRules = field(default_factory=BreakingChangeRules)
    output_format: ReportFormat = ReportFormat.CONSOLE
    output_path: str | None = None
    fail_on_breaking_changes: bool = True

    @classmethod
    def default(cls) -> ComparisonConfiguration:
        """Return the documented defaults."""
        return cls()

    def validate(self) -> None:
        """Validate every section.

        Raises:
            ConfigurationError: For the first invalid setting found.
        """
        self.mappings.validate()
        self.filters.validate()
        self.exclusions.validate()

    def thaw(self) -> MutableComparisonConfiguration:
        """Return a mutable builder initialized from this configuration."""
        return MutableComparisonConfiguration(
            mappings=self.mappings.thaw(),
            filters=self.filters.thaw(),
            exclusions=self.exclusions.thaw(),
            breaking_change_rules=self.breaking_change_rules.thaw(),
            output_format=self.output_format,
            output_path=self.output_path,
            fail_on_breaking_changes=self.fail_on_breaking_changes,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the full document form (camelCase keys, ``outputPath`` omitted when unset)."""
        data: dict[str, Any] = {
            Keys.SECTION_MAPPINGS: self.mappings.to_dict(),
            Keys.SECTION_EXCLUSIONS: self.exclusions.to_dict(),
            Keys.SECTION_BREAKING_CHANGE_RULES: self.breaking_change_rules.to_dict(),
            Keys.SECTION_FILTERS: self.filters.to_dict(),
            Keys.OUTPUT_FORMAT: self.output_format.value,
            Keys.FAIL_ON_BREAKING_CHANGES: self.fail_on_breaking_changes,
        }
        if self.output_path is not None:
            data[Keys.OUTPUT_PATH] = self.output_path
        return data


@dataclass
class MutableComparisonConfiguration:
    """Mutable builder for `ComparisonConfiguration`.

    Attributes mirror `ComparisonConfiguration`; scalar ``None`` means "inherit".
    """

    mappings: MutableMappingConfig = field(default_factory=MutableMappingConfig)
    filters: MutableFilterConfig = field(default_factory=MutableFilterConfig)
    exclusions: MutableExclusionConfig = field(default_factory=MutableExclusionConfig)
    breaking_change_rules: MutableBreakingChangeRules = field(
        default_factory=MutableBreakingChangeRules
    )
    output_format: ReportFormat | None = None
    output_path: str | None = None
    fail_on_breaking_changes: bool | None = None

    def merge_with(self, other: MutableComparisonConfiguration) -> MutableComparisonConfiguration:
        """Return a new builder by applying ``other`` over ``self`` (last-wins).

        Args:
            other (MutableComparisonConfiguration): The layer whose values override.

        Returns:
            MutableComparisonConfiguration: Merged builder.
        """
        return MutableComparisonConfiguration(
            mappings=self.mappings.merge_with(other.mappings),
            filters=self.filters.merge_with(other.filters),
            exclusions=self.exclusions.merge_with(other.exclusions),
            breaking_change_rules=self.breaking_change_rules.merge_with(
                other.breaking_change_rules
            ),
            output_format=other.output_format or self.output_format,
            output_path=other.output_path if other.output_path is not None else self.output_path,
            fail_on_breaking_changes=(
                self.fail_on_breaking_changes
                if other.fail_on_breaking_changes is None
                else other.fail_on_breaking_changes
            ),
        )

    def freeze(self) -> ComparisonConfiguration:
        """Freeze into an immutable, validated configuration.

        Raises:
            ConfigurationError: If any section is invalid.
        """
        defaults = ComparisonConfiguration.default()
        frozen = ComparisonConfiguration(
            mappings=self.mappings.freeze(),
            filters=self.filters.freeze(),
            exclusions=self.exclusions.freeze(),
            breaking_change_rules=self.breaking_change_rules.resolve(
                defaults.breaking_change_rules
            ),
            output_format=self.output_format or defaults.output_format,
            output_path=self.output_path,
            fail_on_breaking_changes=(
                defaults.fail_on_breaking_changes
                if self.fail_on_breaking_changes is None
                else self.fail_on_breaking_changes
            ),
        )
        logger.debug("Frozen comparison configuration: %r", frozen)
        return frozen

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> MutableComparisonConfiguration:
        """Create a builder from a parsed configuration document.

        Args:
            data (Mapping[str, Any] | None): Parsed JSON/TOML document.

        Returns:
            MutableComparisonConfiguration: The builder (unset values stay ``None``).

        Raises:
            ConfigurationError: On unknown keys, malformed values or unknown formats.
        """
        if not data:
            return cls()
        check_unknown_keys(data, TOP_LEVEL_KEYS)

        raw_format: str | None = get_string_or_none(data, Keys.OUTPUT_FORMAT)
        return cls(
            mappings=MutableMappingConfig.from_table(get_table(data, Keys.SECTION_MAPPINGS)),
            filters=MutableFilterConfig.from_table(get_table(data, Keys.SECTION_FILTERS)),
            exclusions=MutableExclusionConfig.from_table(get_table(data, Keys.SECTION_EXCLUSIONS)),
            breaking_change_rules=MutableBreakingChangeRules.from_table(
                get_table(data, Keys.SECTION_BREAKING_CHANGE_RULES)
            ),
            output_format=(
                None
                if raw_format is None
                else parse_enum(ReportFormat, raw_format, key=Keys.OUTPUT_FORMAT)
            ),
            output_path=get_string_or_none(data, Keys.OUTPUT_PATH),
            fail_on_breaking_changes=get_bool_or_none(data, Keys.FAIL_ON_BREAKING_CHANGES),
        )
