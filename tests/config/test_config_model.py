# topmark:header:start
#
#   project      : ApiDelta
#   file         : test_config_model.py
#   file_relpath : tests/config/test_config_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for configuration layering: builders, merge semantics and freezing."""

from __future__ import annotations

import pytest

from apidelta.config.filters import (
    ExclusionConfig,
    FilterConfig,
    MutableExclusionConfig,
    MutableFilterConfig,
    merge_lists,
)
from apidelta.config.model import ComparisonConfiguration, MutableComparisonConfiguration
from apidelta.config.rules import MutableBreakingChangeRules
from apidelta.core.errors import ConfigurationError
from apidelta.core.formats import ReportFormat
from tests.conftest import make_config, parametrize


def test_defaults() -> None:
    """An empty builder freezes to the documented defaults."""
    config: ComparisonConfiguration = MutableComparisonConfiguration().freeze()
    assert config == ComparisonConfiguration.default()
    assert config.output_format is ReportFormat.CONSOLE
    assert config.output_path is None
    assert config.fail_on_breaking_changes is True
    assert config.filters == FilterConfig()
    assert config.exclusions.is_empty


def test_scalars_are_last_wins() -> None:
    """Unset scalars in a later layer keep the earlier value."""
    base = MutableComparisonConfiguration(
        output_format=ReportFormat.JSON, output_path="a.json", fail_on_breaking_changes=False
    )
    layer = MutableComparisonConfiguration(output_format=ReportFormat.MARKDOWN)
    merged = base.merge_with(layer).freeze()
    assert merged.output_format is ReportFormat.MARKDOWN
    assert merged.output_path == "a.json"
    assert merged.fail_on_breaking_changes is False


def test_lists_accumulate_without_duplicates() -> None:
    """Filter and exclusion lists from every layer are kept, in order."""
    base = MutableComparisonConfiguration(
        filters=MutableFilterConfig(include_namespaces=["MyLib", "MyLib.*"]),
        exclusions=MutableExclusionConfig(excluded_types=["MyLib.Old"]),
    )
    layer = MutableComparisonConfiguration(
        filters=MutableFilterConfig(include_namespaces=["MyLib.*", "Other"]),
        exclusions=MutableExclusionConfig(
            excluded_types=["MyLib.Gone"], exclude_obsolete=True
        ),
    )
    merged = base.merge_with(layer).freeze()
    assert merged.filters.include_namespaces == ("MyLib", "MyLib.*", "Other")
    assert merged.exclusions.excluded_types == ("MyLib.Old", "MyLib.Gone")
    assert merged.exclusions.exclude_obsolete


def test_merge_lists_helper() -> None:
    """First occurrences win."""
    assert merge_lists(["a", "b"], ["b", "c"], ["a"]) == ["a", "b", "c"]


def test_freeze_validates_every_section() -> None:
    """An empty filter pattern or a mapping cycle fails at freeze time."""
    with pytest.raises(ConfigurationError, match="filters.excludeTypes"):
        MutableComparisonConfiguration(
            filters=MutableFilterConfig(exclude_types=[""])
        ).freeze()
    with pytest.raises(ConfigurationError, match="exclusions.excludedMemberPatterns"):
        MutableComparisonConfiguration(
            exclusions=MutableExclusionConfig(excluded_member_patterns=["  "])
        ).freeze()


def test_thaw_freeze_round_trip() -> None:
    """A frozen configuration survives a thaw/freeze cycle unchanged."""
    config = make_config(
        breaking_change_rules=MutableBreakingChangeRules(treat_added_type_as_breaking=True),
        output_format=ReportFormat.HTML,
    )
    assert config.thaw().freeze() == config


@parametrize(
    "document, fragment",
    [
        ({"unknownSection": {}}, "unknownSection"),
        ({"outputFormat": "pdf"}, "outputFormat"),
        ({"failOnBreakingChanges": "no"}, "failOnBreakingChanges"),
        ({"filters": ["MyLib"]}, "filters"),
        ({"filters": {"includeNamespaces": "MyLib"}}, "filters.includeNamespaces"),
        ({"exclusions": {"excludedTypes": [1]}}, "exclusions.excludedTypes"),
        ({"mappings": {"typeMappings": {"A": 1}}}, "mappings.typeMappings.A"),
    ],
)
def test_from_dict_rejects_malformed_documents(document: dict[str, object], fragment: str) -> None:
    """Unknown keys and wrongly typed values name the offending key."""
    with pytest.raises(ConfigurationError) as excinfo:
        MutableComparisonConfiguration.from_dict(document)
    assert fragment in str(excinfo.value)


def test_from_dict_reads_every_section() -> None:
    """A complete document populates the builder."""
    builder = MutableComparisonConfiguration.from_dict(
        {
            "outputFormat": "md",
            "outputPath": "report.md",
            "failOnBreakingChanges": False,
            "mappings": {"namespaceMappings": {"Old": ["New"]}},
            "filters": {"includeInternals": True},
            "exclusions": {"excludedMembers": ["MyLib.Parser.Reset"]},
            "breakingChangeRules": {"treatAddedMemberAsBreaking": True},
        }
    )
    config = builder.freeze()
    assert config.output_format is ReportFormat.MARKDOWN
    assert config.output_path == "report.md"
    assert not config.fail_on_breaking_changes
    assert config.mappings.namespace_mappings["Old"] == ("New",)
    assert config.filters.include_internals
    assert config.exclusions.excluded_members == ("MyLib.Parser.Reset",)
    assert config.breaking_change_rules.treat_added_member_as_breaking


def test_to_dict_omits_unset_output_path() -> None:
    """``outputPath`` only appears when set."""
    assert "outputPath" not in ComparisonConfiguration().to_dict()
    assert ComparisonConfiguration(output_path="x.json").to_dict()["outputPath"] == "x.json"


def test_exclusion_config_emptiness() -> None:
    """``excludeObsolete`` alone does not count as an exclusion list."""
    assert ExclusionConfig(exclude_obsolete=True).is_empty
    assert not ExclusionConfig(excluded_member_patterns=("*.Dump",)).is_empty
