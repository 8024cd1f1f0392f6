# topmark:header:start
#
#   project      : ApiDelta
#   file         : test_config_mapping.py
#   file_relpath : tests/config/test_config_mapping.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for mapping-configuration validation, including cycle rejection."""

from __future__ import annotations

import pytest
from hypothesis import given

from apidelta.config.mapping import MappingConfig, MutableMappingConfig
from apidelta.core.errors import ConfigurationError
from apidelta.core.graph import has_cycle
from tests.conftest import parametrize
from tests.strategies_apidelta import namespace_graphs


def test_empty_mapping_is_valid() -> None:
    """Defaults validate and carry no explicit mappings."""
    config = MappingConfig()
    config.validate()
    assert not config.has_explicit_mappings


def test_cycle_a_b_a_is_rejected() -> None:
    """``A -> B`` plus ``B -> A`` is a configuration error naming the cycle."""
    config = MappingConfig(namespace_mappings={"A": ("B",), "B": ("A",)})
    with pytest.raises(ConfigurationError, match="A -> B -> A"):
        config.validate()


def test_cycle_detection_honors_ignore_case() -> None:
    """Names that differ only in case form a cycle when case is ignored."""
    mappings = {"Old": ("New",), "new": ("old",)}
    MappingConfig(namespace_mappings=mappings).validate()
    with pytest.raises(ConfigurationError):
        MappingConfig(namespace_mappings=mappings, ignore_case=True).validate()


@parametrize(
    "namespace_mappings, type_mappings, fragment",
    [
        ({" ": ("B",)}, {}, "empty source namespace"),
        ({"A": ()}, {}, "no target namespaces"),
        ({"A": ("",)}, {}, "empty target namespace"),
        ({"A": ("B", "B")}, {}, "duplicate target namespace"),
        ({}, {"": "B.T"}, "empty source type"),
        ({}, {"A.T": " "}, "empty target type"),
    ],
)
def test_invalid_entries(
    namespace_mappings: dict[str, tuple[str, ...]],
    type_mappings: dict[str, str],
    fragment: str,
) -> None:
    """Empty keys/values and duplicate targets are rejected."""
    config = MappingConfig(namespace_mappings=namespace_mappings, type_mappings=type_mappings)
    with pytest.raises(ConfigurationError, match=fragment):
        config.validate()


def test_from_table_accepts_single_string_target() -> None:
    """A plain string is shorthand for a one-element target list."""
    builder = MutableMappingConfig.from_table(
        {
            "namespaceMappings": {"Old": "New", "Legacy": ["Core", "Compat"]},
            "typeMappings": {"Old.A": "New.B"},
            "autoMapSameNameTypes": True,
        }
    )
    frozen = builder.freeze()
    assert frozen.namespace_mappings["Old"] == ("New",)
    assert frozen.namespace_mappings["Legacy"] == ("Core", "Compat")
    assert frozen.type_mappings == {"Old.A": "New.B"}
    assert frozen.auto_map_same_name_types
    assert not frozen.ignore_case


def test_freeze_validates() -> None:
    """A builder with a cycle cannot be frozen."""
    with pytest.raises(ConfigurationError):
        MutableMappingConfig(namespace_mappings={"A": ["A"]}).freeze()


def test_merge_replaces_target_lists_per_key() -> None:
    """A later layer replaces the targets of the namespaces it names."""
    base = MutableMappingConfig(namespace_mappings={"A": ["B"], "C": ["D"]}, ignore_case=True)
    layer = MutableMappingConfig(namespace_mappings={"A": ["E"]})
    merged = base.merge_with(layer)
    assert merged.namespace_mappings == {"A": ["E"], "C": ["D"]}
    assert merged.ignore_case is True


def test_frozen_mapping_is_read_only() -> None:
    """Mapping tables are exposed as read-only views."""
    config = MappingConfig(namespace_mappings={"A": ("B",)})
    with pytest.raises(TypeError):
        config.namespace_mappings["X"] = ("Y",)  # type: ignore[index]
    assert config.thaw().freeze() == config


@given(namespace_graphs())
def test_validation_fails_exactly_for_cyclic_mappings(graph: dict[str, list[str]]) -> None:
    """Acyclic mapping relations validate; cyclic ones raise `ConfigurationError`."""
    config = MappingConfig(namespace_mappings={k: tuple(v) for k, v in graph.items()})
    if has_cycle(graph):
        with pytest.raises(ConfigurationError):
            config.validate()
    else:
        config.validate()
