# topmark:header:start
#
#   project      : ApiDelta
#   file         : test_exclusions.py
#   file_relpath : tests/engine/test_exclusions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `ExclusionRegistry` lookups and verdicts."""

from __future__ import annotations

import pytest

from apidelta.config.filters import ExclusionConfig
from apidelta.core.errors import ConfigurationError
from apidelta.exclusions import ExclusionRegistry, ExclusionVerdict
from tests.factories import method, type_


def test_literal_type_and_member_lookups() -> None:
    """Members of an excluded type are excluded through their declaring type."""
    registry = ExclusionRegistry(
        ExclusionConfig(
            excluded_types=("MyLib.Legacy.Widget",),
            excluded_members=("MyLib.Parser.Reset",),
        )
    )
    assert registry.is_type_excluded("MyLib.Legacy.Widget")
    assert not registry.is_type_excluded("MyLib.Legacy")
    assert not registry.is_type_excluded("")
    assert registry.is_member_excluded("MyLib.Parser.Reset")
    assert registry.is_member_excluded("MyLib.Legacy.Widget.Render")
    assert not registry.is_member_excluded("MyLib.Parser.Parse")


def test_pattern_lookups() -> None:
    """Type and member patterns use the anchored wildcard syntax."""
    registry = ExclusionRegistry(
        ExclusionConfig(
            excluded_type_patterns=("MyLib.Experimental.*",),
            excluded_member_patterns=("*.DebugDump",),
        )
    )
    assert registry.is_type_excluded("MyLib.Experimental.Fast.Parser")
    assert not registry.is_type_excluded("MyLib.ExperimentalParser")
    assert registry.is_member_excluded("MyLib.Parser.DebugDump")
    cls = type_("MyLib.Parser")
    assert registry.is_excluded(method(cls, "DebugDump"))
    assert not registry.is_excluded(cls)


def test_explicit_declaring_type_is_used() -> None:
    """An explicit declaring type replaces the one derived from the member name."""
    registry = ExclusionRegistry(ExclusionConfig(excluded_types=("MyLib.Outer.Inner",)))
    assert registry.is_member_excluded("MyLib.Outer.Inner.Run")
    assert not registry.is_member_excluded("MyLib.Outer.Inner.Run", "MyLib.Outer")


def test_classify_verdicts() -> None:
    """Excluded elements are either absent (excluded) or present (anomaly)."""
    registry = ExclusionRegistry(
        ExclusionConfig(excluded_types=("MyLib.Gone", "MyLib.Stays")),
        target_names=["MyLib.Stays", "MyLib.Parser"],
    )
    assert registry.classify("MyLib.Parser", is_type=True) is ExclusionVerdict.NOT_EXCLUDED
    assert registry.classify("MyLib.Gone", is_type=True) is ExclusionVerdict.EXCLUDED
    assert (
        registry.classify("MyLib.Stays", is_type=True) is ExclusionVerdict.UNEXPECTEDLY_INCLUDED
    )
    assert (
        registry.classify("MyLib.Gone", is_type=True, present=True)
        is ExclusionVerdict.UNEXPECTEDLY_INCLUDED
    )
    assert registry.classify_descriptor(type_("MyLib.Stays"), present=False) is (
        ExclusionVerdict.EXCLUDED
    )


def test_ignore_case() -> None:
    """Names and presence checks fold case when requested."""
    registry = ExclusionRegistry(
        ExclusionConfig(excluded_types=("mylib.widget",)),
        target_names=["MYLIB.WIDGET"],
        ignore_case=True,
    )
    assert registry.is_type_excluded("MyLib.Widget")
    assert registry.is_present_in_target("MyLib.Widget")
    assert registry.classify("MyLib.Widget", is_type=True) is ExclusionVerdict.UNEXPECTEDLY_INCLUDED


def test_empty_entry_is_rejected() -> None:
    """Blank exclusion entries are configuration errors."""
    with pytest.raises(ConfigurationError):
        ExclusionRegistry(ExclusionConfig(excluded_members=(" ",)))
