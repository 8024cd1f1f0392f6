# topmark:header:start
#
#   project      : ApiDelta
#   file         : test_patterns.py
#   file_relpath : tests/core/test_patterns.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for anchored wildcard patterns (`apidelta.core.patterns`)."""

from __future__ import annotations

import pytest

from apidelta.core.errors import ConfigurationError
from apidelta.core.patterns import PatternSet, WildcardPattern, is_wildcard, wildcard_to_regex
from tests.conftest import parametrize


@parametrize(
    "pattern, identifier, expected",
    [
        ("MyLib.Internal", "MyLib.Internal", True),
        ("MyLib.Internal", "MyLib.Internals", False),
        ("MyLib.*", "MyLib.Core.Parser", True),
        ("MyLib.*", "MyLib", False),
        ("*Tests", "MyLib.ParserTests", True),
        ("My?ib", "MyLib", True),
        ("My?ib", "MyLLib", False),
        ("MyLib.(Core)", "MyLib.(Core)", True),
        ("MyLib+Nested", "MyLib+Nested", True),
        ("*", "", True),
    ],
)
def test_wildcard_matching_is_anchored(pattern: str, identifier: str, expected: bool) -> None:
    """Wildcards cover the whole identifier; other characters are literal."""
    assert WildcardPattern(pattern).matches(identifier) is expected


def test_ignore_case() -> None:
    """Case folding is opt-in."""
    assert not WildcardPattern("mylib.*").matches("MyLib.Core")
    assert WildcardPattern("mylib.*", ignore_case=True).matches("MyLib.Core")


def test_wildcard_helpers() -> None:
    """`is_wildcard` and `wildcard_to_regex` agree on what is special."""
    assert is_wildcard("A.*")
    assert is_wildcard("A?")
    assert not is_wildcard("A.B")
    assert wildcard_to_regex("A.*") == r"^A\..*\Z"
    assert WildcardPattern("A.B").is_literal


@parametrize("text", ["MyLib.Parser", "MyLib.*", "MyLib.Pars?r"])
def test_trailing_newline_never_matches(text: str) -> None:
    """Matching covers the whole identifier, line terminators included."""
    pattern = WildcardPattern(text)
    assert pattern.matches("MyLib.Parser")
    assert not pattern.matches("MyLib.Parser\n")


@parametrize("text", ["", "   "])
def test_empty_pattern_is_rejected(text: str) -> None:
    """Empty and whitespace-only patterns are configuration errors."""
    with pytest.raises(ConfigurationError):
        WildcardPattern(text)


def test_pattern_set_dedupes_and_reports_key() -> None:
    """Duplicates collapse; an invalid entry names the configuration key."""
    ps = PatternSet.compile(["A.*", "B", "A.*"])
    assert len(ps) == 2
    assert ps.matches("A.X")
    assert ps.first_match("B") is not None
    assert ps.first_match("C") is None

    with pytest.raises(ConfigurationError) as excinfo:
        PatternSet.compile(["ok", ""], key="filters.includeTypes")
    assert excinfo.value.key == "filters.includeTypes"
    assert str(excinfo.value).startswith("filters.includeTypes: ")


def test_empty_pattern_set_is_falsy_and_matches_nothing() -> None:
    """An empty set is falsy, which the scope filter uses for 'no include list'."""
    ps = PatternSet.compile([])
    assert not ps
    assert not ps.matches("anything")
