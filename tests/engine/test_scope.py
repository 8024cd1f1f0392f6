# topmark:header:start
#
#   project      : ApiDelta
#   file         : test_scope.py
#   file_relpath : tests/engine/test_scope.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the scope filter and `apply_scope`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from apidelta.config.filters import ExclusionConfig, FilterConfig
from apidelta.engine import apply_scope
from apidelta.model.descriptor import Accessibility
from apidelta.scope import ScopeFilter
from tests.conftest import parametrize
from tests.factories import library_v1, method, type_

if TYPE_CHECKING:
    from apidelta.model.descriptor import MemberDescriptor


def _full_names(descriptors: list[MemberDescriptor]) -> set[str]:
    return {d.full_name for d in descriptors}


def test_defaults_keep_visible_api_only() -> None:
    """Internal and private elements are out of scope by default."""
    scope = ScopeFilter(FilterConfig())
    assert scope.is_in_scope(type_("MyLib.Parser"))
    assert scope.is_in_scope(type_("MyLib.Parser", access=Accessibility.PROTECTED))
    assert scope.rejection_reason(type_("MyLib.Cache", access=Accessibility.INTERNAL)) == (
        "internal element"
    )
    assert not scope.is_in_scope(type_("MyLib.Cache", access=Accessibility.PRIVATE))
    assert ScopeFilter(FilterConfig(include_internals=True)).is_in_scope(
        type_("MyLib.Cache", access=Accessibility.INTERNAL)
    )


def test_compiler_generated_and_obsolete() -> None:
    """Compiler-generated elements are dropped; obsolete ones only on request."""
    cls = type_("MyLib.Parser")
    closure = method(cls, "<Parse>b__0")
    old = method(cls, "Reset", obsolete=True)

    scope = ScopeFilter(FilterConfig())
    assert scope.rejection_reason(closure) == "compiler-generated"
    assert scope.is_in_scope(old)

    assert ScopeFilter(FilterConfig(include_compiler_generated=True)).is_in_scope(closure)
    strict = ScopeFilter.from_config(FilterConfig(), ExclusionConfig(exclude_obsolete=True))
    assert strict.rejection_reason(old) == "obsolete"


@parametrize(
    "filters, full_name, reason",
    [
        (FilterConfig(include_namespaces=("MyLib",)), "MyLib.Parser", None),
        (
            FilterConfig(include_namespaces=("MyLib",)),
            "MyLib.Legacy.Widget",
            "namespace not included",
        ),
        (FilterConfig(include_namespaces=("MyLib*",)), "MyLib.Legacy.Widget", None),
        (
            FilterConfig(exclude_namespaces=("*.Legacy",)),
            "MyLib.Legacy.Widget",
            "namespace excluded",
        ),
        (FilterConfig(include_types=("*Parser",)), "MyLib.Widget", "type not included"),
        (FilterConfig(exclude_types=("*Tests",)), "MyLib.ParserTests", "type excluded"),
        (FilterConfig(exclude_types=("*Tests",)), "MyLib.Parser", None),
    ],
)
def test_pattern_rules(filters: FilterConfig, full_name: str, reason: str | None) -> None:
    """Namespace and type patterns are anchored to the whole identifier."""
    assert ScopeFilter(filters).rejection_reason(type_(full_name)) == reason


def test_members_are_filtered_by_their_declaring_type() -> None:
    """Type patterns apply to a member's declaring type."""
    cls = type_("MyLib.Parser")
    scope = ScopeFilter(FilterConfig(include_types=("MyLib.Parser",)))
    assert scope.is_in_scope(method(cls, "Parse"))
    assert not scope.is_in_scope(method(type_("MyLib.Other"), "Parse"))


def test_ignore_case_patterns() -> None:
    """Patterns follow the mapping case sensitivity."""
    filters = FilterConfig(include_namespaces=("mylib",))
    assert not ScopeFilter(filters).is_in_scope(type_("MyLib.Parser"))
    assert ScopeFilter(filters, ignore_case=True).is_in_scope(type_("MyLib.Parser"))


def test_apply_preserves_order() -> None:
    """`apply` yields in-scope descriptors in snapshot order."""
    snapshot = library_v1()
    kept = list(ScopeFilter(FilterConfig()).apply(snapshot))
    assert kept == [d for d in snapshot if d.namespace != "MyLib.Internal" or not d.is_type]


def test_apply_scope_drops_members_of_dropped_types() -> None:
    """A public member of an internal type leaves scope with its type."""
    kept = apply_scope(library_v1(), ScopeFilter(FilterConfig()))
    names = _full_names(kept)
    assert "MyLib.Internal.Cache" not in names
    assert "MyLib.Internal.Cache.Clear" not in names
    assert "MyLib.Parser.Reset" in names
