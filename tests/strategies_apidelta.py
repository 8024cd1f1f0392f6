# topmark:header:start
#
#   project      : ApiDelta
#   file         : strategies_apidelta.py
#   file_relpath : tests/strategies_apidelta.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies for descriptor snapshots, rule sets and mapping graphs.

Generated snapshots are *well-formed*: type names are unique, every member's
declaring type is present, and member identities are unique within a type. The
strategies stay small on purpose so property tests explore shapes (overloads,
kinds, accessibility) rather than sheer volume.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from hypothesis import strategies as st

from apidelta.config.rules import BreakingChangeRules
from apidelta.model.descriptor import Accessibility, MemberDescriptor, MemberKind, Signature
from tests.factories import member, param, type_

Draw = Callable[[st.SearchStrategy[Any]], Any]

IDENTIFIERS: st.SearchStrategy[str] = st.from_regex(r"[A-Z][a-z]{1,6}", fullmatch=True)
NAMESPACES: st.SearchStrategy[str] = st.lists(IDENTIFIERS, min_size=1, max_size=3).map(".".join)
TYPE_REFERENCES: st.SearchStrategy[str] = st.sampled_from(
    ["System.String", "System.Int32", "System.Boolean", "System.Object", "MyLib.Widget"]
)
INTERFACES: st.SearchStrategy[str] = st.sampled_from(["System.IDisposable", "MyLib.IShape"])

TYPE_KINDS: tuple[MemberKind, ...] = tuple(k for k in MemberKind if k.is_type)
MEMBER_KINDS: tuple[MemberKind, ...] = tuple(k for k in MemberKind if not k.is_type)

rule_sets: st.SearchStrategy[BreakingChangeRules] = st.builds(
    BreakingChangeRules,
    **{name: st.booleans() for name in BreakingChangeRules.__dataclass_fields__},
)


@st.composite
def members_of(draw: Draw, declaring: MemberDescriptor) -> list[MemberDescriptor]:
    """Members of ``declaring`` with unique identities (overloads allowed)."""
    out: list[MemberDescriptor] = []
    seen: set[tuple[str, Any]] = set()
    for _ in range(draw(st.integers(min_value=0, max_value=5))):
        kind: MemberKind = draw(st.sampled_from(MEMBER_KINDS))
        name: str = draw(IDENTIFIERS)
        params = [
            param(t, f"p{i}")
            for i, t in enumerate(draw(st.lists(TYPE_REFERENCES, max_size=3)))
        ]
        descriptor: MemberDescriptor = member(
            declaring,
            name,
            kind,
            returns=draw(TYPE_REFERENCES),
            params=params,
            access=draw(st.sampled_from(list(Accessibility))),
        )
        if descriptor.identity in seen:
            continue
        seen.add(descriptor.identity)
        out.append(descriptor)
    return out


@st.composite
def snapshots(draw: Draw, max_types: int = 4) -> list[MemberDescriptor]:
    """A well-formed snapshot: each type followed by its members."""
    names: list[str] = draw(
        st.lists(
            st.tuples(NAMESPACES, IDENTIFIERS).map(lambda t: f"{t[0]}.{t[1]}"),
            min_size=1,
            max_size=max_types,
            unique=True,
        )
    )
    out: list[MemberDescriptor] = []
    for full_name in names:
        kind: MemberKind = draw(st.sampled_from(TYPE_KINDS))
        declaring = type_(
            full_name,
            kind,
            access=draw(st.sampled_from(list(Accessibility))),
            interfaces=draw(st.lists(INTERFACES, unique=True)),
            signature=Signature(generic_arity=draw(st.integers(min_value=0, max_value=2))),
        )
        out.append(declaring)
        out.extend(draw(members_of(declaring)))
    return out


@st.composite
def namespace_graphs(draw: Draw) -> dict[str, list[str]]:
    """Small namespace-mapping tables over a handful of names (cycles likely)."""
    nodes: list[str] = ["A", "B", "C", "D", "E"]
    sources: list[str] = draw(st.lists(st.sampled_from(nodes), unique=True, max_size=5))
    return {
        s: draw(st.lists(st.sampled_from(nodes), min_size=1, max_size=3, unique=True))
        for s in sources
    }
