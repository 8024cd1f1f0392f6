# topmark:header:start
#
#   project      : ApiDelta
#   file         : test_graph.py
#   file_relpath : tests/core/test_graph.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for `apidelta.core.graph` cycle detection."""

from __future__ import annotations

from hypothesis import given

from apidelta.core.graph import find_cycle, has_cycle
from tests.conftest import parametrize
from tests.strategies_apidelta import namespace_graphs


def _reaches_itself(graph: dict[str, list[str]]) -> bool:
    """Reference check: some node can reach itself (transitive closure)."""
    for start in graph:
        frontier: list[str] = list(graph.get(start, ()))
        seen: set[str] = set()
        while frontier:
            node: str = frontier.pop()
            if node == start:
                return True
            if node in seen:
                continue
            seen.add(node)
            frontier.extend(graph.get(node, ()))
    return False


@parametrize(
    "graph",
    [
        {},
        {"A": ["B"]},
        {"A": ["B", "C"], "B": ["C"], "C": []},
        {"A": ["B"], "B": ["C"], "D": ["A"]},
    ],
)
def test_acyclic_graphs_have_no_cycle(graph: dict[str, list[str]]) -> None:
    """DAGs (including diamonds and dangling sinks) are accepted."""
    assert find_cycle(graph) is None
    assert not has_cycle(graph)


def test_two_node_cycle_is_returned_closed() -> None:
    """``A -> B -> A`` is reported as a closed path starting at the first node."""
    assert find_cycle({"A": ["B"], "B": ["A"]}) == ["A", "B", "A"]


def test_self_loop_is_a_cycle() -> None:
    """A node mapping to itself is the smallest possible cycle."""
    assert find_cycle({"A": ["A"]}) == ["A", "A"]


def test_cycle_reachable_only_through_a_tail() -> None:
    """Only the cyclic part of the path is returned."""
    cycle: list[str] | None = find_cycle({"X": ["A"], "A": ["B"], "B": ["C"], "C": ["A"]})
    assert cycle == ["A", "B", "C", "A"]


def test_nodes_are_generic_hashables() -> None:
    """The routine is not tied to strings."""
    assert find_cycle({1: [2], 2: [3], 3: [1]}) == [1, 2, 3, 1]
    assert find_cycle({(0, 0): [(0, 1)]}) is None


@given(namespace_graphs())
def test_find_cycle_agrees_with_reachability(graph: dict[str, list[str]]) -> None:
    """`has_cycle` holds exactly when some node reaches itself."""
    assert has_cycle(graph) == _reaches_itself(graph)


@given(namespace_graphs())
def test_reported_cycle_follows_graph_edges(graph: dict[str, list[str]]) -> None:
    """Every consecutive pair of a reported cycle is an edge of the graph."""
    cycle: list[str] | None = find_cycle(graph)
    if cycle is None:
        return
    assert cycle[0] == cycle[-1]
    for a, b in zip(cycle, cycle[1:]):
        assert b in graph[a]
