# topmark:header:start
#
#   project      : ApiDelta
#   file         : graph.py
#   file_relpath : src/apidelta/core/graph.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Cycle detection over small directed graphs.

The namespace-mapping relation of a comparison configuration is a directed
graph (source namespace → target namespaces). A rename chain ``A → B → A``
would make candidate resolution ambiguous, so configurations containing a cycle
are rejected. The routines here are generic over hashable node types so the
same check can be reused by any configuration layer.

The search is an iterative depth-first traversal that keeps a *visited* set
and an explicit recursion stack; a back edge to a node currently on the stack
is a cycle.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING, TypeVar

from apidelta.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from apidelta.config.logging import ApiDeltaLogger

N = TypeVar("N", bound=Hashable)

logger: ApiDeltaLogger = get_logger(__name__)


def find_cycle(graph: Mapping[N, Iterable[N]]) -> list[N] | None:
    """Return one cycle of ``graph`` as a closed node path, or ``None``.

    Nodes are visited in mapping order and successors in iteration order, so the
    returned cycle is deterministic for a given input.

    Args:
        graph (Mapping[N, Iterable[N]]): Adjacency mapping. Nodes that only
            appear as successors are treated as sinks.

    Returns:
        list[N] | None: The cycle as ``[n0, n1, ..., n0]`` (first node repeated
            at the end), or ``None`` when the graph is acyclic.
    """
    visited: set[N] = set()

    for root in graph:
        if root in visited:
            continue

        # Explicit stack of (node, successor iterator); `on_stack` mirrors it for O(1) lookups.
        path: list[N] = [root]
        on_stack: set[N] = {root}
        iterators = [iter(graph.get(root, ()))]
        visited.add(root)

        while iterators:
            successor: N | None = next(iterators[-1], None)
            if successor is None:
                iterators.pop()
                on_stack.discard(path.pop())
                continue
            if successor in on_stack:
                start: int = path.index(successor)
                cycle: list[N] = [*path[start:], successor]
                logger.debug("Cycle detected: %s", " -> ".join(str(n) for n in cycle))
                return cycle
            if successor in visited:
                continue
            visited.add(successor)
            path.append(successor)
            on_stack.add(successor)
            iterators.append(iter(graph.get(successor, ())))

    return None


def has_cycle(graph: Mapping[N, Iterable[N]]) -> bool:
    """Return True if ``graph`` contains at least one cycle."""
    return find_cycle(graph) is not None
