"""Graph view of a triple sequence."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from rdfsort._errors import CycleError
from rdfsort._terms import Node, Triple

from ._algorithms import topological_sort

logger = logging.getLogger(__name__)

type AdjacencyList = dict[Node, list[Node]]
type RecoveryIndex = dict[Node, list[Triple]]


def build_adjacency(triples: Iterable[Triple]) -> tuple[AdjacencyList, RecoveryIndex]:
    """Build the adjacency list and the recovery index of a triple sequence.

    Each triple is a directed edge from its subject to its object::

                      predicate
        (subject) ---------------> (object)

    Every subject and every object becomes a key of both mappings, so that
    pure sinks are present with no outgoing edges.

    Args:
        triples: The triples, in any order. Duplicates are kept.

    Returns:
        ``(adjacency, recovery)`` where ``adjacency`` maps each node to the
        objects it points to and ``recovery`` maps each node to the triples it
        is the subject of, both in input order.

    """
    adjacency: AdjacencyList = {}
    recovery: RecoveryIndex = {}
    for triple in triples:
        adjacency.setdefault(triple.subject, []).append(triple.object)
        recovery.setdefault(triple.subject, []).append(triple)
        adjacency.setdefault(triple.object, [])
        recovery.setdefault(triple.object, [])

    logger.debug("Built adjacency list with %d nodes", len(adjacency))
    return adjacency, recovery


@dataclass(frozen=True, slots=True)
class TripleGraph:
    """A directed graph over the nodes of a triple sequence.

    This is a read-only view built once from a list of triples. Edges run
    from a triple's subject to its object; parallel edges are kept.

    Attributes:
        _adjacency: Mapping from node to the objects of its triples.
        _recovery: Mapping from node to the triples it is the subject of.

    """

    _adjacency: AdjacencyList = field(default_factory=dict)
    _recovery: RecoveryIndex = field(default_factory=dict)

    @classmethod
    def from_triples(cls, triples: Iterable[Triple]) -> TripleGraph:
        """Build a graph from a sequence of triples.

        Example:
            >>> from rdfsort import Node, NodeKind, Triple
            >>> a, p, b = (Node(NodeKind.IRI, v) for v in "apb")
            >>> graph = TripleGraph.from_triples([Triple(a, p, b)])
            >>> graph.successors(a) == (b,)
            True

        """
        adjacency, recovery = build_adjacency(triples)
        return cls(_adjacency=adjacency, _recovery=recovery)

    @property
    def nodes(self) -> tuple[Node, ...]:
        """All subjects and objects, in first-seen order."""
        return tuple(self._adjacency)

    def successors(self, node: Node) -> tuple[Node, ...]:
        """Objects of the triples whose subject is ``node``."""
        return tuple(self._adjacency.get(node, ()))

    def triples_of(self, node: Node) -> tuple[Triple, ...]:
        """Triples whose subject is ``node``, in input order."""
        return tuple(self._recovery.get(node, ()))

    def roots(self) -> tuple[Node, ...]:
        """Nodes that never appear as an object."""
        targets = {obj for objs in self._adjacency.values() for obj in objs}
        return tuple(n for n in self._adjacency if n not in targets)

    def leaves(self) -> tuple[Node, ...]:
        """Nodes that never appear as a subject."""
        return tuple(n for n, objs in self._adjacency.items() if not objs)

    def descendants(self, node: Node) -> frozenset[Node]:
        """All nodes reachable from ``node`` through one or more edges."""
        visited: set[Node] = set()
        stack = list(self.successors(node))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(self.successors(current))
        return frozenset(visited)

    def topological_order(self, *, strict: bool = False) -> list[Node]:
        """Return nodes with every node after the nodes it points to.

        Raises:
            CycleError: If ``strict`` is set and the graph has a cycle.

        """
        return topological_sort(self._adjacency, strict=strict)

    def has_cycle(self) -> bool:
        """Check if the graph contains a cycle."""
        try:
            self.topological_order(strict=True)
        except CycleError:
            return True
        return False

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._adjacency)

    def __contains__(self, node: object) -> bool:
        """Check if a node is in the graph."""
        return node in self._adjacency
