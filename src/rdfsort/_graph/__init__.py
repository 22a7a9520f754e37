"""Graph module providing the triple graph and its ordering.

This module contains:
- build_adjacency: Adjacency list and recovery index of a triple sequence
- TripleGraph: A read-only graph view over a triple sequence
- topological_sort: Cycle-tolerant depth-first ordering of nodes
"""

from ._algorithms import TraversalContext, topological_sort
from ._builder import AdjacencyList, RecoveryIndex, TripleGraph, build_adjacency

__all__ = [
    "AdjacencyList",
    "RecoveryIndex",
    "TraversalContext",
    "TripleGraph",
    "build_adjacency",
    "topological_sort",
]
