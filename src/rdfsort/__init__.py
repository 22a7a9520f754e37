"""Ordering of RDF triples for streaming serialization."""

__all__ = [
    "AdjacencyList",
    "BufferOverflowError",
    "CycleError",
    "DanglingNodeError",
    "DocumentError",
    "Node",
    "NodeArena",
    "NodeKind",
    "RecoveryIndex",
    "SortError",
    "TraversalContext",
    "Triple",
    "TripleDocument",
    "TripleGraph",
    "TripleSortError",
    "abbreviate",
    "ancestors",
    "build_adjacency",
    "export_to_toml",
    "invert_schema_definition",
    "load_document",
    "parent_map",
    "sort_triples",
    "topological_sort",
]

from ._ancestry import ancestors, parent_map
from ._errors import BufferOverflowError, CycleError, DanglingNodeError, SortError, TripleSortError
from ._graph import AdjacencyList, RecoveryIndex, TraversalContext, TripleGraph, build_adjacency, topological_sort
from ._io import DocumentError, TripleDocument, export_to_toml, load_document
from ._namespaces import abbreviate, invert_schema_definition
from ._reassemble import sort_triples
from ._terms import Node, NodeArena, NodeKind, Triple
