"""Reordering of triples for streaming serialization."""

import logging
from collections.abc import Sequence

from ._errors import BufferOverflowError, SortError, TripleSortError
from ._graph import build_adjacency, topological_sort
from ._terms import Triple

logger = logging.getLogger(__name__)


def sort_triples(triples: Sequence[Triple], *, strict: bool = False) -> list[Triple]:
    """Order triples so that nested nodes are described before they are referenced.

    Triples are grouped by subject. Groups follow the depth-first finishing
    order of the subject -> object graph, and inside a group triples keep
    their input order. The result is a permutation of ``triples``; duplicates
    are preserved.

    Args:
        triples: Triples in any order.
        strict: Fail with TripleSortError on cyclic input instead of breaking
            the cycle at an arbitrary edge.

    Returns:
        The reordered triples.

    Raises:
        TripleSortError: If ordering the nodes of the graph fails.
        BufferOverflowError: If more triples are recovered than were given.

    """
    adjacency, recovery = build_adjacency(triples)
    try:
        sorted_nodes = topological_sort(adjacency, strict=strict)
    except SortError as e:
        msg = f"error sorting the triples: {e}"
        raise TripleSortError(msg) from e

    sorted_triples: list[Triple] = []
    for subject in sorted_nodes:
        for triple in recovery[subject]:
            if len(sorted_triples) >= len(triples):
                msg = "overflow error. more triples than expected found after sorting"
                raise BufferOverflowError(msg, sorted_triples)
            sorted_triples.append(triple)

    logger.debug("Sorted %d triples over %d nodes", len(sorted_triples), len(sorted_nodes))
    return sorted_triples
