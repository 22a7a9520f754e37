"""Errors raised while ordering triples."""

from collections.abc import Sequence
from typing import Any


class SortError(Exception):
    """Base class for failures of a sort call.

    Attributes:
        partial: Whatever prefix of the result buffer had been filled when the
            failure happened. Only useful for diagnostics; the sort has failed.

    """

    def __init__(self, message: str, partial: Sequence[Any] = ()) -> None:
        super().__init__(message)
        self.partial = list(partial)


class DanglingNodeError(SortError):
    """Raised when a node is referenced but is not a key of the adjacency list."""

    def __init__(self, node: object, partial: Sequence[Any] = ()) -> None:
        self.node = node
        super().__init__(f"node {node!r} doesn't exist in the graph", partial)


class BufferOverflowError(SortError):
    """Raised when more items are written than the result buffer was sized for."""


class CycleError(SortError):
    """Raised in strict mode when a back-edge closes a cycle."""

    def __init__(self, node: object, partial: Sequence[Any] = ()) -> None:
        self.node = node
        super().__init__(f"cycle detected through node {node!r}", partial)


class TripleSortError(SortError):
    """Raised by the triple reassembler when sorting the underlying nodes fails."""
