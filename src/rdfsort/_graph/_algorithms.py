"""Graph algorithms for ordering triple graphs."""

import logging
from collections.abc import Hashable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field

from rdfsort._errors import BufferOverflowError, CycleError, DanglingNodeError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TraversalContext[T: Hashable]:
    """State shared by the depth-first visits of a single sort call.

    The result buffer is sized to the number of keys of the adjacency list and
    filled left to right; ``cursor`` is the next free slot.

    Attributes:
        adjacency: Mapping from node to the nodes it points to.
        strict: Raise CycleError on a back-edge instead of skipping it.
        visited: Nodes already entered by some visit.
        result: Fixed-size output buffer.
        cursor: Number of filled slots of ``result``.

    """

    adjacency: Mapping[T, Sequence[T]]
    strict: bool = False
    visited: set[T] = field(default_factory=set)
    result: list[T | None] = field(init=False)
    cursor: int = 0
    _active: set[T] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.result = [None] * len(self.adjacency)

    @property
    def filled(self) -> list[T]:
        """The filled prefix of the result buffer."""
        return [node for node in self.result[: self.cursor] if node is not None]

    def visit(self, node: T | None) -> None:
        """Append ``node`` and everything newly reachable from it, children first.

        A node is marked visited on entry, so a back-edge into a node that is
        still being traversed is skipped; this is what lets cycles through
        without an error. Uses an explicit stack of ``(node, neighbors)``
        frames, so deep graphs never hit the interpreter recursion limit.

        Raises:
            DanglingNodeError: If a node reached is not a key of the adjacency list.
            BufferOverflowError: If more nodes finish than there are keys.
            CycleError: In strict mode, if a back-edge closes a cycle.

        """
        if node is None:
            return
        if node not in self.adjacency:
            raise DanglingNodeError(node, self.filled)
        if node in self.visited:
            return

        stack: list[tuple[T, Iterator[T]]] = []
        self._enter(node, stack)
        while stack:
            current, neighbors = stack[-1]
            for neighbor in neighbors:
                if neighbor is None:
                    continue
                if neighbor not in self.visited:
                    self._enter(neighbor, stack)
                    break
                if self.strict and neighbor in self._active:
                    raise CycleError(neighbor, self.filled)
            else:
                stack.pop()
                self._active.discard(current)
                self._emit(current)

    def _enter(self, node: T, stack: list[tuple[T, Iterator[T]]]) -> None:
        if node not in self.adjacency:
            raise DanglingNodeError(node, self.filled)
        self.visited.add(node)
        self._active.add(node)
        stack.append((node, iter(self.adjacency[node])))

    def _emit(self, node: T) -> None:
        # Bound is the key count of the whole graph, not of the current subtree.
        if self.cursor >= len(self.result):
            msg = "found more nodes than the number of keys in the adjacency list"
            raise BufferOverflowError(msg, self.filled)
        self.result[self.cursor] = node
        self.cursor += 1


def topological_sort[T: Hashable](adjacency: Mapping[T, Sequence[T]], *, strict: bool = False) -> list[T]:
    """Sort a graph so that every node comes after the nodes it points to.

    Nodes are listed in the order their depth-first traversal finishes: a
    pure sink comes before any node that points to it. Roots are tried in the
    iteration order of ``adjacency``. Cycles are tolerated unless ``strict``
    is set: some total order of all nodes is still produced.

    Args:
        adjacency: Mapping from node to the nodes it points to. Every node
            that appears as a neighbor must also be a key.
        strict: Raise CycleError instead of silently breaking cycles.

    Returns:
        List of all keys of ``adjacency``, dependencies before dependents.

    Raises:
        DanglingNodeError: If a neighbor is not a key of ``adjacency``.
        BufferOverflowError: If the traversal finishes more nodes than keys.
        CycleError: If ``strict`` is set and the graph has a cycle.

    Example:
        >>> # a -> b -> c means a points to b, b points to c
        >>> topological_sort({"a": ["b"], "b": ["c"], "c": []})
        ['c', 'b', 'a']

    """
    logger.debug("Sorting %d nodes (strict=%s)", len(adjacency), strict)
    context = TraversalContext(adjacency, strict=strict)
    for node in adjacency:
        if node not in context.visited:
            context.visit(node)
    return context.filled
