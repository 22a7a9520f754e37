"""RDF terms: nodes, triples and the arena that owns nodes."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum, auto


class NodeKind(StrEnum):
    """The kind of term a node stands for."""

    IRI = auto()
    LITERAL = auto()
    BLANK = auto()  # Anonymous node, identified only by its position in the graph


@dataclass(frozen=True, slots=True, eq=False)
class Node:
    """A node of the triple graph.

    Nodes are handles, not values: two nodes are the same node only if they
    are the same object. ``eq=False`` keeps the identity-based ``__eq__`` and
    ``__hash__`` inherited from ``object``, so nodes can key dicts and sets
    without ever being merged by their contents.

    Attributes:
        kind: Whether the node is an IRI, a literal or a blank node.
        value: The IRI, the literal lexical form, or the blank node label.
        index: Stable position of the node inside its arena (-1 if the node
            was created outside an arena).

    """

    kind: NodeKind
    value: str
    index: int = -1

    def __str__(self) -> str:
        match self.kind:
            case NodeKind.BLANK:
                return f"_:{self.value}"
            case NodeKind.LITERAL:
                return f'"{self.value}"'
            case _:
                return self.value

    def __repr__(self) -> str:
        return f"Node({self.kind.value}, {self.value!r}, #{self.index})"


@dataclass(frozen=True, slots=True)
class Triple:
    """A subject-predicate-object statement.

    Equality delegates to the nodes, so two triples are equal only when they
    reference the very same node handles.
    """

    subject: Node
    predicate: Node
    object: Node

    def __iter__(self) -> Iterator[Node]:
        yield self.subject
        yield self.predicate
        yield self.object

    def __str__(self) -> str:
        return f"{self.subject} {self.predicate} {self.object} ."


@dataclass(slots=True)
class NodeArena:
    """Owner of nodes, handing out stable dense integer indices.

    Example:
        >>> arena = NodeArena()
        >>> a = arena.intern(NodeKind.IRI, "http://example.org/a")
        >>> a is arena.intern(NodeKind.IRI, "http://example.org/a")
        True
        >>> a.index
        0

    """

    _nodes: list[Node] = field(default_factory=list)
    _labels: dict[tuple[NodeKind, str], Node] = field(default_factory=dict)

    def new(self, kind: NodeKind, value: str) -> Node:
        """Create a fresh node, even if a node with the same label exists."""
        node = Node(kind, value, len(self._nodes))
        self._nodes.append(node)
        self._labels.setdefault((kind, value), node)
        return node

    def intern(self, kind: NodeKind, value: str) -> Node:
        """Return the node registered for ``(kind, value)``, creating it if needed."""
        node = self._labels.get((kind, value))
        if node is None:
            node = self.new(kind, value)
        return node

    def __getitem__(self, index: int) -> Node:
        return self._nodes[index]

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)
