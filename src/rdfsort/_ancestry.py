"""Single-hop parent lookup over a triple sequence."""

from collections.abc import Iterable

from ._terms import Node, Triple


def parent_map(triples: Iterable[Triple]) -> dict[Node, Node | None]:
    """Map every node to the subject of the last triple it is the object of.

    Subjects that are never an object map to ``None``. This is a plain
    parent table: there is no union by rank, no path compression and no cycle
    detection.

    Example:
        >>> from rdfsort import Node, NodeKind, Triple
        >>> a, p, b = (Node(NodeKind.BLANK, v) for v in "apb")
        >>> parents = parent_map([Triple(a, p, b)])
        >>> parents[b] is a, parents[a] is None
        (True, True)

    """
    parent: dict[Node, Node | None] = {}
    for triple in triples:
        parent[triple.object] = triple.subject
        parent.setdefault(triple.subject, None)
    return parent


def ancestors(parents: dict[Node, Node | None], node: Node) -> list[Node]:
    """Walk the parent chain of ``node``, nearest first.

    Stops at a node without parent or when the chain loops back onto a node
    already listed.
    """
    chain: list[Node] = []
    seen = {node}
    current = parents.get(node)
    while current is not None and current not in seen:
        chain.append(current)
        seen.add(current)
        current = parents.get(current)
    return chain
