import pytest

from rdfsort._terms import Node, NodeArena, NodeKind


@pytest.fixture
def blank_nodes() -> list[Node]:
    """Ten blank nodes ``N0`` .. ``N9`` owned by a single arena."""
    arena = NodeArena()
    return [arena.new(NodeKind.BLANK, f"N{i}") for i in range(10)]
