"""Tests for the triple graph and its ordering."""

import pytest

from rdfsort._errors import BufferOverflowError, CycleError, DanglingNodeError
from rdfsort._graph import TraversalContext, TripleGraph, build_adjacency, topological_sort
from rdfsort._terms import Node, NodeKind, Triple


class TestBuildAdjacency:
    def test_empty_input(self) -> None:
        adjacency, recovery = build_adjacency([])
        assert adjacency == {}
        assert recovery == {}

    def test_two_triples_sharing_a_subject(self, blank_nodes: list[Node]) -> None:
        #              (N1)
        #       (N0) ---------> (N2)
        #        |
        #   (N3) |
        #        v
        #       (N4)
        n = blank_nodes
        triples = [Triple(n[0], n[1], n[2]), Triple(n[0], n[3], n[4])]
        adjacency, recovery = build_adjacency(triples)

        # Predicates are not part of the graph
        assert list(adjacency) == [n[0], n[2], n[4]]
        assert adjacency[n[0]] == [n[2], n[4]]
        assert adjacency[n[2]] == []
        assert adjacency[n[4]] == []
        assert recovery[n[0]] == triples
        assert recovery[n[2]] == []

    def test_sinks_are_keys(self, blank_nodes: list[Node]) -> None:
        n = blank_nodes
        adjacency, recovery = build_adjacency([Triple(n[0], n[1], n[2])])
        assert n[2] in adjacency
        assert n[2] in recovery

    def test_duplicates_are_kept(self, blank_nodes: list[Node]) -> None:
        n = blank_nodes
        triple = Triple(n[0], n[1], n[2])
        adjacency, recovery = build_adjacency([triple, triple])
        assert adjacency[n[0]] == [n[2], n[2]]
        assert recovery[n[0]] == [triple, triple]

    def test_object_later_used_as_subject(self, blank_nodes: list[Node]) -> None:
        n = blank_nodes
        triples = [Triple(n[0], n[1], n[2]), Triple(n[2], n[3], n[4])]
        adjacency, recovery = build_adjacency(triples)
        assert adjacency[n[2]] == [n[4]]
        assert recovery[n[2]] == [triples[1]]


class TestTopologicalSort:
    def test_empty_graph(self) -> None:
        assert topological_sort({}) == []

    def test_single_node(self) -> None:
        assert topological_sort({"a": []}) == ["a"]

    def test_sink_before_source(self, blank_nodes: list[Node]) -> None:
        n = blank_nodes
        assert topological_sort({n[0]: [n[2]], n[2]: []}) == [n[2], n[0]]

    def test_linear_chain(self) -> None:
        # a -> b -> c
        assert topological_sort({"a": ["b"], "b": ["c"], "c": []}) == ["c", "b", "a"]

    def test_diamond(self) -> None:
        # a -> b, a -> c, b -> d, c -> d
        result = topological_sort({"a": ["b", "c"], "b": ["d"], "c": ["d"], "d": []})
        assert result[0] == "d"
        assert result[-1] == "a"
        assert result.index("d") < result.index("b") < result.index("a")
        assert result.index("d") < result.index("c") < result.index("a")

    def test_forest(self) -> None:
        #       c
        #      / \
        #  a  |   d
        #  |  |   |
        #  b  e   f
        adjacency = {"a": ["b"], "b": [], "c": ["d", "e"], "d": ["f"], "e": [], "f": []}
        result = topological_sort(adjacency)
        assert sorted(result) == sorted(adjacency)
        for node, objects in adjacency.items():
            for obj in objects:
                assert result.index(obj) < result.index(node)

    def test_every_edge_points_backwards_in_acyclic_graph(self) -> None:
        adjacency = {i: [j for j in range(i + 1, 12) if (i * j) % 5 == 1] for i in range(12)}
        result = topological_sort(adjacency)
        assert len(result) == len(set(result)) == 12
        for node, objects in adjacency.items():
            for obj in objects:
                assert result.index(obj) < result.index(node)

    def test_two_node_cycle_is_tolerated(self) -> None:
        result = topological_sort({"a": ["b"], "b": ["a"]})
        assert result == ["b", "a"]

    def test_self_loop_is_tolerated(self) -> None:
        assert topological_sort({"a": ["a"]}) == ["a"]

    def test_longer_cycle_yields_total_order(self) -> None:
        adjacency = {"a": ["b"], "b": ["c"], "c": ["a", "d"], "d": []}
        result = topological_sort(adjacency)
        assert sorted(result) == ["a", "b", "c", "d"]

    def test_missing_key_raises_dangling_node(self, blank_nodes: list[Node]) -> None:
        n = blank_nodes
        with pytest.raises(DanglingNodeError) as excinfo:
            topological_sort({n[0]: [n[2]]})
        assert excinfo.value.node is n[2]

    def test_dangling_node_keeps_filled_prefix(self) -> None:
        with pytest.raises(DanglingNodeError) as excinfo:
            topological_sort({"a": [], "b": ["missing"]})
        assert excinfo.value.partial == ["a"]

    def test_strict_mode_raises_on_cycle(self) -> None:
        with pytest.raises(CycleError, match="cycle"):
            topological_sort({"a": ["b"], "b": ["a"]}, strict=True)

    def test_strict_mode_raises_on_self_loop(self) -> None:
        with pytest.raises(CycleError):
            topological_sort({"a": ["a"]}, strict=True)

    def test_strict_mode_accepts_shared_descendants(self) -> None:
        result = topological_sort({"a": ["b", "c"], "b": ["d"], "c": ["d"], "d": []}, strict=True)
        assert result[0] == "d"

    def test_deep_chain_does_not_recurse(self) -> None:
        depth = 5000
        adjacency = {i: [i + 1] for i in range(depth)}
        adjacency[depth] = []
        assert topological_sort(adjacency) == list(range(depth, -1, -1))


class TestTraversalContext:
    """Visits from a single start node.

    Graph used below::

                     (N1)
            (N0) ------------> (N2)
             |                  |
         (N3)|                  |(N6)
             v                  v
            (N4)               (N7)
                                ^
            (N3) ---------------'
                     (N5)
    """

    @pytest.fixture
    def adjacency(self, blank_nodes: list[Node]) -> dict[Node, list[Node]]:
        n = blank_nodes
        adjacency, _ = build_adjacency(
            [
                Triple(n[0], n[1], n[2]),
                Triple(n[2], n[6], n[7]),
                Triple(n[0], n[3], n[4]),
                Triple(n[3], n[5], n[7]),
            ],
        )
        return adjacency

    def test_unknown_node_raises(self, adjacency: dict[Node, list[Node]]) -> None:
        context = TraversalContext(adjacency)
        with pytest.raises(DanglingNodeError):
            context.visit(Node(NodeKind.BLANK, "sample node"))
        assert context.cursor == 0

    def test_none_is_ignored(self, adjacency: dict[Node, list[Node]]) -> None:
        context = TraversalContext(adjacency)
        context.visit(None)
        assert context.cursor == 0

    def test_node_without_children(self, adjacency: dict[Node, list[Node]], blank_nodes: list[Node]) -> None:
        context = TraversalContext(adjacency)
        context.visit(blank_nodes[7])
        assert context.cursor == 1
        assert context.filled == [blank_nodes[7]]

    def test_node_with_one_child(self, adjacency: dict[Node, list[Node]], blank_nodes: list[Node]) -> None:
        n = blank_nodes
        context = TraversalContext(adjacency)
        context.visit(n[2])
        assert context.filled == [n[7], n[2]]

    def test_whole_reachable_subgraph(self, adjacency: dict[Node, list[Node]], blank_nodes: list[Node]) -> None:
        n = blank_nodes
        context = TraversalContext(adjacency)
        context.visit(n[0])
        assert context.cursor == 4
        assert context.filled == [n[7], n[2], n[4], n[0]]

    def test_visited_node_is_skipped(self, adjacency: dict[Node, list[Node]], blank_nodes: list[Node]) -> None:
        n = blank_nodes
        context = TraversalContext(adjacency)
        context.visit(n[2])
        context.visit(n[2])
        context.visit(n[7])
        assert context.filled == [n[7], n[2]]

    def test_buffer_overflow(self) -> None:
        context = TraversalContext({"a": []})
        context.cursor = 1
        with pytest.raises(BufferOverflowError, match="more nodes than the number of keys"):
            context.visit("a")


class TestTripleGraph:
    def test_empty_graph(self) -> None:
        graph = TripleGraph.from_triples([])
        assert graph.nodes == ()
        assert len(graph) == 0

    def test_queries(self, blank_nodes: list[Node]) -> None:
        n = blank_nodes
        triples = [Triple(n[0], n[1], n[2]), Triple(n[2], n[3], n[4]), Triple(n[0], n[5], n[6])]
        graph = TripleGraph.from_triples(triples)

        assert graph.nodes == (n[0], n[2], n[4], n[6])
        assert graph.successors(n[0]) == (n[2], n[6])
        assert graph.triples_of(n[2]) == (triples[1],)
        assert graph.triples_of(n[9]) == ()
        assert graph.roots() == (n[0],)
        assert graph.leaves() == (n[4], n[6])
        assert graph.descendants(n[0]) == frozenset({n[2], n[4], n[6]})
        assert n[0] in graph
        assert n[1] not in graph

    def test_topological_order(self, blank_nodes: list[Node]) -> None:
        n = blank_nodes
        graph = TripleGraph.from_triples([Triple(n[0], n[1], n[2])])
        assert graph.topological_order() == [n[2], n[0]]

    def test_has_cycle(self, blank_nodes: list[Node]) -> None:
        n = blank_nodes
        acyclic = TripleGraph.from_triples([Triple(n[0], n[1], n[2])])
        cyclic = TripleGraph.from_triples([Triple(n[0], n[1], n[2]), Triple(n[2], n[1], n[0])])
        assert not acyclic.has_cycle()
        assert cyclic.has_cycle()

    def test_descendants_in_cycle(self, blank_nodes: list[Node]) -> None:
        n = blank_nodes
        graph = TripleGraph.from_triples([Triple(n[0], n[1], n[2]), Triple(n[2], n[1], n[0])])
        assert graph.descendants(n[0]) == frozenset({n[0], n[2]})
