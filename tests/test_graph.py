"""Tests for diagram_geometry.ir.graph — DiagramGraph construction and degree queries."""

from diagram_geometry.ir.graph import DiagramGraph
from diagram_geometry.ir.model import Arrow, Node


def _node(id: str) -> Node:
    return Node.at(id, 0, 0, 100, 60)


def _arrow(src: str, tgt: str, arrow_id: str | None = None) -> Arrow:
    return Arrow(arrow_id or f"{src}->{tgt}", src, tgt)


def _graph(ids: str, *edges: tuple[str, str]) -> DiagramGraph:
    return DiagramGraph.from_snapshot([_node(i) for i in ids], [_arrow(s, t) for s, t in edges])


class TestBasicConstruction:
    def test_empty_graph(self):
        g = DiagramGraph.from_snapshot([], [])
        assert g.node_count() == 0
        assert g.edge_count() == 0
        assert g.roots() == []

    def test_single_node(self):
        g = _graph("A")
        assert g.node_count() == 1
        assert g.edge_count() == 0

    def test_node_data_stored(self):
        node = Node.at("A", 10, 20, 30, 40)
        g = DiagramGraph.from_snapshot([node], [])
        assert g.node("A") is node
        assert g.digraph.nodes["A"]["data"] is node

    def test_order_follows_input(self):
        g = _graph("CAB")
        assert g.order == ["C", "A", "B"]
        assert [n.id for n in g.nodes()] == ["C", "A", "B"]

    def test_duplicate_node_keeps_first_position_in_order(self):
        g = DiagramGraph.from_snapshot([_node("A"), _node("B"), Node.at("A", 5, 5, 10, 10)], [])
        assert g.order == ["A", "B"]
        assert g.node("A").size.width == 10


class TestArrows:
    def test_dangling_arrows_dropped(self):
        g = _graph("AB", ("A", "B"), ("A", "Z"), ("Y", "B"))
        assert g.edge_count() == 1

    def test_self_loops_skipped(self):
        g = _graph("AB", ("A", "A"), ("A", "B"))
        assert g.edge_count() == 1
        assert not g.digraph.has_edge("A", "A")

    def test_parallel_arrows_collapse_to_one_edge(self):
        g = DiagramGraph.from_snapshot(
            [_node("A"), _node("B")],
            [_arrow("A", "B", "a1"), _arrow("A", "B", "a2")],
        )
        assert g.edge_count() == 1
        assert g.digraph.edges["A", "B"]["arrows"] == ["a1", "a2"]

    def test_successor_order_follows_arrows(self):
        g = _graph("ABCD", ("A", "D"), ("A", "B"), ("A", "C"))
        assert g.successors("A") == ["D", "B", "C"]


class TestCycles:
    def test_dag(self):
        assert _graph("ABC", ("A", "B"), ("B", "C")).is_dag()

    def test_two_cycle(self):
        assert not _graph("AB", ("A", "B"), ("B", "A")).is_dag()


class TestDegrees:
    def test_degrees(self):
        g = _graph("ABC", ("A", "B"), ("A", "C"), ("B", "C"))
        assert g.out_degree("A") == 2
        assert g.in_degree("C") == 2
        assert g.degree("B") == 2

    def test_unknown_node_has_zero_degree(self):
        g = _graph("A")
        assert g.degree("missing") == 0
        assert g.arrow_degree("missing") == 0

    def test_arrow_degree_counts_parallel_arrows(self):
        g = DiagramGraph.from_snapshot(
            [_node("A"), _node("B"), _node("C")],
            [_arrow("A", "B", "a1"), _arrow("A", "B", "a2"), _arrow("C", "A", "a3")],
        )
        assert g.degree("A") == 2
        assert g.arrow_degree("A") == 3
        assert g.arrow_degree("B") == 2

    def test_roots_in_input_order(self):
        g = _graph("DCBA", ("D", "B"), ("C", "A"))
        assert g.roots() == ["D", "C"]
