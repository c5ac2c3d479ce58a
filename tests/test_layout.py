"""Tests for the hierarchical layout — levelling, ordering and coordinates.

Covers:
  - bfs_levels (roots, promotion, cycles, forced roots)
  - assign_levels with both cycle strategies
  - order_levels (degree ordering)
  - compute_positions (centred rows, fixed and adaptive row pitch)
  - layout / arrange / HierarchyLayout
"""

from __future__ import annotations

import networkx as nx
import pytest

from diagram_geometry.config import LayoutConfig
from diagram_geometry.geometry import Point
from diagram_geometry.ir.graph import DiagramGraph
from diagram_geometry.ir.model import Arrow, Node
from diagram_geometry.layout.engine import arrange, layout
from diagram_geometry.layout.hierarchy import (
    HierarchyLayout,
    assign_levels,
    bfs_levels,
    compute_positions,
    order_levels,
)

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_nodes(*ids: str, width: float = 100, height: float = 60) -> list[Node]:
    return [Node.at(nid, 0, 0, width, height) for nid in ids]


def make_arrows(*edges: tuple[str, str]) -> list[Arrow]:
    return [Arrow(f"{src}->{tgt}", src, tgt) for src, tgt in edges]


def make_graph(ids: list[str], *edges: tuple[str, str]) -> DiagramGraph:
    return DiagramGraph.from_snapshot(make_nodes(*ids), make_arrows(*edges))


DIAMOND = [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")]


# ─── Level Assignment ────────────────────────────────────────────────────────


class TestBfsLevels:
    def test_diamond(self):
        g = make_graph(["A", "B", "C", "D"], *DIAMOND)
        levels = bfs_levels(g.digraph, g.order)
        assert levels["A"] < levels["B"] == levels["C"] < levels["D"]

    def test_promotion_below_all_dependencies(self):
        """A → C directly and via B: C lands below B."""
        g = make_graph(["A", "B", "C"], ("A", "B"), ("B", "C"), ("A", "C"))
        assert bfs_levels(g.digraph, g.order) == {"A": 0, "B": 1, "C": 2}

    def test_edges_point_down_in_dag(self):
        edges = [("A", "B"), ("B", "C"), ("A", "D"), ("D", "C"), ("C", "E"), ("A", "E")]
        g = make_graph(["A", "B", "C", "D", "E"], *edges)
        levels = bfs_levels(g.digraph, g.order)
        for src, tgt in edges:
            assert levels[tgt] > levels[src]

    def test_pure_cycle_terminates(self):
        g = make_graph(["A", "B", "C"], ("A", "B"), ("B", "C"), ("C", "A"))
        levels = bfs_levels(g.digraph, g.order)
        assert set(levels) == {"A", "B", "C"}
        assert all(0 <= lvl <= 2 for lvl in levels.values())

    def test_cycle_below_a_root(self):
        g = make_graph(["R", "A", "B"], ("R", "A"), ("A", "B"), ("B", "A"))
        levels = bfs_levels(g.digraph, g.order)
        assert levels["R"] == 0
        assert max(levels.values()) <= 2

    def test_edge_leaving_a_cycle_points_down(self):
        """B ⇄ C sits between A and D; D still lands below C."""
        g = make_graph(["A", "B", "C", "D"], ("A", "B"), ("B", "C"), ("C", "B"), ("C", "D"))
        levels = bfs_levels(g.digraph, g.order)
        assert levels == {"A": 0, "B": 1, "C": 2, "D": 3}
        assert levels["D"] > levels["C"]

    def test_reconvergence_below_a_cycle_still_promotes(self):
        g = make_graph(
            ["A", "B", "C", "D", "E"],
            ("A", "B"), ("B", "C"), ("C", "B"), ("C", "E"), ("A", "D"), ("D", "E"),
        )
        levels = bfs_levels(g.digraph, g.order)
        assert levels["E"] > levels["C"]
        assert levels["E"] > levels["D"]

    def test_disconnected_nodes_are_level_zero(self):
        g = make_graph(["A", "B", "Z"], ("A", "B"))
        levels = bfs_levels(g.digraph, g.order)
        assert levels["Z"] == 0

    def test_unreached_cycle_is_still_levelled(self):
        """X ⇄ Y has no root of its own; it is walked from X and capped at n - 1."""
        g = make_graph(["A", "B", "X", "Y"], ("A", "B"), ("X", "Y"), ("Y", "X"))
        levels = bfs_levels(g.digraph, g.order)
        assert levels["A"] == 0
        assert levels["B"] == 1
        assert set(levels) == {"A", "B", "X", "Y"}
        assert levels["X"] <= 3
        assert levels["Y"] <= 3

    def test_empty(self):
        assert bfs_levels(nx.DiGraph(), []) == {}


class TestAssignLevels:
    def test_promote_reports_no_reversed_edges(self):
        g = make_graph(["A", "B"], ("A", "B"), ("B", "A"))
        _, reversed_edges = assign_levels(g, "promote")
        assert reversed_edges == set()

    def test_break_strategy_levels_every_kept_edge(self):
        edges = [("A", "B"), ("B", "C"), ("C", "A"), ("C", "D")]
        g = make_graph(["A", "B", "C", "D"], *edges)
        levels, reversed_edges = assign_levels(g, "break")
        assert reversed_edges == {("C", "A")}
        for src, tgt in edges:
            if (src, tgt) not in reversed_edges:
                assert levels[tgt] > levels[src]


# ─── Ordering ────────────────────────────────────────────────────────────────


class TestOrderLevels:
    def test_higher_degree_first(self):
        g = make_graph(["R", "X", "Y", "Z", "W"], ("R", "X"), ("R", "Y"), ("Y", "Z"), ("Y", "W"))
        levels = bfs_levels(g.digraph, g.order)
        rows = order_levels(levels, g)
        assert rows[0] == ["R"]
        assert rows[1] == ["Y", "X"]
        assert rows[2] == ["Z", "W"]

    def test_parallel_arrows_each_count(self):
        nodes = make_nodes("R1", "R2", "X", "Y", "Z")
        arrows = [
            Arrow("r1-1", "R1", "X"),
            Arrow("r1-2", "R1", "X"),
            Arrow("r1-3", "R1", "X"),
            Arrow("r2-y", "R2", "Y"),
            Arrow("r2-z", "R2", "Z"),
        ]
        g = DiagramGraph.from_snapshot(nodes, arrows)
        rows = order_levels(bfs_levels(g.digraph, g.order), g)
        assert rows[0] == ["R1", "R2"]

    def test_ties_keep_input_order(self):
        g = make_graph(["A", "B", "C"])
        rows = order_levels({"A": 0, "B": 0, "C": 0}, g)
        assert rows == [["A", "B", "C"]]

    def test_empty_levels_are_compacted(self):
        g = make_graph(["A", "B"])
        assert order_levels({"A": 0, "B": 3}, g) == [["A"], ["B"]]


# ─── Coordinate Assignment ───────────────────────────────────────────────────


class TestComputePositions:
    def test_row_centred_on_zero(self):
        g = make_graph(["A", "B"])
        positions = compute_positions([["A", "B"]], g, LayoutConfig())
        assert positions["A"] == Point(-160, 0)
        assert positions["B"] == Point(60, 0)

    def test_row_centred_on_viewport_center(self):
        g = make_graph(["A", "B"])
        positions = compute_positions([["A", "B"]], g, LayoutConfig(), center_x=500)
        assert positions["A"] == Point(340, 0)

    def test_fixed_row_pitch(self):
        g = make_graph(["A", "B", "C"])
        positions = compute_positions([["A"], ["B"], ["C"]], g, LayoutConfig(vertical_gap=100))
        assert [positions[n].y for n in "ABC"] == [0, 100, 200]

    def test_adaptive_rows_stack_by_tallest(self):
        nodes = [Node.at("A", 0, 0, 100, 50), Node.at("B", 0, 0, 100, 80), Node.at("C", 0, 0, 100, 10)]
        g = DiagramGraph.from_snapshot(nodes, [])
        config = LayoutConfig(vertical_gap=100, adaptive_rows=True)
        positions = compute_positions([["A"], ["B"], ["C"]], g, config)
        assert [positions[n].y for n in "ABC"] == [0, 150, 330]

    def test_single_node_is_centred(self):
        g = make_graph(["A"])
        assert compute_positions([["A"]], g, LayoutConfig()) == {"A": Point(-50, 0)}


# ─── Full layout ─────────────────────────────────────────────────────────────


class TestLayout:
    def test_empty_input(self):
        assert layout([], []) == {}

    def test_cycle_does_not_flatten_rows(self):
        result = HierarchyLayout().layout(
            make_nodes("A", "B", "C", "D"),
            make_arrows(("A", "B"), ("B", "C"), ("C", "B"), ("C", "D")),
        )
        assert result.rows == [["A"], ["B"], ["C"], ["D"]]

    def test_diamond_rows(self):
        positions = layout(make_nodes("A", "B", "C", "D"), make_arrows(*DIAMOND))
        assert positions["A"].y < positions["B"].y == positions["C"].y < positions["D"].y

    def test_no_node_is_dropped(self):
        nodes = make_nodes("A", "B", "C", "D", "E")
        arrows = make_arrows(("A", "B"), ("B", "A"), ("C", "C"), ("D", "missing"))
        positions = layout(nodes, arrows)
        assert set(positions) == {"A", "B", "C", "D", "E"}

    def test_arrow_kind_does_not_matter(self):
        from diagram_geometry.types import ArrowKind

        nodes = make_nodes("A", "B")
        plain = layout(nodes, [Arrow("1", "A", "B")])
        styled = layout(nodes, [Arrow("1", "A", "B", ArrowKind.Inheritance)])
        assert plain == styled

    def test_result_details(self):
        result = HierarchyLayout().layout(make_nodes("A", "B", "C", "D"), make_arrows(*DIAMOND))
        assert result.rows == [["A"], ["B", "C"], ["D"]]
        assert result.levels == {"A": 0, "B": 1, "C": 1, "D": 2}

    def test_deterministic(self):
        nodes = make_nodes("A", "B", "C", "D", "E")
        arrows = make_arrows(("A", "C"), ("B", "C"), ("C", "D"), ("D", "B"), ("E", "A"))
        assert layout(nodes, arrows) == layout(nodes, arrows)

    def test_arrange_returns_new_nodes(self):
        nodes = make_nodes("A", "B")
        moved = arrange(nodes, make_arrows(("A", "B")))
        assert nodes[1].position == Point(0, 0)
        assert moved[1].position == Point(-50, 100)
        assert moved[1].size == nodes[1].size

    def test_invalid_cycle_strategy(self):
        with pytest.raises(ValueError):
            LayoutConfig(cycle_strategy="shuffle")

    def test_negative_gap_rejected(self):
        with pytest.raises(ValueError):
            LayoutConfig(horizontal_gap=-1)
