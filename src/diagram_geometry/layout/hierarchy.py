"""Hierarchical (top-down layered) auto-layout.

Phases:
  1. Adjacency (DiagramGraph over networkx)
  2. Cycle handling (bounded promotion, or greedy-FAS reversal)
  3. Level assignment (breadth-first with promotion)
  4. In-level ordering (descending degree)
  5. Coordinate assignment (centred rows)

The result is a map of target top-left positions; animating toward them is
the caller's business.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field

import networkx as nx

from diagram_geometry.config import LayoutConfig
from diagram_geometry.geometry import Point
from diagram_geometry.ir.graph import DiagramGraph
from diagram_geometry.ir.model import Arrow, Node
from diagram_geometry.layout.cycles import remove_cycles

logger = logging.getLogger(__name__)


@dataclass
class LayoutResult:
    """Everything the layout computed; ``positions`` is what callers apply."""

    positions: dict[str, Point] = field(default_factory=dict)
    levels: dict[str, int] = field(default_factory=dict)
    rows: list[list[str]] = field(default_factory=list)
    reversed_edges: set[tuple[str, str]] = field(default_factory=set)


# ─── Level Assignment ────────────────────────────────────────────────────────


def _cycle_components(digraph: nx.DiGraph) -> dict[str, int]:
    """Map each node on a cycle to the index of its strongly connected component."""
    component: dict[str, int] = {}
    for idx, members in enumerate(nx.strongly_connected_components(digraph)):
        if len(members) > 1:
            for nid in members:
                component[nid] = idx
    return component


def _drain(
    digraph: nx.DiGraph,
    levels: dict[str, int],
    queue: deque[tuple[str, int]],
    cap: int,
    component: dict[str, int],
) -> None:
    while queue:
        node_id, level = queue.popleft()
        if level < levels[node_id]:
            continue  # superseded by a promotion
        child_level = min(level + 1, cap)
        cycle = component.get(node_id)
        for child in digraph.successors(node_id):
            current = levels.get(child)
            if current is None:
                levels[child] = child_level
                queue.append((child, child_level))
            elif child_level > current and (cycle is None or component.get(child) != cycle):
                levels[child] = child_level
                queue.append((child, child_level))


def bfs_levels(digraph: nx.DiGraph, order: list[str]) -> dict[str, int]:
    """Breadth-first levelling with promote-on-deeper-revisit.

    Roots are the in-degree-0 nodes in ``order``; with none, the first node
    seeds the walk. Edges inside a strongly connected component never promote,
    so a node on a cycle keeps its first-visit level while everything below
    the cycle still lands strictly deeper. Levels never exceed
    ``len(order) - 1``. Nodes still unreached afterwards become level-0 roots
    of their own walk, in ``order``.
    """
    levels: dict[str, int] = {}
    if not order:
        return levels

    cap = len(order) - 1
    component = _cycle_components(digraph)
    roots = [nid for nid in order if digraph.in_degree(nid) == 0] or order[:1]
    queue: deque[tuple[str, int]] = deque()
    for root in roots:
        levels[root] = 0
        queue.append((root, 0))
    _drain(digraph, levels, queue, cap, component)

    for nid in order:
        if nid not in levels:
            logger.debug("Node %s unreached from roots; forcing it to level 0", nid)
            levels[nid] = 0
            queue.append((nid, 0))
            _drain(digraph, levels, queue, cap, component)

    return levels


def assign_levels(graph: DiagramGraph, cycle_strategy: str = "promote") -> tuple[dict[str, int], set[tuple[str, str]]]:
    """Level every node. Returns (levels, reversed_edges)."""
    if cycle_strategy == "break":
        dag, reversed_edges = remove_cycles(graph.digraph)
        return bfs_levels(dag, graph.order), reversed_edges
    return bfs_levels(graph.digraph, graph.order), set()


# ─── Ordering ────────────────────────────────────────────────────────────────


def order_levels(levels: dict[str, int], graph: DiagramGraph) -> list[list[str]]:
    """Group nodes into rows (non-empty levels, ascending) ordered by degree.

    More attached arrows go first; ties keep input order.
    """
    by_level: dict[int, list[str]] = {}
    for nid in graph.order:
        by_level.setdefault(levels[nid], []).append(nid)

    rows: list[list[str]] = []
    for level in sorted(by_level):
        row = by_level[level]
        row.sort(key=lambda nid: -graph.arrow_degree(nid))
        rows.append(row)
    return rows


# ─── Coordinate Assignment ───────────────────────────────────────────────────


def compute_positions(
    rows: list[list[str]],
    graph: DiagramGraph,
    config: LayoutConfig,
    center_x: float = 0.0,
) -> dict[str, Point]:
    """Lay each row out left to right, centred horizontally on center_x."""
    positions: dict[str, Point] = {}
    y = 0.0
    for row_idx, row in enumerate(rows):
        nodes = [graph.node(nid) for nid in row]
        row_width = sum(n.size.width for n in nodes) + max(len(nodes) - 1, 0) * config.horizontal_gap

        if not config.adaptive_rows:
            y = row_idx * config.vertical_gap

        x = center_x - row_width / 2
        for n in nodes:
            positions[n.id] = Point(x, y)
            x += n.size.width + config.horizontal_gap

        if config.adaptive_rows:
            y += max((n.size.height for n in nodes), default=0.0) + config.vertical_gap

    return positions


# ─── HierarchyLayout Engine ──────────────────────────────────────────────────


class HierarchyLayout:
    """Top-down layered layout engine."""

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = config or LayoutConfig()

    def layout(self, nodes: Iterable[Node], arrows: Iterable[Arrow], center_x: float = 0.0) -> LayoutResult:
        graph = DiagramGraph.from_snapshot(nodes, arrows)
        if graph.node_count() == 0:
            return LayoutResult()

        levels, reversed_edges = assign_levels(graph, self.config.cycle_strategy)
        rows = order_levels(levels, graph)
        positions = compute_positions(rows, graph, self.config, center_x)
        logger.debug("Laid out %d nodes in %d rows", len(positions), len(rows))
        return LayoutResult(positions=positions, levels=levels, rows=rows, reversed_edges=reversed_edges)
