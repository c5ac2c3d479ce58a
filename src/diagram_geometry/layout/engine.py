"""Layout engine convenience functions."""

from __future__ import annotations

from collections.abc import Iterable

from diagram_geometry.config import LayoutConfig
from diagram_geometry.geometry import Point
from diagram_geometry.ir.model import Arrow, Node, apply_positions
from diagram_geometry.layout.hierarchy import HierarchyLayout


def layout(
    nodes: Iterable[Node],
    arrows: Iterable[Arrow],
    config: LayoutConfig | None = None,
    center_x: float = 0.0,
) -> dict[str, Point]:
    """Compute target top-left positions for every node."""
    return HierarchyLayout(config).layout(nodes, arrows, center_x).positions


def arrange(
    nodes: Iterable[Node],
    arrows: Iterable[Arrow],
    config: LayoutConfig | None = None,
    center_x: float = 0.0,
) -> list[Node]:
    """Return new nodes already moved to their layout positions."""
    node_list = list(nodes)
    return apply_positions(node_list, layout(node_list, arrows, config, center_x))
