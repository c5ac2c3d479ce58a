"""diagram-geometry: layout, arrow routing, hit-testing and camera math for node diagrams."""

from diagram_geometry.config import LayoutConfig, RouterConfig, ViewportConfig
from diagram_geometry.errors import DiagramGeometryError, NodesNotFound, SnapshotError
from diagram_geometry.geometry import Point, Rect, Size
from diagram_geometry.ir.model import Arrow, Node, apply_positions, node_lookup
from diagram_geometry.layout import HierarchyLayout, Viewport, arrange, fit_to_content, layout, zoom_toward
from diagram_geometry.routing import ArrowRouter, RoutedPath, anchors_of, best_anchor_pair, route
from diagram_geometry.spatial import SpatialIndex
from diagram_geometry.types import ArrowKind

__all__ = [
    "Arrow",
    "ArrowKind",
    "ArrowRouter",
    "DiagramGeometryError",
    "HierarchyLayout",
    "LayoutConfig",
    "Node",
    "NodesNotFound",
    "Point",
    "Rect",
    "RoutedPath",
    "RouterConfig",
    "Size",
    "SnapshotError",
    "SpatialIndex",
    "Viewport",
    "ViewportConfig",
    "anchors_of",
    "apply_positions",
    "arrange",
    "best_anchor_pair",
    "fit_to_content",
    "layout",
    "node_lookup",
    "route",
    "zoom_toward",
]
