"""Layout engine and camera public API."""

from __future__ import annotations

from diagram_geometry.layout.cycles import greedy_fas_ordering, remove_cycles
from diagram_geometry.layout.engine import arrange, layout
from diagram_geometry.layout.hierarchy import (
    HierarchyLayout,
    LayoutResult,
    assign_levels,
    bfs_levels,
    compute_positions,
    order_levels,
)
from diagram_geometry.layout.viewport import (
    Viewport,
    clamp_scale,
    fit_to_content,
    is_rect_visible,
    pan,
    screen_to_world,
    visible_bounds,
    world_to_screen,
    zoom_step,
    zoom_toward,
)

__all__ = [
    "HierarchyLayout",
    "LayoutResult",
    "Viewport",
    "arrange",
    "assign_levels",
    "bfs_levels",
    "clamp_scale",
    "compute_positions",
    "fit_to_content",
    "greedy_fas_ordering",
    "is_rect_visible",
    "layout",
    "order_levels",
    "pan",
    "remove_cycles",
    "screen_to_world",
    "visible_bounds",
    "world_to_screen",
    "zoom_step",
    "zoom_toward",
]
