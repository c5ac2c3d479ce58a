"""Viewport / camera transform math.

A viewport maps world coordinates to screen coordinates as
``screen = world * scale + translate``. Every function returns a new
Viewport whose scale lies inside the configured limits.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from diagram_geometry.config import ViewportConfig
from diagram_geometry.geometry import EPSILON, Point, Rect, bounding_box, clamp
from diagram_geometry.ir.model import Node


@dataclass(frozen=True)
class Viewport:
    translate_x: float = 0.0
    translate_y: float = 0.0
    scale: float = 1.0

    @classmethod
    def identity(cls) -> Viewport:
        return cls()

    def to_svg_transform(self) -> str:
        return f"translate({self.translate_x}, {self.translate_y}) scale({self.scale})"


def _config(config: ViewportConfig | None) -> ViewportConfig:
    return config or ViewportConfig()


def clamp_scale(value: float, config: ViewportConfig | None = None) -> float:
    cfg = _config(config)
    return clamp(value, cfg.min_scale, cfg.max_scale)


# ─── Coordinate conversion ───────────────────────────────────────────────────


def screen_to_world(p: Point, viewport: Viewport) -> Point:
    s = viewport.scale if abs(viewport.scale) >= EPSILON else EPSILON
    return Point((p.x - viewport.translate_x) / s, (p.y - viewport.translate_y) / s)


def world_to_screen(p: Point, viewport: Viewport) -> Point:
    return Point(p.x * viewport.scale + viewport.translate_x, p.y * viewport.scale + viewport.translate_y)


def visible_bounds(viewport: Viewport, viewport_width: float, viewport_height: float) -> Rect:
    """The world-space rectangle currently on screen."""
    top_left = screen_to_world(Point(0.0, 0.0), viewport)
    bottom_right = screen_to_world(Point(viewport_width, viewport_height), viewport)
    return Rect.from_bounds(top_left.x, top_left.y, bottom_right.x, bottom_right.y)


def is_rect_visible(rect: Rect, viewport: Viewport, viewport_width: float, viewport_height: float) -> bool:
    return visible_bounds(viewport, viewport_width, viewport_height).intersects(rect)


# ─── Pan & zoom ──────────────────────────────────────────────────────────────


def pan(viewport: Viewport, dx: float, dy: float) -> Viewport:
    return Viewport(viewport.translate_x + dx, viewport.translate_y + dy, viewport.scale)


def zoom_toward(
    viewport: Viewport,
    pivot: Point,
    new_scale: float,
    config: ViewportConfig | None = None,
) -> Viewport:
    """Change the scale while keeping the world point under pivot fixed on screen."""
    world = screen_to_world(pivot, viewport)
    scale = clamp_scale(new_scale, config)
    return Viewport(
        translate_x=pivot.x - world.x * scale,
        translate_y=pivot.y - world.y * scale,
        scale=scale,
    )


def zoom_step(
    viewport: Viewport,
    direction: int,
    pivot: Point,
    config: ViewportConfig | None = None,
) -> Viewport:
    """Zoom in (direction > 0) or out (direction < 0) by one scale step."""
    cfg = _config(config)
    if direction == 0:
        return viewport
    step = cfg.scale_step if direction > 0 else -cfg.scale_step
    return zoom_toward(viewport, pivot, viewport.scale + step, cfg)


# ─── Fit to content ──────────────────────────────────────────────────────────


def fit_to_content(
    nodes: Iterable[Node],
    viewport_width: float,
    viewport_height: float,
    padding: float = 0.0,
    config: ViewportConfig | None = None,
) -> Viewport:
    """Frame every node in the viewport, zooming out if needed but never in past 1.0.

    An axis with zero content extent does not constrain the scale. Empty
    input gives the identity transform.
    """
    cfg = _config(config)
    box = bounding_box(n.rect for n in nodes)
    if box is None:
        return Viewport.identity()

    candidates = [1.0]
    if box.width > EPSILON:
        candidates.append((viewport_width - 2 * padding) / box.width)
    if box.height > EPSILON:
        candidates.append((viewport_height - 2 * padding) / box.height)
    scale = clamp(min(candidates), cfg.min_scale, min(1.0, cfg.max_scale))

    center = box.center
    return Viewport(
        translate_x=viewport_width / 2 - center.x * scale,
        translate_y=viewport_height / 2 - center.y * scale,
        scale=scale,
    )
