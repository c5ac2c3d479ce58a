"""Geometry kernel: points, rectangles, vector helpers and intersection tests.

Everything here is a pure function over frozen values. Degenerate input
(zero-length vectors, parallel segments) never raises; it falls back to a
defined result guarded by EPSILON.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

EPSILON: float = 1e-9


@dataclass(frozen=True)
class Point:
    """A 2D point (or vector) in world units."""

    x: float
    y: float


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    @classmethod
    def of(cls, width: float, height: float) -> Size:
        """Build a Size, clamping negative extents to zero."""
        return cls(width=max(0.0, float(width)), height=max(0.0, float(height)))


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle anchored at its top-left corner."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    @classmethod
    def from_bounds(cls, min_x: float, min_y: float, max_x: float, max_y: float) -> Rect:
        return cls(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)

    def contains(self, p: Point) -> bool:
        return point_in_rect(p, self)

    def contains_rect(self, other: Rect) -> bool:
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def intersects(self, other: Rect) -> bool:
        """True when the rectangles overlap or touch (inclusive bounds)."""
        return not (
            other.right < self.x
            or other.x > self.right
            or other.bottom < self.y
            or other.y > self.bottom
        )

    def union(self, other: Rect) -> Rect:
        return Rect.from_bounds(
            min(self.x, other.x),
            min(self.y, other.y),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )


# ─── Vector helpers ──────────────────────────────────────────────────────────


def distance(p1: Point, p2: Point) -> float:
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def add(p1: Point, p2: Point) -> Point:
    return Point(p1.x + p2.x, p1.y + p2.y)


def subtract(p1: Point, p2: Point) -> Point:
    return Point(p1.x - p2.x, p1.y - p2.y)


def scale(p: Point, factor: float) -> Point:
    return Point(p.x * factor, p.y * factor)


def dot(p1: Point, p2: Point) -> float:
    return p1.x * p2.x + p1.y * p2.y


def length(p: Point) -> float:
    return math.hypot(p.x, p.y)


def normalize(p: Point) -> Point:
    """Unit vector in the direction of p; the zero vector maps to (0, 0)."""
    n = length(p)
    if n < EPSILON:
        return Point(0.0, 0.0)
    return Point(p.x / n, p.y / n)


def midpoint(p1: Point, p2: Point) -> Point:
    return Point((p1.x + p2.x) / 2, (p1.y + p2.y) / 2)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_point(p1: Point, p2: Point, t: float) -> Point:
    return Point(lerp(p1.x, p2.x, t), lerp(p1.y, p2.y, t))


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def normalize_angle(angle: float) -> float:
    """Wrap an angle in radians into [-pi, pi]."""
    wrapped = math.fmod(angle + math.pi, 2 * math.pi)
    if wrapped < 0:
        wrapped += 2 * math.pi
    return wrapped - math.pi


# ─── Containment & intersection ──────────────────────────────────────────────


def point_in_rect(p: Point, rect: Rect) -> bool:
    """Inclusive containment test."""
    return rect.x <= p.x <= rect.right and rect.y <= p.y <= rect.bottom


def point_on_rect_boundary(p: Point, rect: Rect, tol: float = EPSILON) -> bool:
    """True if p lies on one of the four edges of rect (within tol)."""
    if not (rect.x - tol <= p.x <= rect.right + tol and rect.y - tol <= p.y <= rect.bottom + tol):
        return False
    return (
        abs(p.x - rect.x) <= tol
        or abs(p.x - rect.right) <= tol
        or abs(p.y - rect.y) <= tol
        or abs(p.y - rect.bottom) <= tol
    )


def segments_intersect(a1: Point, a2: Point, b1: Point, b2: Point) -> bool:
    """Parametric segment-segment test.

    Parallel, collinear and zero-length segments (|det| < EPSILON) are
    reported as non-intersecting.
    """
    det = (a1.x - a2.x) * (b1.y - b2.y) - (a1.y - a2.y) * (b1.x - b2.x)
    if abs(det) < EPSILON:
        return False
    t = ((a1.x - b1.x) * (b1.y - b2.y) - (a1.y - b1.y) * (b1.x - b2.x)) / det
    u = -((a1.x - a2.x) * (a1.y - b1.y) - (a1.y - a2.y) * (a1.x - b1.x)) / det
    return 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0


def segment_intersects_rect(p1: Point, p2: Point, rect: Rect) -> bool:
    """True if either endpoint is inside rect or the segment crosses an edge."""
    if max(p1.x, p2.x) < rect.x or min(p1.x, p2.x) > rect.right:
        return False
    if max(p1.y, p2.y) < rect.y or min(p1.y, p2.y) > rect.bottom:
        return False

    if point_in_rect(p1, rect) or point_in_rect(p2, rect):
        return True

    top_left = Point(rect.x, rect.y)
    top_right = Point(rect.right, rect.y)
    bottom_left = Point(rect.x, rect.bottom)
    bottom_right = Point(rect.right, rect.bottom)
    edges = (
        (top_left, top_right),
        (top_right, bottom_right),
        (bottom_left, bottom_right),
        (top_left, bottom_left),
    )
    return any(segments_intersect(p1, p2, e1, e2) for e1, e2 in edges)


def bounding_box(rects: Iterable[Rect]) -> Rect | None:
    """Union of all rects, or None when there are none."""
    box: Rect | None = None
    for r in rects:
        box = r if box is None else box.union(r)
    return box
