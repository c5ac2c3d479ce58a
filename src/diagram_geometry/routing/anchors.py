"""Anchor points on a node's bounding box and best-pair selection.

Each node offers eight anchors: the four edge midpoints followed by the four
corners. A pair of anchors is scored by its length plus a penalty for every
anchor whose outward normal points away from the partner node, so arrows
leave and enter boxes on the side that faces the other box.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from diagram_geometry.geometry import EPSILON, Point, Rect, distance, normalize_angle
from diagram_geometry.ir.model import Node
from diagram_geometry.types import AnchorSide

ANGLE_PENALTY_WEIGHT: float = 50.0

_DIAG: float = math.sqrt(0.5)


@dataclass(frozen=True)
class AnchorPoint:
    x: float
    y: float
    normal: Point
    side: AnchorSide

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class AnchorPair:
    source: AnchorPoint
    target: AnchorPoint
    score: float


def _rect_of(shape: Node | Rect) -> Rect:
    return shape.rect if isinstance(shape, Node) else shape


def anchors_of(shape: Node | Rect) -> list[AnchorPoint]:
    """The eight anchors of a node (or rect) in fixed enumeration order."""
    r = _rect_of(shape)
    cx = r.x + r.width / 2
    cy = r.y + r.height / 2
    return [
        AnchorPoint(cx, r.y, Point(0.0, -1.0), AnchorSide.Top),
        AnchorPoint(r.right, cy, Point(1.0, 0.0), AnchorSide.Right),
        AnchorPoint(cx, r.bottom, Point(0.0, 1.0), AnchorSide.Bottom),
        AnchorPoint(r.x, cy, Point(-1.0, 0.0), AnchorSide.Left),
        AnchorPoint(r.x, r.y, Point(-_DIAG, -_DIAG), AnchorSide.TopLeft),
        AnchorPoint(r.right, r.y, Point(_DIAG, -_DIAG), AnchorSide.TopRight),
        AnchorPoint(r.x, r.bottom, Point(-_DIAG, _DIAG), AnchorSide.BottomLeft),
        AnchorPoint(r.right, r.bottom, Point(_DIAG, _DIAG), AnchorSide.BottomRight),
    ]


def angle_mismatch(anchor: AnchorPoint, partner_center: Point) -> float:
    """Absolute angle in [0, pi] between the anchor normal and the partner.

    Returns 0 when the anchor sits on the partner's centre.
    """
    dx = partner_center.x - anchor.x
    dy = partner_center.y - anchor.y
    if math.hypot(dx, dy) < EPSILON:
        return 0.0
    toward = math.atan2(dy, dx)
    facing = math.atan2(anchor.normal.y, anchor.normal.x)
    return abs(normalize_angle(toward - facing))


def anchor_pair_score(
    source: AnchorPoint,
    target: AnchorPoint,
    source_center: Point,
    target_center: Point,
    weight: float = ANGLE_PENALTY_WEIGHT,
) -> float:
    penalty = angle_mismatch(source, target_center) + angle_mismatch(target, source_center)
    return distance(source.point, target.point) + weight * penalty


def best_anchor_pair(
    from_node: Node | Rect,
    to_node: Node | Rect,
    weight: float = ANGLE_PENALTY_WEIGHT,
) -> AnchorPair:
    """Exhaustively score all 64 anchor combinations and keep the cheapest.

    Ties keep the first pair in enumeration order (source-major).
    """
    from_rect = _rect_of(from_node)
    to_rect = _rect_of(to_node)
    from_center = from_rect.center
    to_center = to_rect.center

    best: AnchorPair | None = None
    for src in anchors_of(from_rect):
        for tgt in anchors_of(to_rect):
            score = anchor_pair_score(src, tgt, from_center, to_center, weight)
            if best is None or score < best.score:
                best = AnchorPair(source=src, target=tgt, score=score)

    assert best is not None
    return best


def offset_point(anchor: AnchorPoint, dist: float) -> Point:
    """The point dist units away from the anchor along its outward normal."""
    return Point(anchor.x + anchor.normal.x * dist, anchor.y + anchor.normal.y * dist)
