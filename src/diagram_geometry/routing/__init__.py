"""Arrow routing: anchor model, path types and the router."""

from __future__ import annotations

from diagram_geometry.routing.anchors import (
    ANGLE_PENALTY_WEIGHT,
    AnchorPair,
    AnchorPoint,
    anchor_pair_score,
    anchors_of,
    angle_mismatch,
    best_anchor_pair,
    offset_point,
)
from diagram_geometry.routing.path import PathCommand, RoutedPath
from diagram_geometry.routing.router import ArrowRouter, route

__all__ = [
    "ANGLE_PENALTY_WEIGHT",
    "AnchorPair",
    "AnchorPoint",
    "ArrowRouter",
    "PathCommand",
    "RoutedPath",
    "anchor_pair_score",
    "anchors_of",
    "angle_mismatch",
    "best_anchor_pair",
    "offset_point",
    "route",
]
