"""Arrow router: anchor selection plus single-waypoint obstacle avoidance.

A route leaves the source anchor along its normal to an exit point, travels
to an entry point in front of the target anchor, and finishes on the target
anchor. If the straight exit→entry segment crosses another node, the path
bends through one waypoint pushed sideways from the midpoint. This resolves
the common "third box in the way" case; it is not full path planning.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from diagram_geometry.config import RouterConfig
from diagram_geometry.errors import NodesNotFound
from diagram_geometry.geometry import (
    EPSILON,
    Point,
    Rect,
    add,
    length,
    lerp_point,
    midpoint,
    scale,
    segment_intersects_rect,
    subtract,
)
from diagram_geometry.ir.model import Arrow, Node
from diagram_geometry.routing.anchors import AnchorPoint, best_anchor_pair, offset_point
from diagram_geometry.routing.path import PathCommand, RoutedPath
from diagram_geometry.types import PathCommandKind

logger = logging.getLogger(__name__)

# Used when exit and entry coincide and the segment has no direction.
_FALLBACK_PERPENDICULAR = Point(0.0, -1.0)


class ArrowRouter:
    """Routes arrows between node rectangles."""

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config = config or RouterConfig()

    # ─── Single route ────────────────────────────────────────────────────────

    def route(self, from_node: Node, to_node: Node, obstacles: Iterable[Node] = ()) -> RoutedPath:
        """Route from_node → to_node; obstacles sharing an endpoint id are ignored."""
        pair = best_anchor_pair(from_node, to_node, self.config.angle_penalty_weight)
        source, target = pair.source, pair.target

        exit_point = offset_point(source, self.config.clearance)
        entry_point = offset_point(target, self.config.clearance)

        endpoint_ids = {from_node.id, to_node.id}
        blockers = [o.rect for o in obstacles if o.id not in endpoint_ids]

        if not _segment_blocked(exit_point, entry_point, blockers):
            return self._direct_path(source, exit_point, entry_point, target)

        waypoint = self._waypoint(exit_point, entry_point, blockers)
        return self._waypoint_path(source, exit_point, waypoint, entry_point, target)

    def route_arrow(self, arrow: Arrow, nodes: Mapping[str, Node]) -> RoutedPath:
        """Route an arrow using a node lookup; every other node is an obstacle.

        Raises:
            NodesNotFound: If the source or target id is not in ``nodes``.
        """
        missing = [nid for nid in (arrow.source_id, arrow.target_id) if nid not in nodes]
        if missing:
            raise NodesNotFound(arrow.id, missing)
        return self.route(nodes[arrow.source_id], nodes[arrow.target_id], nodes.values())

    # ─── Batch routing ───────────────────────────────────────────────────────

    def route_all(self, arrows: Iterable[Arrow], nodes: Mapping[str, Node]) -> dict[str, RoutedPath]:
        """Route every arrow; arrows with missing endpoints are logged and skipped."""
        routes: dict[str, RoutedPath] = {}
        for arrow in arrows:
            try:
                routes[arrow.id] = self.route_arrow(arrow, nodes)
            except NodesNotFound as e:
                logger.warning("Skipping arrow: %s", e)
        return routes

    def route_for_moved(
        self,
        node_id: str,
        arrows: Iterable[Arrow],
        nodes: Mapping[str, Node],
    ) -> dict[str, RoutedPath]:
        """Re-route only the arrows attached to a node that just moved."""
        touching = [a for a in arrows if node_id in (a.source_id, a.target_id)]
        return self.route_all(touching, nodes)

    # ─── Path construction ───────────────────────────────────────────────────

    def _direct_path(
        self,
        source: AnchorPoint,
        exit_point: Point,
        entry_point: Point,
        target: AnchorPoint,
    ) -> RoutedPath:
        mid = midpoint(exit_point, entry_point)
        ratio = self.config.control_ratio
        cp1 = lerp_point(exit_point, mid, ratio)
        cp2 = lerp_point(entry_point, mid, ratio)
        commands = (
            PathCommand(PathCommandKind.Move, (source.point,)),
            PathCommand(PathCommandKind.Line, (exit_point,)),
            PathCommand(PathCommandKind.Cubic, (cp1, cp2, entry_point)),
            PathCommand(PathCommandKind.Line, (target.point,)),
        )
        return RoutedPath(
            commands=commands,
            source_anchor=source,
            target_anchor=target,
            exit_point=exit_point,
            entry_point=entry_point,
        )

    def _waypoint_path(
        self,
        source: AnchorPoint,
        exit_point: Point,
        waypoint: Point,
        entry_point: Point,
        target: AnchorPoint,
    ) -> RoutedPath:
        commands = (
            PathCommand(PathCommandKind.Move, (source.point,)),
            PathCommand(PathCommandKind.Line, (exit_point,)),
            PathCommand(PathCommandKind.Quadratic, (midpoint(exit_point, waypoint), waypoint)),
            PathCommand(PathCommandKind.Quadratic, (midpoint(waypoint, entry_point), entry_point)),
            PathCommand(PathCommandKind.Line, (target.point,)),
        )
        return RoutedPath(
            commands=commands,
            source_anchor=source,
            target_anchor=target,
            exit_point=exit_point,
            entry_point=entry_point,
            waypoint=waypoint,
        )

    def _waypoint(self, exit_point: Point, entry_point: Point, blockers: list[Rect]) -> Point:
        """Midpoint pushed sideways; flips side only if that clears the obstacles."""
        delta = subtract(entry_point, exit_point)
        n = length(delta)
        if n < EPSILON:
            perp = _FALLBACK_PERPENDICULAR
        else:
            perp = Point(-delta.y / n, delta.x / n)

        mid = midpoint(exit_point, entry_point)
        primary = add(mid, scale(perp, self.config.waypoint_offset))
        if not _legs_blocked(exit_point, primary, entry_point, blockers):
            return primary
        alternate = add(mid, scale(perp, -self.config.waypoint_offset))
        if not _legs_blocked(exit_point, alternate, entry_point, blockers):
            return alternate
        return primary


def _segment_blocked(p1: Point, p2: Point, blockers: list[Rect]) -> bool:
    return any(segment_intersects_rect(p1, p2, r) for r in blockers)


def _legs_blocked(exit_point: Point, waypoint: Point, entry_point: Point, blockers: list[Rect]) -> bool:
    return _segment_blocked(exit_point, waypoint, blockers) or _segment_blocked(waypoint, entry_point, blockers)


def route(from_node: Node, to_node: Node, obstacles: Iterable[Node] = ()) -> RoutedPath:
    """Route with the default router configuration."""
    return ArrowRouter().route(from_node, to_node, obstacles)
