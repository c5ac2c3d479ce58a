"""Routed path types: a drawable sequence of move/line/curve commands."""

from __future__ import annotations

import math
from dataclasses import dataclass

from diagram_geometry.geometry import Point
from diagram_geometry.routing.anchors import AnchorPoint
from diagram_geometry.types import PathCommandKind


@dataclass(frozen=True)
class PathCommand:
    """One path command; ``points`` holds control points then the end point."""

    kind: PathCommandKind
    points: tuple[Point, ...]

    @property
    def end(self) -> Point:
        return self.points[-1]

    def to_svg(self) -> str:
        coords = ", ".join(f"{_fmt(p.x)} {_fmt(p.y)}" for p in self.points)
        return f"{self.kind.value} {coords}"


@dataclass(frozen=True)
class RoutedPath:
    """A routed arrow between two anchors.

    ``commands`` always starts with a Move to the source anchor and ends on
    the target anchor. ``waypoint`` is set when the router had to detour
    around an obstacle.
    """

    commands: tuple[PathCommand, ...]
    source_anchor: AnchorPoint
    target_anchor: AnchorPoint
    exit_point: Point
    entry_point: Point
    waypoint: Point | None = None

    @property
    def start(self) -> Point:
        return self.commands[0].end

    @property
    def end(self) -> Point:
        return self.commands[-1].end

    @property
    def has_waypoint(self) -> bool:
        return self.waypoint is not None

    def points(self) -> list[Point]:
        """Every point the path mentions, control points included, in order."""
        return [p for cmd in self.commands for p in cmd.points]

    def end_angle(self) -> float:
        """Direction (degrees) of the final segment, for orienting an arrowhead."""
        last = self.commands[-1]
        prev = self.commands[-2].end if len(self.commands) > 1 else last.end
        return math.degrees(math.atan2(last.end.y - prev.y, last.end.x - prev.x))

    def to_svg(self) -> str:
        """SVG path data (the ``d`` attribute)."""
        return " ".join(cmd.to_svg() for cmd in self.commands)


def _fmt(v: float) -> str:
    text = f"{v:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text
