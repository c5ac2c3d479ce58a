"""Read-only snapshots of diagram nodes and arrows.

The owning store hands these to every call; nothing in the package mutates
them. Results that change geometry come back as new values.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace

from diagram_geometry.geometry import Point, Rect, Size
from diagram_geometry.types import ArrowKind


@dataclass(frozen=True)
class Node:
    id: str
    position: Point
    size: Size

    @classmethod
    def at(cls, id: str, x: float, y: float, width: float, height: float) -> Node:
        """Convenience constructor from plain numbers."""
        return cls(id=id, position=Point(float(x), float(y)), size=Size.of(width, height))

    @property
    def rect(self) -> Rect:
        return Rect(self.position.x, self.position.y, self.size.width, self.size.height)

    @property
    def center(self) -> Point:
        return self.rect.center

    def moved_to(self, position: Point) -> Node:
        return replace(self, position=position)


@dataclass(frozen=True)
class Arrow:
    id: str
    source_id: str
    target_id: str
    kind: ArrowKind = field(default=ArrowKind.Association)


def node_lookup(nodes: Iterable[Node]) -> dict[str, Node]:
    """Index nodes by id; later duplicates replace earlier ones."""
    return {n.id: n for n in nodes}


def apply_positions(nodes: Iterable[Node], positions: Mapping[str, Point]) -> list[Node]:
    """Return new nodes moved to the given positions; unknown ids keep theirs."""
    result: list[Node] = []
    for n in nodes:
        target = positions.get(n.id)
        result.append(n if target is None else n.moved_to(target))
    return result
