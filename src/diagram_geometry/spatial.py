"""Spatial index for hit-testing node rectangles.

Nodes are bucketed into a uniform grid. The cell size defaults to the largest
node extent, so every rectangle covers at most 2x2 cells and a point query
only has to look at a single bucket. Results are always returned in insertion
order, so the last id is the node drawn on top.

The index is the only stateful piece of the package: callers rebuild it when
nodes are added, removed or resized, not on every drag frame.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from diagram_geometry.geometry import Point, Rect, bounding_box, point_in_rect
from diagram_geometry.ir.model import Node

_MIN_CELL_SIZE: float = 1.0


def _finite_rect(rect: Rect) -> bool:
    return all(math.isfinite(v) for v in (rect.x, rect.y, rect.right, rect.bottom))


class SpatialIndex:
    """Uniform-grid index over (node id, rect) entries."""

    def __init__(self, cell_size: float | None = None) -> None:
        self._fixed_cell_size = cell_size
        self.cell_size: float = cell_size or _MIN_CELL_SIZE
        self._cells: dict[tuple[int, int], list[int]] = {}
        self._ids: list[str] = []
        self._rects: list[Rect] = []
        self._slot: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._slot

    def _cell_key(self, x: float, y: float) -> tuple[int, int]:
        return (int(math.floor(x / self.cell_size)), int(math.floor(y / self.cell_size)))

    def _cell_range(self, rect: Rect) -> tuple[int, int, int, int]:
        x0, y0 = self._cell_key(rect.x, rect.y)
        x1, y1 = self._cell_key(rect.right, rect.bottom)
        return x0, y0, x1, y1

    def clear(self) -> None:
        self._cells.clear()
        self._ids.clear()
        self._rects.clear()
        self._slot.clear()

    def rebuild(self, nodes: Iterable[Node]) -> None:
        """Replace the whole index with the given nodes, in stacking order.

        A node id that appears twice keeps only its last rectangle and its
        last stacking position. Nodes with non-finite geometry are left out.
        """
        self.clear()
        latest: dict[str, Rect] = {}
        for node in nodes:
            if not _finite_rect(node.rect):
                continue
            latest.pop(node.id, None)
            latest[node.id] = node.rect

        if self._fixed_cell_size is None:
            extent = max((max(r.width, r.height) for r in latest.values()), default=0.0)
            self.cell_size = max(extent, _MIN_CELL_SIZE)

        for node_id, rect in latest.items():
            slot = len(self._ids)
            self._ids.append(node_id)
            self._rects.append(rect)
            self._slot[node_id] = slot
            x0, y0, x1, y1 = self._cell_range(rect)
            for cx in range(x0, x1 + 1):
                for cy in range(y0, y1 + 1):
                    self._cells.setdefault((cx, cy), []).append(slot)

    # ─── Queries ─────────────────────────────────────────────────────────────

    def query_point(self, p: Point) -> list[str]:
        """Ids of all nodes containing p (inclusive), bottom-most first."""
        if not (math.isfinite(p.x) and math.isfinite(p.y)):
            return []
        bucket = self._cells.get(self._cell_key(p.x, p.y), [])
        return [self._ids[s] for s in bucket if point_in_rect(p, self._rects[s])]

    def query_rect(self, rect: Rect, contained: bool = False) -> list[str]:
        """Ids of nodes overlapping rect, or fully inside it when ``contained``."""
        if not self._ids or not _finite_rect(rect):
            return []

        x0, y0, x1, y1 = self._cell_range(rect)
        cell_count = (x1 - x0 + 1) * (y1 - y0 + 1)
        if cell_count > len(self._ids):
            candidates: Iterable[int] = range(len(self._ids))
        else:
            seen: set[int] = set()
            for cx in range(x0, x1 + 1):
                for cy in range(y0, y1 + 1):
                    seen.update(self._cells.get((cx, cy), ()))
            candidates = sorted(seen)

        if contained:
            return [self._ids[s] for s in candidates if rect.contains_rect(self._rects[s])]
        return [self._ids[s] for s in candidates if rect.intersects(self._rects[s])]

    def topmost_at(self, p: Point) -> str | None:
        hits = self.query_point(p)
        return hits[-1] if hits else None

    def rect_of(self, node_id: str) -> Rect | None:
        slot = self._slot.get(node_id)
        return None if slot is None else self._rects[slot]

    def bounds(self) -> Rect | None:
        """Union of every indexed rectangle, or None when empty."""
        return bounding_box(self._rects)
