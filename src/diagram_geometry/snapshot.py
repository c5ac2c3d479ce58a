"""JSON diagram snapshots: decoding input and encoding results.

Input shape::

    {
      "nodes":  [{"id": "A", "x": 0, "y": 0, "width": 280, "height": 120}],
      "arrows": [{"id": "a1", "source": "A", "target": "B", "kind": "inheritance"}]
    }

Arrows may omit ``id`` (defaults to ``source->target``) and ``kind``.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from typing import Any

from diagram_geometry.errors import SnapshotError
from diagram_geometry.geometry import Point
from diagram_geometry.ir.model import Arrow, Node
from diagram_geometry.layout.viewport import Viewport
from diagram_geometry.routing.path import RoutedPath
from diagram_geometry.types import ArrowKind


def _number(entry: Mapping[str, Any], key: str, default: float | None = None) -> float:
    value = entry.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SnapshotError(f"field '{key}' must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError as e:
        raise SnapshotError(f"field '{key}' is out of range") from e
    if not math.isfinite(number):
        raise SnapshotError(f"field '{key}' must be finite, got {value!r}")
    return number


def _string(entry: Mapping[str, Any], key: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        raise SnapshotError(f"field '{key}' must be a non-empty string, got {value!r}")
    return value


def _decode_node(entry: Any) -> Node:
    if not isinstance(entry, dict):
        raise SnapshotError(f"node entry must be an object, got {entry!r}")
    return Node.at(
        _string(entry, "id"),
        _number(entry, "x", 0.0),
        _number(entry, "y", 0.0),
        _number(entry, "width"),
        _number(entry, "height"),
    )


def _decode_arrow(entry: Any) -> Arrow:
    if not isinstance(entry, dict):
        raise SnapshotError(f"arrow entry must be an object, got {entry!r}")
    source = _string(entry, "source")
    target = _string(entry, "target")
    arrow_id = entry.get("id") or f"{source}->{target}"
    try:
        kind = ArrowKind.parse(entry.get("kind"))
    except ValueError as e:
        raise SnapshotError(str(e)) from e
    return Arrow(id=str(arrow_id), source_id=source, target_id=target, kind=kind)


def load_snapshot(text: str) -> tuple[list[Node], list[Arrow]]:
    """Decode a JSON snapshot.

    Raises:
        SnapshotError: If the text is not valid JSON or an entry is malformed.
    """
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"invalid JSON: {e}") from e
    if not isinstance(doc, dict):
        raise SnapshotError("snapshot must be a JSON object")

    raw_nodes = doc.get("nodes", [])
    raw_arrows = doc.get("arrows", [])
    if not isinstance(raw_nodes, list) or not isinstance(raw_arrows, list):
        raise SnapshotError("'nodes' and 'arrows' must be arrays")

    return [_decode_node(e) for e in raw_nodes], [_decode_arrow(e) for e in raw_arrows]


# ─── Encoding ────────────────────────────────────────────────────────────────


def dump_positions(positions: Mapping[str, Point]) -> dict[str, dict[str, float]]:
    return {nid: {"x": p.x, "y": p.y} for nid, p in positions.items()}


def dump_routes(routes: Mapping[str, RoutedPath]) -> dict[str, dict[str, Any]]:
    out: dict[str, dict[str, Any]] = {}
    for arrow_id, path in routes.items():
        out[arrow_id] = {
            "d": path.to_svg(),
            "source_side": path.source_anchor.side.name,
            "target_side": path.target_anchor.side.name,
            "waypoint": None if path.waypoint is None else {"x": path.waypoint.x, "y": path.waypoint.y},
            "end_angle": path.end_angle(),
        }
    return out


def dump_viewport(viewport: Viewport) -> dict[str, float]:
    return {"scale": viewport.scale, "translateX": viewport.translate_x, "translateY": viewport.translate_y}
