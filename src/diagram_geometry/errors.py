"""Exceptions raised by diagram-geometry.

Nothing here is fatal: routing failures are reported per arrow and snapshot
errors only come from the JSON loader.
"""

from __future__ import annotations


class DiagramGeometryError(Exception):
    """Base class for all diagram-geometry errors."""


class NodesNotFound(DiagramGeometryError):
    """An arrow references an endpoint that is not in the node lookup."""

    def __init__(self, arrow_id: str, missing_ids: list[str]) -> None:
        self.arrow_id = arrow_id
        self.missing_ids = list(missing_ids)
        missing = ", ".join(repr(m) for m in self.missing_ids)
        super().__init__(f"arrow '{arrow_id}' references missing node(s): {missing}")


class SnapshotError(DiagramGeometryError, ValueError):
    """A diagram snapshot could not be decoded."""
