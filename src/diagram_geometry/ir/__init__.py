"""Intermediate representation: node/arrow snapshots and the diagram graph."""

from diagram_geometry.ir.graph import DiagramGraph
from diagram_geometry.ir.model import Arrow, Node, apply_positions, node_lookup

__all__ = [
    "Arrow",
    "DiagramGraph",
    "Node",
    "apply_positions",
    "node_lookup",
]
