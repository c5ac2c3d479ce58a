"""Node height derived from a tree of collapsible sections.

A class box is a header followed by sections (fields, methods, nested
groups). Collapsing a section hides its items and children but keeps its
header row, so the node shrinks and every arrow touching it must be
re-routed.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from diagram_geometry.geometry import Point, Size
from diagram_geometry.ir.model import Node

NODE_HEADER_HEIGHT: float = 44.0
MIN_CONTENT_HEIGHT: float = 60.0
SECTION_HEADER_HEIGHT: float = 32.0
ITEM_HEIGHT: float = 24.0


@dataclass(frozen=True)
class Section:
    id: str
    title: str = ""
    items: tuple[str, ...] = ()
    children: tuple[Section, ...] = field(default_factory=tuple)
    collapsed: bool = False


def section_height(section: Section) -> float:
    height = SECTION_HEADER_HEIGHT
    if section.collapsed:
        return height
    height += len(section.items) * ITEM_HEIGHT
    return height + sum(section_height(child) for child in section.children)


def node_height(sections: Iterable[Section]) -> float:
    content = sum(section_height(s) for s in sections)
    return NODE_HEADER_HEIGHT + max(content, MIN_CONTENT_HEIGHT)


def toggle_section(sections: Iterable[Section], section_id: str) -> tuple[Section, ...]:
    """Return a new tree with the matching section's collapsed flag flipped."""
    result: list[Section] = []
    for s in sections:
        if s.id == section_id:
            result.append(replace(s, collapsed=not s.collapsed))
        elif s.children:
            result.append(replace(s, children=toggle_section(s.children, section_id)))
        else:
            result.append(s)
    return tuple(result)


def sized_node(node_id: str, position: Point, width: float, sections: Iterable[Section]) -> Node:
    """Build a Node whose height follows its section tree."""
    return Node(id=node_id, position=position, size=Size.of(width, node_height(sections)))
