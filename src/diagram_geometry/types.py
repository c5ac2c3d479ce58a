"""Shared type definitions for diagram-geometry.

Enums used across the model, routing and layout modules.
"""

from __future__ import annotations

from enum import Enum, auto


class ArrowKind(Enum):
    Inheritance = auto()  # hollow triangle head
    Composition = auto()  # filled diamond tail
    Aggregation = auto()  # hollow diamond tail
    Dependency = auto()  # dashed
    Association = auto()  # plain line

    @classmethod
    def default(cls) -> ArrowKind:
        return cls.Association

    @classmethod
    def parse(cls, name: str | None) -> ArrowKind:
        """Look up a kind by case-insensitive name; None gives the default."""
        if name is None:
            return cls.default()
        for kind in cls:
            if kind.name.lower() == name.lower():
                return kind
        raise ValueError(f"Unknown arrow kind '{name}'")


class AnchorSide(Enum):
    Top = auto()
    Right = auto()
    Bottom = auto()
    Left = auto()
    TopLeft = auto()
    TopRight = auto()
    BottomLeft = auto()
    BottomRight = auto()

    @property
    def is_corner(self) -> bool:
        return self in (AnchorSide.TopLeft, AnchorSide.TopRight, AnchorSide.BottomLeft, AnchorSide.BottomRight)


class PathCommandKind(Enum):
    Move = "M"
    Line = "L"
    Cubic = "C"
    Quadratic = "Q"
