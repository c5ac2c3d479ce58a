"""Centralized configuration for diagram-geometry."""

from __future__ import annotations

from dataclasses import dataclass

CYCLE_STRATEGIES = ("promote", "break")


@dataclass
class RouterConfig:
    """Tuning for the arrow router."""

    clearance: float = 30.0  # exit/entry offset along the anchor normal
    waypoint_offset: float = 80.0
    angle_penalty_weight: float = 50.0
    control_ratio: float = 0.6


@dataclass
class LayoutConfig:
    """Spacing and cycle handling for the hierarchical layout."""

    horizontal_gap: float = 120.0
    vertical_gap: float = 100.0
    adaptive_rows: bool = False
    cycle_strategy: str = "promote"

    def __post_init__(self) -> None:
        if self.cycle_strategy not in CYCLE_STRATEGIES:
            raise ValueError(f"Unknown cycle strategy '{self.cycle_strategy}'; use promote or break")
        if self.horizontal_gap < 0 or self.vertical_gap < 0:
            raise ValueError("Layout gaps must be non-negative")


@dataclass
class ViewportConfig:
    """Zoom limits for the camera."""

    min_scale: float = 0.1
    max_scale: float = 4.0
    scale_step: float = 0.1

    def __post_init__(self) -> None:
        if not 0 < self.min_scale <= self.max_scale:
            raise ValueError("Viewport scale limits must satisfy 0 < min_scale <= max_scale")
        if self.min_scale > 1.0:
            raise ValueError("min_scale above 1.0 would force fit-to-content to zoom in")
