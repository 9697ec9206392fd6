# src/circmark/layout/__init__.py
from .geometry import PlacementContext, Position, Size
from .engine import (
    DEFAULT_LAYOUT,
    ELEMENT_SIZE,
    LayoutConfig,
    natural_size,
    split_proportionally,
)
from .placement import Placer, draw, place
from .exceptions import LayoutInvariantViolation

__all__ = [
    # Geometry
    "PlacementContext", "Position", "Size",
    # Layout pass
    "DEFAULT_LAYOUT", "ELEMENT_SIZE", "LayoutConfig", "natural_size", "split_proportionally",
    # Placement pass
    "Placer", "draw", "place",
    # Exceptions
    "LayoutInvariantViolation",
]
