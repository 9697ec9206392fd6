# src/circmark/layout/geometry.py
from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Size:
    """A (width, height) pair in integer layout units."""
    width: int
    height: int

    def swapped(self) -> Size:
        return Size(self.height, self.width)


@dataclass(frozen=True)
class Position:
    """
    A point in the output plane. Coordinates are floats so that the centre of a cell
    with an odd width stays exact.
    """
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class PlacementContext:
    """The running origin and rotation handed down during placement."""
    origin: Position = Position()
    rotated: bool = False

    def translate(self, dx: float, dy: float) -> PlacementContext:
        """
        Moves the origin by (dx, dy) in the local frame. A rotated frame runs its local
        horizontal axis along the output's vertical axis, so the offsets swap.
        """
        if self.rotated:
            dx, dy = dy, dx
        return replace(self, origin=Position(self.origin.x + dx, self.origin.y + dy))

    def rotate(self) -> PlacementContext:
        return replace(self, rotated=not self.rotated)

    def point(self, dx: float, dy: float) -> Position:
        """The output-plane position of the local offset (dx, dy)."""
        return self.translate(dx, dy).origin
