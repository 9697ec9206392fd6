# src/circmark/drawing/sink.py
"""
Defines the contract between the placement traversal and a rendering backend.

The traversal never knows what it is drawing into. It emits one call per placed
primitive to any object satisfying `DrawingSink`: an SVG writer, a text preview, or a
geometry recorder in tests. New backends are added by implementing these methods;
the traversal does not change.

Element methods share one signature:
- `label`: display label of the element (empty for an open terminal).
- `position`: centre of the element's cell in the output plane.
- `size`: the allocated (width, height) of the cell, in the element's own frame.
- `rotated`: True when the element runs vertically in the output plane.

A sink usually accumulates output, so one instance must serve a single traversal at
a time.
"""
from typing import Protocol, runtime_checkable

from ..layout.geometry import Position, Size


@runtime_checkable
class DrawingSink(Protocol):
    """The primitive-emission capability consumed by the placement traversal."""

    def resistor(self, label: str, position: Position, size: Size, rotated: bool) -> None:
        """Resistors and generic impedances."""
        ...

    def capacitor(self, label: str, position: Position, size: Size, rotated: bool) -> None:
        ...

    def inductor(self, label: str, position: Position, size: Size, rotated: bool) -> None:
        ...

    def voltage_source(self, label: str, position: Position, size: Size, rotated: bool) -> None:
        ...

    def current_source(self, label: str, position: Position, size: Size, rotated: bool) -> None:
        ...

    def open(self, label: str, position: Position, size: Size, rotated: bool) -> None:
        """An open circuit: two unconnected terminals at the ends of the cell."""
        ...

    def wire(self, a: Position, b: Position) -> None:
        """A straight wire between two output-plane points."""
        ...

    def junction(self, position: Position) -> None:
        """A connection dot where three or more wires meet."""
        ...
