# src/circmark/drawing/svg.py
"""
SVG backend for the placement traversal, built on `drawsvg`.

Every element glyph is drawn in its own frame, centred on the origin and running
along the x axis from `-width/2` to `+width/2`, then moved into place with a group
transform (plus a quarter turn for rotated elements). Lead wires fill the space
between the glyph body and the edges of the allocated cell, so neighbouring cells
join up without extra wires.

The sink tracks the bounding box of everything it receives; `finalize` wraps the
collected shapes in a `drawsvg.Drawing` whose view box covers them plus a margin.
"""
import logging
from dataclasses import dataclass
from typing import List

import drawsvg as draw

from ..layout.geometry import Position, Size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SvgStyle:
    """Visual constants of the SVG backend, in output units."""
    margin: int = 30
    stroke_width: int = 2
    font_size: int = 16
    junction_radius: int = 3
    terminal_radius: int = 5
    color: str = "black"


DEFAULT_STYLE = SvgStyle()

# Glyph body dimensions (width along the element axis, height across it).
RESISTOR_BODY = (70, 20)
CAPACITOR_BODY = (10, 30)
INDUCTOR_BODY = (80, 10)
VOLTAGE_SOURCE_BODY = (10, 40)
CURRENT_SOURCE_RADIUS = 15

LABEL_OFFSET = 12


class SvgSink:
    """Collects drawing primitives as SVG shapes."""

    def __init__(self, style: SvgStyle = DEFAULT_STYLE):
        self.style = style
        self._shapes: List["draw.DrawingElement"] = []
        self.min_x = 0.0
        self.max_x = 0.0
        self.min_y = 0.0
        self.max_y = 0.0

    # --- Helpers ---

    def _stroke(self, **kwargs) -> dict:
        args = {"stroke": self.style.color, "stroke_width": self.style.stroke_width, "fill": "none"}
        args.update(kwargs)
        return args

    def _grow(self, x: float, y: float, half_width: float = 0, half_height: float = 0) -> None:
        self.min_x = min(self.min_x, x - half_width)
        self.max_x = max(self.max_x, x + half_width)
        self.min_y = min(self.min_y, y - half_height)
        self.max_y = max(self.max_y, y + half_height)

    def _leads(self, group: draw.Group, size: Size, body_half_width: float) -> float:
        """Adds the two lead wires and returns the usable half width of the glyph body."""
        half = size.width / 2
        body = min(body_half_width, half)
        group.append(draw.Line(-half, 0, -body, 0, **self._stroke()))
        group.append(draw.Line(body, 0, half, 0, **self._stroke()))
        return body

    def _group(self, position: Position, rotated: bool) -> draw.Group:
        return draw.Group(transform=f"translate({position.x},{position.y}) rotate({90 if rotated else 0})")

    def _add_element(self, group: draw.Group, label: str, position: Position, size: Size,
                     rotated: bool, label_clearance: float) -> None:
        extent = size.swapped() if rotated else size
        self._grow(position.x, position.y, extent.width / 2, extent.height / 2)
        self._shapes.append(group)
        if not label:
            return
        # Labels stay upright: beside a vertical element, above a horizontal one.
        if rotated:
            text = draw.Text(label, self.style.font_size, position.x + label_clearance + LABEL_OFFSET,
                             position.y, text_anchor="start", dominant_baseline="middle",
                             fill=self.style.color)
        else:
            text = draw.Text(label, self.style.font_size, position.x,
                             position.y - label_clearance - LABEL_OFFSET, text_anchor="middle",
                             fill=self.style.color)
        self._shapes.append(text)

    # --- DrawingSink implementation ---

    def resistor(self, label, position, size, rotated):
        width, height = RESISTOR_BODY
        group = self._group(position, rotated)
        body = self._leads(group, size, width / 2)
        group.append(draw.Rectangle(-body, -height / 2, 2 * body, height, **self._stroke()))
        self._add_element(group, label, position, size, rotated, height / 2)

    def capacitor(self, label, position, size, rotated):
        gap, height = CAPACITOR_BODY
        group = self._group(position, rotated)
        body = self._leads(group, size, gap / 2)
        plate = self._stroke(stroke_width=2 * self.style.stroke_width)
        group.append(draw.Line(-body, -height / 2, -body, height / 2, **plate))
        group.append(draw.Line(body, -height / 2, body, height / 2, **plate))
        self._add_element(group, label, position, size, rotated, height / 2)

    def inductor(self, label, position, size, rotated):
        width, radius = INDUCTOR_BODY
        group = self._group(position, rotated)
        body = self._leads(group, size, width / 2)
        turns = 4
        step = 2 * body / turns
        coil = draw.Path(**self._stroke()).M(-body, 0)
        for turn in range(1, turns + 1):
            coil.A(step / 2, radius, 0, 0, 1, -body + turn * step, 0)
        group.append(coil)
        self._add_element(group, label, position, size, rotated, radius)

    def voltage_source(self, label, position, size, rotated):
        gap, height = VOLTAGE_SOURCE_BODY
        group = self._group(position, rotated)
        body = self._leads(group, size, gap / 2)
        plate = self._stroke(stroke_width=2 * self.style.stroke_width)
        group.append(draw.Line(-body, -height / 2, -body, height / 2, **plate))
        group.append(draw.Line(body, -height / 4, body, height / 4, **plate))
        self._add_element(group, label, position, size, rotated, height / 2)

    def current_source(self, label, position, size, rotated):
        group = self._group(position, rotated)
        radius = self._leads(group, size, CURRENT_SOURCE_RADIUS)
        group.append(draw.Circle(0, 0, radius, **self._stroke()))
        shaft = 0.6 * radius
        head = 0.35 * radius
        group.append(draw.Line(-shaft, 0, shaft, 0, **self._stroke()))
        group.append(draw.Lines(shaft - head, -head, shaft, 0, shaft - head, head, **self._stroke()))
        self._add_element(group, label, position, size, rotated, radius)

    def open(self, label, position, size, rotated):
        group = self._group(position, rotated)
        half = size.width / 2
        for x in (-half, half):
            group.append(draw.Circle(x, 0, self.style.terminal_radius, **self._stroke(fill="white")))
        self._add_element(group, label, position, size, rotated, self.style.terminal_radius)

    def wire(self, a, b):
        self._grow(a.x, a.y)
        self._grow(b.x, b.y)
        self._shapes.append(draw.Line(a.x, a.y, b.x, b.y, **self._stroke()))

    def junction(self, position):
        self._grow(position.x, position.y)
        self._shapes.append(draw.Circle(position.x, position.y, self.style.junction_radius,
                                        fill=self.style.color))

    # --- Output ---

    def finalize(self) -> draw.Drawing:
        """Wraps everything drawn so far into a drawing whose view box fits it."""
        margin = self.style.margin
        width = self.max_x - self.min_x + 2 * margin
        height = self.max_y - self.min_y + 2 * margin
        drawing = draw.Drawing(width, height, origin=(self.min_x - margin, self.min_y - margin))
        for shape in self._shapes:
            drawing.append(shape)
        logger.debug("Finalized SVG drawing of %gx%g with %d shapes.", width, height, len(self._shapes))
        return drawing
