# src/circmark/layout/placement.py
"""
Top-down placement pass.

Given a node, the size allocated to it and a placement context (origin and rotation),
the `Placer` recurses through the tree, splits each allocation between children in
proportion to their natural sizes, and emits drawing primitives to a sink. Placement
keeps no state between calls: the same (node, size, context) always produces the same
sequence of primitives.
"""
import logging
from typing import TYPE_CHECKING, Optional

from ..parser.nodes import (
    Chain,
    CircuitSection,
    Document,
    Element,
    ElementKind,
    Parallel,
    Series,
    SeriesLink,
    ShuntLink,
    TwoportSection,
)
from .engine import DEFAULT_LAYOUT, LayoutConfig, natural_size, split_proportionally
from .exceptions import LayoutInvariantViolation
from .geometry import PlacementContext, Size

if TYPE_CHECKING:
    from ..drawing.sink import DrawingSink

logger = logging.getLogger(__name__)

# Sink method emitting each element kind. Impedances share the resistor glyph.
ELEMENT_PRIMITIVES = {
    ElementKind.RESISTOR: "resistor",
    ElementKind.IMPEDANCE: "resistor",
    ElementKind.CAPACITOR: "capacitor",
    ElementKind.INDUCTOR: "inductor",
    ElementKind.VOLTAGE_SOURCE: "voltage_source",
    ElementKind.CURRENT_SOURCE: "current_source",
    ElementKind.OPEN: "open",
}

# A parallel group spends at most 1/MAX_LEAD_IN_SHARE of its width on each lead-in wire.
MAX_LEAD_IN_SHARE = 4


class Placer:
    """Drives one sink through the placement of AST nodes."""

    def __init__(self, sink: "DrawingSink", config: LayoutConfig = DEFAULT_LAYOUT):
        self.sink = sink
        self.config = config

    def place(self, node, size: Size, ctx: PlacementContext) -> None:
        if isinstance(node, Element):
            self._place_element(node, size, ctx)
        elif isinstance(node, Series):
            self._place_series(node, size, ctx)
        elif isinstance(node, Parallel):
            self._place_parallel(node, size, ctx)
        elif isinstance(node, Chain):
            self._place_chain(node, size, ctx)
        elif isinstance(node, TwoportSection):
            self._place_chain(node.chain, size, ctx)
        elif isinstance(node, CircuitSection):
            self.place(node.circuit, size, ctx)
        elif isinstance(node, Document):
            self._place_document(node, size, ctx)
        else:
            raise LayoutInvariantViolation(type(node).__name__, "cannot place a node of this type")

    def _place_element(self, element: Element, size: Size, ctx: PlacementContext) -> None:
        emit = getattr(self.sink, ELEMENT_PRIMITIVES[element.kind])
        emit(element.label, ctx.origin, size, ctx.rotated)

    def _place_series(self, node: Series, size: Size, ctx: PlacementContext) -> None:
        left_natural = natural_size(node.left, self.config)
        right_natural = natural_size(node.right, self.config)
        left_width, right_width = split_proportionally(
            size.width, [left_natural.width, right_natural.width], "Series")

        self.place(node.left, Size(left_width, size.height),
                   ctx.translate(-size.width / 2 + left_width / 2, 0))
        self.place(node.right, Size(right_width, size.height),
                   ctx.translate(size.width / 2 - right_width / 2, 0))

    def _place_parallel(self, node: Parallel, size: Size, ctx: PlacementContext) -> None:
        if size.width <= 0:
            raise LayoutInvariantViolation("Parallel", f"allocated width {size.width} is not positive")
        lead_in = min(self.config.parallel_lead_in, size.width // MAX_LEAD_IN_SHARE)
        inner_width = size.width - 2 * lead_in

        top_natural = natural_size(node.top, self.config)
        bottom_natural = natural_size(node.bottom, self.config)
        top_height, bottom_height = split_proportionally(
            size.height, [top_natural.height, bottom_natural.height], "Parallel")
        top_y = -size.height / 2 + top_height / 2
        bottom_y = size.height / 2 - bottom_height / 2

        self.place(node.top, Size(inner_width, top_height), ctx.translate(0, top_y))
        self.place(node.bottom, Size(inner_width, bottom_height), ctx.translate(0, bottom_y))

        left_rail, right_rail = -inner_width / 2, inner_width / 2
        self.sink.wire(ctx.point(left_rail, top_y), ctx.point(left_rail, bottom_y))
        self.sink.wire(ctx.point(right_rail, top_y), ctx.point(right_rail, bottom_y))
        self.sink.junction(ctx.point(left_rail, 0))
        self.sink.junction(ctx.point(right_rail, 0))
        if lead_in:
            self.sink.wire(ctx.point(-size.width / 2, 0), ctx.point(left_rail, 0))
            self.sink.wire(ctx.point(size.width / 2, 0), ctx.point(right_rail, 0))

    def _place_chain(self, chain: Chain, size: Size, ctx: PlacementContext) -> None:
        widths = split_proportionally(
            size.width, [natural_size(link, self.config).width for link in chain.links], "Chain")
        top_line, bottom_line = -size.height / 2, size.height / 2
        last = len(chain.links) - 1
        left = -size.width / 2

        for i, (link, width) in enumerate(zip(chain.links, widths)):
            centre, right = left + width / 2, left + width
            if isinstance(link, SeriesLink):
                self.place(link.content, Size(width, size.height), ctx.translate(centre, top_line))
                self.sink.wire(ctx.point(left, bottom_line), ctx.point(right, bottom_line))
            elif isinstance(link, ShuntLink):
                left_exists, right_exists = i > 0, i < last
                if left_exists:
                    self.sink.wire(ctx.point(left, top_line), ctx.point(centre, top_line))
                    self.sink.wire(ctx.point(left, bottom_line), ctx.point(centre, bottom_line))
                if right_exists:
                    self.sink.wire(ctx.point(centre, top_line), ctx.point(right, top_line))
                    self.sink.wire(ctx.point(centre, bottom_line), ctx.point(right, bottom_line))
                if left_exists and right_exists:
                    self.sink.junction(ctx.point(centre, top_line))
                    self.sink.junction(ctx.point(centre, bottom_line))

                branch_size = Size(size.height, width)
                branch_ctx = ctx.translate(centre, 0).rotate()
                if isinstance(link.content, Chain):
                    self._place_sub_chain(link.content, branch_size, branch_ctx)
                else:
                    self.place(link.content, branch_size, branch_ctx)
            else:
                raise LayoutInvariantViolation(type(link).__name__, "not a two-port link")
            left = right

    def _place_sub_chain(self, chain: Chain, size: Size, ctx: PlacementContext) -> None:
        """Stacks the elements of a shunt sub-chain end to end along the branch."""
        if not chain.is_sub_chain:
            raise LayoutInvariantViolation("ShuntLink", "a sub-chain may only contain series links")
        lengths = split_proportionally(
            size.width, [natural_size(link, self.config).width for link in chain.links], "Chain")
        start = -size.width / 2
        for link, length in zip(chain.links, lengths):
            self.place(link.content, Size(length, size.height), ctx.translate(start + length / 2, 0))
            start += length

    def _place_document(self, document: Document, size: Size, ctx: PlacementContext) -> None:
        natural = natural_size(document, self.config)
        gaps = self.config.section_gap * (len(document.sections) - 1)
        if size.height <= gaps:
            raise LayoutInvariantViolation("Document", f"allocated height {size.height} is used up by section gaps")
        section_sizes = [natural_size(section, self.config) for section in document.sections]
        heights = split_proportionally(size.height - gaps, [s.height for s in section_sizes], "Document")

        top = -size.height / 2
        for section, section_natural, height in zip(document.sections, section_sizes, heights):
            width = section_natural.width * size.width // natural.width
            self.place(section, Size(width, height), ctx.translate(0, top + height / 2))
            top += height + self.config.section_gap


def place(node, allocated_size: Size, context: PlacementContext, sink: "DrawingSink",
          config: LayoutConfig = DEFAULT_LAYOUT) -> None:
    """Places `node` into `allocated_size` at `context`, emitting primitives to `sink`."""
    Placer(sink, config).place(node, allocated_size, context)


def draw(node, sink: "DrawingSink", config: LayoutConfig = DEFAULT_LAYOUT,
         context: Optional[PlacementContext] = None) -> Size:
    """
    Places `node` at its natural size, centred on the origin unless a context is given.
    Returns the size that was allocated.
    """
    size = natural_size(node, config)
    logger.debug("Placing %s with natural size %dx%d.", type(node).__name__, size.width, size.height)
    place(node, size, context or PlacementContext(), sink, config)
    return size
