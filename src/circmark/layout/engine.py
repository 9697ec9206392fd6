# src/circmark/layout/engine.py
"""
Bottom-up layout pass: the natural size of every AST node.

The natural size is what a subtree would occupy with no outside constraint. It is
defined structurally:

- an element has a fixed size, shared by all element kinds;
- a series group is as wide as both operands together and as tall as the taller one;
- a parallel group is as wide as the wider operand and as tall as both together;
- a shunt link swaps the axes of its content, because shunt branches run vertically;
- a chain (or sub-chain) adds up its link widths and takes the tallest link;
- a document stacks its sections with a fixed gap between them.

The placement pass calls `natural_size` for its proportional splits, so both passes
share one definition.
"""
import logging
from dataclasses import dataclass
from typing import List, Sequence

from ..parser.nodes import (
    Chain,
    CircuitSection,
    Document,
    Element,
    Parallel,
    Series,
    SeriesLink,
    ShuntLink,
    TwoportSection,
)
from .geometry import Size
from .exceptions import LayoutInvariantViolation

logger = logging.getLogger(__name__)

#: Bounding box of every element glyph, in layout units.
ELEMENT_SIZE = Size(200, 60)

#: Length of the stub wire joining each rail of a parallel group to its neighbours.
PARALLEL_LEAD_IN = 20

#: Vertical distance between consecutive document sections.
SECTION_GAP = 60


@dataclass(frozen=True)
class LayoutConfig:
    """Tunable constants shared by the layout and placement passes."""
    element_size: Size = ELEMENT_SIZE
    parallel_lead_in: int = PARALLEL_LEAD_IN
    section_gap: int = SECTION_GAP

    def __post_init__(self):
        if self.element_size.width <= 0 or self.element_size.height <= 0:
            raise ValueError(f"Element size must be positive, got {self.element_size}.")
        if self.parallel_lead_in < 0 or self.section_gap < 0:
            raise ValueError("Lead-in and section gap must be non-negative.")


DEFAULT_LAYOUT = LayoutConfig()


def natural_size(node, config: LayoutConfig = DEFAULT_LAYOUT) -> Size:
    """Returns the natural (width, height) of any AST node."""
    if isinstance(node, Element):
        return config.element_size

    if isinstance(node, Series):
        left, right = natural_size(node.left, config), natural_size(node.right, config)
        return Size(left.width + right.width, max(left.height, right.height))

    if isinstance(node, Parallel):
        top, bottom = natural_size(node.top, config), natural_size(node.bottom, config)
        return Size(max(top.width, bottom.width), top.height + bottom.height)

    if isinstance(node, SeriesLink):
        return natural_size(node.content, config)

    if isinstance(node, ShuntLink):
        if isinstance(node.content, Chain) and not node.content.is_sub_chain:
            raise LayoutInvariantViolation("ShuntLink", "a sub-chain may only contain series links")
        return natural_size(node.content, config).swapped()

    if isinstance(node, Chain):
        if not node.links:
            raise LayoutInvariantViolation("Chain", "a chain needs at least one link")
        sizes = [natural_size(link, config) for link in node.links]
        return Size(sum(s.width for s in sizes), max(s.height for s in sizes))

    if isinstance(node, TwoportSection):
        return natural_size(node.chain, config)

    if isinstance(node, CircuitSection):
        return natural_size(node.circuit, config)

    if isinstance(node, Document):
        if not node.sections:
            raise LayoutInvariantViolation("Document", "a document needs at least one section")
        sizes = [natural_size(section, config) for section in node.sections]
        gaps = config.section_gap * (len(sizes) - 1)
        return Size(max(s.width for s in sizes), sum(s.height for s in sizes) + gaps)

    raise LayoutInvariantViolation(type(node).__name__, "not a circuit notation node")


def split_proportionally(total: int, weights: Sequence[int], node_type: str) -> List[int]:
    """
    Splits `total` into parts proportional to `weights` using integer arithmetic.
    Every part but the last is rounded down; the last takes the remainder, so the
    parts always add up to `total`.
    """
    weight_sum = sum(weights)
    if weight_sum <= 0:
        raise LayoutInvariantViolation(node_type, f"cannot split {total} units over a zero natural size")
    parts = [weight * total // weight_sum for weight in weights[:-1]]
    parts.append(total - sum(parts))
    return parts
