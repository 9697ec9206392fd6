# src/circmark/renderer.py
"""
Defines the `Renderer`, the facade that runs the whole notation-to-drawing pipeline:

1.  **Parse** the notation into a `Document` (trailing input is a warning).
2.  **Lay out** the document bottom-up to find its natural size.
3.  **Place** it top-down at that size, driving an `SvgSink`.
4.  **Finalize** the sink into a `drawsvg.Drawing`.

Errors caused by the input (notation or configuration) are `DiagnosableError`s; the
facade turns them into a single `RenderError` carrying the formatted report. A
`LayoutInvariantViolation` means the tree itself is broken, so it is re-raised untouched.
"""
import logging
from dataclasses import dataclass
from typing import Optional

import drawsvg as draw

from .config import DEFAULT_CONFIG, RenderConfig
from .drawing.svg import SvgSink
from .errors import DiagnosableError, RenderError
from .layout.exceptions import LayoutInvariantViolation
from .layout.geometry import Size
from .layout.placement import draw as place_at_natural_size
from .parser.grammar import CircmarkParser
from .parser.nodes import Document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rendering:
    """The outcome of a render: the drawing plus what was parsed and how large it was laid out."""
    drawing: draw.Drawing
    document: Document
    size: Size
    trailing_input: str = ""

    def as_svg(self) -> str:
        return self.drawing.as_svg()


class Renderer:
    """Turns circuit notation into SVG drawings with one configuration."""

    def __init__(self, config: RenderConfig = DEFAULT_CONFIG):
        self.config = config
        self._parser = CircmarkParser()

    def render(self, notation: str) -> Rendering:
        logger.info("--- Rendering circuit notation (%d characters) ---", len(notation))
        try:
            result = self._parser.parse_notation(notation)
            trailing = result.remainder.strip()
            if trailing:
                logger.info("Trailing input at offset %d left unparsed: %r", result.offset, trailing)

            sink = SvgSink(self.config.svg)
            size = place_at_natural_size(result.value, sink, self.config.layout)
            drawing = sink.finalize()
            logger.info("--- Rendered %d section(s) at %dx%d layout units. ---",
                        len(result.value.sections), size.width, size.height)
            return Rendering(drawing=drawing, document=result.value, size=size, trailing_input=trailing)

        except LayoutInvariantViolation:
            raise
        except DiagnosableError as e:
            raise RenderError(e.get_diagnostic_report()) from e


def render_svg(notation: str, config: Optional[RenderConfig] = None) -> str:
    """Renders notation straight to an SVG document string."""
    return Renderer(config or DEFAULT_CONFIG).render(notation).as_svg()
