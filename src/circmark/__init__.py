# src/circmark/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.debug("circmark package initialized.")

from .parser import (
    CircmarkParser, parse, Document, Chain, Element, ElementKind, Series, Parallel,
    SeriesLink, ShuntLink, TwoportSection, CircuitSection,
    NotationSyntaxError, StructuralViolation,
)
from .layout import (
    LayoutConfig, PlacementContext, Position, Size, natural_size, place, draw,
    LayoutInvariantViolation,
)
from .drawing import DrawingSink, RecordingSink, SvgSink, SvgStyle
from .config import RenderConfig, load_config
from .renderer import Renderer, render_svg
from .errors import CircmarkError, RenderError, DiagnosableError

__all__ = [
    # Parser and AST
    "CircmarkParser", "parse", "Document", "Chain", "Element", "ElementKind", "Series",
    "Parallel", "SeriesLink", "ShuntLink", "TwoportSection", "CircuitSection",
    # Layout and placement
    "LayoutConfig", "PlacementContext", "Position", "Size", "natural_size", "place", "draw",
    # Drawing sinks
    "DrawingSink", "RecordingSink", "SvgSink", "SvgStyle",
    # Configuration and pipeline
    "RenderConfig", "load_config", "Renderer", "render_svg",
    # Errors
    "CircmarkError", "RenderError", "DiagnosableError",
    "NotationSyntaxError", "StructuralViolation", "LayoutInvariantViolation",
]
