# src/circmark/parser/__init__.py
from .nodes import (
    Chain,
    CircuitSection,
    Document,
    Element,
    ElementKind,
    Parallel,
    ParseResult,
    Section,
    Series,
    SeriesLink,
    ShuntLink,
    SubCircuit,
    TwoportLink,
    TwoportSection,
)
from .grammar import CircmarkParser, parse
from .exceptions import BaseParsingError, NotationSyntaxError, StructuralViolation

__all__ = [
    # AST
    "Chain",
    "CircuitSection",
    "Document",
    "Element",
    "ElementKind",
    "Parallel",
    "ParseResult",
    "Section",
    "Series",
    "SeriesLink",
    "ShuntLink",
    "SubCircuit",
    "TwoportLink",
    "TwoportSection",
    # Parser and Exceptions
    "CircmarkParser",
    "parse",
    "BaseParsingError",
    "NotationSyntaxError",
    "StructuralViolation",
]
