# src/circmark/drawing/__init__.py
from .sink import DrawingSink
from .recording import Primitive, RecordingSink
from .svg import DEFAULT_STYLE, SvgSink, SvgStyle

__all__ = [
    "DrawingSink",
    "Primitive", "RecordingSink",
    "DEFAULT_STYLE", "SvgSink", "SvgStyle",
]
