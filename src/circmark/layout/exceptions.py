# src/circmark/layout/exceptions.py
"""
Defines the exception for broken layout invariants.

A `LayoutInvariantViolation` means a tree reached layout or placement in a shape the
parser never produces: a group with a zero natural size, a shunt link nested in a
sub-chain, a parallel group allocated no width, or an object
that is not an AST node at all. It is a programming error rather than bad input, so
callers are not expected to recover from it.
"""
from dataclasses import dataclass

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(eq=False)
class LayoutInvariantViolation(DiagnosableError):
    """Raised when layout or placement meets a tree that breaks an AST invariant."""
    node_type: str
    details: str

    def __str__(self):
        return f"Layout invariant violated at {self.node_type}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Layout Invariant Violation",
            details=f"While laying out a {self.node_type} node: {self.details}",
            suggestion=(
                "This indicates a tree that the parser cannot produce. Build trees with "
                "CircmarkParser, or check any hand-built nodes for empty groups and nested shunts."
            ),
            context={}
        )
