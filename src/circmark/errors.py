# src/circmark/errors.py
from abc import abstractmethod
from typing import Any, Dict, Protocol
from typing import runtime_checkable

# --- User-Facing Exception Hierarchy ---

class CircmarkError(Exception):
    """Base class for all custom, user-facing errors in circmark."""
    pass

class RenderError(CircmarkError):
    """
    Raised when turning notation into a drawing fails because of bad input, either
    the notation itself or the render configuration. The message is a pre-formatted,
    user-friendly diagnostic report.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own diagnostic report.
    Code that only needs the report can depend on this instead of a concrete type.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    Common, concrete base class for all internal exceptions that are diagnosable.

    It inherits from `Exception`, so it can be used in `except` clauses, and declares
    `get_diagnostic_report` abstract so every subclass has to say how it is reported.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        """
        Abstract method to generate the diagnostic report.
        Subclasses MUST implement this.
        """
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    A stateless helper to format the final multi-line report string, giving all
    user-facing diagnostics the same look.

    Args:
        error_type: The high-level category of the error (e.g., "Notation Syntax Error").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: A dictionary of contextual information (user input, location, file path).

    Returns:
        A formatted diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "================== circmark: Actionable Diagnostic Report ==================",
        f"Error Type:     {error_type}",
    ]
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")
    if location := context.get('location'):
        lines.append(f"Location:       {location}")
    if grammar_rule := context.get('grammar_rule'):
        lines.append(f"Grammar Rule:   {grammar_rule}")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("============================================================================")
    return "\n".join(lines)
