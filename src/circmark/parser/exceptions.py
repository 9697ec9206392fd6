# src/circmark/parser/exceptions.py
"""
Defines the diagnosable exceptions raised while parsing circuit notation.

Two failure kinds exist:

1.  `NotationSyntaxError`: the input does not match the grammar at some position.
    It carries the offending position and the construct that was expected there.

2.  `StructuralViolation`: the input is syntactically plausible but breaks a
    structural rule the context-free grammar cannot express (a shunt link inside a
    sub-chain). The parser raises it as a hard failure: no alternative grammar rule
    catches it, so the input is never silently reinterpreted.

Both derive from `BaseParsingError`, which hooks them into the global
`DiagnosableError` hierarchy, and both can render a caret excerpt pointing at the
failure position.
"""
from dataclasses import dataclass, field
from typing import Tuple

from ..errors import DiagnosableError, format_diagnostic_report


class BaseParsingError(DiagnosableError):
    """
    Local base class for all notation parsing errors.

    Subclasses are dataclasses exposing `text` (the full input) and `position`
    (index of the failure in `text`).
    """
    text: str
    position: int

    @property
    def line(self) -> int:
        """1-based line number of the failure position."""
        return self.text.count("\n", 0, self.position) + 1

    @property
    def column(self) -> int:
        """1-based column of the failure position within its line."""
        line_start = self.text.rfind("\n", 0, self.position) + 1
        return self.position - line_start + 1

    def excerpt(self) -> str:
        """The offending source line with a caret under the failure position."""
        line_start = self.text.rfind("\n", 0, self.position) + 1
        line_end = self.text.find("\n", self.position)
        if line_end == -1:
            line_end = len(self.text)
        return f"{self.text[line_start:line_end]}\n{' ' * (self.position - line_start)}^"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Please check the circuit notation.",
            context={}
        )


@dataclass(eq=False)
class NotationSyntaxError(BaseParsingError):
    """
    Raised when the notation does not match the grammar.
    `expected` names the construct the parser was looking for, and `context` is the
    stack of grammar rules that were active at the failure.
    """
    text: str
    position: int
    expected: str
    context: Tuple[str, ...] = field(default_factory=tuple)

    def __str__(self):
        return f"Syntax error at line {self.line}, column {self.column}: {self.expected}"

    def get_diagnostic_report(self) -> str:
        found = self.text[self.position:self.position + 1]
        found_desc = f"found '{found}'" if found else "found end of input"
        details = f"{self.expected} ({found_desc}).\n\n{self.excerpt()}"
        return format_diagnostic_report(
            error_type="Notation Syntax Error",
            details=details,
            suggestion=(
                "Links start with '-' (series) or '|' (shunt). Elements are a tag letter "
                "(R, C, L, V, Z, I) followed by an alphanumeric identifier, or 'O' for an open.\n"
                "Groups are parenthesised and combine operands with '+' (series) or '||' (parallel)."
            ),
            context={
                'user_input': self.text.strip(),
                'location': f"line {self.line}, column {self.column}",
                'grammar_rule': " > ".join(self.context),
            }
        )


@dataclass(eq=False)
class StructuralViolation(BaseParsingError):
    """
    Raised when syntactically plausible input breaks a structural rule, such as a
    shunt link nested inside the sub-chain of another shunt link.
    """
    text: str
    position: int
    rule: str
    context: Tuple[str, ...] = field(default_factory=tuple)

    def __str__(self):
        return f"Structural violation at line {self.line}, column {self.column}: {self.rule}"

    def get_diagnostic_report(self) -> str:
        details = f"{self.rule}.\n\n{self.excerpt()}"
        return format_diagnostic_report(
            error_type="Notation Structural Violation",
            details=details,
            suggestion=(
                "A shunt branch may hold several elements stacked with series links, "
                "e.g. '|(-C1-L1)', but never another shunt link."
            ),
            context={
                'user_input': self.text.strip(),
                'location': f"line {self.line}, column {self.column}",
                'grammar_rule': " > ".join(self.context),
            }
        )
