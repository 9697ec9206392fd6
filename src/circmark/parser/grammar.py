# src/circmark/parser/grammar.py
"""
Recursive-descent parser for the circuit notation.

Grammar, lowest precedence first:

    document      := section+                       (sections separated by whitespace)
    section       := "@twoport" ws chain
    chain         := link+
    link          := "-" subcircuit | "|" shunt
    shunt         := "(" sub_chain ")" | subcircuit
    sub_chain     := ("-" subcircuit)+               (a "|" here is a StructuralViolation)
    subcircuit    := element | "(" series_expr ")"
    series_expr   := parallel_expr ("+" series_expr)?
    parallel_expr := subcircuit ("||" parallel_expr)?
    element       := ("R"|"C"|"V"|"L"|"Z"|"I") identifier | "O"
    identifier    := [A-Za-z0-9]+

Both binary operators are right-associative and `||` binds tighter than `+`. An
expression that reduces to a single operand yields that operand itself, so `(R1)`
and `R1` produce the same tree.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, List, Tuple

from .nodes import (
    TAGGED_ELEMENT_KINDS,
    Chain,
    CircuitSection,
    Document,
    Element,
    Parallel,
    ParseResult,
    Series,
    SeriesLink,
    ShuntLink,
    SubCircuit,
    TwoportLink,
    TwoportSection,
)
from .exceptions import NotationSyntaxError, StructuralViolation

logger = logging.getLogger(__name__)

SERIES_LINK = "-"
SHUNT_LINK = "|"
SERIES_OP = "+"
PARALLEL_OP = "||"
GROUP_OPEN = "("
GROUP_CLOSE = ")"
SECTION_PREFIX = "@"
OPEN_CIRCUIT = "O"
WHITESPACE = " \t\r\n"

SECTION_KINDS = ("twoport",)


def _is_identifier_char(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()


class _Scanner:
    """
    One parse over one input string. Every rule method takes the current index and
    returns `(node, next_index)`; failures raise. The rule-name stack only feeds
    error context.
    """

    def __init__(self, text: str):
        self.text = text
        self._rules: List[str] = []

    # --- Low-level helpers ---

    def at(self, pos: int, token: str) -> bool:
        return self.text.startswith(token, pos)

    def skip_whitespace(self, pos: int) -> int:
        while pos < len(self.text) and self.text[pos] in WHITESPACE:
            pos += 1
        return pos

    def identifier_end(self, pos: int) -> int:
        while pos < len(self.text) and _is_identifier_char(self.text[pos]):
            pos += 1
        return pos

    @contextmanager
    def rule(self, name: str) -> Iterator[None]:
        self._rules.append(name)
        try:
            yield
        finally:
            self._rules.pop()

    def syntax_error(self, pos: int, expected: str) -> NotationSyntaxError:
        return NotationSyntaxError(self.text, pos, expected, tuple(self._rules))

    def structural_violation(self, pos: int, rule: str) -> StructuralViolation:
        return StructuralViolation(self.text, pos, rule, tuple(self._rules))

    def expect_close(self, pos: int) -> int:
        if not self.at(pos, GROUP_CLOSE):
            raise self.syntax_error(pos, "expected closing paren")
        return pos + 1

    # --- Grammar rules ---

    def element(self, pos: int) -> Tuple[Element, int]:
        tag = self.text[pos:pos + 1]
        kind = TAGGED_ELEMENT_KINDS.get(tag)
        if kind is not None:
            end = self.identifier_end(pos + 1)
            if end == pos + 1:
                raise self.syntax_error(pos + 1, "expected identifier")
            return Element(kind, self.text[pos + 1:end]), end
        if tag == OPEN_CIRCUIT:
            return Element.open(), pos + 1
        raise self.syntax_error(pos, "expected element or group")

    def sub_circuit(self, pos: int) -> Tuple[SubCircuit, int]:
        if self.at(pos, GROUP_OPEN):
            with self.rule("sub_circuit-group"):
                node, pos = self.series_expr(pos + 1)
                return node, self.expect_close(pos)
        with self.rule("sub_circuit-element"):
            return self.element(pos)

    def series_expr(self, pos: int) -> Tuple[SubCircuit, int]:
        left, pos = self.parallel_expr(pos)
        if self.at(pos, SERIES_OP):
            right, pos = self.series_expr(pos + len(SERIES_OP))
            return Series(left, right), pos
        return left, pos

    def parallel_expr(self, pos: int) -> Tuple[SubCircuit, int]:
        top, pos = self.sub_circuit(pos)
        if self.at(pos, PARALLEL_OP):
            bottom, pos = self.parallel_expr(pos + len(PARALLEL_OP))
            return Parallel(top, bottom), pos
        return top, pos

    def chain(self, pos: int) -> Tuple[Chain, int]:
        links: List[TwoportLink] = []
        while self.at(pos, SERIES_LINK) or self.at(pos, SHUNT_LINK):
            link, pos = self.link(pos)
            links.append(link)
        if not links:
            raise self.syntax_error(pos, "expected at least one link")
        return Chain(tuple(links)), pos

    def link(self, pos: int) -> Tuple[TwoportLink, int]:
        if self.at(pos, SERIES_LINK):
            content, pos = self.sub_circuit(pos + 1)
            return SeriesLink(content), pos
        content, pos = self.shunt_content(pos + 1)
        return ShuntLink(content), pos

    def shunt_content(self, pos: int):
        opens_sub_chain = self.at(pos, GROUP_OPEN) and (
            self.at(pos + 1, SERIES_LINK) or self.at(pos + 1, SHUNT_LINK)
        )
        if not opens_sub_chain:
            return self.sub_circuit(pos)
        with self.rule("sub_chain"):
            sub_chain, pos = self.sub_chain(pos + 1)
            return sub_chain, self.expect_close(pos)

    def sub_chain(self, pos: int) -> Tuple[Chain, int]:
        links: List[TwoportLink] = []
        while True:
            if self.at(pos, SHUNT_LINK):
                raise self.structural_violation(pos, "shunt within sub-chains is not supported")
            if not self.at(pos, SERIES_LINK):
                break
            content, pos = self.sub_circuit(pos + 1)
            links.append(SeriesLink(content))
        if not links:
            raise self.syntax_error(pos, "expected at least one link")
        return Chain(tuple(links)), pos

    def document(self, pos: int) -> Tuple[Document, int]:
        sections = []
        pos = self.skip_whitespace(pos)
        while self.at(pos, SECTION_PREFIX):
            section, pos = self.section(pos)
            sections.append(section)
            pos = self.skip_whitespace(pos)
        if not sections:
            raise self.syntax_error(pos, "expected section")
        return Document(tuple(sections)), pos

    def section(self, pos: int) -> Tuple[TwoportSection, int]:
        with self.rule("section"):
            kind_start = pos + len(SECTION_PREFIX)
            kind_end = self.identifier_end(kind_start)
            kind = self.text[kind_start:kind_end]
            if not kind:
                raise self.syntax_error(kind_start, "expected section kind")
            if kind not in SECTION_KINDS:
                raise self.syntax_error(kind_start, f"unknown section kind '{kind}'")
            body_start = self.skip_whitespace(kind_end)
            if body_start == kind_end:
                raise self.syntax_error(kind_end, "expected whitespace")
            with self.rule("twoport"):
                chain, pos = self.chain(body_start)
            return TwoportSection(chain), pos


class CircmarkParser:
    """
    Parses circuit notation into the AST defined in `nodes`.

    The parser holds no state between calls. Each `parse_*` method consumes as much of
    the input as its rule matches and returns a `ParseResult` with the node and the
    unconsumed remainder; malformed input raises `NotationSyntaxError` or
    `StructuralViolation`.
    """

    def parse_element(self, text: str) -> ParseResult:
        scanner = _Scanner(text)
        with scanner.rule("element"):
            node, pos = scanner.element(0)
        return self._result(text, node, pos)

    def parse_sub_circuit(self, text: str) -> ParseResult:
        scanner = _Scanner(text)
        node, pos = scanner.sub_circuit(0)
        return self._result(text, node, pos)

    def parse_chain(self, text: str) -> ParseResult:
        scanner = _Scanner(text)
        with scanner.rule("twoport"):
            node, pos = scanner.chain(0)
        return self._result(text, node, pos)

    def parse_document(self, text: str) -> ParseResult:
        scanner = _Scanner(text)
        with scanner.rule("document"):
            node, pos = scanner.document(0)
        return self._result(text, node, pos)

    def parse_notation(self, text: str) -> ParseResult:
        """
        Parses any supported top-level form into a `Document`:
        `@`-prefixed sections, a bare two-port chain, or a bare two-terminal circuit.
        """
        scanner = _Scanner(text)
        start = scanner.skip_whitespace(0)
        if scanner.at(start, SECTION_PREFIX):
            with scanner.rule("document"):
                document, pos = scanner.document(start)
        elif scanner.at(start, SERIES_LINK) or scanner.at(start, SHUNT_LINK):
            with scanner.rule("twoport"):
                chain, pos = scanner.chain(start)
            document = Document((TwoportSection(chain),))
        else:
            circuit, pos = scanner.sub_circuit(start)
            document = Document((CircuitSection(circuit),))
        return self._result(text, document, pos)

    @staticmethod
    def _result(text: str, node, pos: int) -> ParseResult:
        logger.debug("Parsed %s, consumed %d of %d characters.", type(node).__name__, pos, len(text))
        return ParseResult(value=node, remainder=text[pos:], offset=pos)


def parse(text: str) -> Document:
    """
    Parses notation into a `Document`. Leftover input after a successful parse is
    logged as a warning and otherwise ignored.
    """
    result = CircmarkParser().parse_notation(text)
    if result.has_trailing_input:
        logger.warning("Ignoring trailing input at offset %d: %r", result.offset, result.remainder)
    return result.value
