# src/circmark/parser/nodes.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

# The classes in this module define the abstract syntax tree shared by the parser,
# the layout engine and the placement traversal. Every node is a frozen dataclass:
# the tree is built once by the parser and only read afterwards, and dataclass
# equality gives structural comparison of whole trees.


class ElementKind(Enum):
    """The lumped element kinds, keyed by their tag letter in the notation."""
    RESISTOR = "R"
    CAPACITOR = "C"
    INDUCTOR = "L"
    VOLTAGE_SOURCE = "V"
    IMPEDANCE = "Z"
    CURRENT_SOURCE = "I"
    OPEN = "O"


# Tag letters that must be followed by an identifier. The open circuit stands alone.
TAGGED_ELEMENT_KINDS = {kind.value: kind for kind in ElementKind if kind is not ElementKind.OPEN}


@dataclass(frozen=True)
class Element:
    """A single circuit element, e.g. `R1` or the open terminal `O`."""
    kind: ElementKind
    identifier: str = ""

    @classmethod
    def open(cls) -> Element:
        return cls(ElementKind.OPEN)

    @property
    def label(self) -> str:
        """Display label: the tag letter followed by the identifier, empty for an open."""
        if self.kind is ElementKind.OPEN:
            return ""
        return f"{self.kind.value}{self.identifier}"


@dataclass(frozen=True)
class Series:
    """Two sub-circuits in series, drawn left to right."""
    left: SubCircuit
    right: SubCircuit


@dataclass(frozen=True)
class Parallel:
    """Two sub-circuits in parallel, drawn top and bottom between shared rails."""
    top: SubCircuit
    bottom: SubCircuit


# A two-terminal sub-circuit: a single element or a series/parallel group of them.
# Groups always hold two real operands; a parenthesised single operand is never wrapped.
SubCircuit = Union[Element, Series, Parallel]


@dataclass(frozen=True)
class SeriesLink:
    """A link placed in the signal path of a two-port."""
    content: SubCircuit


@dataclass(frozen=True)
class ShuntLink:
    """A link branching from the signal path to the reference rail."""
    content: Union[SubCircuit, Chain]


TwoportLink = Union[SeriesLink, ShuntLink]


@dataclass(frozen=True)
class Chain:
    """
    An ordered sequence of two-port links. Used as the body of a `@twoport` section
    and, restricted to series links only, as the content of a shunt link (a sub-chain
    of elements stacked in one vertical slot).
    """
    links: Tuple[TwoportLink, ...]

    @property
    def is_sub_chain(self) -> bool:
        return all(isinstance(link, SeriesLink) for link in self.links)

    def __len__(self):
        return len(self.links)


@dataclass(frozen=True)
class TwoportSection:
    """A `@twoport` section wrapping one chain."""
    chain: Chain


@dataclass(frozen=True)
class CircuitSection:
    """A bare two-terminal circuit, produced when the notation is not a two-port."""
    circuit: SubCircuit


Section = Union[TwoportSection, CircuitSection]


@dataclass(frozen=True)
class Document:
    """Top-level node: independent sections, laid out in order."""
    sections: Tuple[Section, ...]


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of a successful parse: the node, the unconsumed input, and the index of
    that remainder in the original text.
    """
    value: object
    remainder: str
    offset: int

    @property
    def has_trailing_input(self) -> bool:
        return bool(self.remainder.strip())
