# src/circmark/drawing/recording.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..layout.geometry import Position, Size

ELEMENT_PRIMITIVE_KINDS = (
    "resistor", "capacitor", "inductor", "voltage_source", "current_source", "open",
)


@dataclass(frozen=True)
class Primitive:
    """One recorded sink call. Element calls fill the element fields, wires and junctions fill `points`."""
    kind: str
    label: str = ""
    position: Optional[Position] = None
    size: Optional[Size] = None
    rotated: bool = False
    points: Tuple[Position, ...] = ()

    @property
    def is_element(self) -> bool:
        return self.kind in ELEMENT_PRIMITIVE_KINDS


class RecordingSink:
    """A sink that keeps every emitted primitive, in order. Used to inspect placement geometry."""

    def __init__(self):
        self.primitives: List[Primitive] = []

    def _element(self, kind: str, label: str, position: Position, size: Size, rotated: bool) -> None:
        self.primitives.append(Primitive(kind, label, position, size, rotated))

    def resistor(self, label, position, size, rotated):
        self._element("resistor", label, position, size, rotated)

    def capacitor(self, label, position, size, rotated):
        self._element("capacitor", label, position, size, rotated)

    def inductor(self, label, position, size, rotated):
        self._element("inductor", label, position, size, rotated)

    def voltage_source(self, label, position, size, rotated):
        self._element("voltage_source", label, position, size, rotated)

    def current_source(self, label, position, size, rotated):
        self._element("current_source", label, position, size, rotated)

    def open(self, label, position, size, rotated):
        self._element("open", label, position, size, rotated)

    def wire(self, a, b):
        self.primitives.append(Primitive("wire", points=(a, b)))

    def junction(self, position):
        self.primitives.append(Primitive("junction", position=position, points=(position,)))

    # --- Query helpers ---

    def of_kind(self, kind: str) -> List[Primitive]:
        return [p for p in self.primitives if p.kind == kind]

    @property
    def elements(self) -> List[Primitive]:
        return [p for p in self.primitives if p.is_element]

    @property
    def wires(self) -> List[Primitive]:
        return self.of_kind("wire")

    @property
    def junctions(self) -> List[Primitive]:
        return self.of_kind("junction")

    def by_label(self, label: str) -> Primitive:
        matches = [p for p in self.elements if p.label == label]
        if len(matches) != 1:
            raise KeyError(f"Expected exactly one element labelled '{label}', found {len(matches)}.")
        return matches[0]
