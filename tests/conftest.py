# tests/conftest.py
import pytest

from circmark.parser import (
    CircmarkParser, Element, ElementKind,
)
from circmark.drawing import RecordingSink


@pytest.fixture
def parser():
    return CircmarkParser()


@pytest.fixture
def sink():
    return RecordingSink()


# Short builders so expected trees read close to the notation.

def R(identifier: str) -> Element:
    return Element(ElementKind.RESISTOR, identifier)


def C(identifier: str) -> Element:
    return Element(ElementKind.CAPACITOR, identifier)


def L(identifier: str) -> Element:
    return Element(ElementKind.INDUCTOR, identifier)


def V(identifier: str) -> Element:
    return Element(ElementKind.VOLTAGE_SOURCE, identifier)


OPEN = Element.open()
