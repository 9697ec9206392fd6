# tests/test_svg_sink.py

import pytest

from circmark.drawing import DEFAULT_STYLE, DrawingSink, SvgSink, SvgStyle
from circmark.layout import Position, Size, draw


@pytest.fixture
def svg_sink():
    return SvgSink()


class TestSvgSinkBounds:
    """The sink tracks the extent of everything it draws."""

    def test_starts_at_origin(self, svg_sink):
        assert (svg_sink.min_x, svg_sink.max_x, svg_sink.min_y, svg_sink.max_y) == (0, 0, 0, 0)

    def test_horizontal_element(self, svg_sink):
        svg_sink.resistor("R1", Position(0, 0), Size(200, 60), False)
        assert (svg_sink.min_x, svg_sink.max_x) == (-100, 100)
        assert (svg_sink.min_y, svg_sink.max_y) == (-30, 30)

    def test_rotated_element_swaps_extent(self, svg_sink):
        svg_sink.capacitor("C1", Position(0, 0), Size(200, 60), True)
        assert (svg_sink.min_x, svg_sink.max_x) == (-30, 30)
        assert (svg_sink.min_y, svg_sink.max_y) == (-100, 100)

    def test_wires_and_junctions_grow_bounds(self, svg_sink):
        svg_sink.wire(Position(-50, 10), Position(250, 10))
        svg_sink.junction(Position(0, -40))
        assert (svg_sink.min_x, svg_sink.max_x) == (-50, 250)
        assert (svg_sink.min_y, svg_sink.max_y) == (-40, 10)


class TestSvgSinkOutput:

    def test_finalize_adds_margin(self, svg_sink):
        svg_sink.resistor("R1", Position(0, 0), Size(200, 60), False)
        drawing = svg_sink.finalize()
        assert drawing.width == 200 + 2 * DEFAULT_STYLE.margin
        assert drawing.height == 60 + 2 * DEFAULT_STYLE.margin

    def test_labels_are_written(self, svg_sink):
        svg_sink.resistor("R1", Position(0, 0), Size(200, 60), False)
        svg_sink.inductor("L7", Position(200, 0), Size(200, 60), True)
        svg = svg_sink.finalize().as_svg()
        assert ">R1<" in svg
        assert ">L7<" in svg

    def test_open_terminal_has_no_label(self, svg_sink):
        svg_sink.open("", Position(0, 0), Size(200, 60), False)
        svg = svg_sink.finalize().as_svg()
        assert "<text" not in svg
        assert svg.count("<circle") == 2

    def test_rotation_is_a_group_transform(self, svg_sink):
        svg_sink.voltage_source("V1", Position(10, 20), Size(200, 60), True)
        svg = svg_sink.finalize().as_svg()
        assert "translate(10,20) rotate(90)" in svg

    def test_style_is_applied(self):
        sink = SvgSink(SvgStyle(color="#ff0000", margin=0))
        sink.current_source("I1", Position(0, 0), Size(200, 60), False)
        drawing = sink.finalize()
        assert drawing.width == 200
        assert "#ff0000" in drawing.as_svg()

    def test_all_glyphs_render(self, parser, svg_sink):
        chain = parser.parse_chain("|V1-R1-(C1||L1)|I1-Z1|O").value
        draw(chain, svg_sink)
        svg = svg_sink.finalize().as_svg()
        for label in ("V1", "R1", "C1", "L1", "I1", "Z1"):
            assert f">{label}<" in svg

    def test_svg_sink_is_a_drawing_sink(self, svg_sink):
        assert isinstance(svg_sink, DrawingSink)
