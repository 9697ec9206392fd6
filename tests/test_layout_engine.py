# tests/test_layout_engine.py

import pytest

from circmark.layout import (
    DEFAULT_LAYOUT,
    LayoutConfig,
    LayoutInvariantViolation,
    PlacementContext,
    Position,
    Size,
    natural_size,
    split_proportionally,
)
from circmark.parser import (
    Chain,
    CircuitSection,
    Document,
    Parallel,
    Series,
    SeriesLink,
    ShuntLink,
    TwoportSection,
)
from conftest import C, L, OPEN, R


class TestNaturalSize:
    """Bottom-up sizes under the default configuration (200x60 elements, gap 60)."""

    def test_element(self):
        assert natural_size(R("1")) == Size(200, 60)
        assert natural_size(OPEN) == Size(200, 60)

    def test_series_adds_widths(self):
        assert natural_size(Series(R("1"), R("2"))) == Size(400, 60)

    def test_parallel_adds_heights(self):
        assert natural_size(Parallel(R("1"), R("2"))) == Size(200, 120)

    def test_nested_groups(self):
        node = Parallel(Series(L("1"), R("1")), C("1"))
        assert natural_size(node) == Size(400, 120)

    def test_shunt_link_swaps_axes(self):
        assert natural_size(ShuntLink(Parallel(R("1"), R("2")))) == Size(120, 200)

    def test_twoport_chain(self, parser):
        chain = parser.parse_chain("|O-((L1+R1)||C1)|O").value
        assert natural_size(chain) == Size(520, 200)

    def test_shunt_sub_chain(self, parser):
        chain = parser.parse_chain("|(-C1-L1)").value
        assert natural_size(chain) == Size(60, 400)

    def test_sections_delegate_to_content(self):
        chain = Chain((SeriesLink(R("1")),))
        assert natural_size(TwoportSection(chain)) == natural_size(chain)
        assert natural_size(CircuitSection(R("1"))) == Size(200, 60)

    def test_document_stacks_sections_with_gap(self):
        document = Document((
            TwoportSection(Chain((SeriesLink(R("1")),))),
            TwoportSection(Chain((SeriesLink(Series(R("2"), R("3"))),))),
        ))
        assert natural_size(document) == Size(400, 60 + 60 + 60)

    def test_custom_element_size(self):
        config = LayoutConfig(element_size=Size(100, 40))
        assert natural_size(Series(R("1"), Parallel(R("2"), R("3"))), config) == Size(200, 80)

    def test_size_is_pure(self, parser):
        chain = parser.parse_chain("|V1-(R1||C1)|(-L1-C2)").value
        assert natural_size(chain) == natural_size(chain)


class TestNaturalSizeInvariants:
    """Trees the parser cannot produce are reported, never sized."""

    def test_empty_chain(self):
        with pytest.raises(LayoutInvariantViolation) as excinfo:
            natural_size(Chain(()))
        assert excinfo.value.node_type == "Chain"

    def test_shunt_inside_sub_chain(self):
        nested = Chain((SeriesLink(R("1")), ShuntLink(R("2"))))
        with pytest.raises(LayoutInvariantViolation) as excinfo:
            natural_size(ShuntLink(nested))
        assert excinfo.value.node_type == "ShuntLink"

    def test_empty_document(self):
        with pytest.raises(LayoutInvariantViolation):
            natural_size(Document(()))

    def test_unknown_node(self):
        with pytest.raises(LayoutInvariantViolation) as excinfo:
            natural_size("R1")
        assert excinfo.value.node_type == "str"
        assert "Layout Invariant Violation" in excinfo.value.get_diagnostic_report()


class TestSplitProportionally:

    def test_exact_split(self):
        assert split_proportionally(320, [60, 200, 60], "Chain") == [60, 200, 60]

    def test_remainder_goes_to_last_part(self):
        assert split_proportionally(10, [1, 1, 1], "Chain") == [3, 3, 4]

    def test_scaled_split_conserves_total(self):
        parts = split_proportionally(301, [200, 200], "Series")
        assert parts == [150, 151]
        assert sum(parts) == 301

    def test_zero_weights(self):
        with pytest.raises(LayoutInvariantViolation):
            split_proportionally(100, [0, 0], "Parallel")


class TestLayoutConfig:

    def test_defaults(self):
        assert DEFAULT_LAYOUT.element_size == Size(200, 60)
        assert DEFAULT_LAYOUT.parallel_lead_in == 20
        assert DEFAULT_LAYOUT.section_gap == 60

    @pytest.mark.parametrize("kwargs", [
        {"element_size": Size(0, 60)},
        {"element_size": Size(200, -1)},
        {"parallel_lead_in": -5},
        {"section_gap": -1},
    ])
    def test_rejects_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            LayoutConfig(**kwargs)


class TestPlacementContext:

    def test_translate(self):
        ctx = PlacementContext().translate(10, -5)
        assert ctx.origin == Position(10, -5)
        assert not ctx.rotated

    def test_rotated_translate_swaps_offsets(self):
        ctx = PlacementContext(Position(100, 0)).rotate().translate(10, -5)
        assert ctx.origin == Position(95, 10)
        assert ctx.rotated

    def test_rotate_toggles(self):
        assert not PlacementContext().rotate().rotate().rotated

    def test_point_does_not_move_context(self):
        ctx = PlacementContext(Position(1, 2))
        assert ctx.point(3, 4) == Position(4, 6)
        assert ctx.origin == Position(1, 2)

    def test_size_swapped(self):
        assert Size(200, 60).swapped() == Size(60, 200)
