# tests/test_config.py

import textwrap

import pytest

from circmark.config import (
    DEFAULT_CONFIG,
    ConfigFileError,
    ConfigLoader,
    ConfigSchemaError,
    RenderConfig,
    load_config,
)
from circmark.drawing import DEFAULT_STYLE
from circmark.layout import DEFAULT_LAYOUT, Size


@pytest.fixture
def write_config(tmp_path):
    def _write(content: str, name: str = "render.yaml"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path
    return _write


class TestConfigLoading:
    """YAML files become `RenderConfig`s; missing keys keep their defaults."""

    def test_full_file(self, write_config):
        path = write_config("""
            layout:
              element_width: 120
              element_height: 40
              parallel_lead_in: 10
              section_gap: 30
            svg:
              margin: 5
              stroke_width: 3
              font_size: 12
              junction_radius: 4
              terminal_radius: 6
              color: "#202020"
        """)
        config = load_config(path)
        assert config.layout.element_size == Size(120, 40)
        assert config.layout.parallel_lead_in == 10
        assert config.layout.section_gap == 30
        assert config.svg.margin == 5
        assert config.svg.color == "#202020"
        assert config.svg.terminal_radius == 6

    def test_partial_file_keeps_defaults(self, write_config):
        path = write_config("""
            svg:
              color: navy
        """)
        config = load_config(path)
        assert config.layout == DEFAULT_LAYOUT
        assert config.svg.color == "navy"
        assert config.svg.margin == DEFAULT_STYLE.margin

    def test_empty_file_is_default(self, write_config):
        assert load_config(write_config("")) == DEFAULT_CONFIG

    def test_null_sections_are_default(self, write_config):
        path = write_config("""
            layout:
            svg:
        """)
        assert load_config(path) == DEFAULT_CONFIG

    def test_zero_lead_in_is_allowed(self, write_config):
        path = write_config("""
            layout:
              parallel_lead_in: 0
        """)
        assert load_config(path).layout.parallel_lead_in == 0

    def test_from_mapping(self):
        config = ConfigLoader.from_mapping({"layout": {"element_height": 80}})
        assert isinstance(config, RenderConfig)
        assert config.layout.element_size == Size(200, 80)


class TestConfigFileErrors:

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigFileError) as excinfo:
            load_config(tmp_path / "absent.yaml")
        assert "not found" in excinfo.value.details
        report = excinfo.value.get_diagnostic_report()
        assert "YAML Configuration or File Error" in report
        assert "absent.yaml" in report

    def test_invalid_yaml(self, write_config):
        path = write_config("layout: [unclosed\n")
        with pytest.raises(ConfigFileError) as excinfo:
            load_config(path)
        assert "Invalid YAML syntax" in excinfo.value.details

    def test_root_must_be_a_mapping(self, write_config):
        path = write_config("- layout\n- svg\n")
        with pytest.raises(ConfigFileError) as excinfo:
            load_config(path)
        assert "must be a dictionary" in excinfo.value.details


class TestConfigSchemaErrors:

    def test_unknown_section(self, write_config):
        path = write_config("""
            colours:
              wire: red
        """)
        with pytest.raises(ConfigSchemaError) as excinfo:
            load_config(path)
        assert any(line.startswith("Field 'colours'") for line in excinfo.value.messages)

    def test_wrong_type_is_reported_with_its_path(self, write_config):
        path = write_config("""
            layout:
              element_width: wide
        """)
        with pytest.raises(ConfigSchemaError) as excinfo:
            load_config(path)
        assert any(line.startswith("Field 'layout.element_width'") for line in excinfo.value.messages)

    def test_negative_gap(self, write_config):
        path = write_config("""
            layout:
              section_gap: -10
        """)
        with pytest.raises(ConfigSchemaError) as excinfo:
            load_config(path)
        assert any("layout.section_gap" in line for line in excinfo.value.messages)

    def test_invalid_color(self, write_config):
        path = write_config("""
            svg:
              color: "#12345"
        """)
        with pytest.raises(ConfigSchemaError) as excinfo:
            load_config(path)
        assert any("Color '#12345' is invalid" in line for line in excinfo.value.messages)

    def test_lead_in_must_fit_a_quarter_of_element_width(self, write_config):
        path = write_config("""
            layout:
              element_width: 40
              parallel_lead_in: 20
        """)
        with pytest.raises(ConfigSchemaError) as excinfo:
            load_config(path)
        assert any("must not exceed a quarter of element_width (40)" in line for line in excinfo.value.messages)

    def test_lead_in_at_a_quarter_of_element_width(self, write_config):
        path = write_config("""
            layout:
              element_width: 80
              parallel_lead_in: 20
        """)
        assert load_config(path).layout.parallel_lead_in == 20

    def test_report_lists_every_issue(self, write_config):
        path = write_config("""
            layout:
              element_height: 0
            svg:
              font_size: 0
        """)
        with pytest.raises(ConfigSchemaError) as excinfo:
            load_config(path)
        report = excinfo.value.get_diagnostic_report()
        assert "Configuration Schema Validation Error" in report
        assert "2 issue(s)" in report
        assert "layout.element_height" in report
        assert "svg.font_size" in report
