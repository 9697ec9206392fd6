# src/circmark/config.py
"""
Render configuration: layout constants and SVG style, optionally loaded from YAML.

A configuration file looks like:

    layout:
      element_width: 200
      element_height: 60
      parallel_lead_in: 20
      section_gap: 60
    svg:
      margin: 30
      stroke_width: 2
      font_size: 16
      junction_radius: 3
      terminal_radius: 5
      color: "#202020"

Every key is optional; missing keys keep their defaults. Unknown keys are rejected.
"""
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import cerberus
import yaml

from .errors import DiagnosableError, format_diagnostic_report
from .layout.engine import DEFAULT_LAYOUT, LayoutConfig
from .layout.placement import MAX_LEAD_IN_SHARE
from .layout.geometry import Size
from .drawing.svg import DEFAULT_STYLE, SvgStyle

logger = logging.getLogger(__name__)

COLOR_REGEX = r"^(#[0-9a-fA-F]{3}|#[0-9a-fA-F]{6}|[a-zA-Z]+)$"


@dataclass(frozen=True)
class RenderConfig:
    """Everything needed to turn a parsed document into a drawing."""
    layout: LayoutConfig = DEFAULT_LAYOUT
    svg: SvgStyle = DEFAULT_STYLE


DEFAULT_CONFIG = RenderConfig()


# --- Exceptions ---

class BaseConfigError(DiagnosableError):
    """Local base class for configuration file errors."""

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Configuration Error",
            details=str(self),
            suggestion="Please check the format and content of the render configuration file.",
            context={}
        )


@dataclass(eq=False)
class ConfigFileError(BaseConfigError):
    """Raised when the configuration file is missing, unreadable, or not valid YAML."""
    details: str
    file_path: Path

    def __str__(self):
        return f"Configuration error in file '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="YAML Configuration or File Error",
            details=self.details,
            suggestion="Ensure the file exists, has the correct read permissions, and contains a YAML mapping.",
            context={'source_file': self.file_path}
        )


@dataclass(eq=False)
class ConfigSchemaError(BaseConfigError):
    """Raised when the configuration YAML does not conform to the schema."""
    errors: Dict[str, Any]
    file_path: Path
    messages: List[str] = field(init=False)

    def __post_init__(self):
        self.messages = _flatten_errors(self.errors)

    def __str__(self):
        return (
            f"Configuration schema validation failed for file '{self.file_path}':\n"
            + "\n".join(f"  - {line}" for line in self.messages)
        )

    def get_diagnostic_report(self) -> str:
        details = (
            "The configuration file does not conform to the required schema.\n"
            f"See details for {len(self.messages)} issue(s) below:\n\n"
            + "\n".join(f"  - {line}" for line in self.messages)
        )
        return format_diagnostic_report(
            error_type="Configuration Schema Validation Error",
            details=details,
            suggestion="Correct the listed fields. Only the 'layout' and 'svg' sections and their documented keys are accepted.",
            context={'source_file': self.file_path}
        )


def _flatten_errors(errors: Dict[str, Any], prefix: str = "") -> List[str]:
    """Turns Cerberus' nested error mapping into 'field.subfield: message' lines."""
    lines = []
    for key, entries in sorted(errors.items(), key=lambda item: str(item[0])):
        path = f"{prefix}{key}"
        for entry in entries:
            if isinstance(entry, dict):
                lines.extend(_flatten_errors(entry, prefix=f"{path}."))
            else:
                lines.append(f"Field '{path}': {entry}")
    return lines


# --- Validation ---

class ConfigValidator(cerberus.Validator):
    """Cerberus validator with the cross-field and format rules of render configs."""
    def __init__(self, *args, **kwargs):
        super(ConfigValidator, self).__init__(*args, **kwargs)
        self.rules['color_regex'] = {'schema': {'type': 'boolean'}}
        self.rules['lead_in_fits_element'] = {'schema': {'type': 'boolean'}}

    def _validate_color_regex(self, constraint: bool, field: str, value: Any):
        """
        Validates that a color is a name or a hex code.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if constraint and isinstance(value, str) and not re.match(COLOR_REGEX, value):
            self._error(field, f"Color '{value}' is invalid. Use a color name or a '#rgb' / '#rrggbb' hex code.")

    def _validate_lead_in_fits_element(self, constraint: bool, field: str, value: Dict):
        """
        Validates that the configured lead-in fits within a quarter of the element width.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if not constraint or not isinstance(value, dict):
            return
        width = value.get('element_width', DEFAULT_LAYOUT.element_size.width)
        lead_in = value.get('parallel_lead_in', DEFAULT_LAYOUT.parallel_lead_in)
        if isinstance(width, int) and isinstance(lead_in, int) and lead_in > width // MAX_LEAD_IN_SHARE:
            self._error(
                field,
                f"parallel_lead_in ({lead_in}) must not exceed a quarter of element_width ({width}).",
            )


class ConfigLoader:
    """Loads and validates render configuration files."""
    _positive_int = {"type": "integer", "min": 1}
    _non_negative_int = {"type": "integer", "min": 0}

    _schema = {
        "layout": {
            "type": "dict", "required": False, "nullable": True, "lead_in_fits_element": True, "schema": {
                "element_width": _positive_int,
                "element_height": _positive_int,
                "parallel_lead_in": _non_negative_int,
                "section_gap": _non_negative_int,
            },
        },
        "svg": {
            "type": "dict", "required": False, "nullable": True, "schema": {
                "margin": _non_negative_int,
                "stroke_width": _positive_int,
                "font_size": _positive_int,
                "junction_radius": _non_negative_int,
                "terminal_radius": _non_negative_int,
                "color": {"type": "string", "empty": False, "color_regex": True},
            },
        },
    }

    def __init__(self):
        self._validator = ConfigValidator(self._schema)
        self._validator.allow_unknown = False

    def load(self, config_path: Union[str, Path]) -> RenderConfig:
        """Reads, validates and converts a YAML configuration file."""
        path = Path(config_path).resolve()
        logger.info(f"Loading render configuration from: {path}")
        content = self._load_yaml(path)
        if not self._validator.validate(content):
            raise ConfigSchemaError(self._validator.errors, path)
        return self.from_mapping(self._validator.document)

    @staticmethod
    def from_mapping(data: Dict[str, Any]) -> RenderConfig:
        """Builds a `RenderConfig` from an already validated mapping, filling in defaults."""
        layout_data = data.get("layout") or {}
        svg_data = data.get("svg") or {}
        layout = LayoutConfig(
            element_size=Size(
                layout_data.get("element_width", DEFAULT_LAYOUT.element_size.width),
                layout_data.get("element_height", DEFAULT_LAYOUT.element_size.height),
            ),
            parallel_lead_in=layout_data.get("parallel_lead_in", DEFAULT_LAYOUT.parallel_lead_in),
            section_gap=layout_data.get("section_gap", DEFAULT_LAYOUT.section_gap),
        )
        style = SvgStyle(**{key: svg_data.get(key, getattr(DEFAULT_STYLE, key))
                            for key in SvgStyle.__dataclass_fields__})
        return RenderConfig(layout=layout, svg=style)

    def _load_yaml(self, source: Path) -> Dict[str, Any]:
        """Loads and performs basic sanity checks on a YAML file."""
        if not source.is_file():
            raise ConfigFileError(details=f"Configuration file not found at path: {source}", file_path=source)
        try:
            with source.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except PermissionError as e:
            raise ConfigFileError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        except yaml.YAMLError as e:
            raise ConfigFileError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigFileError(details="The root of the YAML file must be a dictionary (mapping).", file_path=source)
        return content


def load_config(config_path: Union[str, Path]) -> RenderConfig:
    """Convenience wrapper around `ConfigLoader().load`."""
    return ConfigLoader().load(config_path)
