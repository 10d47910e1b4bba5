"""Design token and theme file schema definitions.

This module defines the Pydantic models for the design token groups (color,
font, spacing, border, shadow and motion), their aggregation into a single
DesignToken with CSS variable emission, and the ThemeDefinition model that
validates theme files loaded by the registry.
"""

import re
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .color import Color
from .color_config import ColorConfig, ColorType
from .errors import InvalidColorFormat
from .utils import validate_custom_properties

CSS_VAR_PREFIX = "ant"


class Shape(str, Enum):
    """Component corner shape"""
    DEFAULT = "default"
    ROUND = "round"
    CIRCLE = "circle"


class ComponentSize(str, Enum):
    """Component size scale"""
    SMALL = "small"
    MIDDLE = "middle"
    LARGE = "large"


class _TokenGroup(BaseModel):
    model_config = ConfigDict(frozen=True)


class ColorToken(_TokenGroup):
    """Semantic color tokens"""
    primary: str = "#1890ff"
    primary_hover: str = "#40a9ff"
    primary_active: str = "#096dd9"
    success: str = "#52c41a"
    warning: str = "#faad14"
    error: str = "#ff4d4f"
    info: str = "#1890ff"
    text: str = "rgba(0, 0, 0, 0.85)"
    text_secondary: str = "rgba(0, 0, 0, 0.65)"
    text_disabled: str = "rgba(0, 0, 0, 0.25)"
    background: str = "#fff"
    background_container: str = "#fafafa"
    border: str = "#d9d9d9"
    border_split: str = "#f0f0f0"

    @classmethod
    def dark_defaults(cls) -> 'ColorToken':
        return cls(
            text="rgba(255, 255, 255, 0.85)",
            text_secondary="rgba(255, 255, 255, 0.65)",
            text_disabled="rgba(255, 255, 255, 0.25)",
            background="#141414",
            background_container="#1f1f1f",
            border="#434343",
            border_split="#303030",
        )


class FontToken(_TokenGroup):
    """Typography tokens"""
    size_base: str = "14px"
    size_lg: str = "16px"
    size_sm: str = "12px"
    size_xs: str = "10px"
    line_height_base: str = "1.5715"
    family: str = ("-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, "
                   "'Helvetica Neue', Arial, 'Noto Sans', sans-serif")
    weight_normal: int = 400
    weight_medium: int = 500
    weight_bold: int = 600


class SpacingToken(_TokenGroup):
    xs: str = "8px"
    sm: str = "12px"
    md: str = "16px"
    lg: str = "24px"
    xl: str = "32px"
    xxl: str = "48px"


class BorderToken(_TokenGroup):
    radius_base: str = "6px"
    radius_sm: str = "4px"
    radius_lg: str = "8px"
    width: str = "1px"
    style: str = "solid"


class ShadowToken(_TokenGroup):
    base: str = ("0 3px 6px -4px rgba(0, 0, 0, 0.12), 0 6px 16px 0 rgba(0, 0, 0, 0.08), "
                 "0 9px 28px 8px rgba(0, 0, 0, 0.05)")
    card: str = ("0 1px 2px -2px rgba(0, 0, 0, 0.16), 0 3px 6px 0 rgba(0, 0, 0, 0.12), "
                 "0 5px 12px 4px rgba(0, 0, 0, 0.09)")
    popup: str = ("0 6px 16px 0 rgba(0, 0, 0, 0.08), 0 3px 6px -4px rgba(0, 0, 0, 0.12), "
                  "0 9px 28px 8px rgba(0, 0, 0, 0.05)")
    drawer: str = ("0 8px 10px -5px rgba(0, 0, 0, 0.2), 0 16px 24px 2px rgba(0, 0, 0, 0.14), "
                   "0 6px 30px 5px rgba(0, 0, 0, 0.12)")


class MotionToken(_TokenGroup):
    duration_slow: str = "0.3s"
    duration_mid: str = "0.2s"
    duration_fast: str = "0.1s"
    ease_out: str = "cubic-bezier(0.215, 0.61, 0.355, 1)"
    ease_in_out: str = "cubic-bezier(0.645, 0.045, 0.355, 1)"
    ease_in: str = "cubic-bezier(0.55, 0.055, 0.675, 0.19)"


# ColorToken field -> (ColorType, palette variant or None for the base color)
_COLOR_TOKEN_SOURCES = {
    'primary': (ColorType.PRIMARY, None),
    'primary_hover': (ColorType.PRIMARY, 'light'),
    'primary_active': (ColorType.PRIMARY, 'dark'),
    'success': (ColorType.SUCCESS, None),
    'warning': (ColorType.WARNING, None),
    'error': (ColorType.ERROR, None),
    'info': (ColorType.INFO, None),
    'text': (ColorType.TEXT_COLOR, None),
    'text_secondary': (ColorType.TEXT_COLOR_SECONDARY, None),
    'text_disabled': (ColorType.TEXT_COLOR_DISABLED, None),
    'background': (ColorType.BACKGROUND_COLOR, None),
    'background_container': (ColorType.LAYOUT_BACKGROUND_COLOR, None),
    'border': (ColorType.BORDER_COLOR, None),
    'border_split': (ColorType.DIVIDER_COLOR, None),
}


def css_color(color: Color) -> str:
    """Hex for opaque colors, ``rgba()`` otherwise."""
    if color.a >= 1.0:
        return color.to_hex_string()
    return color.to_rgb_string()


class DesignToken(BaseModel):
    """Complete set of design tokens for a theme."""

    model_config = ConfigDict(frozen=True)

    color: ColorToken = Field(default_factory=ColorToken)
    font: FontToken = Field(default_factory=FontToken)
    spacing: SpacingToken = Field(default_factory=SpacingToken)
    border: BorderToken = Field(default_factory=BorderToken)
    shadow: ShadowToken = Field(default_factory=ShadowToken)
    motion: MotionToken = Field(default_factory=MotionToken)

    @classmethod
    def default(cls) -> 'DesignToken':
        return cls()

    @classmethod
    def dark(cls) -> 'DesignToken':
        return cls(color=ColorToken.dark_defaults())

    @classmethod
    def from_color_config(cls, config: ColorConfig) -> 'DesignToken':
        """Build tokens whose color group comes from a ColorConfig.

        Slots the config leaves unset keep the default (or dark) literal.

        Args:
            config: Color configuration to read from

        Returns:
            DesignToken with the color group resolved through ``config``
        """
        fallback = ColorToken.dark_defaults() if config.is_dark() else ColorToken()
        resolved: Dict[str, str] = {}

        for field_name, (color_type, variant) in _COLOR_TOKEN_SOURCES.items():
            if variant is None:
                color = config.get_color(color_type)
            else:
                palette = config.get_palette(color_type)
                color = getattr(palette, variant) if palette is not None else None

            resolved[field_name] = css_color(color) if color is not None else getattr(fallback, field_name)

        return cls(color=ColorToken(**resolved))

    @classmethod
    def group_names(cls):
        return list(cls.model_fields)

    @classmethod
    def field_count(cls) -> int:
        """Total number of leaf token fields across all groups."""
        return sum(
            len(cls.model_fields[group].annotation.model_fields)
            for group in cls.model_fields
        )

    def to_css_vars(self, groups=None) -> Dict[str, str]:
        """Render every token as ``--ant-<group>-<field>``.

        Args:
            groups: Optional subset of group names to render

        Returns:
            Mapping of CSS variable name to value, one entry per field
        """
        variables: Dict[str, str] = {}
        for group_name in self.group_names():
            if groups is not None and group_name not in groups:
                continue
            group = getattr(self, group_name)
            for field_name, value in group.model_dump().items():
                key = f"--{CSS_VAR_PREFIX}-{group_name}-{field_name.replace('_', '-')}"
                variables[key] = str(value)
        return variables

    def to_css_declaration(self) -> str:
        """Newline-joined ``name: value;`` pairs sorted by name."""
        variables = self.to_css_vars()
        return "\n".join(f"{name}: {variables[name]};" for name in sorted(variables))


_THEME_NAME_PATTERN = re.compile(r'^[A-Za-z0-9][A-Za-z0-9_-]*$')


class ThemeDefinition(BaseModel):
    """Theme file contents as stored by the registry."""

    name: str = Field(..., description="Theme identifier (file stem)")
    display_name: Optional[str] = Field(None, description="Human-readable name")
    description: str = Field("", description="Theme description")
    extends: Optional[str] = Field(None, description="Parent theme name")

    dark: bool = False
    rtl: bool = False
    compact: bool = False
    shape: Shape = Shape.DEFAULT
    size: ComponentSize = ComponentSize.MIDDLE
    radius: int = Field(6, ge=0, description="Base border radius in px")
    motion: bool = True

    colors: Dict[str, str] = Field(default_factory=dict,
                                   description="Seed colors keyed by color type")
    properties: Dict[str, str] = Field(default_factory=dict,
                                       description="Custom CSS properties")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not _THEME_NAME_PATTERN.match(v):
            raise ValueError(f"Invalid theme name {v!r}: use letters, digits, '-' and '_'")
        return v

    @field_validator('colors')
    @classmethod
    def validate_colors(cls, v):
        normalized = {}
        for key, value in v.items():
            try:
                color_type = ColorType(key)
            except ValueError:
                valid = ", ".join(ct.value for ct in ColorType)
                raise ValueError(f"Unknown color type {key!r} (expected one of: {valid})")
            try:
                normalized[color_type.value] = Color.from_hex(value).to_hex_string()
            except InvalidColorFormat as e:
                raise ValueError(f"Color '{key}': {e}")
        return normalized

    @field_validator('properties')
    @classmethod
    def validate_properties(cls, v):
        return validate_custom_properties(v)
