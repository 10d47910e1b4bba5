"""antd-theme - Ant Design style design tokens and theme derivation."""

__version__ = "0.1.0"
__author__ = "antd-theme Team"

from .theme_engine import (
    AntDesignColors,
    Breakpoint,
    Color,
    ColorType,
    DesignToken,
    GenericThemeEngine,
    ResponsiveValue,
    ThemeContext,
)

__all__ = [
    "AntDesignColors",
    "Breakpoint",
    "Color",
    "ColorType",
    "DesignToken",
    "GenericThemeEngine",
    "ResponsiveValue",
    "ThemeContext",
    "__version__",
]
