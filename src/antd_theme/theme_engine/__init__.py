"""Ant Design Theme Engine Package.

This package derives color palettes from seed colors, aggregates design
tokens, resolves responsive values and renders themes as CSS variables and
CSS text, with swappable color configurations and cache-key hashing for
memoized style injection.
"""

from .cache import (
    ComponentTheme,
    StyleCache,
    calculate_theme_hash,
    generate_cache_key,
    merge_theme,
)
from .color import Color, ColorPalette, ColorScale, HSL
from .color_config import (
    PRESET_SCALES,
    AntDesignColors,
    ColorConfig,
    ColorType,
    CustomColorConfig,
    get_preset_scale,
)
from .engine import GenericThemeEngine
from .errors import (
    InvalidCacheKeyPart,
    InvalidColorFormat,
    ThemeContextClosedError,
    ThemeDefinitionError,
    ThemeError,
    ThemeNotFoundError,
)
from .injector import StyleInjector
from .motion import Duration, Easing, TransitionConfig
from .registry import ThemeContext, ThemeRegistry, default_themes
from .responsive import (
    Breakpoint,
    GridConfig,
    ResponsiveValue,
    generate_media_query,
    generate_range_media_query,
    get_current_breakpoint,
)
from .schema import (
    # Token groups
    DesignToken,
    ColorToken,
    FontToken,
    SpacingToken,
    BorderToken,
    ShadowToken,
    MotionToken,

    # Theme files
    ThemeDefinition,

    # Enums
    Shape,
    ComponentSize,
)
from .utils import (
    calculate_contrast_ratio,
    calculate_luminance,
    deep_merge_dict,
    meets_wcag_contrast,
    validate_color_accessibility,
)

__all__ = [
    # Main classes
    "GenericThemeEngine",
    "ThemeRegistry",
    "ThemeContext",
    "StyleInjector",
    "StyleCache",
    "default_themes",

    # Colors
    "Color",
    "HSL",
    "ColorScale",
    "ColorPalette",
    "ColorConfig",
    "ColorType",
    "AntDesignColors",
    "CustomColorConfig",
    "PRESET_SCALES",
    "get_preset_scale",

    # Responsive
    "Breakpoint",
    "ResponsiveValue",
    "GridConfig",
    "get_current_breakpoint",
    "generate_media_query",
    "generate_range_media_query",

    # Motion
    "Duration",
    "Easing",
    "TransitionConfig",

    # Schema models
    "DesignToken",
    "ColorToken",
    "FontToken",
    "SpacingToken",
    "BorderToken",
    "ShadowToken",
    "MotionToken",
    "ThemeDefinition",
    "Shape",
    "ComponentSize",

    # Caching
    "ComponentTheme",
    "merge_theme",
    "calculate_theme_hash",
    "generate_cache_key",

    # Errors
    "ThemeError",
    "InvalidColorFormat",
    "InvalidCacheKeyPart",
    "ThemeNotFoundError",
    "ThemeDefinitionError",
    "ThemeContextClosedError",

    # Utilities
    "calculate_luminance",
    "calculate_contrast_ratio",
    "meets_wcag_contrast",
    "validate_color_accessibility",
    "deep_merge_dict",
]
