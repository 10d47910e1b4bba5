"""Utility functions for theme engine operations.

This module provides contrast calculation, accessibility checks, dictionary
merging and CSS formatting helpers shared by the engine and registry.
"""

from typing import Any, Dict, List, Mapping

from .color import Color
from .color_config import ColorConfig, ColorType


def calculate_luminance(color: Color) -> float:
    """Calculate relative luminance of a color.

    Uses the WCAG formula for luminance calculation; alpha is ignored.

    Args:
        color: Color to measure

    Returns:
        Relative luminance 0.0-1.0
    """
    def gamma_correct(value: int) -> float:
        normalized = value / 255.0
        if normalized <= 0.03928:
            return normalized / 12.92
        else:
            return ((normalized + 0.055) / 1.055) ** 2.4

    r_linear = gamma_correct(color.r)
    g_linear = gamma_correct(color.g)
    b_linear = gamma_correct(color.b)

    return 0.2126 * r_linear + 0.7152 * g_linear + 0.0722 * b_linear


def calculate_contrast_ratio(color1: Color, color2: Color) -> float:
    """Calculate WCAG contrast ratio between two colors.

    Returns:
        Contrast ratio 1.0-21.0 (higher is more contrast)
    """
    lum1 = calculate_luminance(color1)
    lum2 = calculate_luminance(color2)

    if lum1 < lum2:
        lum1, lum2 = lum2, lum1

    return (lum1 + 0.05) / (lum2 + 0.05)


def meets_wcag_contrast(fg_color: Color, bg_color: Color, level: str = 'AA') -> bool:
    """Check if color combination meets WCAG contrast requirements.

    Args:
        fg_color: Foreground color
        bg_color: Background color
        level: 'AA' (4.5:1) or 'AAA' (7:1)
    """
    ratio = calculate_contrast_ratio(fg_color, bg_color)

    if level == 'AAA':
        return ratio >= 7.0
    else:  # AA
        return ratio >= 4.5


# Foreground/background pairs worth checking on every config
CONTRAST_PAIRS = [
    (ColorType.TEXT_COLOR, ColorType.BACKGROUND_COLOR),
    (ColorType.TEXT_COLOR_SECONDARY, ColorType.BACKGROUND_COLOR),
    (ColorType.TEXT_COLOR, ColorType.LAYOUT_BACKGROUND_COLOR),
]


def validate_color_accessibility(config: ColorConfig) -> List[str]:
    """Validate text contrast in a color configuration.

    Pairs the config leaves unset are skipped.

    Returns:
        List of accessibility warnings
    """
    warnings = []

    for fg_type, bg_type in CONTRAST_PAIRS:
        fg_color = config.get_color(fg_type)
        bg_color = config.get_color(bg_type)
        if fg_color is None or bg_color is None:
            continue

        # Translucent text is judged as it renders on its background
        fg_color = fg_color.composite_over(bg_color)
        if not meets_wcag_contrast(fg_color, bg_color, 'AA'):
            ratio = calculate_contrast_ratio(fg_color, bg_color)
            warnings.append(
                f"Low contrast between {fg_type.value} and {bg_type.value}: "
                f"{ratio:.1f}:1 (recommended 4.5:1+)"
            )

    return warnings


def deep_merge_dict(base: Dict[Any, Any], overlay: Dict[Any, Any]) -> Dict[Any, Any]:
    """Deep merge two dictionaries, with overlay taking precedence.

    Args:
        base: Base dictionary
        overlay: Overlay dictionary (takes precedence)

    Returns:
        New merged dictionary
    """
    result = base.copy()

    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_dict(result[key], value)
        else:
            result[key] = value

    return result


def to_css_name(key: str) -> str:
    """``border_radius`` / ``borderRadius`` -> ``border-radius``."""
    chars = []
    for ch in key.strip():
        if ch.isupper():
            if chars and chars[-1] != '-':
                chars.append('-')
            chars.append(ch.lower())
        elif ch in ('_', ' '):
            chars.append('-')
        else:
            chars.append(ch)
    return ''.join(chars)


def format_css_block(selector: str, declarations: Mapping[str, str], sort: bool = True) -> str:
    """Render ``selector { name: value; ... }`` with two-space indentation."""
    names = sorted(declarations) if sort else list(declarations)
    body = "".join(f"  {name}: {declarations[name]};\n" for name in names)
    return f"{selector} {{\n{body}}}\n"


_UNSAFE_NAME_CHARS = (':', ';', '{', '}')
_UNSAFE_VALUE_CHARS = (';', '{', '}')


def validate_custom_properties(properties: Mapping[str, str]) -> Dict[str, str]:
    """Check custom properties before they are written into ``:root``.

    Args:
        properties: Mapping of property name to CSS value

    Returns:
        A plain copy of the mapping

    Raises:
        ValueError: If a name or value could break out of its declaration,
            or two names render to the same ``--theme-*`` variable
    """
    css_names: Dict[str, str] = {}

    for key, value in properties.items():
        if (not isinstance(key, str) or not key or key.strip() != key
                or any(ch in key for ch in _UNSAFE_NAME_CHARS)):
            raise ValueError(f"Invalid property name: {key!r}")
        if not isinstance(value, str) or any(ch in value for ch in _UNSAFE_VALUE_CHARS):
            raise ValueError(f"Invalid value for property '{key}': {value!r}")

        css_name = to_css_name(key)
        if css_name in css_names:
            raise ValueError(
                f"Properties '{css_names[css_name]}' and '{key}' both map to --theme-{css_name}"
            )
        css_names[css_name] = key

    return dict(properties)
