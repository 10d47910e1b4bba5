"""Color configurations for the theme engine.

A ColorConfig maps every semantic ColorType to a Color and a ColorPalette and
knows how to render itself as CSS variables and utility classes. The engine
only talks to this interface, so built-in Ant Design presets and user
configurations are interchangeable.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Mapping, Optional, Union

from .color import Color, ColorPalette, ColorScale

logger = logging.getLogger(__name__)


class ColorType(str, Enum):
    """Semantic color slots"""
    PRIMARY = "primary"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"
    LINK = "link"
    TEXT_COLOR = "text"
    TEXT_COLOR_SECONDARY = "text_secondary"
    TEXT_COLOR_DISABLED = "text_disabled"
    BORDER_COLOR = "border"
    DIVIDER_COLOR = "divider"
    BACKGROUND_COLOR = "background"
    LAYOUT_BACKGROUND_COLOR = "layout_background"

    @property
    def token(self) -> str:
        """CSS token name, e.g. ``primary-color`` or ``text-color-secondary``."""
        return _TOKEN_NAMES[self]

    @property
    def class_name(self) -> str:
        """Utility class stem, e.g. ``primary`` or ``text-secondary``."""
        return self.value.replace('_', '-')


_TOKEN_NAMES = {
    ColorType.PRIMARY: "primary-color",
    ColorType.SUCCESS: "success-color",
    ColorType.WARNING: "warning-color",
    ColorType.ERROR: "error-color",
    ColorType.INFO: "info-color",
    ColorType.LINK: "link-color",
    ColorType.TEXT_COLOR: "text-color",
    ColorType.TEXT_COLOR_SECONDARY: "text-color-secondary",
    ColorType.TEXT_COLOR_DISABLED: "text-color-disabled",
    ColorType.BORDER_COLOR: "border-color",
    ColorType.DIVIDER_COLOR: "divider-color",
    ColorType.BACKGROUND_COLOR: "background-color",
    ColorType.LAYOUT_BACKGROUND_COLOR: "layout-background-color",
}

# Palette variant suffixes in emission order
PALETTE_VARIANTS = ("light", "lighter", "dark", "darker")


class ColorConfig(ABC):
    """Capability every color configuration provides.

    Subclasses supply ``light``/``dark`` constructors and the two lookups;
    CSS rendering is shared.
    """

    default_prefix = "custom"

    def __init__(self, dark: bool = False, prefix: Optional[str] = None):
        self._dark = dark
        self.prefix = prefix or self.default_prefix

    @classmethod
    @abstractmethod
    def light(cls) -> 'ColorConfig':
        """Light color configuration."""

    @classmethod
    @abstractmethod
    def dark(cls) -> 'ColorConfig':
        """Dark color configuration."""

    @abstractmethod
    def get_color(self, color_type: ColorType) -> Optional[Color]:
        """Resolve a semantic color, or None if this config leaves it unset."""

    @abstractmethod
    def get_palette(self, color_type: ColorType) -> Optional[ColorPalette]:
        """Resolve a semantic palette, or None if this config leaves it unset."""

    def is_dark(self) -> bool:
        return self._dark

    def to_css_variables(self) -> Dict[str, str]:
        """Render resolvable colors and palettes as CSS custom properties.

        Returns:
            Mapping of ``--{prefix}-{token}`` (plus ``-light``, ``-lighter``,
            ``-dark`` and ``-darker`` palette variants) to CSS color values
        """
        variables: Dict[str, str] = {}

        for color_type in ColorType:
            name = f"--{self.prefix}-{color_type.token}"

            color = self.get_color(color_type)
            if color is not None:
                variables[name] = color.to_rgb_string()

            palette = self.get_palette(color_type)
            if palette is not None:
                for variant in PALETTE_VARIANTS:
                    variables[f"{name}-{variant}"] = getattr(palette, variant).to_rgb_string()

        return variables

    def generate_css(self) -> str:
        """Render foreground and background utility classes per resolvable color."""
        rules = []

        for color_type in ColorType:
            if self.get_color(color_type) is None:
                continue

            var_name = f"--{self.prefix}-{color_type.token}"
            class_name = f".{self.prefix}-{color_type.class_name}"
            rules.append(f"{class_name} {{ color: var({var_name}); }}")
            rules.append(f"{class_name}-bg {{ background-color: var({var_name}); }}")

        return "\n".join(rules) + ("\n" if rules else "")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorConfig):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.prefix == other.prefix
            and self.is_dark() == other.is_dark()
            and self.to_css_variables() == other.to_css_variables()
        )

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.prefix, self.is_dark(),
                     tuple(sorted(self.to_css_variables().items()))))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dark={self.is_dark()}, prefix={self.prefix!r})"


# Ant Design preset colors
BLUE = Color.rgb(24, 144, 255)
GREEN = Color.rgb(82, 196, 26)
ORANGE = Color.rgb(250, 173, 20)
RED = Color.rgb(255, 77, 79)

LIGHT_SEEDS: Dict[ColorType, Color] = {
    ColorType.PRIMARY: BLUE,
    ColorType.SUCCESS: GREEN,
    ColorType.WARNING: ORANGE,
    ColorType.ERROR: RED,
    ColorType.INFO: BLUE,
    ColorType.LINK: BLUE,
    ColorType.TEXT_COLOR: Color.rgb(0, 0, 0),
    ColorType.TEXT_COLOR_SECONDARY: Color.rgb(69, 69, 69),
    ColorType.TEXT_COLOR_DISABLED: Color.rgb(140, 140, 140),
    ColorType.BORDER_COLOR: Color.rgb(217, 217, 217),
    ColorType.DIVIDER_COLOR: Color.rgb(240, 240, 240),
    ColorType.BACKGROUND_COLOR: Color.rgb(255, 255, 255),
    ColorType.LAYOUT_BACKGROUND_COLOR: Color.rgb(245, 245, 245),
}

DARK_SEEDS: Dict[ColorType, Color] = {
    **LIGHT_SEEDS,
    ColorType.TEXT_COLOR: Color.rgb(255, 255, 255),
    ColorType.TEXT_COLOR_SECONDARY: Color.rgb(191, 191, 191),
    ColorType.TEXT_COLOR_DISABLED: Color.rgb(140, 140, 140),
    ColorType.BORDER_COLOR: Color.rgb(48, 48, 48),
    ColorType.DIVIDER_COLOR: Color.rgb(48, 48, 48),
    ColorType.BACKGROUND_COLOR: Color.rgb(20, 20, 20),
    ColorType.LAYOUT_BACKGROUND_COLOR: Color.rgb(0, 0, 0),
}


# Named Ant Design preset scales, stop 1 (lightest) to stop 10 (darkest)
PRESET_SCALES: Dict[str, ColorScale] = {
    "blue": ColorScale.from_hex_stops((
        "#e6f4ff", "#bae0ff", "#91caff", "#69b1ff", "#4096ff",
        "#1677ff", "#0958d9", "#003eb3", "#002c8c", "#001d66",
    )),
    "green": ColorScale.from_hex_stops((
        "#f6ffed", "#d9f7be", "#b7eb8f", "#95de64", "#73d13d",
        "#52c41a", "#389e0d", "#237804", "#135200", "#092b00",
    )),
    "red": ColorScale.from_hex_stops((
        "#fff2f0", "#ffece6", "#ffd4cc", "#ffb3a6", "#ff8a80",
        "#ff4d4f", "#d9363e", "#b32d33", "#8c2629", "#661f1f",
    )),
    "orange": ColorScale.from_hex_stops((
        "#fff7e6", "#ffe7ba", "#ffd591", "#ffc069", "#ffa940",
        "#fa8c16", "#d46b08", "#ad4e00", "#873800", "#612500",
    )),
    "gold": ColorScale.from_hex_stops((
        "#fffbe6", "#fff1b8", "#ffe58f", "#ffd666", "#ffc53d",
        "#faad14", "#d48806", "#ad6800", "#874d00", "#613400",
    )),
    "purple": ColorScale.from_hex_stops((
        "#f9f0ff", "#efdbff", "#d3adf7", "#b37feb", "#9254de",
        "#722ed1", "#531dab", "#391085", "#22075e", "#120338",
    )),
    "cyan": ColorScale.from_hex_stops((
        "#e6fffb", "#b5f5ec", "#87e8de", "#5cdbd3", "#36cfc9",
        "#13c2c2", "#08979c", "#006d75", "#00474f", "#002329",
    )),
    "gray": ColorScale.from_hex_stops((
        "#ffffff", "#fafafa", "#f5f5f5", "#f0f0f0", "#d9d9d9",
        "#bfbfbf", "#8c8c8c", "#595959", "#434343", "#262626",
    )),
}


def get_preset_scale(name: str) -> ColorScale:
    """Look up a preset scale by name (case-insensitive).

    Raises:
        KeyError: If no preset has that name
    """
    key = name.strip().lower()
    if key not in PRESET_SCALES:
        raise KeyError(f"Unknown preset scale {name!r} (expected one of: {', '.join(PRESET_SCALES)})")
    return PRESET_SCALES[key]


SeedMapping = Mapping[Union[ColorType, str], Union[Color, str]]


def _normalize_seeds(seeds: Optional[SeedMapping]) -> Dict[ColorType, Color]:
    """Coerce string keys and hex values into ColorType -> Color."""
    normalized: Dict[ColorType, Color] = {}
    for key, value in (seeds or {}).items():
        color_type = key if isinstance(key, ColorType) else ColorType(key)
        normalized[color_type] = Color.parse(value)
    return normalized


class AntDesignColors(ColorConfig):
    """Built-in Ant Design color configuration.

    Total over ColorType: every slot has a color and a palette.
    """

    default_prefix = "ant"

    def __init__(self, seeds: Mapping[ColorType, Color], dark: bool = False,
                 prefix: Optional[str] = None):
        super().__init__(dark=dark, prefix=prefix)
        base_seeds = DARK_SEEDS if dark else LIGHT_SEEDS
        self._colors: Dict[ColorType, Color] = {**base_seeds, **seeds}
        self._palettes: Dict[ColorType, ColorPalette] = {
            color_type: ColorPalette.from_base(color)
            for color_type, color in self._colors.items()
        }

    @classmethod
    def light(cls) -> 'AntDesignColors':
        return cls(LIGHT_SEEDS, dark=False)

    @classmethod
    def dark(cls) -> 'AntDesignColors':
        return cls(DARK_SEEDS, dark=True)

    @classmethod
    def from_seeds(cls, seeds: Optional[SeedMapping], dark: bool = False) -> 'AntDesignColors':
        """Build a preset with some semantic seeds replaced.

        Args:
            seeds: Mapping of ColorType (or its value) to Color (or hex string)
            dark: Start from the dark preset instead of the light one

        Returns:
            AntDesignColors with the given seeds overriding the preset

        Raises:
            ValueError: If a key is not a ColorType value
            InvalidColorFormat: If a seed is not a valid hex color
        """
        overrides = _normalize_seeds(seeds)
        if overrides:
            logger.debug(f"Overriding {len(overrides)} seed colors on {'dark' if dark else 'light'} preset")
        return cls(overrides, dark=dark)

    def to_css_variables(self) -> Dict[str, str]:
        """Semantic colors and palettes plus every named preset scale."""
        variables = super().to_css_variables()
        for scale_name, scale in PRESET_SCALES.items():
            variables.update(scale.to_css_variables(f"{self.prefix}-{scale_name}"))
        return variables

    def get_color(self, color_type: ColorType) -> Optional[Color]:
        return self._colors.get(color_type)

    def get_palette(self, color_type: ColorType) -> Optional[ColorPalette]:
        return self._palettes.get(color_type)


class CustomColorConfig(ColorConfig):
    """Partial, user-defined color configuration.

    Unset slots resolve to None and are skipped when rendering CSS.
    """

    def __init__(self, colors: Optional[SeedMapping] = None, dark: bool = False,
                 prefix: Optional[str] = None):
        super().__init__(dark=dark, prefix=prefix)
        self._colors = _normalize_seeds(colors)
        self._palettes = {
            color_type: ColorPalette.from_base(color)
            for color_type, color in self._colors.items()
        }

    @classmethod
    def light(cls) -> 'CustomColorConfig':
        return cls({ColorType.PRIMARY: BLUE})

    @classmethod
    def dark(cls) -> 'CustomColorConfig':
        return cls({ColorType.PRIMARY: BLUE}, dark=True)

    def with_color(self, color_type: ColorType, color: Union[Color, str]) -> 'CustomColorConfig':
        """Return a copy with one more slot set."""
        colors = dict(self._colors)
        colors[color_type] = Color.parse(color)
        return CustomColorConfig(colors, dark=self.is_dark(), prefix=self.prefix)

    def get_color(self, color_type: ColorType) -> Optional[Color]:
        return self._colors.get(color_type)

    def get_palette(self, color_type: ColorType) -> Optional[ColorPalette]:
        return self._palettes.get(color_type)
