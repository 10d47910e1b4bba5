"""Core theme engine for the Ant Design theming system.

This module provides the GenericThemeEngine class that composes a color
configuration with typography, spacing, border, shadow and motion tokens,
and renders the result as CSS variables and CSS text. The engine is generic
over its ColorConfig type; swapping the configuration changes nothing else.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Generic, Mapping, Optional, Type, TypeVar, Union

from .cache import calculate_theme_hash, generate_cache_key
from .color import Color, ColorPalette
from .color_config import AntDesignColors, ColorConfig, ColorType
from .injector import StyleInjector
from .motion import Easing, TransitionConfig
from .schema import (
    CSS_VAR_PREFIX,
    ComponentSize,
    DesignToken,
    FontToken,
    MotionToken,
    Shape,
    SpacingToken,
    ThemeDefinition,
)
from .utils import format_css_block, to_css_name, validate_custom_properties

logger = logging.getLogger(__name__)

C = TypeVar('C', bound=ColorConfig)

# Non-color token groups emitted alongside the color config's own variables
NON_COLOR_GROUPS = ('font', 'spacing', 'border', 'shadow', 'motion')

CONTROL_HEIGHTS = {
    ComponentSize.SMALL: 24,
    ComponentSize.MIDDLE: 32,
    ComponentSize.LARGE: 40,
}

# size -> (size_base, size_lg, size_sm, size_xs)
FONT_SIZES = {
    ComponentSize.SMALL: ("12px", "14px", "10px", "10px"),
    ComponentSize.MIDDLE: ("14px", "16px", "12px", "10px"),
    ComponentSize.LARGE: ("16px", "20px", "14px", "12px"),
}

COMPACT_SPACING = SpacingToken(xs="4px", sm="8px", md="12px", lg="16px", xl="24px", xxl="32px")


class GenericThemeEngine(Generic[C]):
    """Theme composed from a color configuration and design tokens."""

    __slots__ = (
        '_name', '_dark', '_rtl', '_colors', '_shape', '_size', '_radius',
        '_motion', '_compact', '_properties', '_token_cache', '_css_cache',
    )

    def __init__(self, name: str, dark: bool, rtl: bool, colors: C,
                 shape: Union[Shape, str] = Shape.DEFAULT,
                 size: Union[ComponentSize, str] = ComponentSize.MIDDLE,
                 radius: int = 6, motion: bool = True, compact: bool = False,
                 properties: Optional[Dict[str, str]] = None):
        """Initialize the theme engine.

        Args:
            name: Theme name
            dark: Whether this is a dark theme
            rtl: Right-to-left layout
            colors: Color configuration
            shape: Component corner shape (default, round or circle)
            size: Component size (small, middle or large)
            radius: Base border radius in px
            motion: Whether animations are enabled
            compact: Use the compact spacing scale
            properties: Custom properties emitted as ``--theme-<key>``

        Raises:
            ValueError: If name is empty, radius negative, or shape/size unknown
        """
        if not name:
            raise ValueError("Theme name must not be empty")
        if radius < 0:
            raise ValueError(f"Radius must be non-negative, got {radius}")

        self._name = name
        self._dark = dark
        self._rtl = rtl
        self._colors = colors
        self._shape = Shape(shape)
        self._size = ComponentSize(size)
        self._radius = radius
        self._motion = motion
        self._compact = compact
        self._properties = MappingProxyType(validate_custom_properties(properties or {}))

        # Rendered output, filled lazily
        self._token_cache: Optional[DesignToken] = None
        self._css_cache: Optional[str] = None

        logger.debug(f"Theme engine '{name}' created with {type(colors).__name__}")

    @classmethod
    def light(cls, name: str = "light", config_type: Type[ColorConfig] = AntDesignColors,
              **params) -> 'GenericThemeEngine':
        """Create a light theme from ``config_type.light()``."""
        params.setdefault('rtl', False)
        return cls(name, False, colors=config_type.light(), **params)

    @classmethod
    def dark(cls, name: str = "dark", config_type: Type[ColorConfig] = AntDesignColors,
             **params) -> 'GenericThemeEngine':
        """Create a dark theme from ``config_type.dark()``."""
        params.setdefault('rtl', False)
        return cls(name, True, colors=config_type.dark(), **params)

    @classmethod
    def compact(cls, name: str = "compact", dark: bool = False,
                config_type: Type[ColorConfig] = AntDesignColors,
                **params) -> 'GenericThemeEngine':
        """Create a compact theme: small components and tighter spacing."""
        params.setdefault('rtl', False)
        params.setdefault('size', ComponentSize.SMALL)
        colors = config_type.dark() if dark else config_type.light()
        return cls(name, dark, colors=colors, compact=True, **params)

    @classmethod
    def from_definition(cls, definition: ThemeDefinition) -> 'GenericThemeEngine[AntDesignColors]':
        """Build an engine from a validated theme definition."""
        colors = AntDesignColors.from_seeds(definition.colors, dark=definition.dark)
        return cls(
            definition.name,
            definition.dark,
            definition.rtl,
            colors,
            shape=definition.shape,
            size=definition.size,
            radius=definition.radius,
            motion=definition.motion,
            compact=definition.compact,
            properties=definition.properties,
        )

    # Read-only views; with_property/with_colors return modified copies

    @property
    def name(self) -> str:
        return self._name

    @property
    def rtl(self) -> bool:
        return self._rtl

    @property
    def colors(self) -> C:
        return self._colors

    @property
    def shape(self) -> Shape:
        return self._shape

    @property
    def size(self) -> ComponentSize:
        return self._size

    @property
    def radius(self) -> int:
        return self._radius

    @property
    def motion(self) -> bool:
        return self._motion

    @property
    def properties(self) -> Mapping[str, str]:
        return self._properties

    def is_dark(self) -> bool:
        return self._dark

    def is_compact(self) -> bool:
        return self._compact

    @property
    def variant(self) -> str:
        return "dark" if self._dark else "light"

    def get_color(self, color_type: ColorType) -> Optional[Color]:
        return self.colors.get_color(color_type)

    def get_palette(self, color_type: ColorType) -> Optional[ColorPalette]:
        return self.colors.get_palette(color_type)

    def get_property(self, key: str) -> Optional[str]:
        return self.properties.get(key)

    def with_property(self, key: str, value: str) -> 'GenericThemeEngine[C]':
        """Return a copy with one custom property set."""
        properties = dict(self.properties)
        properties[key] = value
        return self._replace(properties=properties)

    def with_colors(self, colors: ColorConfig) -> 'GenericThemeEngine':
        """Return a copy using another color configuration."""
        return self._replace(colors=colors)

    def _replace(self, **changes) -> 'GenericThemeEngine':
        params = dict(
            name=self._name, dark=self._dark, rtl=self._rtl, colors=self._colors,
            shape=self.shape, size=self.size, radius=self.radius,
            motion=self._motion, compact=self._compact, properties=self._properties,
        )
        params.update(changes)
        return type(self)(**params)

    def design_token(self) -> DesignToken:
        """Design tokens with engine settings applied.

        Colors come from the color config; font sizes follow ``size``,
        spacing follows ``compact``, radii follow ``radius`` and durations
        collapse to ``0s`` when motion is disabled.
        """
        if self._token_cache is not None:
            return self._token_cache

        token = DesignToken.from_color_config(self.colors)

        size_base, size_lg, size_sm, size_xs = FONT_SIZES[self.size]
        font = FontToken(size_base=size_base, size_lg=size_lg, size_sm=size_sm, size_xs=size_xs)

        spacing = COMPACT_SPACING if self._compact else SpacingToken()

        border = token.border.model_copy(update={
            'radius_base': f"{self.radius}px",
            'radius_sm': f"{max(self.radius - 2, 0)}px",
            'radius_lg': f"{self.radius + 2}px",
        })

        motion = MotionToken()
        if not self.motion:
            motion = motion.model_copy(update={
                'duration_slow': "0s",
                'duration_mid': "0s",
                'duration_fast': "0s",
            })

        self._token_cache = token.model_copy(update={
            'font': font,
            'spacing': spacing,
            'border': border,
            'motion': motion,
        })
        return self._token_cache

    def control_height(self) -> int:
        return CONTROL_HEIGHTS[self.size]

    def _shape_radius(self) -> str:
        if self.shape == Shape.CIRCLE:
            return "50%"
        if self.shape == Shape.ROUND:
            return f"{self.control_height() // 2}px"
        return f"var(--{CSS_VAR_PREFIX}-border-radius-base)"

    def _meta_variables(self) -> Dict[str, str]:
        prefix = f"--{CSS_VAR_PREFIX}-theme"
        return {
            f"{prefix}-name": self.name,
            f"{prefix}-dark": "1" if self._dark else "0",
            f"{prefix}-rtl": "1" if self.rtl else "0",
            f"{prefix}-compact": "1" if self._compact else "0",
            f"{prefix}-motion": "1" if self.motion else "0",
            f"{prefix}-shape": self.shape.value,
            f"{prefix}-size": self.size.value,
            f"{prefix}-radius": f"{self.radius}px",
            f"{prefix}-control-height": f"{self.control_height()}px",
        }

    def to_css_variables(self) -> Dict[str, str]:
        """All CSS custom properties for this theme.

        Built-in entries (token groups and ``--ant-theme-*`` meta) always win
        over entries from a user color config or custom properties.
        """
        variables: Dict[str, str] = {}
        variables.update(self.design_token().to_css_vars(groups=NON_COLOR_GROUPS))
        variables.update(self._meta_variables())

        for name, value in self.colors.to_css_variables().items():
            if name in variables:
                logger.warning(f"Color variable '{name}' collides with a built-in variable; skipped")
                continue
            variables[name] = value

        for key, value in self.properties.items():
            variables.setdefault(f"--theme-{to_css_name(key)}", value)

        return variables

    def _utility_rules(self) -> str:
        rules = [
            format_css_block(".ant-control", {
                'height': f"var(--{CSS_VAR_PREFIX}-theme-control-height)",
                'border-radius': self._shape_radius(),
                'font-size': f"var(--{CSS_VAR_PREFIX}-font-size-base)",
            }, sort=False),
        ]

        if self.motion:
            transition = TransitionConfig(duration_ms=200, easing=Easing.EASE_IN_OUT)
            rules.append(format_css_block(".ant-motion", {
                'transition': transition.to_css_transition("all"),
            }))

        if self.rtl:
            rules.append(format_css_block(":root", {
                'direction': "rtl",
                'text-align': "right",
            }, sort=False))

        return "\n".join(rules)

    def generate_css(self) -> str:
        """Full stylesheet: sorted ``:root`` variables, color utilities, engine rules."""
        if self._css_cache is not None:
            return self._css_cache

        css = format_css_block(":root", self.to_css_variables())
        css += "\n"
        css += self.colors.generate_css()
        css += "\n"
        css += self._utility_rules()

        self._css_cache = css
        logger.debug(f"Generated CSS for theme '{self.name}' ({len(css)} bytes)")
        return css

    def theme_hash(self) -> str:
        """Stable digest of everything that affects the generated CSS."""
        return calculate_theme_hash({
            'variables': self.to_css_variables(),
            'css': self.generate_css(),
        })

    def component_cache_key(self, component_type: str, active: bool = False,
                            size: Optional[str] = None, shape: Optional[str] = None) -> str:
        """Cache key for a component style under this theme."""
        return generate_cache_key(component_type, active, size, shape, self.theme_hash())

    def inject(self, injector: StyleInjector) -> bool:
        """Inject this theme's stylesheet under ``antd-theme-<name>``."""
        return injector.inject(f"antd-theme-{self.name}", self.generate_css())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'dark': self._dark,
            'rtl': self.rtl,
            'compact': self._compact,
            'shape': self.shape.value,
            'size': self.size.value,
            'radius': self.radius,
            'motion': self.motion,
            'colors': type(self.colors).__name__,
            'properties': dict(self.properties),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GenericThemeEngine):
            return NotImplemented
        return self.to_dict() == other.to_dict() and self.colors == other.colors

    def __hash__(self) -> int:
        return hash(self.theme_hash())

    def __repr__(self) -> str:
        return (f"GenericThemeEngine(name={self.name!r}, dark={self._dark}, "
                f"colors={type(self.colors).__name__})")
