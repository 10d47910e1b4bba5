"""Color primitives for the Ant Design theme engine.

This module provides the immutable Color value type with hex parsing and
formatting, HSL conversion, alpha composition, and the ColorScale and
ColorPalette derivations that turn a single base color into a full set of
tints and shades.
"""

import colorsys
import re
from functools import lru_cache
from typing import Dict, Iterable, NamedTuple, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import InvalidColorFormat

_HEX_DIGITS = re.compile(r'[0-9a-fA-F]{3}|[0-9a-fA-F]{6}')

# Lightness offsets (HSL percentage points) for scale stops 1..10.
# Stop 6 is the base color; steps are small near it and grow toward the ends.
LIGHTNESS_DELTAS: Tuple[float, ...] = (
    45.0,   # 1 - near white
    32.0,   # 2
    21.0,   # 3
    12.0,   # 4
    5.0,    # 5
    0.0,    # 6 - base
    -5.0,   # 7
    -12.0,  # 8
    -21.0,  # 9
    -32.0,  # 10 - darkest
)

SCALE_SIZE = len(LIGHTNESS_DELTAS)
BASE_STOP = 6

# Scale stops used by ColorPalette (symmetric around the base)
LIGHT_STOP = 4
LIGHTER_STOP = 2
DARK_STOP = 8
DARKER_STOP = 10


class HSL(NamedTuple):
    """HSL triple with hue in degrees and saturation/lightness in percent."""
    h: float
    s: float
    l: float


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _format_alpha(alpha: float) -> str:
    text = f"{alpha:.3f}".rstrip('0').rstrip('.')
    return text or "0"


class Color(BaseModel):
    """Immutable RGB color with an alpha channel.

    Channels are integers in [0, 255] and alpha is a float in [0, 1]; the
    model rejects anything outside those ranges.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(..., ge=0, le=255, description="Red channel")
    g: int = Field(..., ge=0, le=255, description="Green channel")
    b: int = Field(..., ge=0, le=255, description="Blue channel")
    a: float = Field(1.0, ge=0.0, le=1.0, description="Alpha channel")

    @classmethod
    def rgb(cls, r: int, g: int, b: int, a: float = 1.0) -> 'Color':
        """Create a color from positional channel values."""
        return cls(r=r, g=g, b=b, a=a)

    @classmethod
    def from_hex(cls, value: str) -> 'Color':
        """Parse a ``#RGB`` or ``#RRGGBB`` hex string.

        The leading ``#`` is optional and digits are case-insensitive.

        Args:
            value: Hex color string

        Returns:
            Parsed Color with alpha 1.0

        Raises:
            InvalidColorFormat: If the string is not 3 or 6 hex digits
        """
        if not isinstance(value, str):
            raise InvalidColorFormat(str(value))

        digits = value.strip()
        if digits.startswith('#'):
            digits = digits[1:]

        if not _HEX_DIGITS.fullmatch(digits):
            raise InvalidColorFormat(value)

        if len(digits) == 3:
            digits = ''.join(ch * 2 for ch in digits)

        return cls(
            r=int(digits[0:2], 16),
            g=int(digits[2:4], 16),
            b=int(digits[4:6], 16),
        )

    @classmethod
    def parse(cls, value: Union['Color', str]) -> 'Color':
        """Coerce a Color or hex string into a Color."""
        if isinstance(value, Color):
            return value
        return cls.from_hex(value)

    @classmethod
    def from_hsl(cls, h: float, s: float, l: float, a: float = 1.0) -> 'Color':
        """Create a color from HSL components.

        Args:
            h: Hue in degrees (wrapped into [0, 360))
            s: Saturation in percent (clamped to [0, 100])
            l: Lightness in percent (clamped to [0, 100])
            a: Alpha (clamped to [0, 1])
        """
        r, g, b = colorsys.hls_to_rgb(
            (h % 360.0) / 360.0,
            _clamp(l, 0.0, 100.0) / 100.0,
            _clamp(s, 0.0, 100.0) / 100.0,
        )
        return cls(
            r=int(round(_clamp(r, 0.0, 1.0) * 255)),
            g=int(round(_clamp(g, 0.0, 1.0) * 255)),
            b=int(round(_clamp(b, 0.0, 1.0) * 255)),
            a=_clamp(a, 0.0, 1.0),
        )

    def with_alpha(self, alpha: float) -> 'Color':
        """Return a copy with alpha clamped into [0, 1]."""
        return self.model_copy(update={'a': _clamp(float(alpha), 0.0, 1.0)})

    def to_hex_string(self) -> str:
        """Canonical lowercase ``#rrggbb`` form (alpha is dropped)."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_rgb_string(self) -> str:
        """CSS ``rgb()`` form, or ``rgba()`` when alpha is below 1."""
        if self.a < 1.0:
            return f"rgba({self.r}, {self.g}, {self.b}, {_format_alpha(self.a)})"
        return f"rgb({self.r}, {self.g}, {self.b})"

    def to_hsl(self) -> HSL:
        """Convert to HSL (degrees, percent, percent)."""
        h, l, s = colorsys.rgb_to_hls(self.r / 255.0, self.g / 255.0, self.b / 255.0)
        return HSL(h * 360.0, s * 100.0, l * 100.0)

    def to_hsl_string(self) -> str:
        h, s, l = self.to_hsl()
        return f"hsl({h:.0f}, {s:.0f}%, {l:.0f}%)"

    def adjust_lightness(self, delta: float) -> 'Color':
        """Shift HSL lightness by ``delta`` percentage points, clamped to [0, 100]."""
        h, s, l = self.to_hsl()
        return Color.from_hsl(h, s, l + delta, self.a)

    def mix(self, other: 'Color', ratio: float) -> 'Color':
        """Linearly blend toward ``other``; ratio 0 keeps self, 1 yields other."""
        ratio = _clamp(ratio, 0.0, 1.0)
        inv = 1.0 - ratio
        return Color(
            r=int(round(self.r * inv + other.r * ratio)),
            g=int(round(self.g * inv + other.g * ratio)),
            b=int(round(self.b * inv + other.b * ratio)),
            a=_clamp(self.a * inv + other.a * ratio, 0.0, 1.0),
        )

    def composite_over(self, background: 'Color') -> 'Color':
        """Alpha-composite this color over ``background`` (source-over)."""
        out_a = self.a + background.a * (1.0 - self.a)
        if out_a <= 0.0:
            return Color(r=0, g=0, b=0, a=0.0)

        def channel(fg: int, bg: int) -> int:
            value = (fg * self.a + bg * background.a * (1.0 - self.a)) / out_a
            return int(round(_clamp(value, 0.0, 255.0)))

        return Color(
            r=channel(self.r, background.r),
            g=channel(self.g, background.g),
            b=channel(self.b, background.b),
            a=_clamp(out_a, 0.0, 1.0),
        )

    def is_dark(self) -> bool:
        """Perceived-brightness check (YIQ weighting)."""
        brightness = 0.299 * self.r + 0.587 * self.g + 0.114 * self.b
        return brightness < 128.0

    def contrast_color(self) -> 'Color':
        """Black or white, whichever reads better on this color."""
        return WHITE if self.is_dark() else BLACK


WHITE = Color(r=255, g=255, b=255)
BLACK = Color(r=0, g=0, b=0)


class ColorScale(BaseModel):
    """Ten ordered stops derived from one base color.

    Stop 1 is the lightest, stop 6 is the base and stop 10 the darkest.
    """

    model_config = ConfigDict(frozen=True)

    base: Color
    stops: Tuple[Color, ...]

    @field_validator('stops')
    @classmethod
    def validate_stop_count(cls, v):
        if len(v) != SCALE_SIZE:
            raise ValueError(f"A color scale needs exactly {SCALE_SIZE} stops, got {len(v)}")
        return v

    @classmethod
    def from_base(cls, base: Color) -> 'ColorScale':
        return _build_scale(base)

    @classmethod
    def from_hex_stops(cls, stops: Iterable[str]) -> 'ColorScale':
        """Build a scale from ten fixed hex stops; stop 6 becomes the base.

        Raises:
            InvalidColorFormat: If a stop is not a valid hex color
            ValueError: If there are not exactly ten stops
        """
        colors = tuple(Color.from_hex(value) for value in stops)
        if len(colors) != SCALE_SIZE:
            raise ValueError(f"A color scale needs exactly {SCALE_SIZE} stops, got {len(colors)}")
        return cls(base=colors[BASE_STOP - 1], stops=colors)

    def stop(self, index: int) -> Color:
        """Return stop ``index`` (1-based).

        Raises:
            IndexError: If index is outside 1..10
        """
        if not 1 <= index <= SCALE_SIZE:
            raise IndexError(f"Scale stop must be between 1 and {SCALE_SIZE}, got {index}")
        return self.stops[index - 1]

    def to_hex_list(self):
        return [color.to_hex_string() for color in self.stops]

    def to_css_variables(self, prefix: str) -> Dict[str, str]:
        """Render stops as ``--{prefix}-1`` through ``--{prefix}-10``."""
        return {
            f"--{prefix}-{index}": color.to_hex_string() if color.a >= 1.0 else color.to_rgb_string()
            for index, color in enumerate(self.stops, start=1)
        }


@lru_cache(maxsize=256)
def _build_scale(base: Color) -> ColorScale:
    h, s, l = base.to_hsl()
    stops = []
    for position, delta in enumerate(LIGHTNESS_DELTAS, start=1):
        if position == BASE_STOP:
            stops.append(base)
        else:
            stops.append(Color.from_hsl(h, s, _clamp(l + delta, 0.0, 100.0), base.a))
    return ColorScale(base=base, stops=tuple(stops))


class ColorPalette(BaseModel):
    """Five-color projection of a ColorScale."""

    model_config = ConfigDict(frozen=True)

    base: Color
    light: Color
    lighter: Color
    dark: Color
    darker: Color

    @classmethod
    def from_base(cls, base: Color) -> 'ColorPalette':
        scale = ColorScale.from_base(base)
        return cls(
            base=scale.stop(BASE_STOP),
            light=scale.stop(LIGHT_STOP),
            lighter=scale.stop(LIGHTER_STOP),
            dark=scale.stop(DARK_STOP),
            darker=scale.stop(DARKER_STOP),
        )

    def scale(self) -> ColorScale:
        """Full ten-stop scale this palette was projected from."""
        return ColorScale.from_base(self.base)
