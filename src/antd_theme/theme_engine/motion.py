"""Motion primitives: standard durations, easing curves and transitions."""

from enum import Enum, IntEnum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Duration(IntEnum):
    """Standard animation durations in milliseconds"""
    FAST = 100
    MID = 200
    SLOW = 300

    def to_css(self) -> str:
        return format_seconds(int(self))


class Easing(str, Enum):
    """CSS timing functions used by Ant Design motion"""
    LINEAR = "linear"
    EASE_IN = "cubic-bezier(0.55, 0.055, 0.675, 0.19)"
    EASE_OUT = "cubic-bezier(0.215, 0.61, 0.355, 1)"
    EASE_IN_OUT = "cubic-bezier(0.645, 0.045, 0.355, 1)"
    EASE_OUT_BACK = "cubic-bezier(0.12, 0.4, 0.29, 1.46)"
    EASE_IN_BACK = "cubic-bezier(0.71, -0.46, 0.88, 0.6)"
    EASE_OUT_CIRC = "cubic-bezier(0.08, 0.82, 0.17, 1)"
    EASE_IN_OUT_CIRC = "cubic-bezier(0.78, 0.14, 0.15, 0.86)"


def format_seconds(milliseconds: int) -> str:
    """Format a millisecond count as CSS seconds, e.g. 300 -> ``0.3s``."""
    return f"{milliseconds / 1000:g}s"


class TransitionConfig(BaseModel):
    """Transition applied when the active theme changes."""

    model_config = ConfigDict(frozen=True)

    duration_ms: int = Field(int(Duration.SLOW), ge=0, description="Transition duration")
    easing: str = Field(Easing.EASE_IN_OUT.value, description="CSS timing function")
    delay_ms: int = Field(0, ge=0, description="Delay before the transition starts")

    @field_validator('duration_ms', mode='before')
    @classmethod
    def coerce_duration(cls, v: Union[Duration, int]):
        if isinstance(v, Duration):
            return int(v)
        return v

    @field_validator('easing', mode='before')
    @classmethod
    def coerce_easing(cls, v):
        if isinstance(v, Easing):
            return v.value
        if isinstance(v, str) and not v.strip():
            raise ValueError("Easing must not be empty")
        return v

    @classmethod
    def disabled(cls) -> 'TransitionConfig':
        return cls(duration_ms=0, easing=Easing.LINEAR)

    def is_enabled(self) -> bool:
        return self.duration_ms > 0

    def to_css_transition(self, css_property: str = "all") -> str:
        """Render a CSS ``transition`` value, e.g. ``all 300ms linear``."""
        value = f"{css_property} {self.duration_ms}ms {self.easing}"
        if self.delay_ms:
            value += f" {self.delay_ms}ms"
        return value
