"""Responsive breakpoints and breakpoint-dependent values.

Breakpoints follow Ant Design's grid: xs < sm < md < lg < xl < xxl with
minimum widths 0, 576, 768, 992, 1200 and 1600 pixels.
"""

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Generic, Iterator, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Breakpoint(IntEnum):
    """Ordered responsive breakpoints"""
    XS = 0
    SM = 1
    MD = 2
    LG = 3
    XL = 4
    XXL = 5

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def min_width(self) -> int:
        return _MIN_WIDTHS[self]

    @property
    def max_width(self) -> Optional[int]:
        """Inclusive upper bound, None for the last breakpoint."""
        return _MAX_WIDTHS[self]

    @classmethod
    def from_label(cls, label: str) -> 'Breakpoint':
        try:
            return cls[label.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown breakpoint: {label!r}")


_MIN_WIDTHS = {
    Breakpoint.XS: 0,
    Breakpoint.SM: 576,
    Breakpoint.MD: 768,
    Breakpoint.LG: 992,
    Breakpoint.XL: 1200,
    Breakpoint.XXL: 1600,
}

_MAX_WIDTHS = {
    Breakpoint.XS: 575,
    Breakpoint.SM: 767,
    Breakpoint.MD: 991,
    Breakpoint.LG: 1199,
    Breakpoint.XL: 1599,
    Breakpoint.XXL: None,
}


def get_current_breakpoint(width: int) -> Breakpoint:
    """Classify a viewport width.

    Args:
        width: Viewport width in pixels; negative widths count as XS

    Returns:
        Highest breakpoint whose minimum width is at or below ``width``
    """
    if width < 0:
        logger.warning(f"Negative viewport width {width}; treating it as xs")
        return Breakpoint.XS

    for breakpoint in reversed(Breakpoint):
        if width >= breakpoint.min_width:
            return breakpoint
    return Breakpoint.XS


def generate_media_query(breakpoint: Breakpoint, direction: str = "min") -> str:
    """Build a single-sided media query.

    ``min`` on XS and ``max`` on XXL match every width and yield ``""``.

    Raises:
        ValueError: If direction is neither ``min`` nor ``max``
    """
    if direction == "min":
        if breakpoint == Breakpoint.XS:
            return ""
        return f"@media (min-width: {breakpoint.min_width}px)"
    if direction == "max":
        if breakpoint.max_width is None:
            return ""
        return f"@media (max-width: {breakpoint.max_width}px)"
    raise ValueError(f"Unknown media query direction: {direction!r} (expected 'min' or 'max')")


def generate_range_media_query(lower: Breakpoint, upper: Breakpoint) -> str:
    """Build a media query covering ``lower`` through ``upper`` inclusive.

    Open ends are dropped: XS has no min clause and XXL no max clause.
    """
    if lower > upper:
        logger.debug(f"Reversed breakpoint range {lower.label}-{upper.label}; swapping")
        lower, upper = upper, lower

    clauses = []
    if lower != Breakpoint.XS:
        clauses.append(f"(min-width: {lower.min_width}px)")
    if upper.max_width is not None:
        clauses.append(f"(max-width: {upper.max_width}px)")

    if not clauses:
        return ""
    return "@media " + " and ".join(clauses)


class ResponsiveValue(Generic[T]):
    """A value that cascades upward from explicitly set breakpoints.

    Instances are immutable; ``set`` returns a new value so calls chain:

        ResponsiveValue(12).set(Breakpoint.SM, 16).set(Breakpoint.LG, 24)
    """

    def __init__(self, default: T, values: Optional[Dict[Breakpoint, T]] = None):
        self._default = default
        self._values: Dict[Breakpoint, T] = dict(values or {})

    @property
    def default(self) -> T:
        return self._default

    @property
    def values(self) -> Dict[Breakpoint, T]:
        return dict(self._values)

    def set(self, breakpoint: Breakpoint, value: T) -> 'ResponsiveValue[T]':
        values = dict(self._values)
        values[breakpoint] = value
        return ResponsiveValue(self._default, values)

    def get_value_for_breakpoint(self, breakpoint: Breakpoint) -> T:
        for candidate in reversed(Breakpoint):
            if candidate <= breakpoint and candidate in self._values:
                return self._values[candidate]
        return self._default

    def get_value_for_width(self, width: int) -> T:
        return self.get_value_for_breakpoint(get_current_breakpoint(width))

    def items(self) -> Iterator[Tuple[Breakpoint, T]]:
        """Explicit values in ascending breakpoint order."""
        for breakpoint in Breakpoint:
            if breakpoint in self._values:
                yield breakpoint, self._values[breakpoint]

    def to_css(self, selector: str, css_property: str, unit: str = "") -> str:
        """Render cascading rules, one media block per explicit breakpoint.

        None values are skipped.

        Args:
            selector: CSS selector the rules apply to
            css_property: CSS property name
            unit: Suffix appended to each value (e.g. ``px``)

        Returns:
            CSS text, empty if nothing resolves
        """
        def declaration(value) -> str:
            return f"{selector} {{ {css_property}: {value}{unit}; }}"

        rules = []
        if self._default is not None and Breakpoint.XS not in self._values:
            rules.append(declaration(self._default))

        for breakpoint, value in self.items():
            if value is None:
                continue
            query = generate_media_query(breakpoint, "min")
            if query:
                rules.append(f"{query} {{\n  {declaration(value)}\n}}")
            else:
                rules.append(declaration(value))

        return "\n".join(rules)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResponsiveValue):
            return NotImplemented
        return self._default == other._default and self._values == other._values

    def __repr__(self) -> str:
        explicit = ", ".join(f"{bp.label}={value!r}" for bp, value in self.items())
        return f"ResponsiveValue(default={self._default!r}{', ' + explicit if explicit else ''})"


def _default_gutter() -> ResponsiveValue[int]:
    return (ResponsiveValue(0)
            .set(Breakpoint.XS, 8)
            .set(Breakpoint.SM, 16)
            .set(Breakpoint.MD, 24)
            .set(Breakpoint.LG, 32))


def _default_container_width() -> ResponsiveValue[Optional[int]]:
    return (ResponsiveValue(None)
            .set(Breakpoint.SM, 540)
            .set(Breakpoint.MD, 720)
            .set(Breakpoint.LG, 960)
            .set(Breakpoint.XL, 1140)
            .set(Breakpoint.XXL, 1320))


@dataclass
class GridConfig:
    """24-column grid with responsive gutter and container width."""
    columns: int = 24
    gutter: ResponsiveValue = field(default_factory=_default_gutter)
    container_max_width: ResponsiveValue = field(default_factory=_default_container_width)

    def gutter_for_width(self, width: int) -> int:
        return self.gutter.get_value_for_width(width)

    def container_width_for(self, width: int) -> Optional[int]:
        """Max container width at ``width``, None meaning fluid."""
        return self.container_max_width.get_value_for_width(width)

    def column_width_percent(self, span: int) -> float:
        """Percentage width of a column spanning ``span`` of ``columns``."""
        if not 0 <= span <= self.columns:
            raise ValueError(f"Span must be between 0 and {self.columns}, got {span}")
        return span / self.columns * 100.0

    def to_css(self, selector: str = ".ant-container") -> str:
        return self.container_max_width.to_css(selector, "max-width", unit="px")
