"""Exception types raised by the theme engine."""


class ThemeError(Exception):
    """Base class for all theme engine errors."""


class InvalidColorFormat(ThemeError, ValueError):
    """Raised when a color string cannot be parsed."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid color format: {value!r} (expected #RGB or #RRGGBB)")


class InvalidCacheKeyPart(ThemeError, ValueError):
    """Raised when a cache key component contains the key delimiter."""


class ThemeNotFoundError(ThemeError, KeyError):
    """Raised when a named theme is not registered."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Theme not found"


class ThemeDefinitionError(ThemeError, ValueError):
    """Raised when a theme definition file is invalid."""


class ThemeContextClosedError(ThemeError, RuntimeError):
    """Raised when a torn-down theme context is used."""
