"""Cache-key hashing and memoized style generation.

Component styles are memoized by a key of the form
``type:active:size:shape:hash``. The hash part is a stable digest of the
component theme, so identical themes share cached CSS across processes.
"""

import hashlib
import json
import logging
import threading
from collections import OrderedDict
from typing import Any, Callable, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidCacheKeyPart

logger = logging.getLogger(__name__)

CACHE_KEY_SEPARATOR = ":"
DEFAULT_KEY_PART = "default"
THEME_HASH_LENGTH = 16


def calculate_theme_hash(theme: Union[BaseModel, Mapping[str, Any]]) -> str:
    """Stable digest of a theme model or mapping.

    The value is dumped to JSON with sorted keys and hashed with sha256, so the
    result is independent of field order and of the running process.

    Args:
        theme: Pydantic model or JSON-serializable mapping

    Returns:
        First 16 hex digits of the sha256 digest
    """
    if isinstance(theme, BaseModel):
        data = theme.model_dump(mode='json')
    else:
        data = dict(theme)

    payload = json.dumps(data, sort_keys=True, separators=(',', ':'), default=str)
    return hashlib.sha256(payload.encode('utf-8')).hexdigest()[:THEME_HASH_LENGTH]


class ComponentTheme(BaseModel):
    """Per-component theme values; None means "use the default"."""

    model_config = ConfigDict(frozen=True)

    block_radius: Optional[int] = Field(None, ge=0)
    gradient_from_color: Optional[str] = None
    gradient_to_color: Optional[str] = None
    paragraph_line_height: Optional[int] = Field(None, ge=0)
    paragraph_margin_top: Optional[int] = Field(None, ge=0)
    title_height: Optional[int] = Field(None, ge=0)

    @classmethod
    def defaults(cls) -> 'ComponentTheme':
        return cls(
            block_radius=4,
            gradient_from_color="rgba(0,0,0,0.06)",
            gradient_to_color="rgba(0,0,0,0.15)",
            paragraph_line_height=16,
            paragraph_margin_top=28,
            title_height=16,
        )

    def theme_hash(self) -> str:
        return calculate_theme_hash(self)


def merge_theme(user: Optional[ComponentTheme],
                defaults: Optional[ComponentTheme] = None) -> ComponentTheme:
    """Overlay a user theme on the defaults, field by field.

    Every field the user leaves as None takes the default value.
    """
    base = defaults or ComponentTheme.defaults()
    if user is None:
        return base

    return ComponentTheme(
        block_radius=user.block_radius if user.block_radius is not None else base.block_radius,
        gradient_from_color=(user.gradient_from_color if user.gradient_from_color is not None
                             else base.gradient_from_color),
        gradient_to_color=(user.gradient_to_color if user.gradient_to_color is not None
                           else base.gradient_to_color),
        paragraph_line_height=(user.paragraph_line_height if user.paragraph_line_height is not None
                               else base.paragraph_line_height),
        paragraph_margin_top=(user.paragraph_margin_top if user.paragraph_margin_top is not None
                              else base.paragraph_margin_top),
        title_height=user.title_height if user.title_height is not None else base.title_height,
    )


def _key_part(value: Any) -> str:
    if value is None or value == "":
        return DEFAULT_KEY_PART
    if isinstance(value, bool):
        return "true" if value else "false"
    if hasattr(value, 'value'):
        value = value.value
    text = str(value)
    if CACHE_KEY_SEPARATOR in text:
        raise InvalidCacheKeyPart(
            f"Cache key part {text!r} must not contain {CACHE_KEY_SEPARATOR!r}"
        )
    return text


def generate_cache_key(component_type: str, active: bool,
                       size: Optional[str] = None, shape: Optional[str] = None,
                       theme_hash: str = "") -> str:
    """Build a ``type:active:size:shape:hash`` cache key.

    Missing discriminators become ``default``.

    Raises:
        InvalidCacheKeyPart: If any part contains ``:``
    """
    parts = [component_type, active, size, shape, theme_hash]
    return CACHE_KEY_SEPARATOR.join(_key_part(part) for part in parts)


class StyleCache:
    """Memoizes generated CSS by cache key, with hit/miss statistics."""

    def __init__(self, maxsize: Optional[int] = 512):
        self.maxsize = maxsize
        self._entries: "OrderedDict[str, str]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            css = self._entries.get(key)
            if css is None:
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return css

    def put(self, key: str, css: str) -> None:
        with self._lock:
            self._entries[key] = css
            self._entries.move_to_end(key)
            if self.maxsize is not None and len(self._entries) > self.maxsize:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted style cache entry: {evicted}")

    def get_or_create(self, key: str, factory: Callable[[], str]) -> str:
        """Return cached CSS for ``key``, generating and storing it on a miss."""
        css = self.get(key)
        if css is not None:
            return css

        css = factory()
        self.put(key, css)
        logger.debug(f"Generated style for cache key: {key}")
        return css

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0
        logger.debug("Style cache cleared")

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            total = self.hits + self.misses
            return {
                'size': len(self._entries),
                'maxsize': self.maxsize,
                'hits': self.hits,
                'misses': self.misses,
                'hit_rate': self.hits / total if total else 0.0,
            }
