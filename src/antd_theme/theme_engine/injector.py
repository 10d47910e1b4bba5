"""Tracks which style blocks have been injected into a document."""

import logging
import threading
from typing import Dict, List

logger = logging.getLogger(__name__)


class StyleInjector:
    """Registry of injected CSS keyed by style id.

    Injecting identical CSS under the same id is a no-op; different CSS
    replaces the previous entry. ``render`` emits each id exactly once, in
    first-injection order.
    """

    def __init__(self):
        self._styles: Dict[str, str] = {}
        self._lock = threading.Lock()

    def inject(self, style_id: str, css: str) -> bool:
        """Record ``css`` under ``style_id``.

        Args:
            style_id: Identifier of the style block (often a cache key)
            css: CSS text

        Returns:
            True if the stored CSS changed, False if it was already injected
        """
        if not style_id:
            raise ValueError("Style id must not be empty")

        with self._lock:
            current = self._styles.get(style_id)
            if current == css:
                return False

            self._styles[style_id] = css

        if current is None:
            logger.debug(f"Injected style: {style_id}")
        else:
            logger.debug(f"Replaced style: {style_id}")
        return True

    def is_injected(self, style_id: str) -> bool:
        with self._lock:
            return style_id in self._styles

    def get(self, style_id: str):
        with self._lock:
            return self._styles.get(style_id)

    def remove(self, style_id: str) -> bool:
        with self._lock:
            removed = self._styles.pop(style_id, None) is not None
        if removed:
            logger.debug(f"Removed style: {style_id}")
        return removed

    def style_ids(self) -> List[str]:
        with self._lock:
            return list(self._styles)

    def clear(self) -> None:
        with self._lock:
            self._styles.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._styles)

    def render(self) -> str:
        """Concatenate all injected blocks, each wrapped in an id comment."""
        with self._lock:
            blocks = [f"/* {style_id} */\n{css.rstrip()}" for style_id, css in self._styles.items()]
        return "\n\n".join(blocks) + ("\n" if blocks else "")
