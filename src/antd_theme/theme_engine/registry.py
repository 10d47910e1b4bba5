"""Theme registry and scope-bound theme context.

ThemeRegistry discovers built-in presets and user theme files (YAML or JSON),
resolves ``extends`` chains and builds GenericThemeEngine instances.
ThemeContext holds the currently active theme for one application scope and
notifies subscribers when it changes.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Set, Tuple

import yaml

from .color_config import AntDesignColors
from .engine import GenericThemeEngine
from .errors import ThemeContextClosedError, ThemeDefinitionError, ThemeNotFoundError
from .motion import TransitionConfig
from .schema import ThemeDefinition
from .utils import deep_merge_dict, validate_color_accessibility

logger = logging.getLogger(__name__)

DEFAULT_THEME_NAME = "light"

# Keys a child theme never inherits from its parent
_UNINHERITED_KEYS = ('name', 'display_name', 'description', 'extends')


class ThemeRegistry:
    """Registry for built-in and user theme definitions."""

    def __init__(self, themes_dir: Optional[Path] = None):
        """Initialize the theme registry.

        Args:
            themes_dir: Directory holding user theme files
                (defaults to ``~/.antd_theme/themes``)
        """
        self.package_dir = Path(__file__).parent.parent
        self.builtin_themes_dir = self.package_dir / "theme_presets"

        if themes_dir:
            self.user_themes_dir = Path(themes_dir)
        else:
            self.user_themes_dir = Path.home() / ".antd_theme" / "themes"

        self.user_themes_dir.mkdir(parents=True, exist_ok=True)

        self._theme_cache: Dict[str, ThemeDefinition] = {}
        self._engine_cache: Dict[str, GenericThemeEngine] = {}

        self._builtin_themes: Set[str] = set()
        self._user_themes: Set[str] = set()

        self._scan_builtin_themes()
        self._scan_user_themes()

    def _scan_builtin_themes(self) -> None:
        self._builtin_themes.clear()

        if not self.builtin_themes_dir.exists():
            logger.warning(f"Built-in themes directory not found: {self.builtin_themes_dir}")
            return

        for theme_file in self.builtin_themes_dir.glob("*.yaml"):
            self._builtin_themes.add(theme_file.stem)
            logger.debug(f"Found built-in theme: {theme_file.stem}")

    def _scan_user_themes(self) -> None:
        self._user_themes.clear()

        for pattern in ("*.yaml", "*.yml", "*.json"):
            for theme_file in self.user_themes_dir.glob(pattern):
                self._user_themes.add(theme_file.stem)
                logger.debug(f"Found user theme: {theme_file.stem}")

    def theme_names(self) -> List[str]:
        return sorted(self._builtin_themes | self._user_themes)

    def theme_exists(self, theme_name: str) -> bool:
        return theme_name in self._builtin_themes or theme_name in self._user_themes

    def is_builtin(self, theme_name: str) -> bool:
        return theme_name in self._builtin_themes

    def list_available_themes(self) -> List[Dict[str, Any]]:
        """List all available themes with metadata.

        Themes that fail to load are listed with ``error: True`` rather than
        aborting the listing.
        """
        themes = []

        for theme_name in self.theme_names():
            theme_type = 'user' if theme_name in self._user_themes else 'builtin'
            try:
                theme_def = self.load_theme_definition(theme_name)
                themes.append({
                    'name': theme_name,
                    'display_name': theme_def.display_name,
                    'description': theme_def.description,
                    'type': theme_type,
                    'dark': theme_def.dark,
                    'compact': theme_def.compact,
                    'extends': theme_def.extends,
                })
            except (ThemeNotFoundError, ThemeDefinitionError) as e:
                logger.error(f"Error loading theme {theme_name}: {e}")
                themes.append({
                    'name': theme_name,
                    'display_name': theme_name,
                    'description': f"Error loading theme: {e}",
                    'type': theme_type,
                    'error': True,
                })

        return themes

    def load_theme_definition(self, theme_name: str) -> ThemeDefinition:
        """Load a fully resolved theme definition.

        Args:
            theme_name: Name of the theme to load

        Returns:
            ThemeDefinition with its ``extends`` chain merged in

        Raises:
            ThemeNotFoundError: If the theme (or a parent) does not exist
            ThemeDefinitionError: If a file is invalid or inheritance is circular
        """
        return self._resolve(theme_name, ())

    def _resolve(self, theme_name: str, chain: Tuple[str, ...]) -> ThemeDefinition:
        if theme_name in chain:
            cycle = " -> ".join(chain + (theme_name,))
            logger.error(f"Circular theme inheritance: {cycle}")
            raise ThemeDefinitionError(f"Circular inheritance detected: {cycle}")

        if theme_name in self._theme_cache:
            return self._theme_cache[theme_name]

        theme_data = self._load_theme_file(theme_name)
        theme_def = self._parse_theme_data(theme_data, theme_name, chain + (theme_name,))

        self._theme_cache[theme_name] = theme_def
        return theme_def

    def _find_theme_file(self, theme_name: str) -> Optional[Path]:
        for suffix in (".yaml", ".yml", ".json"):
            user_path = self.user_themes_dir / f"{theme_name}{suffix}"
            if user_path.exists():
                return user_path

        builtin_path = self.builtin_themes_dir / f"{theme_name}.yaml"
        if builtin_path.exists():
            return builtin_path

        return None

    def _load_theme_file(self, theme_name: str) -> Dict[str, Any]:
        """Load raw theme data, user files shadowing built-ins."""
        theme_path = self._find_theme_file(theme_name)
        if theme_path is None:
            raise ThemeNotFoundError(f"Theme '{theme_name}' not found")

        if theme_path.suffix == ".json":
            data = self._load_json_file(theme_path)
        else:
            data = self._load_yaml_file(theme_path)

        if not isinstance(data, dict):
            raise ThemeDefinitionError(f"Theme file {theme_path} must contain a mapping")

        bad_keys = [key for key in data if not isinstance(key, str)]
        if bad_keys:
            logger.error(f"Non-string keys in {theme_path}: {bad_keys!r}")
            raise ThemeDefinitionError(f"Theme file {theme_path} has non-string keys: {bad_keys!r}")
        return data

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in {file_path}: {e}")
            raise ThemeDefinitionError(f"Invalid YAML in {file_path}: {e}")
        except OSError as e:
            logger.error(f"Error reading {file_path}: {e}")
            raise ThemeDefinitionError(f"Error reading {file_path}: {e}")

    def _load_json_file(self, file_path: Path) -> Dict[str, Any]:
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {file_path}: {e}")
            raise ThemeDefinitionError(f"Invalid JSON in {file_path}: {e}")
        except OSError as e:
            logger.error(f"Error reading {file_path}: {e}")
            raise ThemeDefinitionError(f"Error reading {file_path}: {e}")

    def _parse_theme_data(self, theme_data: Dict[str, Any], theme_name: str,
                          chain: Tuple[str, ...]) -> ThemeDefinition:
        """Merge the parent chain and validate the result."""
        base_theme_name = theme_data.get('extends')
        if base_theme_name:
            base_theme = self._resolve(base_theme_name, chain)
            base_data = base_theme.model_dump(mode='json')
            for key in _UNINHERITED_KEYS:
                base_data.pop(key, None)
            theme_data = deep_merge_dict(base_data, theme_data)

        theme_data.setdefault('name', theme_name)
        if not theme_data.get('display_name'):
            theme_data['display_name'] = theme_name.replace('_', ' ').replace('-', ' ').title()

        try:
            return ThemeDefinition.model_validate(theme_data)
        except ValueError as e:
            logger.error(f"Invalid theme definition for '{theme_name}': {e}")
            raise ThemeDefinitionError(f"Invalid theme definition for '{theme_name}': {e}")

    def get_theme(self, theme_name: str) -> GenericThemeEngine:
        """Build (or return the cached) engine for a theme.

        Raises:
            ThemeNotFoundError: If the theme does not exist
            ThemeDefinitionError: If its definition is invalid
        """
        if theme_name in self._engine_cache:
            return self._engine_cache[theme_name]

        theme_def = self.load_theme_definition(theme_name)
        engine = GenericThemeEngine.from_definition(theme_def)
        self._engine_cache[theme_name] = engine

        logger.debug(f"Built theme engine '{theme_name}'")
        return engine

    def register(self, engine: GenericThemeEngine) -> None:
        """Register an in-memory engine (any ColorConfig) under its name."""
        self._engine_cache[engine.name] = engine
        logger.info(f"Registered theme: {engine.name}")

    def save_user_theme(self, theme_def: ThemeDefinition, overwrite: bool = False) -> Path:
        """Save a user theme definition as YAML.

        Raises:
            FileExistsError: If the theme exists and overwrite is False
            ThemeDefinitionError: If the file cannot be written
        """
        theme_path = self.user_themes_dir / f"{theme_def.name}.yaml"

        if theme_path.exists() and not overwrite:
            raise FileExistsError(f"Theme '{theme_def.name}' already exists")

        theme_dict = theme_def.model_dump(mode='json', exclude_unset=True)
        theme_dict['name'] = theme_def.name

        try:
            with open(theme_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(theme_dict, f, default_flow_style=False, indent=2, sort_keys=False)
        except OSError as e:
            logger.error(f"Error saving theme '{theme_def.name}': {e}")
            raise ThemeDefinitionError(f"Error saving theme '{theme_def.name}': {e}")

        self._user_themes.add(theme_def.name)
        self._invalidate(theme_def.name)

        logger.info(f"Saved user theme: {theme_def.name}")
        return theme_path

    def delete_user_theme(self, theme_name: str) -> bool:
        """Delete a user theme.

        Returns:
            True if a file was deleted, False if none was found
        """
        deleted = False
        for suffix in (".yaml", ".yml", ".json"):
            path = self.user_themes_dir / f"{theme_name}{suffix}"
            if path.exists():
                path.unlink()
                deleted = True

        if deleted:
            self._user_themes.discard(theme_name)
            self._invalidate(theme_name)
            logger.info(f"Deleted user theme: {theme_name}")

        return deleted

    def _invalidate(self, theme_name: str) -> None:
        # Children resolved through this theme hold merged copies of it,
        # so every file-backed entry goes; registered engines stay.
        self._theme_cache.clear()
        self._engine_cache.pop(theme_name, None)
        for name in list(self._engine_cache):
            if self.theme_exists(name):
                del self._engine_cache[name]

    def validate_theme(self, theme_name: str) -> List[str]:
        """Validate a theme and return any issues (empty if valid)."""
        issues = []

        try:
            engine = self.get_theme(theme_name)
            issues.extend(validate_color_accessibility(engine.colors))
        except (ThemeNotFoundError, ThemeDefinitionError) as e:
            issues.append(f"Failed to load theme: {e}")

        return issues

    def clear_cache(self) -> None:
        """Clear caches and rescan theme directories."""
        self._theme_cache.clear()
        self._engine_cache.clear()
        self._scan_builtin_themes()
        self._scan_user_themes()

    def get_default_theme_name(self) -> str:
        if DEFAULT_THEME_NAME in self._builtin_themes:
            return DEFAULT_THEME_NAME
        names = self.theme_names()
        return names[0] if names else DEFAULT_THEME_NAME

    def create_context(self, current: Optional[str] = None, **kwargs) -> 'ThemeContext':
        """Build a ThemeContext holding every theme this registry can load."""
        themes = {}
        for name in self.theme_names():
            try:
                themes[name] = self.get_theme(name)
            except (ThemeNotFoundError, ThemeDefinitionError) as e:
                logger.warning(f"Skipping theme '{name}': {e}")
        for name, engine in self._engine_cache.items():
            themes.setdefault(name, engine)

        return ThemeContext(themes, current=current or self.get_default_theme_name(), **kwargs)


def default_themes() -> Dict[str, GenericThemeEngine]:
    """Built-in engines constructed in code, without touching the filesystem."""
    return {
        'light': GenericThemeEngine.light('light', AntDesignColors),
        'dark': GenericThemeEngine.dark('dark', AntDesignColors),
        'compact': GenericThemeEngine.compact('compact', dark=False, radius=4),
        'compact-dark': GenericThemeEngine.compact('compact-dark', dark=True, radius=4),
    }


ThemeListener = Callable[[GenericThemeEngine, GenericThemeEngine], None]


class ThemeContext:
    """Current theme for one application scope.

    Use as a context manager; once closed, every operation raises
    ThemeContextClosedError. Writes are serialized by a re-entrant lock and
    subscribers are called after the change is committed, outside the lock.
    """

    def __init__(self, themes: Optional[Mapping[str, GenericThemeEngine]] = None,
                 current: str = DEFAULT_THEME_NAME, auto_theme: bool = False,
                 transition_config: Optional[TransitionConfig] = None):
        self._lock = threading.RLock()
        self._themes: Dict[str, GenericThemeEngine] = dict(themes if themes is not None else default_themes())
        if not self._themes:
            raise ValueError("A theme context needs at least one theme")

        if current not in self._themes:
            raise ThemeNotFoundError(f"Theme '{current}' not found")

        self._current = current
        self._auto_theme = auto_theme
        self._transition = transition_config or TransitionConfig()
        self._listeners: List[ThemeListener] = []
        self._closed = False

    def __enter__(self) -> 'ThemeContext':
        self._check_open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        with self._lock:
            self._closed = True
            self._listeners.clear()

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise ThemeContextClosedError("Theme context has been closed")

    @property
    def current_theme(self) -> GenericThemeEngine:
        with self._lock:
            self._check_open()
            return self._themes[self._current]

    @property
    def current_name(self) -> str:
        with self._lock:
            self._check_open()
            return self._current

    @property
    def available_themes(self) -> List[str]:
        with self._lock:
            self._check_open()
            return sorted(self._themes)

    @property
    def auto_theme(self) -> bool:
        return self._auto_theme

    def set_auto_theme(self, enabled: bool) -> None:
        with self._lock:
            self._check_open()
            self._auto_theme = enabled

    @property
    def transition_config(self) -> TransitionConfig:
        return self._transition

    def set_transition_config(self, config: TransitionConfig) -> None:
        with self._lock:
            self._check_open()
            self._transition = config

    def register_theme(self, engine: GenericThemeEngine) -> None:
        with self._lock:
            self._check_open()
            self._themes[engine.name] = engine

    def subscribe(self, listener: ThemeListener) -> Callable[[], None]:
        """Register ``listener(old, new)``; returns a function that unsubscribes it."""
        with self._lock:
            self._check_open()
            self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: ThemeListener) -> bool:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
                return True
            return False

    def switch_theme(self, theme_name: str) -> GenericThemeEngine:
        """Make ``theme_name`` current and notify subscribers if it changed.

        Raises:
            ThemeNotFoundError: If the theme is not available in this context
        """
        with self._lock:
            self._check_open()
            if theme_name not in self._themes:
                raise ThemeNotFoundError(f"Theme '{theme_name}' not found")

            old = self._themes[self._current]
            new = self._themes[theme_name]
            changed = theme_name != self._current
            self._current = theme_name
            listeners = list(self._listeners)

        if changed:
            logger.info(f"Switched theme: {old.name} -> {new.name}")
            self._notify(listeners, old, new)
        return new

    def _notify(self, listeners: List[ThemeListener], old: GenericThemeEngine,
                new: GenericThemeEngine) -> None:
        for listener in listeners:
            try:
                listener(old, new)
            except Exception:
                logger.exception(f"Theme listener {listener!r} failed")

    def _counterpart(self, want_dark: bool) -> Optional[str]:
        """Name of the theme that pairs with the current one in the other mode."""
        name = self._current
        if want_dark:
            candidates = ["dark"] if name == "light" else [f"{name}-dark"]
        else:
            candidates = ["light"] if name == "dark" else []
            if name.endswith("-dark"):
                candidates.append(name[:-len("-dark")])

        for candidate in candidates:
            theme = self._themes.get(candidate)
            if theme is not None and theme.is_dark() == want_dark:
                return candidate

        for candidate in sorted(self._themes):
            if self._themes[candidate].is_dark() == want_dark:
                return candidate
        return None

    def toggle_theme(self) -> GenericThemeEngine:
        """Switch between the light and dark counterpart of the current theme.

        Stays put when no theme of the other mode is available.
        """
        with self._lock:
            self._check_open()
            target = self._counterpart(not self._themes[self._current].is_dark())
            if target is None:
                logger.warning(f"No counterpart for theme '{self._current}'")
                return self._themes[self._current]
        return self.switch_theme(target)

    def apply_system_preference(self, prefers_dark: bool) -> GenericThemeEngine:
        """Follow the OS color scheme when auto theme is enabled."""
        with self._lock:
            self._check_open()
            current = self._themes[self._current]
            if not self._auto_theme or current.is_dark() == prefers_dark:
                return current
            target = self._counterpart(prefers_dark)
            if target is None:
                return current
        return self.switch_theme(target)

    def generate_css(self) -> str:
        """Current theme's stylesheet plus the theme transition rule."""
        theme = self.current_theme
        css = theme.generate_css()
        if self._transition.is_enabled() and theme.motion:
            css += "\n.ant-theme-transition {\n"
            css += f"  transition: {self._transition.to_css_transition('background-color')};\n"
            css += "}\n"
        return css
