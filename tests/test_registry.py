"""Tests for the theme registry."""

import json

import pytest
import yaml

from antd_theme.theme_engine import (
    Color,
    ColorType,
    CustomColorConfig,
    GenericThemeEngine,
    ThemeDefinition,
    ThemeDefinitionError,
    ThemeNotFoundError,
)


def write_yaml(directory, name, data):
    path = directory / f"{name}.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


class TestBuiltinThemes:
    """Test the shipped presets."""

    def test_builtins_listed(self, registry):
        """Test that every preset is discovered."""
        for name in ("light", "dark", "compact", "compact-dark"):
            assert registry.theme_exists(name)
            assert registry.is_builtin(name)

    def test_builtin_flags(self, registry):
        """Test resolved preset definitions."""
        assert not registry.load_theme_definition("light").dark
        assert registry.load_theme_definition("dark").dark
        compact_dark = registry.load_theme_definition("compact-dark")
        assert compact_dark.dark and compact_dark.compact
        assert compact_dark.size.value == "small"
        assert compact_dark.extends == "compact"

    def test_builtin_engine_matches_factory(self, registry):
        """Test that the light preset renders like the light factory."""
        assert registry.get_theme("light").generate_css() == GenericThemeEngine.light("light").generate_css()

    def test_default_theme_name(self, registry):
        """Test the default theme."""
        assert registry.get_default_theme_name() == "light"

    def test_unknown_theme(self, registry):
        """Test that unknown themes raise ThemeNotFoundError."""
        with pytest.raises(ThemeNotFoundError):
            registry.get_theme("nope")
        with pytest.raises(KeyError):
            registry.load_theme_definition("nope")


class TestUserThemes:
    """Test user theme files."""

    def test_yaml_theme_extends_builtin(self, registry, themes_dir):
        """Test inheritance from a built-in theme."""
        write_yaml(themes_dir, "brand", {"extends": "dark", "colors": {"primary": "#722ed1"}})
        registry.clear_cache()

        theme = registry.load_theme_definition("brand")
        assert theme.dark is True
        assert theme.display_name == "Brand"

        engine = registry.get_theme("brand")
        assert engine.get_color(ColorType.PRIMARY) == Color.from_hex("#722ed1")

    def test_json_theme(self, registry, themes_dir):
        """Test loading a JSON theme file."""
        (themes_dir / "ocean.json").write_text(json.dumps({"radius": 10}), encoding="utf-8")
        registry.clear_cache()
        assert registry.get_theme("ocean").radius == 10

    def test_user_file_shadows_builtin(self, registry, themes_dir):
        """Test that a user file wins over a preset of the same name."""
        write_yaml(themes_dir, "light", {"radius": 0})
        registry.clear_cache()
        assert registry.load_theme_definition("light").radius == 0

    def test_circular_inheritance(self, registry, themes_dir):
        """Test that inheritance cycles are detected."""
        write_yaml(themes_dir, "a", {"extends": "b"})
        write_yaml(themes_dir, "b", {"extends": "a"})
        registry.clear_cache()
        with pytest.raises(ThemeDefinitionError, match="Circular"):
            registry.load_theme_definition("a")

    def test_self_inheritance(self, registry, themes_dir):
        """Test that a theme extending itself is a cycle."""
        write_yaml(themes_dir, "loop", {"extends": "loop"})
        registry.clear_cache()
        with pytest.raises(ThemeDefinitionError):
            registry.load_theme_definition("loop")

    def test_missing_parent(self, registry, themes_dir):
        """Test extending a theme that does not exist."""
        write_yaml(themes_dir, "orphan", {"extends": "ghost"})
        registry.clear_cache()
        with pytest.raises(ThemeNotFoundError):
            registry.load_theme_definition("orphan")

    def test_invalid_yaml(self, registry, themes_dir):
        """Test that malformed YAML raises ThemeDefinitionError."""
        (themes_dir / "broken.yaml").write_text("colors: [unclosed", encoding="utf-8")
        registry.clear_cache()
        with pytest.raises(ThemeDefinitionError):
            registry.load_theme_definition("broken")

    def test_invalid_definition(self, registry, themes_dir):
        """Test that schema violations raise ThemeDefinitionError."""
        write_yaml(themes_dir, "bad", {"colors": {"primary": "nope"}})
        registry.clear_cache()
        with pytest.raises(ThemeDefinitionError):
            registry.load_theme_definition("bad")

    def test_listing_reports_broken_themes(self, registry, themes_dir):
        """Test that broken themes are listed with an error flag."""
        write_yaml(themes_dir, "bad", {"colors": {"primary": "nope"}})
        registry.clear_cache()
        themes = {info['name']: info for info in registry.list_available_themes()}
        assert themes["bad"]["error"] is True
        assert themes["bad"]["type"] == "user"
        assert themes["dark"]["type"] == "builtin"


class TestSaveDelete:
    """Test persisting user themes."""

    def test_save_and_load(self, registry, themes_dir):
        """Test a save/load cycle."""
        definition = ThemeDefinition(name="sunset", extends="light", colors={"primary": "#fa541c"})
        path = registry.save_user_theme(definition)
        assert path == themes_dir / "sunset.yaml"

        loaded = registry.load_theme_definition("sunset")
        assert loaded.colors == {"primary": "#fa541c"}
        assert loaded.extends == "light"

    def test_save_refuses_overwrite(self, registry):
        """Test that saving over an existing theme needs overwrite=True."""
        definition = ThemeDefinition(name="sunset")
        registry.save_user_theme(definition)
        with pytest.raises(FileExistsError):
            registry.save_user_theme(definition)
        registry.save_user_theme(ThemeDefinition(name="sunset", radius=3), overwrite=True)
        assert registry.get_theme("sunset").radius == 3

    def test_save_invalidates_children(self, registry):
        """Test that children see a re-saved parent."""
        registry.save_user_theme(ThemeDefinition(name="parent", radius=3))
        registry.save_user_theme(ThemeDefinition(name="child", extends="parent"))
        assert registry.get_theme("child").radius == 3

        registry.save_user_theme(ThemeDefinition(name="parent", radius=9), overwrite=True)
        assert registry.get_theme("child").radius == 9

    def test_delete(self, registry):
        """Test deleting a user theme."""
        registry.save_user_theme(ThemeDefinition(name="temp"))
        assert registry.delete_user_theme("temp") is True
        assert not registry.theme_exists("temp")
        assert registry.delete_user_theme("temp") is False


class TestRegistryEngines:
    """Test engine caching and registration."""

    def test_engines_are_cached(self, registry):
        """Test that get_theme returns the same engine."""
        assert registry.get_theme("dark") is registry.get_theme("dark")

    def test_register_heterogeneous_engine(self, registry):
        """Test registering an engine with a user color config."""
        engine = GenericThemeEngine.light("brand-custom", config_type=CustomColorConfig)
        registry.register(engine)
        assert registry.get_theme("brand-custom") is engine

        context = registry.create_context()
        assert "brand-custom" in context.available_themes
        assert context.current_name == "light"

    def test_validate_theme(self, registry, themes_dir):
        """Test accessibility validation."""
        assert registry.validate_theme("light") == []
        write_yaml(themes_dir, "faded", {"colors": {"text": "#eeeeee"}})
        registry.clear_cache()
        issues = registry.validate_theme("faded")
        assert any("Low contrast" in issue for issue in issues)
        assert registry.validate_theme("missing")[0].startswith("Failed to load theme")


class TestMalformedFiles:
    """Test theme files that parse but do not describe a theme."""

    def test_non_string_keys(self, registry, themes_dir):
        """Test that numeric top-level keys raise ThemeDefinitionError."""
        (themes_dir / "bad.yaml").write_text("1: foo\nname: bad\n", encoding="utf-8")
        registry.clear_cache()
        with pytest.raises(ThemeDefinitionError, match="non-string keys"):
            registry.load_theme_definition("bad")

    def test_listing_survives_non_string_keys(self, registry, themes_dir):
        """Test that a bad-key file is listed as broken instead of aborting the listing."""
        (themes_dir / "bad.yaml").write_text("1: foo\nname: bad\n", encoding="utf-8")
        registry.clear_cache()
        themes = {info['name']: info for info in registry.list_available_themes()}
        assert themes["bad"]["error"] is True
        assert "error" not in themes["light"]

    def test_non_mapping_file(self, registry, themes_dir):
        """Test that a YAML list is rejected."""
        (themes_dir / "listy.yaml").write_text("- a\n- b\n", encoding="utf-8")
        registry.clear_cache()
        with pytest.raises(ThemeDefinitionError):
            registry.load_theme_definition("listy")

    def test_unsafe_property_in_file(self, registry, themes_dir):
        """Test that an injected property value is rejected at load time."""
        write_yaml(themes_dir, "sneaky", {"properties": {"accent": "red; } body { display: none"}})
        registry.clear_cache()
        with pytest.raises(ThemeDefinitionError):
            registry.get_theme("sneaky")
