"""Tests for design tokens and theme definitions."""

import pytest

from antd_theme.theme_engine import (
    AntDesignColors,
    ColorType,
    CustomColorConfig,
    DesignToken,
    ThemeDefinition,
)


class TestDesignToken:
    """Test token aggregation and CSS variable emission."""

    def setup_method(self):
        self.token = DesignToken.default()

    def test_field_count(self):
        """Test the number of leaf token fields."""
        assert DesignToken.field_count() == 44

    def test_css_vars_one_per_field(self):
        """Test that every field is emitted exactly once."""
        variables = self.token.to_css_vars()
        assert len(variables) == DesignToken.field_count()
        assert all(name.startswith("--ant-") for name in variables)

    def test_css_var_key_set_is_stable(self):
        """Test that light and dark tokens share the key set."""
        assert set(self.token.to_css_vars()) == set(DesignToken.dark().to_css_vars())

    def test_default_values(self):
        """Test a sample of default literals."""
        variables = self.token.to_css_vars()
        assert variables["--ant-color-primary"] == "#1890ff"
        assert variables["--ant-color-text-secondary"] == "rgba(0, 0, 0, 0.65)"
        assert variables["--ant-font-size-base"] == "14px"
        assert variables["--ant-font-line-height-base"] == "1.5715"
        assert variables["--ant-font-weight-bold"] == "600"
        assert variables["--ant-spacing-xxl"] == "48px"
        assert variables["--ant-border-radius-base"] == "6px"
        assert variables["--ant-motion-duration-slow"] == "0.3s"
        assert variables["--ant-motion-ease-out"] == "cubic-bezier(0.215, 0.61, 0.355, 1)"

    def test_dark_values(self):
        """Test dark color overrides."""
        dark = DesignToken.dark()
        assert dark.color.background == "#141414"
        assert dark.color.text == "rgba(255, 255, 255, 0.85)"
        assert dark.color.primary == "#1890ff"
        assert dark.font == self.token.font

    def test_group_subset(self):
        """Test rendering a subset of groups."""
        variables = self.token.to_css_vars(groups=("spacing",))
        assert len(variables) == 6
        assert all(name.startswith("--ant-spacing-") for name in variables)

    def test_declaration_sorted(self):
        """Test that declarations are sorted by name."""
        lines = self.token.to_css_declaration().split("\n")
        names = [line.split(":", 1)[0] for line in lines]
        assert len(lines) == 44
        assert names == sorted(names)
        assert all(line.endswith(";") for line in lines)

    def test_tokens_are_frozen(self):
        """Test that tokens cannot be mutated."""
        with pytest.raises(ValueError):
            self.token.color.primary = "#000"


class TestFromColorConfig:
    """Test routing the color group through a ColorConfig."""

    def test_builtin_config(self):
        """Test tokens from the light preset."""
        config = AntDesignColors.light()
        token = DesignToken.from_color_config(config)
        assert token.color.primary == "#1890ff"
        assert token.color.text == "#000000"
        assert token.color.primary_hover == config.get_palette(ColorType.PRIMARY).light.to_hex_string()

    def test_partial_config_falls_back(self):
        """Test field-by-field fallback to the default literals."""
        token = DesignToken.from_color_config(CustomColorConfig({"primary": "#eb2f96"}))
        assert token.color.primary == "#eb2f96"
        assert token.color.success == "#52c41a"
        assert token.color.text == "rgba(0, 0, 0, 0.85)"

    def test_partial_dark_config_falls_back_to_dark(self):
        """Test that dark configs fall back to the dark literals."""
        token = DesignToken.from_color_config(CustomColorConfig(dark=True))
        assert token.color == DesignToken.dark().color


class TestThemeDefinition:
    """Test theme file validation."""

    def test_minimal(self):
        """Test defaults of a minimal definition."""
        theme = ThemeDefinition(name="brand")
        assert theme.radius == 6
        assert theme.shape.value == "default"
        assert theme.size.value == "middle"
        assert theme.colors == {}

    def test_colors_normalized(self):
        """Test that seed colors are normalized to lowercase hex."""
        theme = ThemeDefinition(name="brand", colors={"primary": "#ABC"})
        assert theme.colors == {"primary": "#aabbcc"}

    def test_unknown_color_type(self):
        """Test that unknown seed keys are rejected."""
        with pytest.raises(ValueError):
            ThemeDefinition(name="brand", colors={"sparkle": "#fff"})

    def test_invalid_color(self):
        """Test that invalid seed colors are rejected."""
        with pytest.raises(ValueError):
            ThemeDefinition(name="brand", colors={"primary": "not-a-color"})

    @pytest.mark.parametrize("name", ["", "../evil", "with space", "-leading"])
    def test_invalid_names(self, name):
        """Test theme name validation."""
        with pytest.raises(ValueError):
            ThemeDefinition(name=name)

    def test_invalid_shape(self):
        """Test enum validation."""
        with pytest.raises(ValueError):
            ThemeDefinition(name="brand", shape="triangle")

    def test_unsafe_property_value(self):
        """Test that property values cannot close the :root block."""
        with pytest.raises(ValueError):
            ThemeDefinition(name="brand", properties={"accent": "red; } body { display: none"})

    def test_colliding_property_names(self):
        """Test that property names must stay distinct as CSS variables."""
        with pytest.raises(ValueError):
            ThemeDefinition(name="brand", properties={"fooBar": "1", "foo_bar": "2"})
