"""Tests for breakpoints and responsive values."""

import logging

import pytest

from antd_theme.theme_engine import (
    Breakpoint,
    GridConfig,
    ResponsiveValue,
    generate_media_query,
    generate_range_media_query,
    get_current_breakpoint,
)


class TestBreakpoint:
    """Test breakpoint ordering and classification."""

    def test_ordering(self):
        """Test XS < SM < MD < LG < XL < XXL."""
        assert list(Breakpoint) == sorted(Breakpoint)
        assert Breakpoint.XS < Breakpoint.SM < Breakpoint.MD < Breakpoint.LG < Breakpoint.XL < Breakpoint.XXL

    def test_widths(self):
        """Test min and max widths."""
        assert [bp.min_width for bp in Breakpoint] == [0, 576, 768, 992, 1200, 1600]
        assert [bp.max_width for bp in Breakpoint] == [575, 767, 991, 1199, 1599, None]

    @pytest.mark.parametrize("width, expected", [
        (0, Breakpoint.XS),
        (575, Breakpoint.XS),
        (576, Breakpoint.SM),
        (767, Breakpoint.SM),
        (768, Breakpoint.MD),
        (991, Breakpoint.MD),
        (992, Breakpoint.LG),
        (1199, Breakpoint.LG),
        (1200, Breakpoint.XL),
        (1599, Breakpoint.XL),
        (1600, Breakpoint.XXL),
        (5000, Breakpoint.XXL),
    ])
    def test_boundaries(self, width, expected):
        """Test classification at every boundary."""
        assert get_current_breakpoint(width) == expected

    def test_negative_width_is_xs(self):
        """Test that negative widths classify as XS."""
        assert get_current_breakpoint(-10) == Breakpoint.XS

    def test_from_label(self):
        """Test lookup by label."""
        assert Breakpoint.from_label("md") == Breakpoint.MD
        assert Breakpoint.XXL.label == "xxl"
        with pytest.raises(ValueError):
            Breakpoint.from_label("huge")


class TestResponsiveValue:
    """Test breakpoint cascading."""

    def setup_method(self):
        self.value = (ResponsiveValue(12)
                      .set(Breakpoint.SM, 16)
                      .set(Breakpoint.MD, 20)
                      .set(Breakpoint.LG, 24))

    @pytest.mark.parametrize("width, expected", [
        (500, 12),
        (600, 16),
        (800, 20),
        (1000, 24),
        (1300, 24),
    ])
    def test_value_for_width(self, width, expected):
        """Test the cascade at representative widths."""
        assert self.value.get_value_for_width(width) == expected

    def test_value_for_breakpoint(self):
        """Test lookup by breakpoint."""
        assert self.value.get_value_for_breakpoint(Breakpoint.XS) == 12
        assert self.value.get_value_for_breakpoint(Breakpoint.XXL) == 24

    def test_set_returns_new_value(self):
        """Test that set does not mutate the original."""
        base = ResponsiveValue(1)
        updated = base.set(Breakpoint.MD, 2)
        assert base.values == {}
        assert updated.values == {Breakpoint.MD: 2}
        assert base.default == updated.default == 1

    def test_default_only(self):
        """Test that the default covers every width."""
        value = ResponsiveValue("auto")
        assert value.get_value_for_width(-1) == "auto"
        assert value.get_value_for_width(10000) == "auto"

    def test_equality(self):
        """Test structural equality."""
        assert ResponsiveValue(12).set(Breakpoint.SM, 16) == ResponsiveValue(12, {Breakpoint.SM: 16})
        assert ResponsiveValue(12) != ResponsiveValue(13)

    def test_to_css(self):
        """Test cascading CSS rules."""
        css = ResponsiveValue(8).set(Breakpoint.MD, 16).to_css(".row", "gap", unit="px")
        assert css == (
            ".row { gap: 8px; }\n"
            "@media (min-width: 768px) {\n"
            "  .row { gap: 16px; }\n"
            "}"
        )

    def test_to_css_xs_replaces_default(self):
        """Test that an explicit XS value is emitted without a media query."""
        css = ResponsiveValue(0).set(Breakpoint.XS, 4).to_css(".col", "padding", unit="px")
        assert css == ".col { padding: 4px; }"


class TestMediaQueries:
    """Test media query generation."""

    def test_min(self):
        """Test min-width queries."""
        assert generate_media_query(Breakpoint.MD, "min") == "@media (min-width: 768px)"
        assert generate_media_query(Breakpoint.XS, "min") == ""

    def test_max(self):
        """Test max-width queries."""
        assert generate_media_query(Breakpoint.MD, "max") == "@media (max-width: 991px)"
        assert generate_media_query(Breakpoint.XXL, "max") == ""

    def test_unknown_direction(self):
        """Test that an unknown direction raises ValueError."""
        with pytest.raises(ValueError):
            generate_media_query(Breakpoint.MD, "up")

    def test_range(self):
        """Test the exact range query for SM..LG."""
        assert generate_range_media_query(Breakpoint.SM, Breakpoint.LG) == \
            "@media (min-width: 576px) and (max-width: 1199px)"

    def test_range_open_ends(self):
        """Test that XS drops the min clause and XXL the max clause."""
        assert generate_range_media_query(Breakpoint.XS, Breakpoint.MD) == "@media (max-width: 991px)"
        assert generate_range_media_query(Breakpoint.LG, Breakpoint.XXL) == "@media (min-width: 992px)"
        assert generate_range_media_query(Breakpoint.XS, Breakpoint.XXL) == ""


class TestGridConfig:
    """Test grid defaults."""

    def setup_method(self):
        self.grid = GridConfig()

    def test_columns(self):
        """Test column count and widths."""
        assert self.grid.columns == 24
        assert self.grid.column_width_percent(12) == 50.0
        with pytest.raises(ValueError):
            self.grid.column_width_percent(25)

    def test_gutter(self):
        """Test responsive gutter values."""
        assert self.grid.gutter_for_width(100) == 8
        assert self.grid.gutter_for_width(600) == 16
        assert self.grid.gutter_for_width(800) == 24
        assert self.grid.gutter_for_width(2000) == 32

    def test_container_width(self):
        """Test responsive container widths."""
        assert self.grid.container_width_for(400) is None
        assert self.grid.container_width_for(700) == 540
        assert self.grid.container_width_for(1700) == 1320

    def test_container_css(self):
        """Test that the fluid default emits no base rule."""
        css = self.grid.to_css()
        assert css.startswith("@media (min-width: 576px)")
        assert "max-width: 1320px" in css


class TestResponsiveLogging:
    """Test diagnostics for unusual inputs."""

    def test_negative_width_warns(self, caplog):
        """Test that a negative width is reported."""
        with caplog.at_level(logging.WARNING, logger="antd_theme.theme_engine.responsive"):
            assert get_current_breakpoint(-1) == Breakpoint.XS
        assert "Negative viewport width -1" in caplog.text

    def test_reversed_range_is_swapped(self, caplog):
        """Test that a reversed range is swapped and logged."""
        with caplog.at_level(logging.DEBUG, logger="antd_theme.theme_engine.responsive"):
            query = generate_range_media_query(Breakpoint.LG, Breakpoint.SM)
        assert query == generate_range_media_query(Breakpoint.SM, Breakpoint.LG)
        assert "Reversed breakpoint range lg-sm" in caplog.text
