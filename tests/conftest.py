"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from antd_theme.theme_engine import GenericThemeEngine, ThemeRegistry  # noqa: E402


@pytest.fixture
def themes_dir(tmp_path):
    """Empty user themes directory."""
    path = tmp_path / "themes"
    path.mkdir()
    return path


@pytest.fixture
def registry(themes_dir):
    """Registry reading user themes from a temporary directory."""
    return ThemeRegistry(themes_dir)


@pytest.fixture
def light_engine():
    return GenericThemeEngine.light("light")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep tests away from the real home directory and environment overrides."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("ANTD_THEME_DATA_DIR", raising=False)
    monkeypatch.delenv("ANTD_THEME_DEFAULT", raising=False)
