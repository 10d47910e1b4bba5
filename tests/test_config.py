"""Tests for engine configuration."""

import pytest

from antd_theme.config import EngineConfig, load_config, save_config


class TestEngineConfig:
    """Test the configuration model."""

    def test_defaults(self, tmp_path):
        """Test default values."""
        config = EngineConfig(data_dir=str(tmp_path))
        assert config.default_theme == "light"
        assert config.css_var_prefix == "custom"
        assert config.transition_duration == 300
        assert config.get_themes_dir() == tmp_path / "themes"
        assert config.get_config_path() == tmp_path / "config.yaml"

    def test_yaml_round_trip(self, tmp_path):
        """Test to_yaml/from_yaml."""
        config = EngineConfig(default_theme="dark", auto_theme=True, data_dir=str(tmp_path),
                              log_level="debug")
        restored = EngineConfig.from_yaml(config.to_yaml())
        assert restored == config
        assert restored.log_level == "DEBUG"

    def test_unknown_keys_ignored(self):
        """Test that unknown keys do not break loading."""
        config = EngineConfig.from_yaml("default_theme: dark\nlegacy_option: 1\n")
        assert config.default_theme == "dark"

    @pytest.mark.parametrize("kwargs", [
        {"log_level": "LOUD"},
        {"transition_duration": -5},
        {"css_var_prefix": ""},
    ])
    def test_validation(self, kwargs):
        """Test rejected values."""
        with pytest.raises(ValueError):
            EngineConfig(**kwargs)

    def test_env_overrides(self, tmp_path):
        """Test environment overrides."""
        config = EngineConfig().apply_env_overrides({
            "ANTD_THEME_DATA_DIR": str(tmp_path),
            "ANTD_THEME_DEFAULT": "compact",
        })
        assert config.data_dir == str(tmp_path)
        assert config.default_theme == "compact"

    def test_transition_config(self):
        """Test the derived transition config."""
        assert EngineConfig(transition_duration=150).transition_config().duration_ms == 150

    def test_create_context(self, tmp_path):
        """Test building a theme context from config."""
        config = EngineConfig(data_dir=str(tmp_path), default_theme="dark", auto_theme=True)
        with config.create_context() as context:
            assert context.current_name == "dark"
            assert context.auto_theme is True
            assert context.transition_config.duration_ms == 300


class TestLoadSave:
    """Test reading and writing config files."""

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test loading when no file exists."""
        config = load_config(tmp_path / "missing.yaml")
        assert config.default_theme == "light"

    def test_save_then_load(self, tmp_path):
        """Test a save/load cycle."""
        path = tmp_path / "nested" / "config.yaml"
        save_config(EngineConfig(default_theme="compact", data_dir=str(tmp_path)), path)
        assert load_config(path).default_theme == "compact"

    def test_env_applied_on_load(self, tmp_path, monkeypatch):
        """Test that the environment wins over the file."""
        path = tmp_path / "config.yaml"
        save_config(EngineConfig(default_theme="compact", data_dir=str(tmp_path)), path)
        monkeypatch.setenv("ANTD_THEME_DEFAULT", "dark")
        assert load_config(path).default_theme == "dark"

    def test_invalid_file(self, tmp_path):
        """Test that an unparsable file raises ValueError."""
        path = tmp_path / "config.yaml"
        path.write_text("log_level: LOUD\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)

    def test_non_mapping_file(self, tmp_path):
        """Test that a YAML list is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)
