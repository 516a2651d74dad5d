"""
Tests for configuration loading.
"""

import pytest

from benchwarmer.config.settings import ConfigManager, AppConfig


class TestConfigManager:
    """Test cases for ConfigManager."""

    def test_defaults_when_optional_file_missing(self, tmp_path):
        """A missing optional config falls back to defaults."""
        config = ConfigManager(str(tmp_path / "config.yaml")).get_config()

        assert isinstance(config, AppConfig)
        assert config.logging.level == "INFO"
        assert config.analysis.max_chain_depth is None
        assert "OP" in config.payload.invalid_positions
        assert config.payload.default_position_fixes == {"RB/WR": "WR"}

    def test_required_file_missing(self, tmp_path):
        """An explicitly requested config must exist."""
        manager = ConfigManager(str(tmp_path / "missing.yaml"), required=True)
        with pytest.raises(FileNotFoundError):
            manager.get_config()

    def test_load_yaml(self, tmp_path):
        """Values from YAML override defaults section by section."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "logging:\n"
            "  level: debug\n"
            "  file: out.log\n"
            "analysis:\n"
            "  max_chain_depth: 4\n"
            "payload:\n"
            "  invalid_positions: [OP]\n"
        )
        config = ConfigManager(str(path), required=True).get_config()

        assert config.logging.level == "DEBUG"
        assert config.logging.file == "out.log"
        assert config.logging.max_size_mb == 10
        assert config.analysis.max_chain_depth == 4
        assert config.payload.invalid_positions == ["OP"]
        assert config.payload.default_position_fixes == {"RB/WR": "WR"}

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        config = ConfigManager(str(path)).get_config()
        assert config.logging.backup_count == 5

    @pytest.mark.parametrize("body", [
        "logging:\n  level: LOUD\n",
        "analysis:\n  max_chain_depth: 0\n",
        "analysis:\n  max_chain_depth: deep\n",
        "logging:\n  max_size_mb: -1\n",
        "- just\n- a list\n",
    ])
    def test_invalid_values(self, tmp_path, body):
        """Bad values are rejected with ValueError."""
        path = tmp_path / "config.yaml"
        path.write_text(body)

        with pytest.raises(ValueError):
            ConfigManager(str(path)).get_config()

    def test_reload_picks_up_changes(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("analysis:\n  max_chain_depth: 3\n")
        manager = ConfigManager(str(path))
        assert manager.get_config().analysis.max_chain_depth == 3

        path.write_text("analysis:\n  max_chain_depth: 6\n")
        assert manager.get_config().analysis.max_chain_depth == 3
        assert manager.reload_config().analysis.max_chain_depth == 6
