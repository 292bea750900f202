"""Unit tests for the config manager."""

import json

import pytest

from proclaunch.errors import ConfigError
from proclaunch.services.config_manager import ConfigManager


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "PROCLAUNCH_CONFIG_PATH",
        "PROCLAUNCH_LOG_LEVEL",
        "PROCLAUNCH_LOG_DIR",
        "PROCLAUNCH_RETRY_TIMEOUT",
        "PROCLAUNCH_RETRY_INTERVAL",
    ):
        monkeypatch.delenv(name, raising=False)


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_missing_file_gives_defaults(self, tmp_path):
        """Test a missing config file yields default values."""
        config = ConfigManager(tmp_path / "missing.yaml", load_env_file=False).config

        assert config.launch.find_pid_retries == 10
        assert config.launch.transient_exit_code == 81
        assert config.retry.timeout == 120.0
        assert config.logging.level == "INFO"

    def test_yaml_file(self, tmp_path):
        """Test values are read from YAML."""
        path = tmp_path / "proclaunch.yaml"
        path.write_text(
            "launch:\n"
            "  find_pid_retries: 20\n"
            "  startup_grace_delay: 3.5\n"
            "retry:\n"
            "  timeout: 30\n"
            "logging:\n"
            "  level: DEBUG\n"
        )

        config = ConfigManager(path, load_env_file=False).config

        assert config.launch.find_pid_retries == 20
        assert config.launch.startup_grace_delay == 3.5
        assert config.launch.find_pid_interval == 0.25
        assert config.retry.timeout == 30
        assert config.logging.level == "DEBUG"

    def test_json_file(self, tmp_path):
        """Test values are read from JSON."""
        path = tmp_path / "proclaunch.json"
        path.write_text(json.dumps({"retry": {"interval": 1.5}}))

        config = ConfigManager(path, load_env_file=False).config

        assert config.retry.interval == 1.5

    def test_path_from_environment(self, tmp_path, monkeypatch):
        """Test PROCLAUNCH_CONFIG_PATH selects the file."""
        path = tmp_path / "custom.yaml"
        path.write_text("launch:\n  transient_exit_code: 75\n")
        monkeypatch.setenv("PROCLAUNCH_CONFIG_PATH", str(path))

        manager = ConfigManager(load_env_file=False)

        assert manager.config_path == path
        assert manager.config.launch.transient_exit_code == 75

    def test_environment_overrides(self, tmp_path, monkeypatch):
        """Test environment variables override file values."""
        path = tmp_path / "proclaunch.yaml"
        path.write_text("retry:\n  timeout: 30\n")
        monkeypatch.setenv("PROCLAUNCH_RETRY_TIMEOUT", "45")
        monkeypatch.setenv("PROCLAUNCH_LOG_LEVEL", "WARNING")

        config = ConfigManager(path, load_env_file=False).config

        assert config.retry.timeout == 45.0
        assert config.logging.level == "WARNING"

    def test_invalid_environment_number(self, tmp_path, monkeypatch):
        """Test a non-numeric override is rejected."""
        monkeypatch.setenv("PROCLAUNCH_RETRY_INTERVAL", "soon")

        with pytest.raises(ConfigError):
            ConfigManager(tmp_path / "missing.yaml", load_env_file=False)

    def test_unknown_key(self, tmp_path):
        """Test unknown keys are reported as config errors."""
        path = tmp_path / "proclaunch.yaml"
        path.write_text("launch:\n  retries: 3\n")

        with pytest.raises(ConfigError):
            ConfigManager(path, load_env_file=False)

    def test_invalid_value(self, tmp_path):
        """Test values rejected by the models are config errors."""
        path = tmp_path / "proclaunch.yaml"
        path.write_text("launch:\n  find_pid_retries: 0\n")

        with pytest.raises(ConfigError):
            ConfigManager(path, load_env_file=False)

    def test_malformed_yaml(self, tmp_path):
        """Test unparsable YAML is a config error."""
        path = tmp_path / "proclaunch.yaml"
        path.write_text("launch: [unclosed\n")

        with pytest.raises(ConfigError):
            ConfigManager(path, load_env_file=False)

    def test_non_mapping(self, tmp_path):
        """Test a top-level list is rejected."""
        path = tmp_path / "proclaunch.yaml"
        path.write_text("- launch\n")

        with pytest.raises(ConfigError):
            ConfigManager(path, load_env_file=False)

    def test_invalid_log_level_in_file(self, tmp_path):
        """Test an unknown log level in the file is a config error."""
        path = tmp_path / "proclaunch.yaml"
        path.write_text("logging:\n  level: loud\n")

        with pytest.raises(ConfigError):
            ConfigManager(path, load_env_file=False)

    def test_invalid_log_level_in_environment(self, tmp_path, monkeypatch):
        """Test an unknown PROCLAUNCH_LOG_LEVEL is a config error."""
        monkeypatch.setenv("PROCLAUNCH_LOG_LEVEL", "verbose")

        with pytest.raises(ConfigError):
            ConfigManager(tmp_path / "missing.yaml", load_env_file=False)

    def test_log_level_normalized(self, tmp_path, monkeypatch):
        """Test lower-case level names are accepted and upper-cased."""
        monkeypatch.setenv("PROCLAUNCH_LOG_LEVEL", "debug")

        config = ConfigManager(tmp_path / "missing.yaml", load_env_file=False).config

        assert config.logging.level == "DEBUG"
