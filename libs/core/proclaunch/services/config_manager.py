import json
import os
from pathlib import Path

import yaml
from dotenv import find_dotenv, load_dotenv

from proclaunch.errors import ConfigError
from proclaunch.models.config import (
    LaunchConfig,
    LoggingConfig,
    ProclaunchConfig,
    RetryConfig,
    validate_log_level,
)

DEFAULT_CONFIG_PATH = Path("config/proclaunch.yaml")


class ConfigManager:
    """Loads proclaunch settings from a YAML/JSON file and the environment.

    Lookup order for the file: explicit path, ``PROCLAUNCH_CONFIG_PATH``,
    ``config/proclaunch.yaml``. A missing file means defaults.
    Environment overrides: ``PROCLAUNCH_LOG_LEVEL``, ``PROCLAUNCH_LOG_DIR``,
    ``PROCLAUNCH_RETRY_TIMEOUT``, ``PROCLAUNCH_RETRY_INTERVAL``.
    """

    def __init__(self, config_path: Path | None = None, load_env_file: bool = True):
        if load_env_file:
            dotenv_path = find_dotenv(usecwd=True)
            if dotenv_path:
                load_dotenv(dotenv_path)

        if config_path is None:
            env_path = os.getenv("PROCLAUNCH_CONFIG_PATH")
            config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

        self.config_path = Path(config_path).expanduser()
        self.config = self.load_config()

    def load_config(self) -> ProclaunchConfig:
        config_data = self._read_file()

        try:
            config = ProclaunchConfig(
                launch=LaunchConfig(**(config_data.get("launch") or {})),
                retry=RetryConfig(**(config_data.get("retry") or {})),
                logging=LoggingConfig(**(config_data.get("logging") or {})),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration in {self.config_path}: {e}") from e

        self._apply_env_overrides(config)
        return config

    def _read_file(self) -> dict:
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path, "r") as f:
                if self.config_path.suffix in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read configuration {self.config_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration {self.config_path} must be a mapping")
        return data

    def _apply_env_overrides(self, config: ProclaunchConfig) -> None:
        if level := os.getenv("PROCLAUNCH_LOG_LEVEL"):
            try:
                config.logging.level = validate_log_level(level)
            except ValueError as e:
                raise ConfigError(f"PROCLAUNCH_LOG_LEVEL: {e}") from e
        if log_dir := os.getenv("PROCLAUNCH_LOG_DIR"):
            config.logging.log_dir = log_dir

        for name, attr in (
            ("PROCLAUNCH_RETRY_TIMEOUT", "timeout"),
            ("PROCLAUNCH_RETRY_INTERVAL", "interval"),
        ):
            value = os.getenv(name)
            if not value:
                continue
            try:
                setattr(config.retry, attr, float(value))
            except ValueError as e:
                raise ConfigError(f"{name} must be a number, got {value!r}") from e
