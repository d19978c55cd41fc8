"""
Transfer settings management.

This module loads transfer settings from pyproject.toml (or project.toml)
and environment variables, with environment variables taking precedence.
"""

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, get_args

from .exceptions import ConfigurationError
from .types import WriteStrategyName

WRITE_STRATEGIES = get_args(WriteStrategyName)


@dataclass
class TransferSettings:
    """Static settings applied to every transfer."""

    write_strategy: WriteStrategyName = "streaming"
    partition_size: int = 5
    max_workers: int = 4
    token_lifetime: int = 300  # Seconds, for impersonated credentials
    probe_table: bool = True
    job_labels: dict[str, str] = field(default_factory=dict)


class TransferSettingsManager:
    """Manages transfer settings from multiple sources."""

    ENV_MAPPINGS = {
        "BQPLANE_WRITE_STRATEGY": "write_strategy",
        "BQPLANE_PARTITION_SIZE": "partition_size",
        "BQPLANE_MAX_WORKERS": "max_workers",
        "BQPLANE_TOKEN_LIFETIME": "token_lifetime",
        "BQPLANE_PROBE_TABLE": "probe_table",
    }

    INT_FIELDS = ("partition_size", "max_workers", "token_lifetime")

    def __init__(self, project_root: str | None = None) -> None:
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.logger = logging.getLogger(self.__class__.__name__)

    def load_settings(self) -> TransferSettings:
        """
        Load settings from the TOML file and environment variables.

        Returns:
            TransferSettings with merged configuration

        Raises:
            ConfigurationError: If a setting has an invalid value
        """
        merged = self._load_toml_config()
        merged.update(self._load_env_config())
        return self._create_settings(merged)

    def _load_toml_config(self) -> dict[str, Any]:
        """Load the [tool.bqplane] table from pyproject.toml or project.toml."""
        toml_file = self.project_root / "pyproject.toml"
        if not toml_file.exists():
            toml_file = self.project_root / "project.toml"
            if not toml_file.exists():
                self.logger.debug("No pyproject.toml or project.toml found")
                return {}

        try:
            with open(toml_file, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            self.logger.warning(f"Could not read {toml_file.name}: {e}")
            return {}

        return dict(data.get("tool", {}).get("bqplane", {}))

    def _load_env_config(self) -> dict[str, Any]:
        """Load configuration from environment variables."""
        env_config = {}
        for env_var, config_key in self.ENV_MAPPINGS.items():
            value = os.getenv(env_var)
            if value is not None:
                env_config[config_key] = value
        return env_config

    def _create_settings(self, config_dict: dict[str, Any]) -> TransferSettings:
        """Validate raw values and build TransferSettings."""
        settings = TransferSettings()

        if "write_strategy" in config_dict:
            strategy = str(config_dict["write_strategy"]).lower()
            if strategy not in WRITE_STRATEGIES:
                raise ConfigurationError(
                    f"Unsupported write strategy: {strategy}. Supported: {list(WRITE_STRATEGIES)}"
                )
            settings.write_strategy = strategy

        for key in self.INT_FIELDS:
            if key not in config_dict:
                continue
            try:
                value = int(config_dict[key])
            except (TypeError, ValueError):
                raise ConfigurationError(f"{key} must be an integer") from None
            if value <= 0:
                raise ConfigurationError(f"{key} must be positive")
            setattr(settings, key, value)

        if "probe_table" in config_dict:
            settings.probe_table = _parse_bool(config_dict["probe_table"])

        labels = config_dict.get("job_labels")
        if labels:
            if not isinstance(labels, dict):
                raise ConfigurationError("job_labels must be a table of strings")
            settings.job_labels = {str(k): str(v) for k, v in labels.items()}

        return settings


TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigurationError(f"probe_table must be a boolean, got {value!r}")


def load_settings(project_root: str | None = None) -> TransferSettings:
    """
    Convenience function to load transfer settings.

    Args:
        project_root: Directory holding pyproject.toml (defaults to current directory)

    Returns:
        TransferSettings object
    """
    return TransferSettingsManager(project_root).load_settings()
