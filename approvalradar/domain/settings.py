"""Scan settings.

Settings are resolved from three layers, lowest precedence first:
built-in defaults, an optional YAML file, then command-line flags.

Parse-once pattern: the YAML mapping is parsed into a typed ScanSettings
at the boundary using the from_file() factory method.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

from approvalradar.domain.errors import ConfigError

DEFAULT_REGION = "us-east-2"
DEFAULT_TIMEOUT_MINUTES = 10.0

CONFIG_ENV_VAR = "APPROVALRADAR_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "approvalradar" / "config.yaml"

# YAML key -> ScanSettings field
_YAML_KEYS = {
    "region": "region",
    "mine": "return_mine",
    "debug": "debug",
    "timeout_minutes": "timeout_minutes",
}


@dataclass(frozen=True)
class ScanSettings:
    """Everything a scan needs to know besides credentials."""

    region: str = DEFAULT_REGION
    return_mine: bool = False
    debug: bool = False
    timeout_minutes: float = DEFAULT_TIMEOUT_MINUTES

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict) -> ScanSettings:
        """Parse settings from a YAML mapping. Unknown keys are ignored.

        Raises:
            ConfigError: If a value has the wrong type
        """
        values = {}
        for key, name in _YAML_KEYS.items():
            if key in data and data[key] is not None:
                values[name] = data[key]
        return cls()._with_values(values)

    @classmethod
    def from_file(cls, path: Path) -> ScanSettings:
        """Load settings from a YAML file.

        Args:
            path: Path to the YAML file

        Returns:
            Typed ScanSettings instance

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        try:
            text = path.read_text()
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return cls.from_dict(data)

    @classmethod
    def load(cls, config_path: str | None = None, **overrides) -> ScanSettings:
        """Resolve settings from defaults, the config file and CLI overrides.

        Args:
            config_path: Explicit config file path (--config). Falls back to
                $APPROVALRADAR_CONFIG, then the default path.
            **overrides: Flag values; None means "not given"

        Returns:
            The merged ScanSettings

        Raises:
            ConfigError: If an explicitly named file is missing or any
                layer is invalid
        """
        explicit = config_path or os.environ.get(CONFIG_ENV_VAR)
        if explicit:
            path = Path(explicit).expanduser()
            if not path.is_file():
                raise ConfigError(f"Config file not found: {path}")
            settings = cls.from_file(path)
        elif DEFAULT_CONFIG_PATH.is_file():
            settings = cls.from_file(DEFAULT_CONFIG_PATH)
        else:
            settings = cls()

        given = {k: v for k, v in overrides.items() if v is not None}
        return settings._with_values(given)

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_minutes * 60

    # --------------------------------------------------------
    # Private Methods
    # --------------------------------------------------------

    def _with_values(self, values: dict) -> ScanSettings:
        known = {f.name for f in fields(self)}
        unknown = set(values) - known
        if unknown:
            raise ConfigError(f"Unknown settings: {', '.join(sorted(unknown))}")

        if "region" in values and not isinstance(values["region"], str):
            raise ConfigError(f"region must be a string, got {values['region']!r}")
        for name in ("return_mine", "debug"):
            if name in values and not isinstance(values[name], bool):
                raise ConfigError(f"{name} must be true or false, got {values[name]!r}")
        if "timeout_minutes" in values:
            timeout = values["timeout_minutes"]
            is_number = isinstance(timeout, (int, float)) and not isinstance(timeout, bool)
            if not is_number or not math.isfinite(timeout) or timeout <= 0:
                raise ConfigError(f"timeout_minutes must be a positive number, got {timeout!r}")
            values = {**values, "timeout_minutes": float(timeout)}

        return replace(self, **values)
