"""Runner configuration.

Handles optional persistent configuration stored in ~/.crud-e2e/config.yaml.
Supports environment variable overrides and CLI flag precedence.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# Default values
DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_TIMEOUT = 30.0
DEFAULT_INSECURE = False

# Environment variable mappings
ENV_VARS = {
    "base_url": "BASE_URL",
    "timeout": "E2E_TIMEOUT",
    "insecure": "E2E_INSECURE",
}

TRUE_VALUES = ("1", "true", "yes", "on")


def parse_bool(value: Any) -> bool:
    """Interpret a config value as a boolean.

    Real booleans pass through; anything else is true only when its
    lowercased string form is one of TRUE_VALUES.
    """
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


@dataclass
class RunnerConfig:
    """Runner configuration."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    insecure: bool = DEFAULT_INSECURE

    # Track where each value came from
    _sources: dict[str, str] = field(default_factory=dict)

    def get_source(self, key: str) -> str:
        """Get the source of a config value."""
        return self._sources.get(key, "default")

    def override(self, key: str, value: Any) -> None:
        """Apply a CLI flag value, ignoring None."""
        if value is None:
            return
        setattr(self, key, value)
        self._sources[key] = "flag"


def get_config_path() -> Path:
    """Get the config file path.

    Returns:
        Path to ~/.crud-e2e/config.yaml
    """
    return Path.home() / ".crud-e2e" / "config.yaml"


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def load_config() -> RunnerConfig:
    """Load runner configuration.

    Precedence (highest to lowest):
    1. Environment variables
    2. Config file (~/.crud-e2e/config.yaml)
    3. Defaults

    CLI flags are applied afterwards with RunnerConfig.override().

    Returns:
        RunnerConfig with values and sources
    """
    config = RunnerConfig()
    sources: dict[str, str] = {key: "default" for key in ENV_VARS}

    config_path = get_config_path()
    if config_path.exists():
        file_config = _read_config_file(config_path)

        if "base_url" in file_config:
            config.base_url = str(file_config["base_url"])
            sources["base_url"] = "config file"
        if "timeout" in file_config:
            try:
                config.timeout = float(file_config["timeout"])
                sources["timeout"] = "config file"
            except (TypeError, ValueError):
                pass
        if "insecure" in file_config:
            config.insecure = parse_bool(file_config["insecure"])
            sources["insecure"] = "config file"

    # Override with environment variables
    if os.environ.get(ENV_VARS["base_url"]):
        config.base_url = os.environ[ENV_VARS["base_url"]]
        sources["base_url"] = "environment"
    if os.environ.get(ENV_VARS["timeout"]):
        try:
            config.timeout = float(os.environ[ENV_VARS["timeout"]])
            sources["timeout"] = "environment"
        except ValueError:
            pass
    if os.environ.get(ENV_VARS["insecure"]):
        config.insecure = parse_bool(os.environ[ENV_VARS["insecure"]])
        sources["insecure"] = "environment"

    config._sources = sources
    return config
