"""Configuration management for PyQuill.

Configuration is loaded from (in order of precedence):
1. Environment variables (PYQUILL_*)
2. User config file (~/.pyquill/config.json)
3. Default values

Environment variables:
    PYQUILL_SEARCH_START - Address where the signature search starts
    PYQUILL_JSON_INDENT - Indentation of exported JSON (0 for compact)
    PYQUILL_LOG_LEVEL - Logging level name (DEBUG, INFO, WARNING, ...)
"""

import json
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path

from pyquill.decoder.header import SEARCH_START


# Default config directory
CONFIG_DIR = Path.home() / ".pyquill"
CONFIG_FILE = CONFIG_DIR / "config.json"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class DecoderConfig:
    """Decoder configuration."""

    search_start: int = SEARCH_START


@dataclass
class OutputConfig:
    """JSON export configuration."""

    indent: int = 2
    ensure_ascii: bool = False


@dataclass
class Config:
    """Main configuration container."""

    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log_level: str = "WARNING"

    def to_dict(self) -> dict:
        """Convert to dictionary for saving."""
        return {
            "decoder": asdict(self.decoder),
            "output": asdict(self.output),
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Create from dictionary.

        Raises:
            ValueError: The data does not have the shape of a config.
        """
        if not isinstance(data, dict):
            raise ValueError("Config must be a JSON object")
        config = cls()
        decoder = _section(data, "decoder")
        if "search_start" in decoder:
            config.decoder.search_start = _parse_int(decoder["search_start"])
        output = _section(data, "output")
        if "indent" in output:
            config.output.indent = _parse_int(output["indent"])
        if "ensure_ascii" in output:
            config.output.ensure_ascii = bool(output["ensure_ascii"])
        if str(data.get("log_level", "")).upper() in LOG_LEVELS:
            config.log_level = data["log_level"].upper()
        return config


def _section(data: dict, name: str) -> dict:
    """Get a nested config section, which must be an object if present."""
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ValueError(f"Config section {name!r} must be a JSON object")
    return section


def _parse_int(value) -> int:
    """Parse an integer setting given as a number or a numeric string.

    Strings accept the same decimal or prefixed literals as the environment.
    """
    if isinstance(value, bool):
        raise ValueError(f"Expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value, 0)
    raise ValueError(f"Expected an integer, got {value!r}")


def _get_env_int(key: str, default: int) -> int:
    """Get integer from environment variable.

    Accepts decimal or prefixed hex/octal/binary literals.
    """
    value = os.environ.get(key, "")
    try:
        return int(value, 0)
    except ValueError:
        return default


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from environment and/or file.

    Environment variables take precedence over file config.
    """
    config = Config()
    config_file = config_file or CONFIG_FILE

    # Try to load from file first
    if config_file.exists():
        try:
            with open(config_file) as f:
                data = json.load(f)
                config = Config.from_dict(data)
        except (ValueError, OSError):
            config = Config()  # Use defaults

    # Override with environment variables
    if "PYQUILL_SEARCH_START" in os.environ:
        config.decoder.search_start = _get_env_int(
            "PYQUILL_SEARCH_START", config.decoder.search_start
        )
    if "PYQUILL_JSON_INDENT" in os.environ:
        config.output.indent = _get_env_int("PYQUILL_JSON_INDENT", config.output.indent)
    if os.environ.get("PYQUILL_LOG_LEVEL", "").upper() in LOG_LEVELS:
        config.log_level = os.environ["PYQUILL_LOG_LEVEL"].upper()

    return config


def save_config(config: Config, config_file: Path | None = None) -> None:
    """Save configuration to file."""
    config_file = config_file or CONFIG_FILE
    config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config_file, "w") as f:
        json.dump(config.to_dict(), f, indent=2)


# Global config instance (lazy loaded)
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> Config:
    """Reload configuration from sources."""
    global _config
    _config = load_config()
    return _config
