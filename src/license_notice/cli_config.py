"""
Configuration management for license-notice.

Settings come from defaults, then the first config file found in the
standard locations, then LICENSE_NOTICE_* environment variables.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from rich.console import Console

from .error_handling import ErrorCategory, get_error_handler

console = Console(stderr=True)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def decode_escapes(value: str) -> str:
    """Expand backslash escapes such as ``\\n`` while keeping non-ASCII text intact."""
    return value.encode("latin-1", "backslashreplace").decode("unicode_escape")


@dataclass
class OutputConfig:
    """Notice output configuration."""

    separator: str = "\n\n---\n\n"
    include_private: bool = False
    encoding: str = "utf-8"
    output_file: Optional[str] = None


@dataclass
class LoggingConfig:
    """Logging configuration."""

    log_level: str = "WARNING"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class NoticeConfig:
    """Main configuration containing all subsections."""

    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Global configuration instance
_global_config: Optional[NoticeConfig] = None


def validate_config_values(config: NoticeConfig) -> List[str]:
    """
    Validate configuration values and return any errors.

    Args:
        config: Configuration to validate

    Returns:
        List[str]: List of validation errors (empty if valid)
    """
    errors = []

    if not isinstance(config.output.separator, str) or not config.output.separator:
        errors.append("output.separator must be a non-empty string")
    try:
        "".encode(config.output.encoding)
    except (LookupError, TypeError):
        errors.append(f"output.encoding is not a known codec: {config.output.encoding}")

    if str(config.logging.log_level).upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"logging.log_level must be one of {', '.join(VALID_LOG_LEVELS)}"
        )

    return errors


def load_config_file(config_path: Path) -> Optional[Dict[str, Any]]:
    """Load config from a JSON or YAML file."""
    if not config_path.exists():
        return None

    try:
        with open(config_path, encoding="utf-8") as f:
            if config_path.suffix.lower() in [".yaml", ".yml"]:
                return yaml.safe_load(f)
            elif config_path.suffix.lower() == ".json":
                return json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        get_error_handler().warning(
            ErrorCategory.CONFIGURATION,
            f"Error loading config from {config_path.name}: {e}",
            __name__,
            "load_config_file",
            exception=e,
        )
        console.print(
            f"⚠️  Error loading config from {config_path}: {e}", style="yellow"
        )

    return None


def find_config_file() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / ".license-notice.json",
        Path.cwd() / ".license-notice.yaml",
        Path.cwd() / ".license-notice.yml",
        Path.home() / ".config" / "license-notice" / "config.json",
        Path.home() / ".config" / "license-notice" / "config.yaml",
    ]

    for location in locations:
        if location.exists():
            return location

    return None


def load_environment_overrides(config: NoticeConfig) -> None:
    """Apply LICENSE_NOTICE_* environment variables."""

    def get_env_bool(key: str, default: bool = False) -> bool:
        value = os.environ.get(key, "").lower()
        return value in ["true", "1", "yes", "on"] if value else default

    if separator := os.environ.get("LICENSE_NOTICE_SEPARATOR"):
        # Allow "\n" escapes so separators can be given on one line.
        config.output.separator = decode_escapes(separator)
    config.output.include_private = get_env_bool(
        "LICENSE_NOTICE_INCLUDE_PRIVATE", config.output.include_private
    )
    if encoding := os.environ.get("LICENSE_NOTICE_ENCODING"):
        config.output.encoding = encoding

    if log_level := os.environ.get("LICENSE_NOTICE_LOG_LEVEL"):
        config.logging.log_level = log_level.upper()


def apply_config_section(
    config: Any, section_data: Dict[str, Any], section_name: str
) -> None:
    """Apply configuration from dictionary to config section."""
    for key, value in section_data.items():
        if hasattr(config, key):
            setattr(config, key, value)
        else:
            console.print(
                f"⚠️  Unknown config key in {section_name}: {key}", style="yellow"
            )


def load_config() -> NoticeConfig:
    """Load configuration from file and environment."""
    global _global_config

    if _global_config is not None:
        return _global_config

    config = NoticeConfig()

    config_file = find_config_file()
    if config_file:
        file_config = load_config_file(config_file)
        if file_config:
            if "output" in file_config:
                apply_config_section(config.output, file_config["output"], "output")

            if "logging" in file_config:
                apply_config_section(config.logging, file_config["logging"], "logging")

    load_environment_overrides(config)

    validation_errors = validate_config_values(config)
    if validation_errors:
        console.print("⚠️  Configuration validation errors:", style="red")
        for error in validation_errors:
            console.print(f"  • {error}", style="red")
        console.print("Using default values for invalid settings.", style="yellow")
        _reset_invalid_values(config, validation_errors)

    _global_config = config
    return config


def _reset_invalid_values(config: NoticeConfig, errors: List[str]) -> None:
    defaults = NoticeConfig()
    for error in errors:
        section, _, rest = error.partition(".")
        key = rest.split(" ", 1)[0]
        setattr(
            getattr(config, section), key, getattr(getattr(defaults, section), key)
        )


def get_config() -> NoticeConfig:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = load_config()
    return _global_config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _global_config
    _global_config = None


def create_sample_config() -> str:
    """Generate sample configuration."""
    sample_config = {
        "output": {
            "separator": "\n\n---\n\n",
            "include_private": False,
            "encoding": "utf-8",
            "output_file": None,
        },
        "logging": {
            "log_level": "WARNING",
            "log_format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
    }

    return json.dumps(sample_config, indent=2)
