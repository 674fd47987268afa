"""
Generator configuration.

A GeneratorConfig can be built directly, loaded from a YAML file, or
assembled by the CLI (flags override file values).

YAML format:
    input: data/blocks.json
    output: generated/blocks.py
    run_formatter: true
    format_command: [black, -q]
    log_level: INFO
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

import yaml

from blockgen.backends.python_generator import DEFAULT_FORMAT_COMMAND


class ConfigError(Exception):
    """Raised when a configuration file is unreadable or invalid."""
    pass


@dataclass
class GeneratorConfig:
    """
    Settings for one generation run.

    Properties:
        input: Schema path (.json, .yaml, .yml)
        output: Generated module path
        run_formatter: Whether to run the external formatter afterwards
        format_command: Formatter command; the output path is appended
        log_level: Logging level name for the CLI
    """

    input: Optional[str] = None
    output: Optional[str] = None
    run_formatter: bool = True
    format_command: List[str] = field(default_factory=lambda: list(DEFAULT_FORMAT_COMMAND))
    log_level: str = "INFO"


def config_from_dict(d: Dict[str, Any]) -> GeneratorConfig:
    known = {f.name for f in fields(GeneratorConfig)}
    unknown = sorted(set(d) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {unknown}")

    config = GeneratorConfig(**d)
    if isinstance(config.format_command, str):
        config.format_command = config.format_command.split()
    if not isinstance(config.format_command, list) or not config.format_command:
        raise ConfigError("format_command must be a non-empty list")
    if not isinstance(config.run_formatter, bool):
        raise ConfigError("run_formatter must be true or false")
    return config


def load_config(filepath: str) -> GeneratorConfig:
    """
    Load a GeneratorConfig from a YAML file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ConfigError: If the file is not a valid configuration
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Config file not found: {filepath}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config {filepath}: {e}") from e

    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config {filepath} must be a mapping")
    return config_from_dict(data)
