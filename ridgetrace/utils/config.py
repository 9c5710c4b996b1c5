"""
Configuration management for the ridge trace framework.

This module provides utilities for loading, validating, and accessing
configuration parameters from YAML files.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union
import yaml


@dataclass
class ProcessingConfig:
    """
    Configuration for the trace pipeline.

    `contrast` is accepted for compatibility with existing option files
    but is not used by the pipeline.
    """
    threshold: float = 30.0
    invert: bool = False
    contrast: Optional[float] = None

    def __post_init__(self):
        if self.threshold < 0:
            raise ValueError(f"threshold must be >= 0 (got {self.threshold})")


@dataclass
class DataConfig:
    """Configuration for data paths."""
    input_dir: str = "data/raw"
    output_dir: str = "data/traced"
    history_file: str = "data/history.json"


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    log_dir: str = "logs"
    save_results: bool = True


@dataclass
class Config:
    """
    Main configuration container for the ridge trace framework.

    Attributes:
        data: Data path configurations
        processing: Trace pipeline settings
        logging: Logging configuration
        extra: Any remaining top-level sections
    """
    data: DataConfig = field(default_factory=DataConfig)
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: Dict[str, Any] = field(default_factory=dict)


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        path: Path to the YAML file

    Returns:
        Dictionary containing the configuration

    Raises:
        FileNotFoundError: If the configuration file does not exist
        yaml.YAMLError: If the YAML file is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, 'r') as f:
        return yaml.safe_load(f) or {}


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two configuration dictionaries.

    The override dictionary values take precedence over base values.

    Args:
        base: Base configuration dictionary
        override: Override configuration dictionary

    Returns:
        Merged configuration dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def config_from_dict(config_dict: Dict[str, Any]) -> Config:
    """
    Build a Config object from a plain dictionary.

    Args:
        config_dict: Parsed configuration

    Returns:
        Config object; unknown top-level sections end up in `extra`

    Raises:
        ValueError: If the processing threshold is negative
    """
    config_dict = dict(config_dict)

    data_dict = config_dict.pop('data', None) or {}
    processing_dict = config_dict.pop('processing', None) or {}
    logging_dict = config_dict.pop('logging', None) or {}

    data_config = DataConfig(
        input_dir=data_dict.get('input_dir', 'data/raw'),
        output_dir=data_dict.get('output_dir', 'data/traced'),
        history_file=data_dict.get('history_file', 'data/history.json')
    )

    contrast = processing_dict.get('contrast')
    processing_config = ProcessingConfig(
        threshold=float(processing_dict.get('threshold', 30.0)),
        invert=bool(processing_dict.get('invert', False)),
        contrast=float(contrast) if contrast is not None else None
    )

    logging_config = LoggingConfig(
        level=logging_dict.get('level', 'INFO'),
        log_dir=logging_dict.get('log_dir', 'logs'),
        save_results=logging_dict.get('save_results', True)
    )

    return Config(
        data=data_config,
        processing=processing_config,
        logging=logging_config,
        extra=config_dict
    )


def load_config(
    config_path: Union[str, Path],
    base_config_path: Optional[Union[str, Path]] = None
) -> Config:
    """
    Load configuration from YAML files.

    Optionally merges with a base configuration file.

    Args:
        config_path: Path to the main configuration file
        base_config_path: Optional path to base configuration to merge with

    Returns:
        Config object with loaded settings
    """
    config_dict = load_yaml(config_path)

    if base_config_path is not None:
        base_dict = load_yaml(base_config_path)
        config_dict = merge_configs(base_dict, config_dict)

    return config_from_dict(config_dict)


def get_extra_config(config: Config, key: str, default: Any = None) -> Any:
    """
    Get a value from the extra configuration sections.

    Args:
        config: Configuration object
        key: Dot-separated key path (e.g., 'report.title')
        default: Default value if key not found

    Returns:
        Configuration value or default
    """
    keys = key.split('.')
    value = config.extra

    for k in keys:
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    return value


# Default configuration instance
DEFAULT_CONFIG = Config()
