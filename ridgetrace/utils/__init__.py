"""
Utility modules for the ridge trace framework.
"""

from .config import (
    Config,
    DataConfig,
    ProcessingConfig,
    LoggingConfig,
    load_config,
    load_yaml,
    merge_configs,
    config_from_dict,
    get_extra_config,
    DEFAULT_CONFIG
)
from .logger import (
    ExperimentLogger,
    ProgressTracker,
    setup_logger
)
from .io import (
    load_raster,
    save_raster,
    decode_raster,
    encode_png,
    encode_png_data_url,
    discover_images,
    load_json,
    save_json,
    SUPPORTED_EXTENSIONS
)

__all__ = [
    # Config
    'Config',
    'DataConfig',
    'ProcessingConfig',
    'LoggingConfig',
    'load_config',
    'load_yaml',
    'merge_configs',
    'config_from_dict',
    'get_extra_config',
    'DEFAULT_CONFIG',
    # Logger
    'ExperimentLogger',
    'ProgressTracker',
    'setup_logger',
    # IO
    'load_raster',
    'save_raster',
    'decode_raster',
    'encode_png',
    'encode_png_data_url',
    'discover_images',
    'load_json',
    'save_json',
    'SUPPORTED_EXTENSIONS',
]
