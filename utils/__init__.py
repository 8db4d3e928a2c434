"""
Utility modules.

This package contains shared utility functions and configurations:
- File discovery and video/subtitle/note association
- Logging configuration
- Configuration file loading
- Shared constants
"""

from .file_operations import FileHandler, MediaLibrary, VideoFile
from .logging_config import setup_logging, get_logger
from .config import AppConfig, ConfigFileError
from .constants import (
    SubtitleFormat,
    SUBTITLE_EXTENSIONS,
    VIDEO_EXTENSIONS,
    NOTE_EXTENSIONS,
    DECODE_ORDER,
    UTF8_BOM,
    DEFAULT_MAX_RESULTS,
    DEFAULT_INTERVAL,
    DEFAULT_MAX_WORKERS,
    APP_NAME,
    APP_VERSION,
    APP_DESCRIPTION,
)

__all__ = [
    'FileHandler',
    'MediaLibrary',
    'VideoFile',
    'setup_logging',
    'get_logger',
    'AppConfig',
    'ConfigFileError',
    'SubtitleFormat',
    'SUBTITLE_EXTENSIONS',
    'VIDEO_EXTENSIONS',
    'NOTE_EXTENSIONS',
    'DECODE_ORDER',
    'UTF8_BOM',
    'DEFAULT_MAX_RESULTS',
    'DEFAULT_INTERVAL',
    'DEFAULT_MAX_WORKERS',
    'APP_NAME',
    'APP_VERSION',
    'APP_DESCRIPTION',
]
