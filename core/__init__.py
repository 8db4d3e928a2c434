"""
Core subtitle processing modules.

This package contains the fundamental components for subtitle processing:
- Subtitle entry model and format parsers (SRT, ASS/SSA, VTT)
- Parser registry dispatching by file extension
- Encoding fallback decoding
- Timecode parsing and formatting
- Error types
"""

from .exceptions import (
    VidSearchError,
    SubtitleParseError,
    SubtitleFileNotFoundError,
    SubtitleEncodingError,
    InvalidSubtitleFormatError,
    UnsupportedSubtitleFormatError,
    ScanError,
    ScanCancelledError,
    ConfigurationError,
)
from .subtitle_formats import (
    SubtitleEntry,
    SubtitleParser,
    SRTParser,
    ASSParser,
    VTTParser,
    SubtitleParserRegistry,
)
from .encoding_detection import EncodingDetector
from .timing_utils import TimeConverter

__all__ = [
    'VidSearchError',
    'SubtitleParseError',
    'SubtitleFileNotFoundError',
    'SubtitleEncodingError',
    'InvalidSubtitleFormatError',
    'UnsupportedSubtitleFormatError',
    'ScanError',
    'ScanCancelledError',
    'ConfigurationError',
    'SubtitleEntry',
    'SubtitleParser',
    'SRTParser',
    'ASSParser',
    'VTTParser',
    'SubtitleParserRegistry',
    'EncodingDetector',
    'TimeConverter',
]
