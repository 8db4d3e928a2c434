"""
Exception types raised by the subtitle indexing pipeline.

Each class also derives from the closest built-in exception, so code that
catches FileNotFoundError, ValueError or IOError keeps working.
"""


class VidSearchError(Exception):
    """Base class for all VidSearch errors."""
    pass


class SubtitleParseError(VidSearchError):
    """Raised when a subtitle file cannot be turned into entries."""
    pass


class SubtitleFileNotFoundError(SubtitleParseError, FileNotFoundError):
    """Raised when the subtitle file does not exist."""
    pass


class SubtitleEncodingError(SubtitleParseError, ValueError):
    """Raised when no decoding in the fallback chain accepts the file."""
    pass


class InvalidSubtitleFormatError(SubtitleParseError, ValueError):
    """Raised for malformed timecodes and files yielding no entries."""
    pass


class UnsupportedSubtitleFormatError(SubtitleParseError, ValueError):
    """Raised when no registered parser handles the file extension."""
    pass


class ScanError(VidSearchError, IOError):
    """Raised when the scan root cannot be enumerated."""
    pass


class ScanCancelledError(VidSearchError):
    """Raised when a scan is cancelled between two files."""
    pass


class ConfigurationError(VidSearchError, ValueError):
    """Raised for invalid export or application settings."""
    pass
