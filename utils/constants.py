"""
Shared constants and configurations for the VidSearch subtitle indexer.

This module contains all the constants used across different modules including:
- Supported subtitle, video and note file extensions
- Decoding order for subtitle files
- Search and report markup
- Default configuration values
"""

from enum import Enum
from typing import Dict, List, Tuple

# ============================================================================
# FILE FORMAT CONSTANTS
# ============================================================================

class SubtitleFormat(Enum):
    """Supported subtitle formats."""
    SRT = "srt"
    ASS = "ass"
    SSA = "ssa"
    VTT = "vtt"

    @classmethod
    def from_extension(cls, ext: str) -> 'SubtitleFormat':
        """
        Get format from file extension.

        Args:
            ext: File extension (with or without dot)

        Returns:
            SubtitleFormat enum value

        Raises:
            ValueError: If extension is not supported
        """
        ext = ext.lower().lstrip('.')
        ext = FORMAT_ALIASES.get(ext, ext)
        for format_type in cls:
            if format_type.value == ext:
                return format_type
        raise ValueError(f"Unsupported subtitle format: {ext}")


# Extensions that name an existing format under another spelling
FORMAT_ALIASES: Dict[str, str] = {
    'webvtt': 'vtt',
}

# Subtitle extensions, in sibling lookup priority order
SUBTITLE_EXTENSIONS: Tuple[str, ...] = ('srt', 'ass', 'ssa', 'vtt', 'webvtt')

# Video extensions, in sibling lookup priority order
VIDEO_EXTENSIONS: Tuple[str, ...] = ('mp4', 'mov', 'mkv', 'avi', 'm4v', 'wmv', 'flv')

# Note extensions, in sibling lookup priority order
NOTE_EXTENSIONS: Tuple[str, ...] = ('md', 'txt', 'markdown')

# Placeholder extension for results without a video next to them
PLACEHOLDER_VIDEO_EXTENSION: str = 'mp4'

# Directories treated as opaque bundles and never descended into
PACKAGE_DIRECTORY_SUFFIXES: Tuple[str, ...] = (
    '.app', '.bundle', '.framework', '.plugin', '.kext',
    '.photoslibrary', '.fcpbundle', '.imovielibrary', '.tvlibrary',
    '.rtfd', '.xcodeproj', '.xcworkspace',
)

# ============================================================================
# ENCODING CONSTANTS
# ============================================================================

# Decode attempts, in order. latin-1 accepts any byte sequence.
DECODE_ORDER: List[str] = ['utf-8', 'gb18030', 'latin-1']

# UTF-8 BOM marker
UTF8_BOM: bytes = b"\xef\xbb\xbf"
BOM_CHAR: str = '\ufeff'

# ============================================================================
# PARSER CONSTANTS
# ============================================================================

TIMING_SEPARATOR: str = '-->'
VTT_HEADER: str = 'WEBVTT'

# WebVTT blocks that never carry a cue
VTT_NON_CUE_BLOCKS: Tuple[str, ...] = ('NOTE', 'STYLE', 'REGION')

# Events format assumed when an [Events] section has no Format line
DEFAULT_ASS_EVENT_FORMAT: List[str] = [
    'Layer', 'Start', 'End', 'Style', 'Name',
    'MarginL', 'MarginR', 'MarginV', 'Effect', 'Text'
]

# ============================================================================
# SEARCH AND EXPORT CONSTANTS
# ============================================================================

# ASCII comma and CJK full-width comma
QUERY_DELIMITERS: str = ',，'

HIGHLIGHT_DELIMITER: str = '**'

DEFAULT_MAX_RESULTS: int = 100
DEFAULT_INTERVAL: int = 1
DEFAULT_MAX_WORKERS: int = 1

REPORT_TITLE: str = '# VidSearch Export: search keyword "{keyword}"'
REPORT_GROUP_HEADER: str = '## Grouped by: {video}'
REPORT_FOOTER: str = '*Generated automatically by VidSearch*'
REPORT_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'
REPORT_FILE_DATE_FORMAT: str = '%Y%m%d_%H%M%S'

# ============================================================================
# DEFAULT CONFIGURATION VALUES
# ============================================================================

DEFAULT_CONFIG_FILE: str = 'vidsearch.json'

# Log formats; the file log records the worker thread of parallel scans
FILE_LOG_FORMAT: str = '%(asctime)s [%(threadName)s] %(name)s %(levelname)s: %(message)s'
CONSOLE_LOG_FORMAT: str = '%(levelname)s: %(message)s'
DEFAULT_LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'

# Application metadata
APP_NAME: str = "VidSearch"
APP_LOGGER_NAME: str = "vidsearch"
APP_VERSION: str = "1.0.0"
APP_DESCRIPTION: str = """
Index and search the subtitles of a video collection:
- Subtitle parsing for SRT, ASS/SSA and WebVTT with encoding fallback
- Multi-term, case and accent insensitive search with highlighting
- Markdown reports of matched fragments grouped by video
- Subtitle, video and note file association
"""
