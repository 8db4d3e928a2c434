"""
Time conversion utilities for subtitle processing.

This module provides functions for:
- Parsing SRT, ASS and WebVTT clock values into seconds
- Parsing "start --> end" timing lines
- Formatting seconds for display
"""

import math
from typing import Tuple
from core.exceptions import InvalidSubtitleFormatError
from utils.constants import TIMING_SEPARATOR
from utils.logging_config import get_logger

logger = get_logger(__name__)


class TimeConverter:
    """Handles timecode parsing and formatting for subtitles."""

    @staticmethod
    def time_to_seconds(time_str: str) -> float:
        """
        Convert a clock string to seconds.

        Accepts HH:MM:SS,mmm (SRT), H:MM:SS.cc (ASS), HH:MM:SS.mmm and
        MM:SS.mmm (WebVTT). A comma decimal separator is treated as a period.

        Args:
            time_str: Time string to convert

        Returns:
            Time in seconds as float

        Raises:
            InvalidSubtitleFormatError: If the string has neither 2 nor 3
                fields or a field is not a number

        Example:
            >>> TimeConverter.time_to_seconds("01:30:20,500")
            5420.5
        """
        fields = time_str.strip().replace(',', '.').split(':')
        if len(fields) not in (2, 3):
            raise InvalidSubtitleFormatError(f"Invalid time format: {time_str!r}")

        try:
            values = [float(field) for field in fields]
        except ValueError:
            raise InvalidSubtitleFormatError(f"Invalid time format: {time_str!r}")

        if not all(math.isfinite(value) for value in values):
            raise InvalidSubtitleFormatError(f"Invalid time format: {time_str!r}")

        if len(values) == 2:
            hours = 0.0
            minutes, seconds = values
        else:
            hours, minutes, seconds = values

        return hours * 3600 + minutes * 60 + seconds

    @staticmethod
    def parse_time_range(timing_line: str) -> Tuple[float, float]:
        """
        Parse a "start --> end" timing line.

        Anything after the end clock (WebVTT cue settings such as
        "align:start") is ignored.

        Args:
            timing_line: Line such as "00:01:23,456 --> 00:01:26,789"

        Returns:
            Tuple of (start_seconds, end_seconds)

        Raises:
            InvalidSubtitleFormatError: If the line is not a timing line
        """
        parts = timing_line.split(TIMING_SEPARATOR)
        if len(parts) != 2:
            raise InvalidSubtitleFormatError(f"Invalid timing line: {timing_line!r}")

        start_part = parts[0].strip()
        end_tokens = parts[1].split()
        if not start_part or not end_tokens:
            raise InvalidSubtitleFormatError(f"Invalid timing line: {timing_line!r}")

        start_seconds = TimeConverter.time_to_seconds(start_part)
        end_seconds = TimeConverter.time_to_seconds(end_tokens[0])
        return start_seconds, end_seconds

    @staticmethod
    def seconds_to_display(seconds: float) -> str:
        """
        Format seconds as HH:MM:SS, truncating the fraction.

        Example:
            >>> TimeConverter.seconds_to_display(5420.9)
            '01:30:20'
        """
        total = max(int(seconds), 0)
        hours = total // 3600
        minutes = total % 3600 // 60
        secs = total % 60
        return "%02d:%02d:%02d" % (hours, minutes, secs)

    @staticmethod
    def milliseconds_to_readable(ms: int) -> str:
        """
        Convert milliseconds to readable format (HH:MM:SS.mmm).

        Example:
            >>> TimeConverter.milliseconds_to_readable(3825678)
            '01:03:45.678'
        """
        if ms < 0:
            ms = 0
        hours = ms // 3600000
        ms %= 3600000
        minutes = ms // 60000
        ms %= 60000
        seconds = ms // 1000
        milliseconds = ms % 1000
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{milliseconds:03d}"

    @staticmethod
    def format_duration(seconds: float) -> str:
        """
        Format duration in seconds to human-readable string.

        Example:
            >>> TimeConverter.format_duration(3825.5)
            '1h 3m 45.5s'
        """
        if seconds < 60:
            return f"{seconds:.1f}s"
        elif seconds < 3600:
            minutes = int(seconds // 60)
            remaining_seconds = seconds % 60
            return f"{minutes}m {remaining_seconds:.1f}s"
        else:
            hours = int(seconds // 3600)
            remaining_seconds = seconds % 3600
            minutes = int(remaining_seconds // 60)
            remaining_seconds = remaining_seconds % 60
            return f"{hours}h {minutes}m {remaining_seconds:.1f}s"
