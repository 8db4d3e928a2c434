"""
Subtitle data structures and format parsers.

This module provides:
- The SubtitleEntry value type shared by the whole pipeline
- Parsers for SRT, ASS/SSA and WebVTT sharing one decoding policy
- A registry dispatching files to parsers by extension

Every parser returns entries sorted by start time. Malformed blocks are
skipped; a file only fails when it yields no entries at all.
"""

import re
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Type
from core.encoding_detection import EncodingDetector
from core.exceptions import InvalidSubtitleFormatError, UnsupportedSubtitleFormatError
from core.timing_utils import TimeConverter
from utils.constants import (
    BOM_CHAR,
    DEFAULT_ASS_EVENT_FORMAT,
    TIMING_SEPARATOR,
    VTT_HEADER,
    VTT_NON_CUE_BLOCKS,
    SubtitleFormat,
)
from utils.file_operations import FileHandler
from utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SubtitleEntry:
    """Represents a single subtitle entry/cue."""
    start_time: float       # Start time in seconds
    end_time: float         # End time in seconds
    content: str            # Text, newlines preserved
    source_file_path: Path  # File the entry was parsed from
    sequence_number: int    # 1-based position assigned by the parser
    id: str = field(default_factory=lambda: uuid.uuid4().hex, compare=False)

    @property
    def formatted_start_time(self) -> str:
        """Start time as HH:MM:SS."""
        return TimeConverter.seconds_to_display(self.start_time)

    @property
    def source_file_name(self) -> str:
        """Source file name without extension."""
        return self.source_file_path.stem

    @property
    def associated_video_path(self) -> Optional[Path]:
        """The video next to the source file, looked up on every access."""
        return FileHandler.find_video_for(self.source_file_path)

    def duration(self) -> float:
        """Get the duration of this entry in seconds."""
        return self.end_time - self.start_time

    def format_time_range(self) -> str:
        """Format the time range as HH:MM:SS.mmm --> HH:MM:SS.mmm."""
        start_str = TimeConverter.milliseconds_to_readable(int(self.start_time * 1000))
        end_str = TimeConverter.milliseconds_to_readable(int(self.end_time * 1000))
        return f"{start_str} --> {end_str}"


def sort_entries(entries: List[SubtitleEntry]) -> List[SubtitleEntry]:
    """Sort entries by start time, keeping the order of equal start times."""
    return sorted(entries, key=lambda entry: entry.start_time)


class SubtitleParser:
    """
    Base class for subtitle format parsers.

    Subclasses declare the formats they handle and implement parse_content().
    """

    formats: Tuple[SubtitleFormat, ...] = ()

    @classmethod
    def can_parse(cls, file_path: Path) -> bool:
        """Check by extension, case-insensitively, whether this parser handles file_path."""
        try:
            return SubtitleFormat.from_extension(file_path.suffix) in cls.formats
        except ValueError:
            return False

    @classmethod
    def parse(cls, file_path: Path) -> List[SubtitleEntry]:
        """
        Parse a subtitle file.

        Args:
            file_path: Path to the subtitle file

        Returns:
            Entries sorted by start time

        Raises:
            SubtitleFileNotFoundError: If the file does not exist
            SubtitleEncodingError: If the file cannot be decoded
            InvalidSubtitleFormatError: If no entry could be parsed
        """
        file_path = Path(file_path)
        content, encoding = EncodingDetector.read_file_with_encoding(file_path)
        logger.debug(f"Read {file_path.name} with encoding: {encoding}")

        entries = cls.parse_content(content, file_path)
        logger.info(f"Parsed {len(entries)} entries from {cls.__name__[:-6]} file: {file_path.name}")
        return entries

    @classmethod
    def parse_content(cls, content: str, source_path: Path) -> List[SubtitleEntry]:
        """Parse decoded file content into sorted entries."""
        raise NotImplementedError

    @staticmethod
    def _require_entries(entries: List[SubtitleEntry], source_path: Path) -> List[SubtitleEntry]:
        if not entries:
            raise InvalidSubtitleFormatError(f"No subtitle entries found in {source_path.name}")
        return sort_entries(entries)

    @staticmethod
    def _non_empty_lines(block: str) -> List[str]:
        return [line.strip() for line in block.splitlines() if line.strip()]


class SRTParser(SubtitleParser):
    """Parser for SRT subtitle format."""

    formats = (SubtitleFormat.SRT,)

    @classmethod
    def parse_content(cls, content: str, source_path: Path) -> List[SubtitleEntry]:
        """
        Parse SRT content.

        Blocks are separated by blank lines. Files mixing CRLF and LF line
        endings are split both ways and the split yielding more non-empty
        blocks wins.
        """
        crlf_blocks = [block.strip() for block in content.split('\r\n\r\n') if block.strip()]
        lf_blocks = [block.strip() for block in content.split('\n\n') if block.strip()]
        blocks = crlf_blocks if len(crlf_blocks) > len(lf_blocks) else lf_blocks

        entries = []
        for block_idx, block in enumerate(blocks):
            try:
                entries.append(cls._parse_block(block, source_path))
            except (InvalidSubtitleFormatError, ValueError) as e:
                logger.debug(f"Skipping SRT block {block_idx} in {source_path.name}: {e}")

        return cls._require_entries(entries, source_path)

    @classmethod
    def _parse_block(cls, block: str, source_path: Path) -> SubtitleEntry:
        lines = cls._non_empty_lines(block)
        if len(lines) < 3:
            raise InvalidSubtitleFormatError(f"Incomplete block: {block!r}")

        index_line = lines[0].replace(BOM_CHAR, '')
        try:
            sequence_number = int(index_line)
        except ValueError:
            raise InvalidSubtitleFormatError(f"Invalid sequence number: {index_line!r}")

        start_time, end_time = TimeConverter.parse_time_range(lines[1])

        return SubtitleEntry(
            start_time=start_time,
            end_time=end_time,
            content='\n'.join(lines[2:]),
            source_file_path=source_path,
            sequence_number=sequence_number
        )


class ASSParser(SubtitleParser):
    """Parser for ASS/SSA subtitle format."""

    formats = (SubtitleFormat.ASS, SubtitleFormat.SSA)

    OVERRIDE_TAG_PATTERN = re.compile(r'\{[^}]*\}')

    @classmethod
    def parse_content(cls, content: str, source_path: Path) -> List[SubtitleEntry]:
        """
        Parse ASS/SSA content.

        Only the [Events] section is read. Its Format line gives the column
        order of the Dialogue lines that follow.
        """
        entries = []
        format_fields: List[str] = []
        in_events = False
        sequence_number = 1

        for line in content.splitlines():
            line = line.strip().lstrip(BOM_CHAR)

            if line.startswith('['):
                in_events = line.lower() == '[events]'
                continue

            if not in_events:
                continue

            lowered = line.lower()
            if lowered.startswith('format:'):
                format_fields = [name.strip() for name in line.split(':', 1)[1].split(',')]
            elif lowered.startswith('dialogue:'):
                try:
                    entry = cls._parse_dialogue_line(
                        line, format_fields or DEFAULT_ASS_EVENT_FORMAT, source_path, sequence_number
                    )
                except (InvalidSubtitleFormatError, ValueError) as e:
                    logger.debug(f"Skipping dialogue line in {source_path.name}: {line} - {e}")
                    continue
                entries.append(entry)
                sequence_number += 1

        return cls._require_entries(entries, source_path)

    @classmethod
    def _parse_dialogue_line(cls, line: str, format_fields: Sequence[str],
                             source_path: Path, sequence_number: int) -> SubtitleEntry:
        """
        Parse a Dialogue line using the column order from the Format line.

        Raises:
            InvalidSubtitleFormatError: If columns are missing or times are invalid
        """
        values = cls.split_dialogue_fields(line.split(':', 1)[1], len(format_fields))
        if len(values) < len(format_fields):
            raise InvalidSubtitleFormatError(
                f"Expected {len(format_fields)} fields, got {len(values)}"
            )

        columns = [name.lower() for name in format_fields]
        try:
            start_idx = columns.index('start')
            end_idx = columns.index('end')
            text_idx = columns.index('text')
        except ValueError:
            raise InvalidSubtitleFormatError(f"Format line lacks Start/End/Text: {format_fields}")

        return SubtitleEntry(
            start_time=TimeConverter.time_to_seconds(values[start_idx]),
            end_time=TimeConverter.time_to_seconds(values[end_idx]),
            content=cls.clean_text(values[text_idx]),
            source_file_path=source_path,
            sequence_number=sequence_number
        )

    @staticmethod
    def split_dialogue_fields(body: str, field_count: int) -> List[str]:
        """
        Split the body of a Dialogue line into at most field_count fields.

        Commas inside {...} override blocks never split. Once field_count - 1
        separators have been consumed, the rest of the line, commas included,
        belongs to the last field.

        Example:
            >>> ASSParser.split_dialogue_fields("0,0:00:01.00,0:00:02.00,Hi, there", 4)
            ['0', '0:00:01.00', '0:00:02.00', 'Hi, there']
        """
        max_splits = max(field_count - 1, 0)
        fields = []
        current = []
        depth = 0

        for char in body:
            if char == '{':
                depth += 1
            elif char == '}' and depth > 0:
                depth -= 1
            elif char == ',' and depth == 0 and len(fields) < max_splits:
                fields.append(''.join(current).strip())
                current = []
                continue
            current.append(char)

        fields.append(''.join(current).strip())
        return fields

    @classmethod
    def clean_text(cls, text: str) -> str:
        """
        Turn ASS dialogue text into plain text.

        Override blocks are removed, \\N and \\n become newlines and \\h
        becomes a space.
        """
        text = cls.OVERRIDE_TAG_PATTERN.sub('', text)
        text = text.replace('\\N', '\n').replace('\\n', '\n')
        text = text.replace('\\h', ' ')
        return text.strip()


class VTTParser(SubtitleParser):
    """Parser for WebVTT subtitle format."""

    formats = (SubtitleFormat.VTT,)

    BLOCK_SEPARATOR = re.compile(r'\r?\n[ \t]*\r?\n')

    @classmethod
    def parse_content(cls, content: str, source_path: Path) -> List[SubtitleEntry]:
        """
        Parse WebVTT content.

        Raises:
            InvalidSubtitleFormatError: If the WEBVTT header is missing or
                no cue could be parsed
        """
        content = content.replace(BOM_CHAR, '')
        lines = content.splitlines()
        if not lines or not lines[0].startswith(VTT_HEADER):
            raise InvalidSubtitleFormatError(f"Missing {VTT_HEADER} header in {source_path.name}")

        blocks = [block.strip() for block in cls.BLOCK_SEPARATOR.split(content)]
        blocks = [block for block in blocks if block and not block.startswith(VTT_HEADER)]

        entries = []
        for block in blocks:
            if block.split(None, 1)[0] in VTT_NON_CUE_BLOCKS:
                continue
            try:
                entries.append(cls._parse_cue(block, source_path, len(entries) + 1))
            except (InvalidSubtitleFormatError, ValueError) as e:
                logger.debug(f"Skipping VTT block in {source_path.name}: {e}")

        return cls._require_entries(entries, source_path)

    @classmethod
    def _parse_cue(cls, block: str, source_path: Path, sequence_number: int) -> SubtitleEntry:
        lines = cls._non_empty_lines(block)
        if len(lines) < 2:
            raise InvalidSubtitleFormatError(f"Incomplete cue: {block!r}")

        # Without "-->" the first line is a cue identifier
        timing_idx = 0 if TIMING_SEPARATOR in lines[0] else 1
        if len(lines) < timing_idx + 2:
            raise InvalidSubtitleFormatError(f"Incomplete cue: {block!r}")

        start_time, end_time = TimeConverter.parse_time_range(lines[timing_idx])

        return SubtitleEntry(
            start_time=start_time,
            end_time=end_time,
            content='\n'.join(lines[timing_idx + 1:]),
            source_file_path=source_path,
            sequence_number=sequence_number
        )


class SubtitleParserRegistry:
    """Dispatches subtitle files to the parser registered for their extension."""

    _parsers: Tuple[Type[SubtitleParser], ...] = (SRTParser, ASSParser, VTTParser)

    @classmethod
    def parsers(cls) -> Tuple[Type[SubtitleParser], ...]:
        """Registered parsers in resolution order."""
        return cls._parsers

    @classmethod
    def resolve(cls, file_path: Path) -> Optional[Type[SubtitleParser]]:
        """
        Get the first parser handling the file's extension.

        Args:
            file_path: Subtitle file path

        Returns:
            Parser class, or None if the extension is not supported
        """
        for parser in cls._parsers:
            if parser.can_parse(Path(file_path)):
                return parser
        return None

    @classmethod
    def parse_file(cls, file_path: Path) -> List[SubtitleEntry]:
        """
        Parse a subtitle file with the parser matching its extension.

        Raises:
            UnsupportedSubtitleFormatError: If no parser handles the extension
            SubtitleFileNotFoundError, SubtitleEncodingError,
            InvalidSubtitleFormatError: From the parser
        """
        file_path = Path(file_path)
        parser = cls.resolve(file_path)
        if parser is None:
            raise UnsupportedSubtitleFormatError(f"Unsupported subtitle format: {file_path.suffix}")

        logger.debug(f"Parsing {file_path} with {parser.__name__}")
        return parser.parse(file_path)
