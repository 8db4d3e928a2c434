"""Shared fixtures for the VidSearch test suite."""

import logging
from pathlib import Path

import pytest

from core.subtitle_formats import SubtitleEntry
from utils.constants import APP_LOGGER_NAME


SRT_SAMPLE = """1
00:00:05,000 --> 00:00:07,000
Second cue in time

2
00:00:01,000 --> 00:00:03,500
Hello world
Multi line

3
garbage timing
this block is skipped
"""

ASS_SAMPLE = r"""[Script Info]
Title: Sample
ScriptType: v4.00+

[V4+ Styles]
Format: Name, Fontname, Fontsize
Style: Default,Arial,20

[Events]
Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text
Dialogue: 0,0:00:05.00,0:00:06.00,Default,,0,0,0,,Later line
Dialogue: 0,0:00:01.50,0:00:03.00,Default,,0,0,0,,{\pos(10,20)\fs20}Hello, world\Nsecond\hline
Comment: 0,0:00:00.00,0:00:01.00,Default,,0,0,0,,not dialogue
Dialogue: 0,bad,0:00:03.00,Default,,0,0,0,,broken timing
"""

VTT_SAMPLE = """WEBVTT
Kind: captions

NOTE this is a comment
spanning two lines

intro
00:00:05.000 --> 00:00:07.000 align:start position:10%
With identifier

00:01.000 --> 00:02.500
Short clock form

bad-cue
not a timing line
ignored text
"""


@pytest.fixture
def write_file(tmp_path):
    """Factory writing text or bytes below tmp_path and returning the path."""
    def _write(relative_path, content, encoding='utf-8'):
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode(encoding))
        return path
    return _write


@pytest.fixture
def make_entry(tmp_path):
    """Factory building SubtitleEntry objects without touching the parsers."""
    def _make(content, start=0.0, end=None, source='movie.srt', sequence=1):
        source_path = source if isinstance(source, Path) else tmp_path / source
        return SubtitleEntry(
            start_time=start,
            end_time=start + 1.0 if end is None else end,
            content=content,
            source_file_path=source_path,
            sequence_number=sequence,
        )
    return _make


@pytest.fixture
def srt_file(write_file):
    return write_file('movie.srt', SRT_SAMPLE)


@pytest.fixture
def ass_file(write_file):
    return write_file('episode.ass', ASS_SAMPLE)


@pytest.fixture
def vtt_file(write_file):
    return write_file('lecture.vtt', VTT_SAMPLE)


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers installed by setup_logging so they never outlive a test."""
    yield
    logger = logging.getLogger(APP_LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
