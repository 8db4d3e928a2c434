"""Tests for the in-memory subtitle index."""

import threading

import pytest

from core.exceptions import ScanCancelledError, ScanError
from processors.scanner import DirectoryScanner
from processors.subtitle_index import SubtitleIndex


@pytest.fixture
def library(tmp_path, write_file):
    write_file('intro.srt', "1\n00:00:01,000 --> 00:00:02,000\nWelcome to the course\n\n"
                            "2\n00:00:03,000 --> 00:00:05,000\nGradient descent\n")
    write_file('part2/deep.vtt', "WEBVTT\n\n00:04.000 --> 00:06.000\nStochastic gradient\n")
    return tmp_path


def test_rebuild_and_search(library):
    index = SubtitleIndex()
    report = index.rebuild(library)

    assert report.files_parsed == 2
    assert len(index) == 3
    assert index.root == library

    results = index.search("gradient")
    assert [result.matched_text for result in results] == ["Gradient descent", "Stochastic gradient"]


def test_entries_for_file_and_search_file(library):
    index = SubtitleIndex()
    index.rebuild(library)

    intro = library / 'intro.srt'
    assert [entry.content for entry in index.entries_for_file(intro)] == [
        "Welcome to the course", "Gradient descent"
    ]
    assert [r.matched_text for r in index.search_file(intro, "gradient")] == ["Gradient descent"]


def test_failed_rebuild_keeps_previous_snapshot(library):
    index = SubtitleIndex()
    index.rebuild(library)
    before = index.entries

    with pytest.raises(ScanError):
        index.rebuild(library / 'missing')

    assert index.entries is before
    assert index.root == library


def test_cancelled_rebuild_keeps_previous_snapshot(library):
    index = SubtitleIndex()
    index.rebuild(library)
    before = index.entries

    cancel = threading.Event()
    cancel.set()
    index.scanner = DirectoryScanner(cancel_event=cancel)
    with pytest.raises(ScanCancelledError):
        index.rebuild(library)

    assert index.entries is before


def test_replace(make_entry):
    index = SubtitleIndex()
    index.replace([make_entry("one"), make_entry("two")])
    assert len(index) == 2
    assert index.root is None


def test_entry_at_and_context(make_entry):
    entries = [make_entry(f"cue {i}", start=i * 10, end=i * 10 + 5) for i in range(6)]

    assert SubtitleIndex.entry_at(entries, 22).content == "cue 2"
    assert SubtitleIndex.entry_at(entries, 20).content == "cue 2"
    assert SubtitleIndex.entry_at(entries, 25).content == "cue 2"
    assert SubtitleIndex.entry_at(entries, 27) is None

    context = SubtitleIndex.context_entries(entries, 1, context=2)
    assert [entry.content for entry in context] == ["cue 0", "cue 1", "cue 2"]

    context = SubtitleIndex.context_entries(entries, 31, context=1)
    assert [entry.content for entry in context] == ["cue 2", "cue 3", "cue 4"]

    assert SubtitleIndex.context_entries(entries, 7) == []
