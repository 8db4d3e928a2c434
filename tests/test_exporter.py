"""Tests for the Markdown report exporter."""

from datetime import datetime

import pytest

from core.exceptions import ConfigurationError
from processors.exporter import ExportConfiguration, MarkdownExporter
from processors.search_engine import SearchResult


GENERATED_AT = datetime(2024, 5, 1, 8, 30, 0)


@pytest.fixture
def make_result(make_entry):
    def _make(content, start=0.0, source='movie.srt', keyword='hello'):
        return SearchResult.from_entry(make_entry(content, start=start, source=source), keyword)
    return _make


def _bullet_lines(report):
    return [line for line in report.splitlines() if line.startswith('- **[')]


def test_interval_and_max_results_across_groups(make_result):
    a_results = [make_result(f"a-{i:02d}", start=i * 10, source='a.srt') for i in range(12)]
    b_results = [make_result(f"b-{i:02d}", start=i * 10, source='b.srt') for i in range(13)]
    results = list(reversed(b_results)) + list(reversed(a_results))

    report = MarkdownExporter.render(
        results, ExportConfiguration("x", max_results=10, interval=2), GENERATED_AT
    )

    contents = [line.split('** ', 1)[1] for line in _bullet_lines(report)]
    assert contents == [
        "a-00", "a-02", "a-04", "a-06", "a-08", "a-10",
        "b-00", "b-02", "b-04", "b-06",
    ]
    assert "Total results: 25" in report
    assert "Export settings: max results 10, interval 2" in report


def test_exact_layout(make_result):
    result = make_result("Hello\nthere", start=3661.5, source='a.srt')

    report = MarkdownExporter.render([result], ExportConfiguration("hello"), GENERATED_AT)

    assert report == (
        '# VidSearch Export: search keyword "hello"\n\n'
        'Exported at: 2024-05-01 08:30:00\n'
        'Total results: 1\n'
        'Export settings: max results 100, interval 1\n\n'
        '---\n\n'
        '## Grouped by: a.mp4\n\n'
        '- **[01:01:01]** Hello there\n'
        '\n---\n\n'
        '\n*Generated automatically by VidSearch*\n'
    )


def test_empty_results_still_render_header_and_footer():
    report = MarkdownExporter.render([], ExportConfiguration("nothing"), GENERATED_AT)
    assert report.startswith('# VidSearch Export: search keyword "nothing"')
    assert "Total results: 0" in report
    assert "## Grouped by" not in report
    assert report.endswith("*Generated automatically by VidSearch*\n")


def test_groups_sorted_by_video_name(make_result):
    results = [make_result("from b", source='b.srt'), make_result("from a", source='a.srt')]
    groups = MarkdownExporter.group_by_video(results)
    assert list(groups) == ["a.mp4", "b.mp4"]


def test_group_uses_existing_video_name(tmp_path, make_result):
    (tmp_path / 'talk.mov').touch()
    report = MarkdownExporter.render(
        [make_result("hello", source='talk.srt')], ExportConfiguration("hello"), GENERATED_AT
    )
    assert "## Grouped by: talk.mov" in report


def test_max_results_stops_before_next_group(make_result):
    results = [make_result("one", source='a.srt'), make_result("two", source='b.srt')]
    report = MarkdownExporter.render(results, ExportConfiguration("x", max_results=1), GENERATED_AT)
    assert len(_bullet_lines(report)) == 1
    assert "## Grouped by: b.mp4" not in report


def test_entry_line_flattens_newlines(make_result):
    line = MarkdownExporter.format_entry_line(make_result("line one\nline two ", start=1))
    assert line == "- **[00:00:01]** line one line two\n"


@pytest.mark.parametrize("kwargs", [
    {"max_results": 0},
    {"max_results": -1},
    {"interval": 0},
    {"interval": True},
    {"max_results": 2.5},
])
def test_invalid_configuration(kwargs):
    with pytest.raises(ConfigurationError):
        ExportConfiguration("x", **kwargs)


def test_default_file_name():
    name = MarkdownExporter.default_file_name(" a/b\\c ", GENERATED_AT)
    assert name == "VidSearch_a_b_c_20240501_083000.md"
