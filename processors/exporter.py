"""
Markdown report generation for search results.

Results are grouped by video file, groups are ordered by name and entries
by start time. The interval keeps every Nth processed entry and the export
stops as soon as max_results entries have been written.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence
from core.exceptions import ConfigurationError
from utils.constants import (
    APP_NAME,
    DEFAULT_INTERVAL,
    DEFAULT_MAX_RESULTS,
    REPORT_DATE_FORMAT,
    REPORT_FILE_DATE_FORMAT,
    REPORT_FOOTER,
    REPORT_GROUP_HEADER,
    REPORT_TITLE,
)
from utils.logging_config import get_logger
from .search_engine import SearchResult

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExportConfiguration:
    """Limits applied when exporting search results."""
    search_keyword: str
    max_results: int = DEFAULT_MAX_RESULTS
    interval: int = DEFAULT_INTERVAL

    def __post_init__(self):
        for name in ('max_results', 'interval'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")


class MarkdownExporter:
    """Renders search results as a Markdown report."""

    @staticmethod
    def group_by_video(results: Sequence[SearchResult]) -> Dict[str, List[SearchResult]]:
        """
        Group results by the name of their video file.

        Groups come back sorted by video name and each group is sorted by
        start time.
        """
        video_names: Dict[Path, str] = {}
        groups: Dict[str, List[SearchResult]] = {}

        for result in results:
            source_path = result.entry.source_file_path
            if source_path not in video_names:
                video_names[source_path] = result.video_file_name
            groups.setdefault(video_names[source_path], []).append(result)

        return {
            video_name: sorted(groups[video_name], key=lambda r: r.entry.start_time)
            for video_name in sorted(groups)
        }

    @staticmethod
    def format_entry_line(result: SearchResult) -> str:
        """Format one exported result as a bullet line."""
        content = result.entry.content.replace('\n', ' ').strip()
        return f"- **[{result.formatted_time}]** {content}\n"

    @staticmethod
    def render(results: Sequence[SearchResult], config: ExportConfiguration,
               generated_at: Optional[datetime] = None) -> str:
        """
        Render search results as a Markdown report.

        Args:
            results: Search results to export
            config: Export limits and the keyword used as title
            generated_at: Timestamp written in the header (defaults to now)

        Returns:
            Report text
        """
        generated_at = generated_at or datetime.now()

        content = REPORT_TITLE.format(keyword=config.search_keyword) + "\n\n"
        content += f"Exported at: {generated_at.strftime(REPORT_DATE_FORMAT)}\n"
        content += f"Total results: {len(results)}\n"
        content += f"Export settings: max results {config.max_results}, interval {config.interval}\n\n"
        content += "---\n\n"

        exported_count = 0
        processed_count = 0

        for video_name, group in MarkdownExporter.group_by_video(results).items():
            if exported_count >= config.max_results:
                break

            content += REPORT_GROUP_HEADER.format(video=video_name) + "\n\n"

            for result in group:
                if processed_count % config.interval == 0:
                    content += MarkdownExporter.format_entry_line(result)
                    exported_count += 1
                processed_count += 1
                if exported_count >= config.max_results:
                    break

            content += "\n---\n\n"

        content += f"\n{REPORT_FOOTER}\n"

        logger.info(f"Rendered {exported_count} of {len(results)} results "
                    f"(max {config.max_results}, interval {config.interval})")
        return content

    @staticmethod
    def default_file_name(search_keyword: str, now: Optional[datetime] = None) -> str:
        """
        Suggest a report file name for a keyword.

        Example:
            >>> MarkdownExporter.default_file_name("hello", datetime(2024, 5, 1, 8, 30))
            'VidSearch_hello_20240501_083000.md'
        """
        now = now or datetime.now()
        safe_keyword = search_keyword.strip().replace('/', '_').replace('\\', '_')
        return f"{APP_NAME}_{safe_keyword}_{now.strftime(REPORT_FILE_DATE_FORMAT)}.md"
