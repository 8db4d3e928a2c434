"""
Directory scanning for subtitle files.

This module walks a directory tree, parses every subtitle file it finds and
concatenates the entries in discovery order. A file that fails to parse is
logged and left out; it never aborts the scan.
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple
from core.exceptions import ScanCancelledError, ScanError, SubtitleParseError
from core.subtitle_formats import SubtitleEntry, SubtitleParserRegistry
from core.timing_utils import TimeConverter
from utils.constants import DEFAULT_MAX_WORKERS
from utils.file_operations import FileHandler
from utils.logging_config import get_logger

logger = get_logger(__name__)

ProgressCallback = Callable[[float, str], None]


@dataclass
class ScanReport:
    """Outcome of a directory scan."""
    root: Path
    entries: List[SubtitleEntry] = field(default_factory=list)
    files_found: int = 0
    files_parsed: int = 0
    failures: List[Tuple[Path, str]] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def files_failed(self) -> int:
        return len(self.failures)


class DirectoryScanner:
    """Finds and parses the subtitle files below a directory."""

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS,
                 progress_callback: Optional[ProgressCallback] = None,
                 cancel_event: Optional[threading.Event] = None):
        """
        Initialize the scanner.

        Args:
            max_workers: Number of parser threads; 1 parses sequentially
            progress_callback: Receives (fraction, status) as files are processed
            cancel_event: When set, the scan stops at the next file boundary
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.max_workers = max_workers
        self.progress_callback = progress_callback
        self.cancel_event = cancel_event
        self._last_fraction = 0.0

    def scan(self, root_directory: Path) -> List[SubtitleEntry]:
        """
        Scan a directory tree and return all parsed entries.

        Entries of one file are sorted by start time; files follow each other
        in discovery order.

        Raises:
            ScanError: If the root directory cannot be enumerated
            ScanCancelledError: If the cancel event was set during the scan

        Example:
            >>> entries = DirectoryScanner().scan(Path("/media/movies"))
        """
        return self.scan_with_report(root_directory).entries

    def scan_with_report(self, root_directory: Path) -> ScanReport:
        """Scan a directory tree and return entries with per-file statistics."""
        root_directory = Path(root_directory)
        started = time.monotonic()
        self._last_fraction = 0.0
        self._report_progress(0.0, "Scanning directory...")

        try:
            subtitle_files = FileHandler.find_subtitle_files(root_directory)
        except OSError as e:
            logger.error(f"Cannot enumerate {root_directory}: {e}")
            raise ScanError(f"Cannot enumerate directory {root_directory}: {e}")

        report = ScanReport(root=root_directory, files_found=len(subtitle_files))
        logger.info(f"Found {len(subtitle_files)} subtitle files in {root_directory}")
        self._report_progress(0.0, f"Found {len(subtitle_files)} subtitle files, parsing...")

        if self.max_workers > 1 and len(subtitle_files) > 1:
            parsed = self._parse_parallel(subtitle_files)
        else:
            parsed = self._parse_sequential(subtitle_files)

        for file_path in subtitle_files:
            entries, error = parsed[file_path]
            if error is not None:
                report.failures.append((file_path, error))
            else:
                report.files_parsed += 1
                report.entries.extend(entries)

        report.elapsed_seconds = time.monotonic() - started
        logger.info(f"Scan complete: {len(report.entries)} entries from "
                    f"{report.files_parsed}/{report.files_found} files "
                    f"in {TimeConverter.format_duration(report.elapsed_seconds)}")
        self._report_progress(1.0, f"Scan complete: {len(report.entries)} entries")
        return report

    def _parse_one(self, file_path: Path) -> Tuple[List[SubtitleEntry], Optional[str]]:
        """Parse a single file, turning parse failures into an error message."""
        try:
            return SubtitleParserRegistry.parse_file(file_path), None
        except (SubtitleParseError, OSError) as e:
            logger.warning(f"✗ Failed to parse {file_path}: {e}")
            return [], str(e)

    def _parse_sequential(self, subtitle_files: List[Path]) -> Dict[Path, Tuple[List[SubtitleEntry], Optional[str]]]:
        parsed = {}
        total = len(subtitle_files)
        for index, file_path in enumerate(subtitle_files):
            self._check_cancelled()
            self._report_progress(index / total, f"Parsing: {file_path.name}")
            parsed[file_path] = self._parse_one(file_path)
        return parsed

    def _parse_parallel(self, subtitle_files: List[Path]) -> Dict[Path, Tuple[List[SubtitleEntry], Optional[str]]]:
        parsed = {}
        total = len(subtitle_files)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_path = {
                executor.submit(self._parse_one, path): path
                for path in subtitle_files
            }

            for completed, future in enumerate(as_completed(future_to_path), 1):
                if self.cancel_event is not None and self.cancel_event.is_set():
                    for pending in future_to_path:
                        pending.cancel()
                    self._check_cancelled()

                file_path = future_to_path[future]
                parsed[file_path] = future.result()
                self._report_progress(completed / total, f"Parsed: {file_path.name}")

        return parsed

    def _check_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            logger.info("Scan cancelled")
            raise ScanCancelledError("Scan cancelled before completion")

    def _report_progress(self, fraction: float, status: str) -> None:
        """Forward progress to the callback, never letting the fraction go back."""
        fraction = min(max(fraction, self._last_fraction), 1.0)
        self._last_fraction = fraction
        logger.debug(f"[{fraction:.0%}] {status}")
        if self.progress_callback is not None:
            self.progress_callback(fraction, status)

    @staticmethod
    def get_scan_summary(report: ScanReport) -> str:
        """
        Generate a human-readable summary of a scan.

        Example:
            >>> print(DirectoryScanner.get_scan_summary(report))
        """
        summary_lines = [
            f"Scan Summary for {report.root}:",
            f"  Subtitle files found: {report.files_found}",
            f"  Parsed: {report.files_parsed}",
        ]

        if report.files_failed > 0:
            summary_lines.append(f"  Failed: {report.files_failed}")
            for file_path, error in report.failures:
                summary_lines.append(f"    - {file_path.name}: {error}")

        summary_lines.append(f"  Entries: {len(report.entries)}")
        summary_lines.append(f"  Time: {TimeConverter.format_duration(report.elapsed_seconds)}")
        return '\n'.join(summary_lines)
