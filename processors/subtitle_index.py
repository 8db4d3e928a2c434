"""
In-memory subtitle index.

The index holds an immutable snapshot of the corpus. A rebuild only replaces
the snapshot once the scan has finished; a failed or cancelled scan leaves
the previous snapshot in place.
"""

import threading
from pathlib import Path
from typing import List, Optional, Sequence, Tuple
from core.subtitle_formats import SubtitleEntry
from utils.logging_config import get_logger
from .scanner import DirectoryScanner, ScanReport
from .search_engine import SearchEngine, SearchResult

logger = get_logger(__name__)


class SubtitleIndex:
    """Holds the current corpus and answers queries against it."""

    def __init__(self, scanner: Optional[DirectoryScanner] = None):
        """
        Initialize an empty index.

        Args:
            scanner: Scanner used by rebuild(); a sequential one by default
        """
        self.scanner = scanner or DirectoryScanner()
        self._entries: Tuple[SubtitleEntry, ...] = ()
        self._root: Optional[Path] = None
        self._lock = threading.Lock()

    @property
    def entries(self) -> Tuple[SubtitleEntry, ...]:
        """Current corpus snapshot."""
        with self._lock:
            return self._entries

    @property
    def root(self) -> Optional[Path]:
        """Directory the current snapshot was built from."""
        with self._lock:
            return self._root

    def __len__(self) -> int:
        return len(self.entries)

    def rebuild(self, root_directory: Path) -> ScanReport:
        """
        Scan a directory and swap in the new corpus.

        Raises:
            ScanError, ScanCancelledError: The previous snapshot stays current
        """
        report = self.scanner.scan_with_report(Path(root_directory))
        self.replace(report.entries, report.root)
        return report

    def replace(self, entries: Sequence[SubtitleEntry], root_directory: Optional[Path] = None) -> None:
        """Swap in a complete corpus."""
        snapshot = tuple(entries)
        with self._lock:
            self._entries = snapshot
            self._root = root_directory
        logger.info(f"Index now holds {len(snapshot)} entries")

    def search(self, raw_query: str) -> List[SearchResult]:
        """Search the current snapshot."""
        return SearchEngine.search(self.entries, raw_query)

    def entries_for_file(self, subtitle_path: Path) -> List[SubtitleEntry]:
        """Entries parsed from one subtitle file, in start time order."""
        subtitle_path = Path(subtitle_path)
        return [entry for entry in self.entries if entry.source_file_path == subtitle_path]

    def search_file(self, subtitle_path: Path, raw_query: str) -> List[SearchResult]:
        """Search only the entries of one subtitle file."""
        return SearchEngine.search(self.entries_for_file(subtitle_path), raw_query)

    @staticmethod
    def entry_at(entries: Sequence[SubtitleEntry], timestamp: float) -> Optional[SubtitleEntry]:
        """
        Find the first entry showing at a timestamp.

        Args:
            entries: Entries of one file, in start time order
            timestamp: Playback position in seconds

        Returns:
            Entry whose [start_time, end_time] contains timestamp, or None
        """
        for entry in entries:
            if entry.start_time <= timestamp <= entry.end_time:
                return entry
        return None

    @staticmethod
    def context_entries(entries: Sequence[SubtitleEntry], timestamp: float,
                        context: int = 2) -> List[SubtitleEntry]:
        """
        Get the entry showing at a timestamp with its neighbours.

        Args:
            entries: Entries of one file, in start time order
            timestamp: Playback position in seconds
            context: Number of neighbours to include on each side

        Returns:
            Up to 2 * context + 1 entries, or [] when nothing shows at timestamp
        """
        for index, entry in enumerate(entries):
            if entry.start_time <= timestamp <= entry.end_time:
                start = max(0, index - context)
                end = min(len(entries), index + context + 1)
                return list(entries[start:end])
        return []
