"""
Subtitle processing modules.

This package contains the pipeline stages built on top of the parsers:
- Directory scanning
- The in-memory subtitle index
- Multi-term search with highlighting
- Markdown report export
"""

from .scanner import DirectoryScanner, ScanReport
from .search_engine import SearchEngine, SearchResult
from .subtitle_index import SubtitleIndex
from .exporter import ExportConfiguration, MarkdownExporter

__all__ = [
    'DirectoryScanner',
    'ScanReport',
    'SearchEngine',
    'SearchResult',
    'SubtitleIndex',
    'ExportConfiguration',
    'MarkdownExporter',
]
