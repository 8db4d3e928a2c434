"""
Command-line interface for VidSearch.

This module provides the CLI commands for parsing single subtitle files,
scanning directories, searching subtitles, exporting reports and looking up
video/subtitle/note associations.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional
from core.encoding_detection import EncodingDetector
from core.exceptions import ConfigurationError, VidSearchError
from core.subtitle_formats import SubtitleParserRegistry
from processors.exporter import ExportConfiguration, MarkdownExporter
from processors.scanner import DirectoryScanner
from processors.subtitle_index import SubtitleIndex
from utils.config import AppConfig, ConfigFileError
from utils.constants import (
    APP_DESCRIPTION,
    APP_NAME,
    APP_VERSION,
    NOTE_EXTENSIONS,
    SUBTITLE_EXTENSIONS,
    VIDEO_EXTENSIONS,
)
from utils.file_operations import FileHandler
from utils.logging_config import level_from_flags, setup_logging

logger = None  # Will be initialized in setup_cli_logging


def setup_cli_logging(verbose: bool = False, debug: bool = False,
                      use_colors: bool = True, log_file: Optional[Path] = None):
    """Set up logging for CLI operations."""
    global logger

    logger = setup_logging(level=level_from_flags(verbose, debug), log_file=log_file, use_colors=use_colors)
    return logger


def _print_progress(fraction: float, status: str) -> None:
    """Show scan progress on an interactive stderr."""
    if sys.stderr.isatty():
        sys.stderr.write(f"\r[{fraction:4.0%}] {status[:60]:<60}")
        if fraction >= 1.0:
            sys.stderr.write("\n")
        sys.stderr.flush()


class CLIHandler:
    """Handles command-line interface operations."""

    def __init__(self):
        """Initialize the CLI handler."""
        self.config = AppConfig()

    def create_parser(self) -> argparse.ArgumentParser:
        """
        Create the main argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog='vidsearch',
            description=f"{APP_NAME} v{APP_VERSION}\n{APP_DESCRIPTION}",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Search every subtitle below a directory
  vidsearch search /media/lectures "gradient, 梯度"

  # Export the matches as a Markdown report
  vidsearch export /media/lectures "gradient" --max-results 50 --interval 2

  # Parse a single file
  vidsearch parse lecture01.srt

  # Show the files associated with a video
  vidsearch associate lecture01.mp4
            """
        )

        parser.add_argument('--version', action='version', version=f'{APP_NAME} {APP_VERSION}')
        parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose output')
        parser.add_argument('-d', '--debug', action='store_true', help='Enable debug output')
        parser.add_argument('--no-colors', action='store_true', help='Disable colored output')
        parser.add_argument('--log-file', type=Path, help='Also write log messages to this file')
        parser.add_argument('--config', type=Path,
                            help='JSON configuration file (default: ./vidsearch.json if present)')

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        self._add_parse_parser(subparsers)
        self._add_scan_parser(subparsers)
        self._add_search_parser(subparsers)
        self._add_export_parser(subparsers)
        self._add_associate_parser(subparsers)
        self._add_detect_parser(subparsers)

        return parser

    def _add_parse_parser(self, subparsers):
        """Add parse command parser."""
        parse_parser = subparsers.add_parser(
            'parse',
            help='Parse a subtitle file and print its entries',
            description='Parse one SRT, ASS/SSA or WebVTT file'
        )
        parse_parser.add_argument('input', type=Path, help='Subtitle file')

    def _add_scan_parser(self, subparsers):
        """Add scan command parser."""
        scan_parser = subparsers.add_parser(
            'scan',
            help='Scan a directory and summarize its subtitle files',
            description='Recursively parse every subtitle file below a directory'
        )
        scan_parser.add_argument('directory', type=Path, help='Directory to scan')
        self._add_workers_argument(scan_parser)

    def _add_search_parser(self, subparsers):
        """Add search command parser."""
        search_parser = subparsers.add_parser(
            'search',
            help='Search the subtitles below a directory',
            description='Search terms are separated by "," or "，"; an entry matches any term'
        )
        search_parser.add_argument('directory', type=Path, help='Directory to scan')
        search_parser.add_argument('query', help='Search query')
        self._add_workers_argument(search_parser)

    def _add_export_parser(self, subparsers):
        """Add export command parser."""
        export_parser = subparsers.add_parser(
            'export',
            help='Export search results as a Markdown report',
            description='Search the subtitles below a directory and write a grouped report'
        )
        export_parser.add_argument('directory', type=Path, help='Directory to scan')
        export_parser.add_argument('query', help='Search query')
        export_parser.add_argument('-o', '--output', type=Path,
                                   help='Report path (default: VidSearch_<query>_<time>.md)')
        export_parser.add_argument('--max-results', type=int,
                                   help='Maximum number of exported entries')
        export_parser.add_argument('--interval', type=int,
                                   help='Export every Nth result')
        self._add_workers_argument(export_parser)

    def _add_associate_parser(self, subparsers):
        """Add associate command parser."""
        associate_parser = subparsers.add_parser(
            'associate',
            help='Show files associated with a video, subtitle or note',
            description='Look up same-name siblings in the same directory'
        )
        associate_parser.add_argument('input', type=Path, help='Video, subtitle or note file')

    def _add_detect_parser(self, subparsers):
        """Add detect command parser."""
        detect_parser = subparsers.add_parser(
            'detect',
            help='Show how a subtitle file is decoded',
            description='Report the encoding chosen by the decode chain and the detector guess'
        )
        detect_parser.add_argument('input', type=Path, help='Subtitle file')

    @staticmethod
    def _add_workers_argument(subparser):
        subparser.add_argument('-w', '--workers', type=int,
                               help='Number of parser threads (default: 1)')

    def handle_command(self, args) -> int:
        """
        Handle the parsed command-line arguments.

        Args:
            args: Parsed arguments from argparse

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        setup_cli_logging(args.verbose, args.debug, not args.no_colors, args.log_file)

        if not args.command:
            logger.error("No command specified. Use --help for usage information.")
            return 1

        try:
            self.config = AppConfig.load(args.config)
            if self.config.log_file and not args.log_file:
                setup_cli_logging(args.verbose, args.debug, not args.no_colors, self.config.log_file)

            if args.command == 'parse':
                return self._handle_parse(args)
            elif args.command == 'scan':
                return self._handle_scan(args)
            elif args.command == 'search':
                return self._handle_search(args)
            elif args.command == 'export':
                return self._handle_export(args)
            elif args.command == 'associate':
                return self._handle_associate(args)
            elif args.command == 'detect':
                return self._handle_detect(args)
            else:
                logger.error(f"Unknown command: {args.command}")
                return 1

        except KeyboardInterrupt:
            logger.warning("Operation cancelled by user")
            return 1
        except (VidSearchError, ConfigFileError, OSError) as e:
            logger.error(f"{e}")
            if args.debug:
                import traceback
                traceback.print_exc()
            return 1

    def _create_scanner(self, args) -> DirectoryScanner:
        workers = args.workers if args.workers is not None else self.config.max_workers
        if workers < 1:
            raise ConfigurationError(f"--workers must be at least 1, got {workers}")
        return DirectoryScanner(max_workers=workers, progress_callback=_print_progress)

    def _build_index(self, args) -> SubtitleIndex:
        index = SubtitleIndex(self._create_scanner(args))
        report = index.rebuild(args.directory)
        if report.files_failed:
            logger.warning(f"{report.files_failed} of {report.files_found} subtitle files could not be parsed")
        return index

    def _handle_parse(self, args) -> int:
        """Handle parse command."""
        entries = SubtitleParserRegistry.parse_file(args.input)
        for entry in entries:
            text = entry.content.replace('\n', ' / ')
            print(f"#{entry.sequence_number:<5} {entry.format_time_range()}  {text}")
        print(f"\n{len(entries)} entries")
        return 0

    def _handle_scan(self, args) -> int:
        """Handle scan command."""
        scanner = self._create_scanner(args)
        report = scanner.scan_with_report(args.directory)
        print(DirectoryScanner.get_scan_summary(report))
        return 0

    def _handle_search(self, args) -> int:
        """Handle search command."""
        index = self._build_index(args)
        results = index.search(args.query)

        for result in results:
            text = result.highlighted_content.replace('\n', ' ')
            print(f"[{result.formatted_time}] {result.video_file_name}: {text}")

        print(f"\n{len(results)} results in {len(index)} entries")
        return 0

    def _handle_export(self, args) -> int:
        """Handle export command."""
        config = ExportConfiguration(
            search_keyword=args.query,
            max_results=args.max_results if args.max_results is not None else self.config.max_results,
            interval=args.interval if args.interval is not None else self.config.interval,
        )

        index = self._build_index(args)
        results = index.search(args.query)
        if not results:
            logger.warning(f"No results for {args.query!r}; writing an empty report")

        report = MarkdownExporter.render(results, config)
        output_path = args.output or Path.cwd() / MarkdownExporter.default_file_name(args.query)
        FileHandler.safe_write(output_path, report)

        print(f"Exported results for {args.query!r} to {output_path}")
        return 0

    def _handle_associate(self, args) -> int:
        """Handle associate command."""
        ext = args.input.suffix.lower().lstrip('.')

        if ext in VIDEO_EXTENSIONS:
            subtitles = FileHandler.find_subtitles_for(args.input)
            notes = FileHandler.find_notes_for(args.input)
            print(f"Video: {args.input}")
            print("Subtitles:")
            for path in subtitles:
                print(f"  {path}")
            if not subtitles:
                print("  (none)")
            print("Notes:")
            for path in notes:
                print(f"  {path}")
            if not notes:
                print("  (none)")
            return 0

        if ext in SUBTITLE_EXTENSIONS or ext in NOTE_EXTENSIONS:
            video = FileHandler.find_video_for(args.input)
            print(f"File: {args.input}")
            print(f"Video: {video if video else '(none)'}")
            return 0

        logger.error(f"Not a video, subtitle or note file: {args.input}")
        return 1

    def _handle_detect(self, args) -> int:
        """Handle detect command."""
        if not args.input.is_file():
            logger.error(f"Input file not found: {args.input}")
            return 1

        data = args.input.read_bytes()
        _, encoding = EncodingDetector.decode_bytes(data, args.input.name)
        guess = EncodingDetector.detect_encoding(data)

        print(f"File: {args.input}")
        print(f"Size: {len(data)} bytes")
        print(f"UTF-8 BOM: {'yes' if EncodingDetector.has_bom(data) else 'no'}")
        print(f"Decoded as: {encoding}")
        print(f"Detector guess: {guess or 'unknown'}")
        return 0
