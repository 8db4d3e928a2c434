#!/usr/bin/env python3
"""
VidSearch - Main Application Entry Point
========================================

Index the subtitle files of a video collection and search them:
- Subtitle parsing for SRT, ASS/SSA and WebVTT with encoding fallback
- Multi-term search with highlighting
- Markdown export of matched fragments grouped by video
- Video, subtitle and note association

Usage:
    python vidsearch.py search /media/lectures "gradient, 梯度"
    python vidsearch.py export /media/lectures "gradient" -o report.md
    python vidsearch.py parse lecture01.srt

    # Help
    python vidsearch.py --help
    python vidsearch.py <command> --help
"""

import sys
from pathlib import Path

# Add the current directory to Python path for imports
sys.path.insert(0, str(Path(__file__).parent))

from utils.constants import APP_NAME, APP_VERSION
from ui.cli import CLIHandler


def main():
    """
    Main application entry point.

    Parses the command line and dispatches to the CLI handler.
    """
    debug_mode = '--debug' in sys.argv or '-d' in sys.argv

    cli_handler = CLIHandler()
    cli_parser = cli_handler.create_parser()

    if len(sys.argv) == 1:
        cli_parser.print_help()
        sys.exit(0)

    try:
        args = cli_parser.parse_args()
        exit_code = cli_handler.handle_command(args)
        sys.exit(exit_code)
    except SystemExit:
        # argparse calls sys.exit() for --help, --version, etc.
        raise
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if debug_mode:
            import traceback
            traceback.print_exc()
        sys.exit(1)


def print_system_info():
    """Print system and application information."""
    import platform

    print(f"{APP_NAME} v{APP_VERSION}")
    print(f"Python {platform.python_version()}")
    print(f"Platform: {platform.system()} {platform.release()}")
    print()


if __name__ == '__main__':
    if '--debug' in sys.argv:
        print_system_info()

    main()
