"""
User interface modules.

This package contains the command-line interface for VidSearch.
"""

from .cli import CLIHandler

__all__ = [
    'CLIHandler',
]
