"""
File discovery and association utilities.

This module provides:
- Sibling lookup between videos, subtitles and notes sharing a base name
- Recursive discovery that skips hidden entries and bundle directories
- Safe report writing
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence
from .constants import (
    NOTE_EXTENSIONS,
    PACKAGE_DIRECTORY_SUFFIXES,
    SUBTITLE_EXTENSIONS,
    VIDEO_EXTENSIONS,
)
from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class VideoFile:
    """A video found on disk with the subtitle and note files beside it."""
    path: Path
    subtitle_paths: List[Path] = field(default_factory=list)
    note_paths: List[Path] = field(default_factory=list)

    @property
    def name(self) -> str:
        """Base name without extension."""
        return self.path.stem


@dataclass
class MediaLibrary:
    """Videos and notes discovered under a directory, each sorted by name."""
    videos: List[VideoFile] = field(default_factory=list)
    notes: List[Path] = field(default_factory=list)


class FileHandler:
    """Handles file lookups and writes with proper error handling and logging."""

    @staticmethod
    def find_sibling(file_path: Path, candidate_extensions: Sequence[str]) -> Optional[Path]:
        """
        Find the first existing sibling with the same base name.

        Extensions are tried in the given order. Nothing is cached, so the
        answer always reflects the file system at call time.

        Args:
            file_path: Subtitle, note or video file
            candidate_extensions: Extensions without dot, in priority order

        Returns:
            Path of the first existing sibling, or None

        Example:
            >>> FileHandler.find_sibling(Path("/media/movie.srt"), VIDEO_EXTENSIONS)
            PosixPath('/media/movie.mp4')
        """
        for candidate in FileHandler._sibling_candidates(file_path, candidate_extensions):
            if candidate.is_file():
                return candidate
        return None

    @staticmethod
    def find_all_siblings(file_path: Path, candidate_extensions: Sequence[str]) -> List[Path]:
        """
        Find every existing sibling with the same base name, in priority order.

        Args:
            file_path: File whose siblings are wanted
            candidate_extensions: Extensions without dot, in priority order

        Returns:
            List of existing sibling paths
        """
        return [candidate
                for candidate in FileHandler._sibling_candidates(file_path, candidate_extensions)
                if candidate.is_file()]

    @staticmethod
    def find_video_for(file_path: Path) -> Optional[Path]:
        """Find the video belonging to a subtitle or note file."""
        return FileHandler.find_sibling(file_path, VIDEO_EXTENSIONS)

    @staticmethod
    def find_subtitles_for(video_path: Path) -> List[Path]:
        """Find all subtitle files belonging to a video."""
        return FileHandler.find_all_siblings(video_path, SUBTITLE_EXTENSIONS)

    @staticmethod
    def find_notes_for(video_path: Path) -> List[Path]:
        """Find all note files belonging to a video."""
        return FileHandler.find_all_siblings(video_path, NOTE_EXTENSIONS)

    @staticmethod
    def _sibling_candidates(file_path: Path, candidate_extensions: Iterable[str]) -> List[Path]:
        base_name = file_path.stem
        return [file_path.parent / f"{base_name}.{ext.lstrip('.')}"
                for ext in candidate_extensions]

    @staticmethod
    def is_hidden(name: str) -> bool:
        """Check if a file or directory name is hidden."""
        return name.startswith('.')

    @staticmethod
    def is_package_directory(name: str) -> bool:
        """Check if a directory is an opaque bundle that should not be entered."""
        return name.lower().endswith(PACKAGE_DIRECTORY_SUFFIXES)

    @staticmethod
    def iter_files(directory: Path, extensions: Sequence[str]) -> List[Path]:
        """
        Recursively list files with one of the given extensions.

        Hidden files, hidden directories and bundle directories are skipped.
        Directories and files are visited in sorted order so discovery order
        is stable between runs.

        Args:
            directory: Root directory
            extensions: Lower-case extensions without dot

        Returns:
            Matching file paths in discovery order

        Raises:
            FileNotFoundError: If directory does not exist
            NotADirectoryError: If directory is not a directory
            OSError: If directory itself cannot be listed
        """
        if not directory.exists():
            raise FileNotFoundError(f"Directory not found: {directory}")
        if not directory.is_dir():
            raise NotADirectoryError(f"Not a directory: {directory}")

        wanted = {ext.lower().lstrip('.') for ext in extensions}
        root = str(directory)

        def on_error(error: OSError) -> None:
            if error.filename is not None and os.path.abspath(error.filename) == os.path.abspath(root):
                raise error
            logger.warning(f"Skipping unreadable directory {error.filename}: {error.strerror}")

        found = []
        for current, dirnames, filenames in os.walk(root, onerror=on_error):
            dirnames[:] = sorted(
                name for name in dirnames
                if not FileHandler.is_hidden(name) and not FileHandler.is_package_directory(name)
            )
            for filename in sorted(filenames):
                if FileHandler.is_hidden(filename):
                    continue
                file_path = Path(current) / filename
                if file_path.suffix.lower().lstrip('.') in wanted and file_path.is_file():
                    found.append(file_path)

        return found

    @staticmethod
    def find_subtitle_files(directory: Path) -> List[Path]:
        """
        Find all subtitle files under a directory.

        Example:
            >>> files = FileHandler.find_subtitle_files(Path("/media/movies"))
            >>> print(f"Found {len(files)} subtitle files")
        """
        subtitle_files = FileHandler.iter_files(directory, SUBTITLE_EXTENSIONS)
        logger.debug(f"Found {len(subtitle_files)} subtitle files in {directory}")
        return subtitle_files

    @staticmethod
    def find_media_files(directory: Path) -> MediaLibrary:
        """
        Find videos and notes under a directory.

        Each video carries its same-name subtitle and note siblings. Both
        lists are sorted by base name.

        Args:
            directory: Directory to search

        Returns:
            MediaLibrary with videos and notes
        """
        paths = FileHandler.iter_files(directory, VIDEO_EXTENSIONS + NOTE_EXTENSIONS)

        videos = []
        notes = []
        for path in paths:
            ext = path.suffix.lower().lstrip('.')
            if ext in VIDEO_EXTENSIONS:
                videos.append(VideoFile(
                    path=path,
                    subtitle_paths=FileHandler.find_subtitles_for(path),
                    note_paths=FileHandler.find_notes_for(path),
                ))
            else:
                notes.append(path)

        videos.sort(key=lambda video: video.name)
        notes.sort(key=lambda note: note.stem)

        logger.debug(f"Found {len(videos)} videos and {len(notes)} notes in {directory}")
        return MediaLibrary(videos=videos, notes=notes)

    @staticmethod
    def safe_write(file_path: Path, content: str, encoding: str = 'utf-8') -> None:
        """
        Write text content to a file, creating parent directories.

        Args:
            file_path: Path to write to
            content: Content to write
            encoding: File encoding to use

        Raises:
            IOError: If write operation fails
        """
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, 'w', encoding=encoding, newline='\n') as f:
                f.write(content)
            logger.debug(f"Successfully wrote file: {file_path}")
        except OSError as e:
            logger.error(f"Failed to write file {file_path}: {e}")
            raise IOError(f"Write operation failed: {e}")
