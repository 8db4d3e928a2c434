"""
Encoding handling for subtitle files.

Subtitle bytes are decoded with a fixed fallback chain: UTF-8 first (it
rejects invalid byte sequences), then GB18030 for legacy Chinese files,
then Latin-1, which accepts any input. charset-normalizer is only consulted
to report a best guess when the chain ends up at Latin-1.
"""

from pathlib import Path
from typing import Optional, Tuple
from charset_normalizer import from_bytes
from core.exceptions import SubtitleEncodingError, SubtitleFileNotFoundError
from utils.constants import DECODE_ORDER, UTF8_BOM
from utils.logging_config import get_logger

logger = get_logger(__name__)


class EncodingDetector:
    """Decodes subtitle bytes with the UTF-8 / GB18030 / Latin-1 chain."""

    @staticmethod
    def decode_bytes(data: bytes, source_name: str = "<bytes>") -> Tuple[str, str]:
        """
        Decode raw subtitle bytes.

        Args:
            data: Raw file content
            source_name: Name used in log messages

        Returns:
            Tuple of (text, encoding_used)

        Raises:
            SubtitleEncodingError: If no encoding in the chain accepts the data
        """
        for encoding in DECODE_ORDER:
            try:
                text = data.decode(encoding)
            except (UnicodeDecodeError, LookupError):
                logger.debug(f"{source_name} is not valid {encoding}")
                continue

            if encoding == DECODE_ORDER[-1] and len(DECODE_ORDER) > 1:
                guess = EncodingDetector.detect_encoding(data)
                logger.warning(
                    f"Decoded {source_name} as {encoding} fallback"
                    + (f" (charset-normalizer suggests {guess})" if guess else "")
                )
            else:
                logger.debug(f"Decoded {source_name} as {encoding}")
            return text, encoding

        raise SubtitleEncodingError(f"Cannot decode {source_name} with any of {DECODE_ORDER}")

    @staticmethod
    def read_file_with_encoding(file_path: Path) -> Tuple[str, str]:
        """
        Read a subtitle file and decode it with the fallback chain.

        Args:
            file_path: Path to the file to read

        Returns:
            Tuple of (file_content, encoding_used)

        Raises:
            SubtitleFileNotFoundError: If the file does not exist
            SubtitleEncodingError: If the content cannot be decoded
            IOError: If the file exists but cannot be read

        Example:
            >>> content, encoding = EncodingDetector.read_file_with_encoding(Path("movie.srt"))
        """
        if not file_path.is_file():
            raise SubtitleFileNotFoundError(f"Subtitle file not found: {file_path}")

        try:
            data = file_path.read_bytes()
        except FileNotFoundError:
            raise SubtitleFileNotFoundError(f"Subtitle file not found: {file_path}")
        except OSError as e:
            raise IOError(f"Cannot read file {file_path}: {e}")

        return EncodingDetector.decode_bytes(data, file_path.name)

    @staticmethod
    def detect_encoding(data: bytes) -> Optional[str]:
        """
        Ask charset-normalizer for its best guess at the encoding of data.

        Args:
            data: Raw bytes to analyze

        Returns:
            Detected encoding name or None if detection failed
        """
        if not data:
            return None
        best = from_bytes(data).best()
        return best.encoding if best else None

    @staticmethod
    def has_bom(data: bytes) -> bool:
        """Check if data starts with a UTF-8 BOM."""
        return data.startswith(UTF8_BOM)
