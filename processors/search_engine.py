"""
Multi-term subtitle search with highlighting.

Queries are split on ASCII and CJK commas. An entry matches when its content
contains any term, compared without regard to case or diacritics. Matches
are returned ordered by start time, ties keeping corpus order.
"""

import bisect
import re
import unicodedata
import uuid
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple
from core.subtitle_formats import SubtitleEntry
from utils.constants import HIGHLIGHT_DELIMITER, PLACEHOLDER_VIDEO_EXTENSION, QUERY_DELIMITERS
from utils.logging_config import get_logger

logger = get_logger(__name__)

_DELIMITER_PATTERN = re.compile('[' + re.escape(QUERY_DELIMITERS) + ']')


def fold_char(char: str) -> str:
    """
    Fold one character for comparison.

    Diacritics are removed through canonical decomposition and the rest is
    case-folded. The result may be empty (a bare combining mark) or longer
    than one character ('ß' folds to 'ss').
    """
    decomposed = unicodedata.normalize('NFD', char)
    stripped = ''.join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.casefold()


def fold_text(text: str) -> str:
    """Fold a whole string for case and diacritic insensitive comparison."""
    return ''.join(fold_char(char) for char in text)


def _folded_with_offsets(text: str) -> Tuple[str, List[int], List[bool]]:
    """
    Fold text and keep, for each folded character, the index of the
    original character it came from.
    """
    folded_chars = []
    offsets = []
    empty = []
    for index, char in enumerate(text):
        piece = fold_char(char)
        empty.append(not piece)
        folded_chars.append(piece)
        offsets.extend([index] * len(piece))
    return ''.join(folded_chars), offsets, empty


def find_occurrences(text: str, term: str) -> List[Tuple[int, int]]:
    """
    Find non-overlapping occurrences of term in text, left to right.

    Comparison ignores case and diacritics. Spans are (start, end) indexes
    into the original text; a match ending just before combining marks
    takes those marks along. A character folding to several letters
    ('ß' to "ss") is matched at most once.

    Example:
        >>> find_occurrences("Café, CAFE", "cafe")
        [(0, 4), (6, 10)]
    """
    folded_term = fold_text(term)
    if not folded_term:
        return []

    folded, offsets, empty = _folded_with_offsets(text)
    spans = []
    position = folded.find(folded_term)
    while position != -1:
        start = offsets[position]
        end = offsets[position + len(folded_term) - 1] + 1
        while end < len(text) and empty[end]:
            end += 1
        spans.append((start, end))
        # Resume after the last original character of the match
        position = folded.find(folded_term, bisect.bisect_left(offsets, end))
    return spans


@dataclass(frozen=True)
class SearchResult:
    """A subtitle entry matched by a query, with its highlighted content."""
    entry: SubtitleEntry
    search_keyword: str
    search_terms: Tuple[str, ...]
    highlighted_content: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex, compare=False)

    @classmethod
    def from_entry(cls, entry: SubtitleEntry, search_keyword: str) -> 'SearchResult':
        """Wrap an entry, parsing the keyword and computing highlights eagerly."""
        terms = tuple(SearchEngine.parse_query(search_keyword))
        return cls(
            entry=entry,
            search_keyword=search_keyword,
            search_terms=terms,
            highlighted_content=SearchEngine.highlight(entry.content, terms),
        )

    @property
    def matched_text(self) -> str:
        """The entry's raw content."""
        return self.entry.content

    @property
    def video_file_name(self) -> str:
        """
        Name of the video next to the source subtitle file.

        Falls back to "<subtitle base name>.mp4" when no video exists.
        """
        video_path = self.entry.associated_video_path
        if video_path is not None:
            return video_path.name
        return f"{self.entry.source_file_name}.{PLACEHOLDER_VIDEO_EXTENSION}"

    @property
    def formatted_time(self) -> str:
        """Start time as HH:MM:SS."""
        return self.entry.formatted_start_time


class SearchEngine:
    """Stateless search over a corpus of subtitle entries."""

    @staticmethod
    def parse_query(raw_query: str) -> List[str]:
        """
        Split a raw query into search terms.

        Pieces between ',' or '，' are trimmed and empty pieces dropped.

        Example:
            >>> SearchEngine.parse_query("hello, world")
            ['hello', 'world']
            >>> SearchEngine.parse_query("你好，世界")
            ['你好', '世界']
        """
        trimmed_query = raw_query.strip()
        terms = [piece.strip() for piece in _DELIMITER_PATTERN.split(raw_query)]
        terms = [term for term in terms if term]

        # A query without delimiters stays one term
        if len(terms) == 1 and terms[0] == trimmed_query:
            return [trimmed_query]

        return terms

    @staticmethod
    def matches(content: str, terms: Iterable[str]) -> bool:
        """Check if content contains any of the terms, ignoring case and diacritics."""
        folded_content = fold_text(content)
        for term in terms:
            folded_term = fold_text(term)
            if folded_term and folded_term in folded_content:
                return True
        return False

    @staticmethod
    def highlight(content: str, terms: Sequence[str]) -> str:
        """
        Wrap every occurrence of every term in bold markers.

        Terms are applied one after another, each scanning the output of the
        previous one, so overlapping terms may nest markers. Within one term
        the replacements run right to left so earlier spans keep their
        offsets.

        Example:
            >>> SearchEngine.highlight("Hello hello", ["hello"])
            '**Hello** **hello**'
        """
        result = content
        for term in terms:
            if not term:
                continue
            spans = find_occurrences(result, term)
            for start, end in reversed(spans):
                result = (result[:start]
                          + HIGHLIGHT_DELIMITER + result[start:end] + HIGHLIGHT_DELIMITER
                          + result[end:])
        return result

    @staticmethod
    def search(corpus: Iterable[SubtitleEntry], raw_query: str) -> List[SearchResult]:
        """
        Search a corpus for entries matching any term of the query.

        Args:
            corpus: Entries to search
            raw_query: Query as typed by the user

        Returns:
            Results sorted by start time; equal start times keep corpus order.
            An empty query gives an empty list.
        """
        if not raw_query:
            return []

        terms = SearchEngine.parse_query(raw_query)
        if not terms:
            return []

        results = [SearchResult.from_entry(entry, raw_query)
                   for entry in corpus
                   if SearchEngine.matches(entry.content, terms)]

        results.sort(key=lambda result: result.entry.start_time)
        logger.debug(f"Query {raw_query!r} parsed as {terms}: {len(results)} results")
        return results
