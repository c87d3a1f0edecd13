"""
Text splitting strategies for chunking source content.

Content is split at the most structure-preserving boundary available:
- ContentSegmenter: packs whole blobs (files) into chunks
- LineAwareSplitter: packs lines of a blob that is too large on its own
- DelimiterSplitter: cuts a single overlong line after a delimiter,
  falling back to a hard character cut
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable

from ..core.errors import SegmentationConfigError
from ..core.types import DEFAULT_MAX_CHUNK_SIZE, Chunk, SourceBlob

logger = logging.getLogger(__name__)

BLOB_SEPARATOR = "\n\n"
LINE_SEPARATOR = "\n"

# Boundary characters in priority order
DELIMITERS = (" ", ",", ".", ";", "{", "}", "(", ")", "[", "]")


def _check_max_chars(max_chars: int) -> None:
    if max_chars < 1:
        raise SegmentationConfigError(
            f"max_chars must be at least 1, got {max_chars}",
        )


class TextSplitter(ABC):
    """Base class for text splitting strategies."""

    def __init__(self, max_chars: int = DEFAULT_MAX_CHUNK_SIZE):
        _check_max_chars(max_chars)
        self.max_chars = max_chars

    @abstractmethod
    def split(self, text: str) -> list[str]:
        """Split text into chunks.

        Args:
            text: The input text to split

        Returns:
            List of text chunks, none longer than max_chars
        """
        pass


class DelimiterSplitter(TextSplitter):
    """Split a single line at the last delimiter before max_chars.

    Delimiters are tried in priority order (space, comma, period,
    semicolon, brackets). The first one found inside the window wins,
    even if a lower-priority delimiter sits closer to the limit. The
    delimiter stays at the end of the emitted piece. When no delimiter
    occurs in the window the line is cut at exactly max_chars.

    Example:
        splitter = DelimiterSplitter(max_chars=10)
        splitter.split("alpha beta gamma")  # ["alpha ", "beta gamma"]
    """

    def __init__(
        self,
        max_chars: int = DEFAULT_MAX_CHUNK_SIZE,
        delimiters: tuple[str, ...] = DELIMITERS,
    ):
        super().__init__(max_chars)
        self.delimiters = delimiters

    def split(self, text: str) -> list[str]:
        """Split one line into pieces of at most max_chars."""
        pieces: list[str] = []
        remaining = text

        while len(remaining) > self.max_chars:
            split_index = self._find_split(remaining)
            pieces.append(remaining[:split_index])
            remaining = remaining[split_index:]

        if remaining:
            pieces.append(remaining)

        return pieces

    def _find_split(self, text: str) -> int:
        """Return the cut position for the head of text."""
        for delimiter in self.delimiters:
            # Index 0 is skipped so every piece makes progress
            index = text.rfind(delimiter, 1, self.max_chars)
            if index > 0:
                return index + 1

        return self.max_chars


class LineAwareSplitter(TextSplitter):
    """Split text on line boundaries, respecting max_chars.

    Accumulates lines (each followed by a newline) until the next
    line would exceed max_chars, then starts a new chunk. A line
    that cannot fit in a chunk by itself is handed to a
    DelimiterSplitter and its pieces are emitted as separate chunks.

    Example:
        splitter = LineAwareSplitter(max_chars=1000)
        chunks = splitter.split(source_file)
    """

    def __init__(self, max_chars: int = DEFAULT_MAX_CHUNK_SIZE):
        super().__init__(max_chars)
        self.line_splitter = DelimiterSplitter(max_chars)

    def split(self, text: str) -> list[str]:
        """Split text on line boundaries."""
        chunks: list[str] = []
        current_chunk = ""

        for line in text.split(LINE_SEPARATOR):
            entry = line + LINE_SEPARATOR

            # If single line exceeds max, split it at delimiters
            if len(entry) > self.max_chars:
                if current_chunk:
                    chunks.append(current_chunk)
                    current_chunk = ""
                chunks.extend(self.line_splitter.split(line))
                continue

            # Check if adding this line would exceed limit
            if len(current_chunk) + len(entry) > self.max_chars:
                chunks.append(current_chunk)
                current_chunk = entry
            else:
                current_chunk += entry

        if current_chunk:
            chunks.append(current_chunk)

        return chunks


class ContentSegmenter:
    """Pack an ordered sequence of blobs into bounded-size chunks.

    Blobs are appended to a running buffer, each followed by a blank
    line. The buffer is flushed when the next blob would push it past
    max_chars. A blob too large for a chunk of its own flushes the
    buffer and is split by a LineAwareSplitter; its pieces are never
    merged with neighbouring blobs.

    Output is deterministic for a given input and max_chars.

    Example:
        segmenter = ContentSegmenter(max_chars=12000)
        chunks = segmenter.segment(blobs)
    """

    def __init__(self, max_chars: int = DEFAULT_MAX_CHUNK_SIZE):
        _check_max_chars(max_chars)
        self.max_chars = max_chars
        self.blob_splitter = LineAwareSplitter(max_chars)

    def segment(self, blobs: Iterable[SourceBlob]) -> list[Chunk]:
        """Segment blobs into ordinal-numbered chunks."""
        texts: list[str] = []
        current_chunk = ""

        for blob in blobs:
            entry = blob.text + BLOB_SEPARATOR

            if len(entry) > self.max_chars:
                if current_chunk:
                    texts.append(current_chunk)
                    current_chunk = ""
                pieces = self.blob_splitter.split(blob.text)
                logger.debug(
                    f"Split oversize blob {blob.origin or '<unnamed>'} "
                    f"({len(blob.text)} chars) into {len(pieces)} chunks"
                )
                texts.extend(pieces)
            elif len(current_chunk) + len(entry) > self.max_chars:
                texts.append(current_chunk)
                current_chunk = entry
            else:
                current_chunk += entry

        if current_chunk:
            texts.append(current_chunk)

        return [Chunk(text=text, ordinal=i) for i, text in enumerate(texts)]


def segment(
    blobs: Iterable[SourceBlob],
    max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE,
) -> list[Chunk]:
    """Segment blobs into chunks of at most max_chunk_size characters.

    Args:
        blobs: Ordered source blobs
        max_chunk_size: Maximum characters per chunk

    Returns:
        Ordered chunks; empty when blobs is empty

    Raises:
        SegmentationConfigError: If max_chunk_size is below 1
    """
    return ContentSegmenter(max_chunk_size).segment(blobs)
