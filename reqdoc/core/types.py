"""
Core type definitions for the analysis pipeline.

These types carry text through the three pipeline stages:
SourceBlob -> Chunk -> PartialResult -> Summary.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .errors import SegmentationConfigError

# Text used in reports for a category with nothing to analyze
NOT_FOUND = "Not found"

DEFAULT_MAX_CHUNK_SIZE = 12000
DEFAULT_CONCURRENT_REQUESTS = 5
DEFAULT_RATE_LIMIT_DELAY = 1.0  # seconds between call issuances


class ChunkOutcome(str, Enum):
    """Outcome of one chunk's inference call."""

    SUCCESS = "success"
    FAILURE = "failure"


class SummaryStatus(str, Enum):
    """How a Summary was produced."""

    COMPLETE = "complete"  # Every chunk succeeded
    PARTIAL = "partial"  # Some chunks failed or were cut off by a timeout
    EMPTY = "empty"  # Nothing to analyze, no inference call made


@dataclass(frozen=True)
class SourceBlob:
    """One unit of raw input text, usually a file's content."""

    text: str
    origin: Optional[str] = None  # Diagnostics only

    def __len__(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class Chunk:
    """A bounded-size text segment destined for one inference call."""

    text: str
    ordinal: int

    def __len__(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class PartialResult:
    """Tagged outcome of one chunk's inference call.

    Successful results carry the response text, failed results
    carry the error message instead.
    """

    ordinal: int
    outcome: ChunkOutcome
    text: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, ordinal: int, text: str) -> "PartialResult":
        return cls(ordinal=ordinal, outcome=ChunkOutcome.SUCCESS, text=text)

    @classmethod
    def failure(cls, ordinal: int, error: str) -> "PartialResult":
        return cls(ordinal=ordinal, outcome=ChunkOutcome.FAILURE, error=error)

    def is_success(self) -> bool:
        """Check if the chunk call succeeded."""
        return self.outcome == ChunkOutcome.SUCCESS


@dataclass(frozen=True)
class Summary:
    """Final combined text of one pipeline invocation."""

    text: str
    status: SummaryStatus
    chunks_total: int = 0
    chunks_failed: int = 0

    @classmethod
    def empty(cls) -> "Summary":
        """The "no content analyzable" sentinel."""
        return cls(text=NOT_FOUND, status=SummaryStatus.EMPTY)

    @property
    def is_empty(self) -> bool:
        return self.status == SummaryStatus.EMPTY

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "text": self.text,
            "status": self.status.value,
            "chunks_total": self.chunks_total,
            "chunks_failed": self.chunks_failed,
        }


@dataclass(frozen=True)
class PipelineConfig:
    """Immutable limits consumed by the segmenter and dispatcher.

    Attributes:
        max_chunk_size: Maximum characters per chunk
        concurrent_requests: Maximum simultaneously in-flight calls
        rate_limit_delay: Minimum seconds between two call issuances
    """

    max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE
    concurrent_requests: int = DEFAULT_CONCURRENT_REQUESTS
    rate_limit_delay: float = DEFAULT_RATE_LIMIT_DELAY

    def validate(self) -> None:
        """Fail fast on limits that cannot produce a valid run.

        Raises:
            SegmentationConfigError: If any limit is out of range
        """
        if self.max_chunk_size < 1:
            raise SegmentationConfigError(
                f"max_chunk_size must be at least 1, got {self.max_chunk_size}",
                suggestion="Set REQDOC_MAX_CHUNK_SIZE to a positive value below the model's input limit",
            )
        if self.concurrent_requests < 1:
            raise SegmentationConfigError(
                f"concurrent_requests must be at least 1, got {self.concurrent_requests}",
            )
        if self.rate_limit_delay < 0:
            raise SegmentationConfigError(
                f"rate_limit_delay must not be negative, got {self.rate_limit_delay}",
            )
