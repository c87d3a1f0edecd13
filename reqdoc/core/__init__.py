"""Core pipeline types and errors."""

from .errors import (
    AggregationError,
    AllChunksFailedError,
    AnalysisError,
    ChunkCallError,
    PipelineTimeoutError,
    ReqdocError,
    SegmentationConfigError,
)
from .types import (
    DEFAULT_CONCURRENT_REQUESTS,
    DEFAULT_MAX_CHUNK_SIZE,
    DEFAULT_RATE_LIMIT_DELAY,
    NOT_FOUND,
    Chunk,
    ChunkOutcome,
    PartialResult,
    PipelineConfig,
    SourceBlob,
    Summary,
    SummaryStatus,
)

__all__ = [
    # Errors
    "ReqdocError",
    "SegmentationConfigError",
    "ChunkCallError",
    "AllChunksFailedError",
    "AggregationError",
    "PipelineTimeoutError",
    "AnalysisError",
    # Types
    "NOT_FOUND",
    "DEFAULT_MAX_CHUNK_SIZE",
    "DEFAULT_CONCURRENT_REQUESTS",
    "DEFAULT_RATE_LIMIT_DELAY",
    "SourceBlob",
    "Chunk",
    "ChunkOutcome",
    "PartialResult",
    "Summary",
    "SummaryStatus",
    "PipelineConfig",
]
