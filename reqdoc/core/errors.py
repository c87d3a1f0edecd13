"""
Error hierarchy for reqdoc.

All reqdoc exceptions inherit from ReqdocError, providing a
consistent interface for error handling.
"""

from typing import Any, Optional


class ReqdocError(Exception):
    """Base exception for all reqdoc errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional hint for fixing the error
        context: Optional dict with additional error context
    """

    def __init__(
        self,
        message: str,
        *,
        suggestion: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        parts = [self.message]

        if self.suggestion:
            parts.append(f"\n  Hint: {self.suggestion}")

        return "".join(parts)


class SegmentationConfigError(ReqdocError):
    """Invalid pipeline limits (e.g., a zero max_chunk_size).

    Raised before any segmentation or dispatch starts.
    """
    pass


class ChunkCallError(ReqdocError):
    """A single chunk's inference call failed.

    Recorded on the chunk's PartialResult and logged; the
    dispatcher never raises it to the caller.
    """

    def __init__(
        self,
        message: str,
        *,
        ordinal: int,
        total: int,
        original_error: Optional[Exception] = None,
        **kwargs: Any,
    ):
        self.ordinal = ordinal
        self.total = total
        self.original_error = original_error

        message = f"Chunk {ordinal + 1}/{total}: {message}"
        super().__init__(message, **kwargs)


class AllChunksFailedError(ReqdocError):
    """Every attempted chunk call failed.

    Distinct from the empty-input case, which yields the
    "Not found" sentinel without raising.
    """

    def __init__(
        self,
        message: str = "All chunk analyses failed",
        *,
        chunks_total: int = 0,
        **kwargs: Any,
    ):
        self.chunks_total = chunks_total

        if chunks_total:
            message = f"{message} ({chunks_total} attempted)"

        kwargs.setdefault("suggestion", "Check model availability and API key, then retry")
        super().__init__(message, **kwargs)


class AggregationError(ReqdocError):
    """The final reduction call failed.

    There is no fallback reduction, so this fails the
    whole pipeline invocation.
    """

    def __init__(
        self,
        message: str,
        *,
        original_error: Optional[Exception] = None,
        **kwargs: Any,
    ):
        self.original_error = original_error
        super().__init__(message, **kwargs)


class PipelineTimeoutError(ReqdocError):
    """Raised when a pipeline run exceeds its overall timeout."""

    def __init__(
        self,
        message: str,
        *,
        timeout_seconds: float,
        completed: int = 0,
        total: int = 0,
        **kwargs: Any,
    ):
        self.timeout_seconds = timeout_seconds
        self.completed = completed
        self.total = total

        kwargs.setdefault("suggestion", "Raise the timeout or pass --allow-partial")
        super().__init__(message, **kwargs)


class AnalysisError(ReqdocError):
    """The codebase analysis could not be started."""
    pass
