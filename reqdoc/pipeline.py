"""
Segment -> dispatch -> aggregate pipeline.

Usage:
    pipeline = ChunkPipeline(client, PipelineConfig(max_chunk_size=8000))
    summary = await pipeline.run(blobs, "Describe the data models")
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Iterable, Optional

from .chunking import ChunkDispatcher, ContentSegmenter, SummaryAggregator
from .core.errors import PipelineTimeoutError
from .core.types import PartialResult, PipelineConfig, SourceBlob, Summary

if TYPE_CHECKING:
    from .protocols import LLMClient

logger = logging.getLogger(__name__)


class ChunkPipeline:
    """Turn source blobs into one LLM summary within size and rate limits.

    The configuration is validated on construction, so a bad limit
    fails before any chunk is produced or any call is made.

    Raises:
        SegmentationConfigError: If the configuration is invalid
    """

    def __init__(
        self,
        llm_client: "LLMClient",
        config: Optional[PipelineConfig] = None,
    ):
        self.config = config or PipelineConfig()
        self.config.validate()

        self.segmenter = ContentSegmenter(self.config.max_chunk_size)
        self.dispatcher = ChunkDispatcher(llm_client, self.config)
        self.aggregator = SummaryAggregator(
            llm_client,
            max_input_chars=self.config.max_chunk_size,
        )

    async def run(
        self,
        blobs: Iterable[SourceBlob],
        instruction: str,
        *,
        timeout: Optional[float] = None,
        allow_partial: bool = False,
    ) -> Summary:
        """Run the full pipeline for one analysis task.

        Args:
            blobs: Ordered source blobs
            instruction: System prompt for the per-chunk analysis
            timeout: Optional overall dispatch timeout in seconds
            allow_partial: On timeout, summarize the results collected so
                far instead of raising

        Returns:
            Summary; Summary.empty() when there is nothing to analyze

        Raises:
            AllChunksFailedError: If every chunk call failed
            AggregationError: If the combining call failed
            PipelineTimeoutError: If the timeout expired and partial
                results are not allowed (or none were collected)
        """
        chunks = self.segmenter.segment(blobs)
        if not chunks:
            logger.debug("No content to analyze, skipping inference")
            return await self.aggregator.aggregate([])

        logger.info(f"Segmented content into {len(chunks)} chunks")
        slots: list[Optional[PartialResult]] = [None] * len(chunks)

        try:
            await asyncio.wait_for(
                self.dispatcher.dispatch(chunks, instruction, slots=slots),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            collected = [slot for slot in slots if slot is not None]
            succeeded = sum(1 for r in collected if r.is_success())
            if not allow_partial or not succeeded:
                raise PipelineTimeoutError(
                    f"Chunk analysis timed out after {timeout}s "
                    f"({len(collected)}/{len(chunks)} chunks completed)",
                    timeout_seconds=timeout or 0.0,
                    completed=len(collected),
                    total=len(chunks),
                )
            logger.warning(
                f"Chunk analysis timed out after {timeout}s, summarizing "
                f"{succeeded}/{len(chunks)} completed chunks"
            )

        results = [slot for slot in slots if slot is not None]
        return await self.aggregator.aggregate(results, chunks_total=len(chunks))
