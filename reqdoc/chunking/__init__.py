"""
Chunking module for processing large content.

Provides segmentation, bounded dispatch and result aggregation
for content that exceeds LLM context windows.

Usage:
    from reqdoc.chunking import segment, ChunkDispatcher, SummaryAggregator

    chunks = segment(blobs, max_chunk_size=12000)
    results = await ChunkDispatcher(client, config).dispatch(chunks, instruction)
    summary = await SummaryAggregator(client).aggregate(results)
"""

from .aggregator import (
    COMBINE_INSTRUCTION,
    SummaryAggregator,
)
from .dispatcher import (
    CHUNK_PROMPT,
    ChunkDispatcher,
    RateGate,
)
from .splitter import (
    ContentSegmenter,
    DelimiterSplitter,
    LineAwareSplitter,
    TextSplitter,
    segment,
)

__all__ = [
    # Splitters
    "TextSplitter",
    "DelimiterSplitter",
    "LineAwareSplitter",
    "ContentSegmenter",
    "segment",
    # Dispatch
    "ChunkDispatcher",
    "RateGate",
    "CHUNK_PROMPT",
    # Aggregation
    "SummaryAggregator",
    "COMBINE_INSTRUCTION",
]
