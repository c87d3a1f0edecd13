"""
reqdoc - System requirements documents from source repositories.

Selected groups of repository files are split into bounded-size
chunks, analyzed by an LLM under concurrency and rate limits, and
the per-chunk answers are combined into one summary per section.

Usage:
    import asyncio
    import llm
    from reqdoc import ChunkPipeline, ModelLLMClient, PipelineConfig, SourceBlob

    client = ModelLLMClient(llm.get_model())
    pipeline = ChunkPipeline(client, PipelineConfig(max_chunk_size=8000))
    summary = asyncio.run(pipeline.run(
        [SourceBlob(text=open("app.py").read(), origin="app.py")],
        "Describe the architecture of this code.",
    ))
"""

__version__ = "0.1.0"

from .analyzer import (
    ANALYSIS_CATEGORIES,
    AnalysisCategory,
    AnalysisReport,
    CategoryResult,
    CodebaseAnalyzer,
)
from .chunking import (
    ChunkDispatcher,
    ContentSegmenter,
    SummaryAggregator,
    segment,
)
from .config import (
    ReqdocSettings,
    get_settings,
)
from .core import (
    NOT_FOUND,
    AggregationError,
    AllChunksFailedError,
    AnalysisError,
    Chunk,
    ChunkCallError,
    ChunkOutcome,
    PartialResult,
    PipelineConfig,
    PipelineTimeoutError,
    ReqdocError,
    SegmentationConfigError,
    SourceBlob,
    Summary,
    SummaryStatus,
)
from .llm_client import ModelLLMClient
from .pipeline import ChunkPipeline
from .protocols import LLMClient
from .report import DocumentGenerator

__all__ = [
    # Version
    "__version__",
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
    "SourceBlob",
    "Chunk",
    "ChunkOutcome",
    "PartialResult",
    "Summary",
    "SummaryStatus",
    "PipelineConfig",
    # Pipeline
    "segment",
    "ContentSegmenter",
    "ChunkDispatcher",
    "SummaryAggregator",
    "ChunkPipeline",
    # Analysis and report
    "AnalysisCategory",
    "ANALYSIS_CATEGORIES",
    "CategoryResult",
    "AnalysisReport",
    "CodebaseAnalyzer",
    "DocumentGenerator",
    # Protocols and clients
    "LLMClient",
    "ModelLLMClient",
    # Config
    "ReqdocSettings",
    "get_settings",
]
