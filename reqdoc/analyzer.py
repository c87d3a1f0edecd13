"""
Codebase analysis by category.

Each analysis category selects files by naming convention and runs
them through the chunk pipeline with its own instruction. Dependency
manifests are parsed directly, without an LLM call.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Sequence, Union

from .core.errors import AllChunksFailedError, AnalysisError, PipelineTimeoutError
from .core.types import PipelineConfig, Summary
from .pipeline import ChunkPipeline
from .sources import (
    CONFIG_FILES,
    DEPENDENCY_FILES,
    MAIN_FILES,
    MODEL_FILES,
    ROUTE_FILES,
    SOURCE_FILES,
    FileMatcher,
    discover_files,
    load_blobs,
    parse_dependencies,
)

if TYPE_CHECKING:
    from .protocols import LLMClient

logger = logging.getLogger(__name__)

ANY_LANGUAGE = "The code could be in any programming language."


@dataclass(frozen=True)
class AnalysisCategory:
    """One section of the requirements document backed by an LLM summary."""

    key: str
    title: str
    matchers: tuple[FileMatcher, ...]
    instruction: str


ANALYSIS_CATEGORIES: tuple[AnalysisCategory, ...] = (
    AnalysisCategory(
        key="system_overview",
        title="System Overview",
        matchers=(MAIN_FILES,),
        instruction=(
            "You are a senior software architect analyzing a codebase. "
            f"{ANY_LANGUAGE} Provide a high-level overview of the system."
        ),
    ),
    AnalysisCategory(
        key="functional_requirements",
        title="Functional Requirements",
        matchers=(SOURCE_FILES,),
        instruction=f"Extract and list all functional requirements from the codebase. {ANY_LANGUAGE}",
    ),
    AnalysisCategory(
        key="technical_architecture",
        title="Technical Architecture",
        matchers=(SOURCE_FILES,),
        instruction=(
            "Analyze the technical architecture and design patterns used in the codebase. "
            f"{ANY_LANGUAGE}"
        ),
    ),
    AnalysisCategory(
        key="data_models",
        title="Data Models",
        matchers=(MODEL_FILES,),
        instruction=f"Extract and document all data models and their relationships. {ANY_LANGUAGE}",
    ),
    AnalysisCategory(
        key="api_specifications",
        title="API Specifications",
        matchers=(ROUTE_FILES,),
        instruction=(
            "Document all API endpoints, their purposes, and specifications. "
            f"{ANY_LANGUAGE}"
        ),
    ),
    AnalysisCategory(
        key="security_requirements",
        title="Security Requirements",
        matchers=(SOURCE_FILES, CONFIG_FILES),
        instruction=(
            "Identify and document security requirements and potential security concerns. "
            f"{ANY_LANGUAGE}"
        ),
    ),
)


@dataclass
class CategoryResult:
    """Outcome of one category's analysis.

    Exactly one of summary and error is set.
    """

    key: str
    title: str
    summary: Optional[Summary] = None
    error: Optional[str] = None
    file_count: int = 0

    @property
    def has_content(self) -> bool:
        return self.summary is not None and not self.summary.is_empty

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "key": self.key,
            "title": self.title,
            "summary": self.summary.to_dict() if self.summary else None,
            "error": self.error,
            "file_count": self.file_count,
        }


@dataclass
class AnalysisReport:
    """All category results and parsed dependencies of one repository."""

    repo_path: Path
    categories: dict[str, CategoryResult] = field(default_factory=dict)
    dependencies: dict[str, dict[str, str]] = field(default_factory=dict)

    def get(self, key: str) -> Optional[CategoryResult]:
        return self.categories.get(key)

    def has_content(self, key: str) -> bool:
        """Check whether a category produced a summary worth reporting."""
        result = self.categories.get(key)
        return result is not None and result.has_content

    @property
    def failed_categories(self) -> list[CategoryResult]:
        return [r for r in self.categories.values() if r.failed]


class CodebaseAnalyzer:
    """Analyze a repository category by category.

    Categories run one after another; within a category the chunk
    pipeline applies its own concurrency and rate limits. A category
    whose chunk calls all fail (or that times out) is recorded as
    failed and the analysis moves on. A failed combining call aborts
    the whole analysis.

    Example:
        analyzer = CodebaseAnalyzer("./my-repo", client, settings.pipeline_config())
        report = await analyzer.analyze()
    """

    def __init__(
        self,
        repo_path: Union[str, Path],
        llm_client: "LLMClient",
        config: Optional[PipelineConfig] = None,
        *,
        timeout: Optional[float] = None,
        allow_partial: bool = False,
        categories: Sequence[AnalysisCategory] = ANALYSIS_CATEGORIES,
    ):
        """Initialize the analyzer.

        Args:
            repo_path: Repository root directory
            llm_client: Inference engine
            config: Pipeline limits
            timeout: Optional per-category dispatch timeout in seconds
            allow_partial: Summarize completed chunks on timeout
            categories: Categories to analyze, in report order

        Raises:
            AnalysisError: If repo_path is not a directory
            SegmentationConfigError: If config is invalid
        """
        self.repo_path = Path(repo_path)
        if not self.repo_path.is_dir():
            raise AnalysisError(
                f"Repository path is not a directory: {self.repo_path}",
                suggestion="Pass the root directory of the repository to analyze",
            )

        self.pipeline = ChunkPipeline(llm_client, config)
        self.timeout = timeout
        self.allow_partial = allow_partial
        self.categories = tuple(categories)

    async def analyze(self) -> AnalysisReport:
        """Run every category and parse dependency manifests.

        Raises:
            AggregationError: If a category's combining call fails
        """
        report = AnalysisReport(repo_path=self.repo_path)

        for category in self.categories:
            report.categories[category.key] = await self.analyze_category(category)

        report.dependencies = self.analyze_dependencies()
        return report

    async def analyze_category(self, category: AnalysisCategory) -> CategoryResult:
        """Summarize the files selected by one category."""
        files = discover_files(self.repo_path, *category.matchers)
        blobs = load_blobs(self.repo_path, files)

        if not blobs:
            logger.info(f"{category.title}: no content found")
            return CategoryResult(
                key=category.key,
                title=category.title,
                summary=Summary.empty(),
            )

        logger.info(f"{category.title}: analyzing {len(blobs)} files")
        try:
            summary = await self.pipeline.run(
                blobs,
                category.instruction,
                timeout=self.timeout,
                allow_partial=self.allow_partial,
            )
        except (AllChunksFailedError, PipelineTimeoutError) as e:
            logger.error(f"{category.title} analysis failed: {e.message}")
            return CategoryResult(
                key=category.key,
                title=category.title,
                error=e.message,
                file_count=len(blobs),
            )

        return CategoryResult(
            key=category.key,
            title=category.title,
            summary=summary,
            file_count=len(blobs),
        )

    def analyze_dependencies(self) -> dict[str, dict[str, str]]:
        """Parse dependency manifests found in the repository."""
        manifests = discover_files(self.repo_path, DEPENDENCY_FILES)
        if not manifests:
            return {}

        logger.info(f"Dependencies: parsing {len(manifests)} manifests")
        return parse_dependencies(self.repo_path, manifests)
