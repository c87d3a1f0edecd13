"""
Reduction of per-chunk results into one summary.

A single fixed-depth reduction: all successful chunk texts are joined
in chunk order and sent to the LLM in one combining call. There is no
recursive reduce when the joined text itself is large.
"""

import logging
from typing import TYPE_CHECKING, Iterable, Optional

from ..core.errors import AggregationError, AllChunksFailedError
from ..core.types import PartialResult, Summary, SummaryStatus

if TYPE_CHECKING:
    from ..protocols import LLMClient

logger = logging.getLogger(__name__)

COMBINE_INSTRUCTION = (
    "Combine and summarize the following analysis results into a cohesive overview:"
)


class SummaryAggregator:
    """Combine chunk results into a Summary with one LLM call.

    No-results policy:
    - nothing was attempted: the "Not found" sentinel, no LLM call
    - results were attempted but all failed: AllChunksFailedError

    Args:
        llm_client: Inference engine for the combining call
        instruction: System prompt of the combining call
        separator: String placed between chunk texts (default: "\\n\\n")
        max_input_chars: Size above which a warning is logged before
            the combining call (no splitting is attempted)
    """

    def __init__(
        self,
        llm_client: "LLMClient",
        *,
        instruction: str = COMBINE_INSTRUCTION,
        separator: str = "\n\n",
        max_input_chars: Optional[int] = None,
    ):
        self.llm_client = llm_client
        self.instruction = instruction
        self.separator = separator
        self.max_input_chars = max_input_chars

    async def aggregate(
        self,
        results: Iterable[PartialResult],
        *,
        chunks_total: Optional[int] = None,
    ) -> Summary:
        """Reduce chunk results into a Summary.

        Args:
            results: Tagged chunk outcomes; failures are skipped
            chunks_total: Number of chunks dispatched, when some never
                produced a result (e.g. cut off by a timeout)

        Returns:
            Combined Summary, or Summary.empty() for no input

        Raises:
            AllChunksFailedError: If chunks were attempted and none succeeded
            AggregationError: If the combining call fails
        """
        results = list(results)
        total = chunks_total if chunks_total is not None else len(results)
        successes = sorted(
            (r for r in results if r.is_success()),
            key=lambda r: r.ordinal,
        )

        if not successes:
            if total == 0:
                return Summary.empty()
            raise AllChunksFailedError(chunks_total=total)

        combined = self.separator.join(r.text or "" for r in successes)
        if self.max_input_chars is not None and len(combined) > self.max_input_chars:
            logger.warning(
                f"Combined results are {len(combined)} chars, above the "
                f"{self.max_input_chars} chunk limit; sending in one call"
            )

        logger.info(f"Combining {len(successes)} chunk results")
        try:
            text = await self.llm_client.complete(combined, system=self.instruction)
        except Exception as e:
            raise AggregationError(
                f"Combining {len(successes)} chunk results failed: {e}",
                original_error=e,
            ) from e

        failed = total - len(successes)
        return Summary(
            text=text,
            status=SummaryStatus.COMPLETE if failed == 0 else SummaryStatus.PARTIAL,
            chunks_total=total,
            chunks_failed=failed,
        )
