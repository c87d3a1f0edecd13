"""
Bounded concurrent dispatch of chunks to an inference engine.

A fixed pool of worker tasks pulls chunks from an ordered queue.
Two independent limits apply to every call:
- at most `concurrent_requests` calls are in flight
- consecutive call issuances are at least `rate_limit_delay` apart

Each worker writes its chunk's outcome into the chunk's own slot of
a pre-sized list, so results come back in chunk order no matter
which call finishes first.
"""

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Optional, Sequence

from ..core.errors import ChunkCallError
from ..core.types import Chunk, PartialResult, PipelineConfig

if TYPE_CHECKING:
    from ..protocols import LLMClient

logger = logging.getLogger(__name__)

CHUNK_PROMPT = "Analyze this code chunk and provide insights:\n\n{chunk}"


class RateGate:
    """Minimum spacing between call issuances, shared by all workers.

    Example:
        gate = RateGate(delay=1.0)
        await gate.wait()  # returns at most once per second
    """

    def __init__(self, delay: float):
        self.delay = delay
        self._lock = asyncio.Lock()
        self._next_at: Optional[float] = None

    async def wait(self) -> None:
        """Block until the next issuance is allowed, then claim it."""
        if self.delay <= 0:
            return

        async with self._lock:
            now = time.monotonic()
            if self._next_at is not None and now < self._next_at:
                await asyncio.sleep(self._next_at - now)
            self._next_at = time.monotonic() + self.delay


class ChunkDispatcher:
    """Send each chunk to the LLM under concurrency and rate limits.

    A failed call (timeout, transport error, malformed response) is
    logged and recorded as a failure PartialResult. It never aborts
    sibling calls. There is no automatic retry.

    Args:
        llm_client: Inference engine
        config: Pipeline limits (concurrency and rate limit are used)
        chunk_prompt: User prompt template with a {chunk} placeholder

    Example:
        dispatcher = ChunkDispatcher(client, PipelineConfig(concurrent_requests=3))
        results = await dispatcher.dispatch(chunks, "Describe the architecture")
    """

    def __init__(
        self,
        llm_client: "LLMClient",
        config: Optional[PipelineConfig] = None,
        *,
        chunk_prompt: str = CHUNK_PROMPT,
    ):
        self.llm_client = llm_client
        self.config = config or PipelineConfig()
        self.chunk_prompt = chunk_prompt

    async def dispatch(
        self,
        chunks: Sequence[Chunk],
        instruction: str,
        *,
        slots: Optional[list[Optional[PartialResult]]] = None,
    ) -> list[PartialResult]:
        """Analyze every chunk and return outcomes in chunk order.

        Args:
            chunks: Ordered chunks from the segmenter
            instruction: System prompt describing the analysis task
            slots: Optional pre-sized list receiving each outcome as it
                completes. Entries written before a cancellation stay valid.

        Returns:
            One PartialResult per chunk, successes and failures, in chunk order

        Raises:
            ValueError: If slots does not have one entry per chunk
        """
        total = len(chunks)
        if slots is None:
            slots = [None] * total
        elif len(slots) != total:
            raise ValueError(f"Expected {total} result slots, got {len(slots)}")

        if not chunks:
            return []

        queue: asyncio.Queue[tuple[int, Chunk]] = asyncio.Queue()
        for index, chunk in enumerate(chunks):
            queue.put_nowait((index, chunk))

        gate = RateGate(self.config.rate_limit_delay)
        worker_count = min(self.config.concurrent_requests, total)
        logger.info(f"Dispatching {total} chunks ({worker_count} concurrent)")

        workers = [
            asyncio.create_task(self._worker(queue, gate, instruction, slots, total))
            for _ in range(worker_count)
        ]
        try:
            await asyncio.gather(*workers)
        finally:
            for worker in workers:
                if not worker.done():
                    worker.cancel()

        results = [slot for slot in slots if slot is not None]
        failed = sum(1 for r in results if not r.is_success())
        if failed:
            logger.info(f"{failed}/{total} chunk analyses failed")
        return results

    async def _worker(
        self,
        queue: "asyncio.Queue[tuple[int, Chunk]]",
        gate: RateGate,
        instruction: str,
        slots: list[Optional[PartialResult]],
        total: int,
    ) -> None:
        """Pull chunks until the queue is drained."""
        while True:
            try:
                index, chunk = queue.get_nowait()
            except asyncio.QueueEmpty:
                return

            await gate.wait()
            slots[index] = await self._analyze_chunk(chunk, instruction, total)

    async def _analyze_chunk(
        self,
        chunk: Chunk,
        instruction: str,
        total: int,
    ) -> PartialResult:
        """Run one inference call and tag its outcome."""
        prompt = self.chunk_prompt.format(chunk=chunk.text)
        logger.debug(f"Analyzing chunk {chunk.ordinal + 1}/{total} ({len(chunk)} chars)")

        try:
            text = await self.llm_client.complete(prompt, system=instruction)
            if not isinstance(text, str):
                raise TypeError(f"expected text response, got {type(text).__name__}")
        except Exception as e:
            error = ChunkCallError(
                str(e) or type(e).__name__,
                ordinal=chunk.ordinal,
                total=total,
                original_error=e,
            )
            logger.warning(f"Error analyzing chunk: {error}")
            return PartialResult.failure(chunk.ordinal, error.message)

        return PartialResult.success(chunk.ordinal, text)
