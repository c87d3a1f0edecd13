"""
Integration protocols for the analysis pipeline.

The pipeline only talks to an inference engine through the
LLMClient protocol, so any backend (llm library model, a direct
SDK client, a test double) can be plugged in.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class LLMClient(Protocol):
    """Protocol for LLM integration.

    Implementations:
        - ModelLLMClient: Wraps an `llm` library model
    """

    async def complete(
        self,
        prompt: str,
        *,
        system: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float | None = None,
    ) -> str:
        """Generate text completion.

        Args:
            prompt: The user prompt
            system: Optional system prompt
            model: Optional model override (default: client's configured model)
            temperature: Sampling temperature (0.0 = deterministic)
            max_tokens: Maximum tokens to generate
            timeout: Optional per-call timeout in seconds

        Returns:
            Generated text response

        Raises:
            Exception: Any transport, timeout or model error
        """
        ...
