"""
LLM client backed by the `llm` library.

This module implements the LLMClient protocol, bridging the
analysis pipeline to any model the `llm` CLI has configured
(OpenAI, Anthropic, Gemini, local models via plugins).
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Optional

import llm

if TYPE_CHECKING:
    from llm import Model

    from .config import ReqdocSettings

logger = logging.getLogger(__name__)


class ModelLLMClient:
    """
    LLMClient implementation for an `llm` model.

    The llm library exposes a blocking API, so each completion runs
    in the default executor and is bounded by a timeout.

    Example:
        client = ModelLLMClient(llm.get_model("claude-3-opus"))
        text = await client.complete("Summarize this", system="Be brief")
    """

    def __init__(
        self,
        model: "Model",
        default_temperature: Optional[float] = 0.0,
        default_max_tokens: Optional[int] = None,
        default_timeout: float = 120.0,
    ):
        """Initialize the LLM client.

        Args:
            model: llm.Model instance
            default_temperature: Sampling temperature, None for the model default
            default_max_tokens: Token cap per response, None for the model default
            default_timeout: Timeout for a single call in seconds
        """
        self.model = model
        self.default_temperature = default_temperature
        self.default_max_tokens = default_max_tokens
        self.default_timeout = default_timeout

    @classmethod
    def from_settings(cls, settings: "ReqdocSettings") -> "ModelLLMClient":
        """Build a client for the configured (or default) llm model.

        Raises:
            llm.UnknownModelError: If the model id is not installed
        """
        model = llm.get_model(settings.model) if settings.model else llm.get_model()
        logger.debug(f"Using model {model.model_id}")
        return cls(
            model=model,
            default_temperature=settings.temperature,
            default_max_tokens=settings.max_tokens,
            default_timeout=float(settings.llm_timeout),
        )

    async def complete(
        self,
        prompt: str,
        *,
        system: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> str:
        """Generate text completion.

        Args:
            prompt: The user prompt
            system: Optional system prompt
            model: Optional model override (ignored, uses self.model for consistency)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            timeout: Timeout in seconds (defaults to self.default_timeout)

        Returns:
            Generated text response

        Raises:
            asyncio.TimeoutError: If the call exceeds the timeout
        """
        # Accepted for protocol compliance only
        _ = model

        options: dict[str, Any] = {}
        temp = temperature if temperature is not None else self.default_temperature
        if temp is not None:
            options["temperature"] = temp
        tokens = max_tokens if max_tokens is not None else self.default_max_tokens
        if tokens:
            options["max_tokens"] = tokens

        def _sync_complete() -> str:
            response = self.model.prompt(prompt, system=system, **options)
            return response.text()

        loop = asyncio.get_running_loop()
        return await asyncio.wait_for(
            loop.run_in_executor(None, _sync_complete),
            timeout=timeout if timeout is not None else self.default_timeout,
        )
