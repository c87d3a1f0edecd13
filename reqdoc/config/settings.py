"""
Configuration settings using pydantic-settings.

Supports configuration via environment variables (REQDOC_*)
and a .env file in the working directory.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.types import (
    DEFAULT_CONCURRENT_REQUESTS,
    DEFAULT_MAX_CHUNK_SIZE,
    PipelineConfig,
)


class ReqdocSettings(BaseSettings):
    """reqdoc configuration settings.

    Configuration is loaded from (in order of priority):
    1. Environment variables (REQDOC_*)
    2. .env file
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="REQDOC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # LLM
    model: str | None = Field(
        default=None,
        description="llm model id (default: the llm CLI's default model)",
    )
    temperature: float | None = Field(
        default=0.0,
        ge=0.0,
        description="Sampling temperature for analysis calls",
    )
    max_tokens: int | None = Field(
        default=None,
        ge=1,
        description="Maximum tokens per response (only for models with a max_tokens option)",
    )
    llm_timeout: int = Field(
        default=120,
        ge=1,
        description="Timeout for a single LLM call in seconds",
    )

    # Pipeline limits
    max_chunk_size: int = Field(
        default=DEFAULT_MAX_CHUNK_SIZE,
        ge=1,
        description="Maximum characters per chunk sent to the LLM",
    )
    concurrent_requests: int = Field(
        default=DEFAULT_CONCURRENT_REQUESTS,
        ge=1,
        description="Maximum simultaneous LLM calls",
    )
    rate_limit_delay_ms: int = Field(
        default=1000,
        ge=0,
        description="Minimum milliseconds between two LLM call issuances",
    )
    pipeline_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Overall timeout per analysis category in seconds",
    )
    allow_partial: bool = Field(
        default=False,
        description="Summarize completed chunks when a category times out",
    )

    # Output
    output_path: Path = Field(
        default=Path("system_requirements_document.md"),
        description="Where the requirements document is written",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    def pipeline_config(self) -> PipelineConfig:
        """Get the immutable pipeline limits."""
        return PipelineConfig(
            max_chunk_size=self.max_chunk_size,
            concurrent_requests=self.concurrent_requests,
            rate_limit_delay=self.rate_limit_delay_ms / 1000.0,
        )


@lru_cache
def get_settings() -> ReqdocSettings:
    """Get cached settings instance.

    Returns:
        ReqdocSettings singleton
    """
    return ReqdocSettings()
