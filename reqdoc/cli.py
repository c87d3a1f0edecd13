"""
Command-line interface for reqdoc.

Analyzes a repository and writes a System Requirements Document:

    reqdoc ./my-repo
    reqdoc ./my-repo -m claude-3-opus --concurrency 3 -o docs/requirements.md
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
import llm

from .analyzer import CodebaseAnalyzer
from .config import get_settings
from .core.errors import ReqdocError
from .llm_client import ModelLLMClient
from .report import DocumentGenerator

logger = logging.getLogger(__name__)


def resolve_model_query(queries: list[str]) -> Optional[str]:
    """
    Resolve model using fuzzy query matching (like llm -q).
    Returns first model matching ALL query strings.
    """
    if not queries:
        return None
    for model in llm.get_models():
        model_id = model.model_id.lower()
        if all(q.lower() in model_id for q in queries):
            return model.model_id
    return None


@click.command()
@click.argument("repo_path", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("-m", "--model", help="LLM model to use (default: llm's default model)")
@click.option("-q", "--query", multiple=True,
              help="Select model by fuzzy matching (can be used multiple times)")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Output file (default: system_requirements_document.md)")
@click.option("--max-chunk-size", type=click.IntRange(min=1), default=None,
              help="Maximum characters per chunk (default: 12000)")
@click.option("--concurrency", type=click.IntRange(min=1), default=None,
              help="Maximum simultaneous LLM calls (default: 5)")
@click.option("--rate-limit-delay", type=click.IntRange(min=0), default=None,
              help="Minimum milliseconds between LLM calls (default: 1000)")
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=None,
              help="Per-category timeout in seconds")
@click.option("--allow-partial", is_flag=True, default=None,
              help="Summarize completed chunks when a category times out")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(package_name="reqdoc")
def main(
    repo_path: Path,
    model: Optional[str],
    query: tuple[str, ...],
    output: Optional[Path],
    max_chunk_size: Optional[int],
    concurrency: Optional[int],
    rate_limit_delay: Optional[int],
    timeout: Optional[float],
    allow_partial: Optional[bool],
    debug: bool,
):
    """Generate a System Requirements Document for REPO_PATH.

    \b
    Exit codes:
      0  Document written
      1  Analysis failed
    """
    settings = get_settings()

    # Resolve model: -m flag > query > settings > llm default
    model_name = model
    if not model_name and query:
        model_name = resolve_model_query(list(query))
        if not model_name:
            click.echo(f"Error: No model found matching queries {' '.join(query)}", err=True)
            sys.exit(1)

    overrides = {
        "model": model_name,
        "output_path": output,
        "max_chunk_size": max_chunk_size,
        "concurrent_requests": concurrency,
        "rate_limit_delay_ms": rate_limit_delay,
        "pipeline_timeout": timeout,
        "allow_partial": allow_partial or None,
    }
    settings = settings.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )

    logging.basicConfig(
        level=logging.DEBUG if debug else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        client = ModelLLMClient.from_settings(settings)
    except llm.UnknownModelError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    try:
        analyzer = CodebaseAnalyzer(
            repo_path,
            client,
            settings.pipeline_config(),
            timeout=settings.pipeline_timeout,
            allow_partial=settings.allow_partial,
        )
        logger.info("Starting codebase analysis...")
        report = asyncio.run(analyzer.analyze())
    except ReqdocError as e:
        click.echo(f"Error during analysis: {e}", err=True)
        sys.exit(1)

    logger.info("Generating system requirements document...")
    try:
        path = DocumentGenerator(settings.output_path).write(report)
    except OSError as e:
        click.echo(f"Error writing {settings.output_path}: {e}", err=True)
        sys.exit(1)

    for result in report.failed_categories:
        click.echo(click.style(f"Warning: {result.title} analysis failed: {result.error}", fg="yellow"), err=True)

    click.echo(click.style(f"Analysis complete! Check {path} for results", fg="green"))
