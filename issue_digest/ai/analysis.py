"""Core analysis logic for AI processing.

Small issue sets are analyzed in one request. Larger sets are split into
batches, each batch is summarized with a fixed directive, and a final
request synthesizes the summaries into an answer to the user's prompt.
"""

import asyncio
import logging
from collections.abc import Sequence
import httpx
from pydantic_ai import Agent
from pydantic_ai.exceptions import AgentRunError, ModelHTTPError

from ..config import DigestConfig
from ..exceptions import LLMError, LLMErrorKind
from ..github_client.models import IssueRecord
from .chunking import plan_chunks
from .prompts import (
    CHUNK_SUMMARY_PROMPT,
    render_analysis_prompt,
    render_synthesis_prompt,
)

logger = logging.getLogger(__name__)

AUTH_MARKERS = ("api key not valid", "api_key_invalid", "permission_denied")

BLOCKED_MARKERS = ("safety", "content filter", "blocked", "prohibited")


def classify_llm_error(error: Exception) -> LLMError:
    """Map a PydanticAI or transport exception to an LLMError.

    Gemini rejects a bad API key with a 400, so the error text is checked for
    credential failures before it is checked for blocked content.
    """
    status_code = error.status_code if isinstance(error, ModelHTTPError) else None
    text = str(error).lower()

    if status_code in (401, 403) or any(marker in text for marker in AUTH_MARKERS):
        kind = LLMErrorKind.AUTH_ERROR
    elif status_code == 429:
        kind = LLMErrorKind.RATE_LIMITED
    elif any(marker in text for marker in BLOCKED_MARKERS):
        kind = LLMErrorKind.CONTENT_BLOCKED
    else:
        kind = LLMErrorKind.OTHER

    return LLMError(f"LLM request failed: {error}", kind=kind, status_code=status_code)


async def _generate(
    agent: Agent[None, str], prompt: str, config: DigestConfig
) -> str:
    """Run one completion and return its text ("" when the model sends none)."""
    try:
        result = await agent.run(prompt, model_settings=config.model_settings())
    except (AgentRunError, httpx.HTTPError) as e:
        error = classify_llm_error(e)
        logger.error("LLM call failed (%s): %s", error.kind.value, e)
        raise error from e
    return result.output or ""


async def _analyze_single_batch(
    agent: Agent[None, str],
    issues: Sequence[IssueRecord],
    user_prompt: str,
    config: DigestConfig,
) -> str:
    prompt = render_analysis_prompt(issues, user_prompt, config.body_limit())
    return await _generate(agent, prompt, config)


async def _summarize_batches(
    agent: Agent[None, str], batches: list[list[IssueRecord]], config: DigestConfig
) -> list[str]:
    """Summarize each batch, returning summaries in batch order."""
    if config.max_concurrency <= 1:
        summaries = []
        for index, batch in enumerate(batches, start=1):
            logger.info("Processing chunk %d/%d...", index, len(batches))
            summaries.append(
                await _analyze_single_batch(agent, batch, CHUNK_SUMMARY_PROMPT, config)
            )
        return summaries

    semaphore = asyncio.Semaphore(config.max_concurrency)

    async def summarize(index: int, batch: list[IssueRecord]) -> tuple[int, str]:
        async with semaphore:
            logger.info("Processing chunk %d/%d...", index + 1, len(batches))
            summary = await _analyze_single_batch(
                agent, batch, CHUNK_SUMMARY_PROMPT, config
            )
            return index, summary

    tasks = [
        asyncio.create_task(summarize(index, batch))
        for index, batch in enumerate(batches)
    ]
    try:
        results = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        raise

    return [summary for _, summary in sorted(results, key=lambda item: item[0])]


async def analyze_issues(
    agent: Agent[None, str],
    issues: Sequence[IssueRecord],
    user_prompt: str,
    config: DigestConfig,
) -> str:
    """Analyze issues with the LLM.

    Args:
        agent: PydanticAI agent from ``create_analysis_agent``
        issues: Cached issues to analyze (not modified)
        user_prompt: What the user wants to know about the issues
        config: Runtime configuration (chunk size, model settings)

    Returns:
        The model's answer

    Raises:
        LLMError: If any completion call fails. Chunked analysis returns
            nothing partial; the first failure aborts the run.
    """
    if len(issues) <= config.max_issues_per_chunk:
        logger.info("Analyzing %d issues in a single request", len(issues))
        return await _analyze_single_batch(agent, issues, user_prompt, config)

    batches = plan_chunks(issues, config.max_issues_per_chunk)
    logger.info("Analyzing %d issues in %d chunks...", len(issues), len(batches))

    summaries = await _summarize_batches(agent, batches, config)

    logger.info("Synthesizing final analysis...")
    return await _generate(
        agent, render_synthesis_prompt(summaries, user_prompt), config
    )


async def check_connection(agent: Agent[None, str], config: DigestConfig) -> bool:
    """Send a trivial prompt to verify the LLM is reachable."""
    try:
        await _generate(agent, "Hello", config)
    except LLMError:
        return False
    return True
