"""
Human-editable prompt templates for issue analysis.
Edit the prompts below to modify AI behavior.
"""

from collections.abc import Sequence

from ..github_client.models import IssueRecord

# ruff: noqa

# Attached as system instructions to every completion call
SYSTEM_PROMPT = """You are an expert software development analyst specializing in GitHub issue analysis.
Your role is to help maintainers and developers understand patterns, prioritize work, and identify themes in their issue trackers.

When analyzing issues, consider:
- Common themes and recurring problems
- Severity and potential impact
- User sentiment and frustration levels
- Dependencies between issues
- Quick wins vs long-term projects

Be concise but thorough. Use bullet points and clear structure in your responses.
Focus on actionable insights that help maintainers make decisions."""

# Used instead of the caller's prompt for each batch of a chunked analysis
CHUNK_SUMMARY_PROMPT = (
    "Summarize the key themes, patterns, and notable issues in this batch. "
    "Be concise."
)


def _format_issue(index: int, issue: IssueRecord, max_body_length: int | None) -> str:
    labels = ", ".join(issue.label_names()) or "none"
    lines = [f"Issue #{index}:", f"- Title: {issue.title}", f"- Labels: {labels}"]
    if max_body_length:
        description = issue.body[:max_body_length] if issue.body else "No description"
        lines.append(f"- Description: {description}")
    lines.append("---")
    return "\n" + "\n".join(lines)


def render_analysis_prompt(
    issues: Sequence[IssueRecord],
    user_prompt: str,
    max_body_length: int | None = None,
) -> str:
    """Render issues plus the user's request into one analysis prompt.

    Args:
        issues: Issues to include, numbered from 1 in the given order
        user_prompt: The user's request, appended verbatim
        max_body_length: Include each body truncated to this many
            characters; bodies are left out when None or 0

    Returns:
        Prompt text
    """
    issue_context = "\n".join(
        _format_issue(index, issue, max_body_length)
        for index, issue in enumerate(issues, start=1)
    )

    return f"""
## GitHub Issues Data

Below are {len(issues)} open issues from a GitHub repository:

{issue_context}

## Analysis Request

{user_prompt}

Please provide a comprehensive analysis based on the issues above."""


def render_synthesis_prompt(summaries: Sequence[str], user_prompt: str) -> str:
    """Render per-batch summaries and the original request for synthesis."""
    batches = "\n\n".join(
        f"Batch {index}:\n{summary}" for index, summary in enumerate(summaries, start=1)
    )

    return f"""
## Aggregated Issue Summaries

The following are summaries from analyzing multiple batches of issues:

{batches}

## Final Analysis Request

{user_prompt}

Please synthesize the above summaries into a comprehensive final analysis."""
