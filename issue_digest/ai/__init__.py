"""AI processing module for GitHub issue analysis."""

from .agents import create_analysis_agent
from .analysis import analyze_issues, check_connection, classify_llm_error
from .chunking import plan_chunks
from .prompts import (
    CHUNK_SUMMARY_PROMPT,
    SYSTEM_PROMPT,
    render_analysis_prompt,
    render_synthesis_prompt,
)

__all__ = [
    # Agents
    "create_analysis_agent",
    # Analysis functions
    "analyze_issues",
    "check_connection",
    "classify_llm_error",
    "plan_chunks",
    # Prompts
    "SYSTEM_PROMPT",
    "CHUNK_SUMMARY_PROMPT",
    "render_analysis_prompt",
    "render_synthesis_prompt",
]
