"""PydanticAI agent for GitHub issue analysis."""

from pydantic_ai import Agent
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.providers.google import GoogleProvider

from ..config import DigestConfig
from ..exceptions import ConfigurationError
from .prompts import SYSTEM_PROMPT


def create_analysis_agent(config: DigestConfig) -> Agent[None, str]:
    """Create the Gemini-backed agent used for every analysis call.

    The agent is built once at startup and passed to ``analyze_issues``.

    Raises:
        ConfigurationError: If no Gemini API key is configured
    """
    if not config.api_key:
        raise ConfigurationError(
            "Gemini API key is required. Set GEMINI_API_KEY environment variable."
        )

    model = GoogleModel(config.model, provider=GoogleProvider(api_key=config.api_key))
    return Agent(
        model,
        output_type=str,
        instructions=SYSTEM_PROMPT,
        model_settings=config.model_settings(),
    )
