"""Runtime configuration for issue collection and analysis."""

import os
from typing import Any

from pydantic import BaseModel, Field
from pydantic_ai.settings import ModelSettings

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_DATABASE_PATH = "issues.db"


class DigestConfig(BaseModel):
    """Settings shared by the GitHub client, the cache and the analyzer.

    Built once at startup and passed to each component. Nothing below the
    CLI reads the environment directly.
    """

    api_key: str | None = Field(None, description="Gemini API key")
    github_token: str | None = Field(
        None, description="GitHub token; anonymous access when unset"
    )
    model: str = Field(DEFAULT_MODEL, description="Gemini model name")
    max_output_tokens: int = Field(2048, ge=1)
    temperature: float = Field(0.7, ge=0.0, le=2.0)
    max_issues_per_chunk: int = Field(
        50, ge=1, description="Largest issue count sent in a single LLM request"
    )
    max_body_length: int = Field(
        500, ge=0, description="Characters of each issue body sent to the LLM"
    )
    include_descriptions: bool = Field(
        False, description="Include truncated issue bodies in analysis prompts"
    )
    max_concurrency: int = Field(
        1, ge=1, description="Concurrent chunk summary requests"
    )
    database_path: str = Field(DEFAULT_DATABASE_PATH)
    github_timeout: int = Field(30, ge=1, description="GitHub request timeout (s)")

    @classmethod
    def from_env(cls, **overrides: Any) -> "DigestConfig":
        """Build configuration from environment variables.

        Args:
            **overrides: Explicit values that win over the environment.
                ``None`` values are ignored.

        Returns:
            DigestConfig instance
        """
        values: dict[str, Any] = {
            "api_key": os.getenv("GEMINI_API_KEY"),
            "github_token": os.getenv("GITHUB_TOKEN"),
            "model": os.getenv("ISSUE_DIGEST_MODEL", DEFAULT_MODEL),
            "database_path": os.getenv("ISSUE_DIGEST_DB", DEFAULT_DATABASE_PATH),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def model_settings(self) -> ModelSettings:
        """PydanticAI settings applied to every completion call."""
        return ModelSettings(
            max_tokens=self.max_output_tokens,
            temperature=self.temperature,
        )

    def body_limit(self) -> int | None:
        """Body truncation length for prompts, or None to omit bodies."""
        return self.max_body_length if self.include_descriptions else None
