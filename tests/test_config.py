"""Tests for runtime configuration."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from issue_digest.config import DEFAULT_MODEL, DigestConfig


class TestDigestConfig:
    """Test DigestConfig defaults and environment loading."""

    def test_defaults(self) -> None:
        config = DigestConfig()

        assert config.model == DEFAULT_MODEL
        assert config.max_output_tokens == 2048
        assert config.temperature == 0.7
        assert config.max_issues_per_chunk == 50
        assert config.max_body_length == 500
        assert config.max_concurrency == 1
        assert config.include_descriptions is False

    @patch.dict(
        os.environ,
        {
            "GEMINI_API_KEY": "env-key",
            "GITHUB_TOKEN": "env-token",
            "ISSUE_DIGEST_MODEL": "gemini-1.5-flash",
            "ISSUE_DIGEST_DB": "/tmp/cache.db",
        },
        clear=True,
    )
    def test_from_env(self) -> None:
        config = DigestConfig.from_env()

        assert config.api_key == "env-key"
        assert config.github_token == "env-token"
        assert config.model == "gemini-1.5-flash"
        assert config.database_path == "/tmp/cache.db"

    @patch.dict(os.environ, {"GITHUB_TOKEN": "env-token"}, clear=True)
    def test_overrides_win_and_none_is_ignored(self) -> None:
        config = DigestConfig.from_env(github_token="cli-token", model=None)

        assert config.github_token == "cli-token"
        assert config.model == DEFAULT_MODEL
        assert config.api_key is None

    @pytest.mark.parametrize(
        "field,value",
        [
            ("max_issues_per_chunk", 0),
            ("max_concurrency", 0),
            ("temperature", 3.0),
            ("max_output_tokens", 0),
        ],
    )
    def test_rejects_invalid_values(self, field: str, value: float) -> None:
        with pytest.raises(ValidationError):
            DigestConfig(**{field: value})

    def test_model_settings(self) -> None:
        settings = DigestConfig(max_output_tokens=100, temperature=0.1).model_settings()
        assert settings == {"max_tokens": 100, "temperature": 0.1}

    def test_body_limit(self) -> None:
        assert DigestConfig(max_body_length=200).body_limit() is None
        config = DigestConfig(max_body_length=200, include_descriptions=True)
        assert config.body_limit() == 200
