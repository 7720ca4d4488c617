"""Fetch, cache and analyze open GitHub issues with an LLM."""

__version__ = "0.1.0"
