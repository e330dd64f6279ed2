"""LLM integration module for category suggestions."""

from llm.factory import get_suggestion_provider

__all__ = ["get_suggestion_provider"]
