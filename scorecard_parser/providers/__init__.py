"""Providers package for completion API providers (e.g. OpenAI)."""
from .base import ModelProvider
from .openai_provider import OpenAIProvider

__all__ = ["ModelProvider", "OpenAIProvider"]
