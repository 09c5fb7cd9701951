"""
LLM providers / 大模型提供商
"""

from .base import BaseLLMProvider
from .openai_provider import OpenAICompatibleProvider

__all__ = ["BaseLLMProvider", "OpenAICompatibleProvider"]
