"""
LLM Gateway / 大模型网关
"""

from functools import lru_cache

from moodcards.config import settings

from .errors import build_user_message, classify_error
from .gateway import CompletionClient


@lru_cache(maxsize=1)
def get_gateway() -> CompletionClient:
    """Process-wide completion client built from settings."""
    return CompletionClient(
        api_key=settings.deepseek_api_key,
        base_url=settings.llm_base_url,
        model=settings.llm_model,
        timeout=settings.llm_timeout_seconds,
        key_prefix=settings.api_key_prefix,
    )


__all__ = [
    "CompletionClient",
    "build_user_message",
    "classify_error",
    "get_gateway",
]
