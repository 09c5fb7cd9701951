# -*- coding: utf-8 -*-
"""
心卡 MoodCards - 大模型驱动的情绪与运势卡片生成服务
MoodCards - LLM-Powered Mood & Fortune Card Generation Service

Copyright © 2025-2026 MoodCards Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  LLM提供商抽象基类 - 统一接口定义
  Base LLM Provider Abstract Class - Unified interface for chat-completion backends.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class BaseLLMProvider(ABC):
    """
    大模型提供商抽象基类 / Abstract base class for LLM providers

    实现必须把传输层异常转换为 moodcards.exceptions 中的 LLMError 子类。
    Implementations must translate transport failures into the LLMError
    subclasses from moodcards.exceptions (UpstreamError, NetworkError,
    UpstreamTimeoutError).

    Attributes:
        api_key (str): API密钥 / API key for authentication.
        model (str): 模型名称 / Model name/identifier.
    """

    def __init__(self, api_key: str, model: str):
        self.api_key = api_key
        self.model = model

    @abstractmethod
    async def chat(self, messages: List[Dict[str, str]], temperature: float) -> Dict[str, Any]:
        """
        发送聊天请求到LLM提供商 / Send chat request to LLM provider

        Args:
            messages: 消息列表，格式为 [{"role": "user", "content": "..."}]
            temperature: 生成温度 / Sampling temperature.

        Returns:
            响应字典 / Response dict with keys:
            - content: 第一个候选的文本，缺失时为 None / First choice text or None
            - usage: token使用情况 / Token usage dict (may be empty)
            - model: 模型名称 / Model name
            - finish_reason: 完成原因 / Completion reason
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """获取提供商名称 / Get provider name (e.g., 'deepseek')."""

    async def aclose(self) -> None:
        """Release transport resources; default is a no-op."""
