# -*- coding: utf-8 -*-
"""
心卡 MoodCards - 大模型驱动的情绪与运势卡片生成服务
MoodCards - LLM-Powered Mood & Fortune Card Generation Service

Copyright © 2025-2026 MoodCards Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  OpenAI 兼容 Chat Completions 提供商（DeepSeek 等）
  OpenAI-compatible Chat Completions Provider - Works with DeepSeek or any provider
  exposing {model, messages, temperature} -> {choices: [{message: {content}}]}.
"""

from typing import Any, Dict, List, Optional

import httpx
from openai import APIConnectionError, APIStatusError, APITimeoutError, AsyncOpenAI

from moodcards.exceptions import NetworkError, UpstreamError, UpstreamTimeoutError
from moodcards.llm_gateway.providers.base import BaseLLMProvider


def _status_detail(error: APIStatusError) -> str:
    """Pull the upstream-provided message out of an error body."""
    body = getattr(error, "body", None)
    if isinstance(body, dict):
        inner = body.get("error", body)
        if isinstance(inner, dict) and inner.get("message"):
            return str(inner["message"])
        if isinstance(inner, str):
            return inner
    if isinstance(body, str) and body.strip():
        return body.strip()
    response = getattr(error, "response", None)
    return getattr(response, "reason_phrase", "") or ""


class OpenAICompatibleProvider(BaseLLMProvider):
    """
    OpenAI SDK 适配器 / Adapter over the async OpenAI SDK

    自动重试关闭：是否重试由调用方决定。
    Automatic retries are disabled; retry is a caller decision.

    Attributes:
        client (AsyncOpenAI): 异步客户端 / Async OpenAI client instance.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "deepseek-chat",
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(api_key, model)
        self.base_url = base_url
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )
        self._timeout = timeout

    async def chat(self, messages: List[Dict[str, str]], temperature: float) -> Dict[str, Any]:
        """
        发送 Chat Completions 请求 / Send a chat completion request

        Raises:
            UpstreamTimeoutError: SDK 超时 / SDK-level timeout
            UpstreamError: 非 2xx 状态 / Non-2xx status
            NetworkError: 连接失败 / Transport failure
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
            )
        except APITimeoutError as exc:
            raise UpstreamTimeoutError(self._timeout) from exc
        except APIConnectionError as exc:
            raise NetworkError(f"网络请求失败: {exc}") from exc
        except APIStatusError as exc:
            raise UpstreamError(exc.status_code, _status_detail(exc)) from exc

        choices = getattr(response, "choices", None) or []
        first = choices[0] if choices else None
        message = getattr(first, "message", None)
        usage = getattr(response, "usage", None)

        return {
            "content": getattr(message, "content", None),
            "usage": usage.model_dump() if usage is not None else {},
            "model": getattr(response, "model", self.model),
            "finish_reason": getattr(first, "finish_reason", None),
        }

    def get_provider_name(self) -> str:
        return "deepseek"

    async def aclose(self) -> None:
        await self.client.close()
