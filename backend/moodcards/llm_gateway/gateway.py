# -*- coding: utf-8 -*-
"""
心卡 MoodCards - 大模型驱动的情绪与运势卡片生成服务
MoodCards - LLM-Powered Mood & Fortune Card Generation Service

Copyright © 2025-2026 MoodCards Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  补全客户端 - 单次调用、硬超时、取消传播、首个候选文本提取
  Completion Client - One upstream call per invocation with a hard timeout,
  cancellation propagated to the transport, and first-choice text extraction.
"""

import asyncio
import time
from typing import Callable, Dict, List, Optional

from moodcards.exceptions import ConfigError, MalformedResponseError, UpstreamTimeoutError
from moodcards.llm_gateway.providers.base import BaseLLMProvider
from moodcards.llm_gateway.providers.openai_provider import OpenAICompatibleProvider
from moodcards.utils.logger import get_logger
from moodcards.utils.text import mask_secret

logger = get_logger(__name__)

ProviderFactory = Callable[[], BaseLLMProvider]


class CompletionClient:
    """
    大模型补全客户端 / Chat-completion client

    凭证在构造时注入，客户端本身不读取环境变量。缺少凭证时在调用时抛出 ConfigError。
    The credential is injected at construction; the client never reads the
    environment. A missing credential fails the call with ConfigError.

    Attributes:
        base_url (str): 端点 / Chat-completion base URL.
        model (str): 固定模型标识 / Fixed model identifier.
        timeout (float): 硬超时秒数 / Hard wall-clock timeout in seconds.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://api.deepseek.com/v1",
        model: str = "deepseek-chat",
        timeout: float = 30.0,
        key_prefix: str = "sk-",
        provider_factory: Optional[ProviderFactory] = None,
    ):
        self._api_key = (api_key or "").strip() or None
        self.base_url = base_url
        self.model = model
        self.timeout = timeout
        self.key_prefix = key_prefix
        self._provider_factory = provider_factory
        self._provider: Optional[BaseLLMProvider] = None

    @property
    def configured(self) -> bool:
        return self._api_key is not None

    @property
    def endpoint(self) -> str:
        return f"{self.base_url.rstrip('/')}/chat/completions"

    def _get_provider(self) -> BaseLLMProvider:
        if self._api_key is None:
            raise ConfigError("DEEPSEEK_API_KEY 环境变量未设置")
        if self.key_prefix and not self._api_key.startswith(self.key_prefix):
            logger.warning(
                "API Key 格式可能不正确，预期以 '%s' 开头 / API key may be malformed (expected prefix %r)",
                self.key_prefix,
                self.key_prefix,
            )
        if self._provider is None:
            if self._provider_factory is not None:
                self._provider = self._provider_factory()
            else:
                self._provider = OpenAICompatibleProvider(
                    api_key=self._api_key,
                    model=self.model,
                    base_url=self.base_url,
                    timeout=self.timeout,
                )
        return self._provider

    async def complete(self, system_prompt: str, user_prompt: str, temperature: float) -> str:
        """
        系统 + 用户两条消息的单次补全

        Single completion for a system/user message pair.

        Returns:
            第一个候选的原始文本 / Raw text of the first completion choice

        Raises:
            ConfigError, UpstreamTimeoutError, UpstreamError, NetworkError, MalformedResponseError
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        return await self.chat(messages, temperature)

    async def chat(self, messages: List[Dict[str, str]], temperature: float) -> str:
        """
        任意消息列表的单次补全（人格聊天使用）

        Single completion for an arbitrary message list (used by the persona chat).
        """
        provider = self._get_provider()

        logger.info(
            "LLM request: endpoint=%s model=%s provider=%s temperature=%.2f messages=%d key=%s",
            self.endpoint,
            self.model,
            provider.get_provider_name(),
            temperature,
            len(messages),
            mask_secret(self._api_key),
        )

        started = time.perf_counter()
        try:
            # wait_for cancels the in-flight request, which closes the underlying connection.
            response = await asyncio.wait_for(provider.chat(messages, temperature), timeout=self.timeout)
        except UpstreamTimeoutError:
            logger.error("LLM request timed out in transport after %.1fs", self.timeout)
            raise
        except asyncio.TimeoutError as exc:
            logger.error("LLM request timed out after %.1fs", self.timeout)
            raise UpstreamTimeoutError(self.timeout) from exc

        elapsed_ms = (time.perf_counter() - started) * 1000
        content = response.get("content")
        logger.info(
            "LLM response: model=%s finish_reason=%s latency=%.0fms chars=%d usage=%s",
            response.get("model"),
            response.get("finish_reason"),
            elapsed_ms,
            len(content or ""),
            response.get("usage") or {},
        )

        if not content:
            raise MalformedResponseError("上游返回的数据格式不正确：缺少 choices[0].message.content")
        return content

    async def aclose(self) -> None:
        if self._provider is not None:
            await self._provider.aclose()
            self._provider = None
