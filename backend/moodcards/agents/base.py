# -*- coding: utf-8 -*-
"""
心卡 MoodCards - 大模型驱动的情绪与运势卡片生成服务
MoodCards - LLM-Powered Mood & Fortune Card Generation Service

Copyright © 2025-2026 MoodCards Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  功能编排基类 - 提示词 -> 补全 -> 规范化 -> 校验 -> 错误分类 的统一流程
  Base Agent - The shared pipeline every feature runs:
  prompt -> completion -> normalize -> validate -> classify errors.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from pydantic import BaseModel

from moodcards.exceptions import FeatureError
from moodcards.llm_gateway import build_user_message, classify_error
from moodcards.llm_gateway.gateway import CompletionClient
from moodcards.schemas.validation import SchemaKind, validate_payload
from moodcards.utils.llm_output import normalize_response
from moodcards.utils.logger import get_logger

logger = get_logger(__name__)


class BaseAgent(ABC):
    """
    功能编排抽象基类 / Abstract base for feature agents

    子类提供提示词、schema 与温度；本类负责调用与错误分类。
    Subclasses supply prompts, schema kind and temperature; this class owns the
    call and error classification. Agents hold no per-request state.

    Attributes:
        gateway (CompletionClient): 补全客户端 / Completion client.
        schema_kind (SchemaKind): 输出 schema / Output schema kind.
        temperature (float): 默认温度 / Default sampling temperature.
        feature_label (str): 用户提示中的功能名称 / Feature name used in user messages.
    """

    schema_kind: SchemaKind
    temperature: float = 0.7
    feature_label: str = "生成"

    def __init__(self, gateway: CompletionClient):
        self.gateway = gateway

    @abstractmethod
    def get_agent_name(self) -> str:
        """Short agent name used in logs."""

    async def run_pipeline(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: Optional[float] = None,
        schema_kind: Optional[SchemaKind] = None,
        prepare: Optional[Callable[[Any], Any]] = None,
    ) -> BaseModel:
        """
        执行一次完整的补全-校验流程

        Run one completion through normalization and validation.

        Args:
            prepare: 校验前对解析结果的修补 / Applied to the parsed payload before validation

        Returns:
            校验通过的结果模型 / Validated typed result

        Raises:
            FeatureError: 任一步骤失败，已分类并附带本地化提示
                          Any step failed; classified with a localized message.
        """
        kind = schema_kind or self.schema_kind
        try:
            raw_text = await self.gateway.complete(
                system_prompt,
                user_prompt,
                self.temperature if temperature is None else temperature,
            )
            payload = normalize_response(raw_text)
            if prepare is not None:
                payload = prepare(payload)
            result = validate_payload(payload, kind)
        except Exception as exc:
            raise self.to_feature_error(exc) from exc

        logger.info("[%s] %s validated", self.get_agent_name(), kind.value)
        return result

    def to_feature_error(self, exc: Exception) -> FeatureError:
        """把底层异常转换为面向用户的错误并记录诊断信息 / Classify, log and wrap."""
        if isinstance(exc, FeatureError):
            return exc
        kind = classify_error(exc)
        logger.error(
            "[%s] %s failed: kind=%s error=%s",
            self.get_agent_name(),
            self.feature_label,
            kind.value,
            exc,
            exc_info=exc,
        )
        return FeatureError(kind, build_user_message(kind, self.feature_label, exc), feature=self.get_agent_name())
