# -*- coding: utf-8 -*-
"""
心卡 MoodCards - 大模型驱动的情绪与运势卡片生成服务
MoodCards - LLM-Powered Mood & Fortune Card Generation Service

Copyright © 2025-2026 MoodCards Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  应用级异常层次 - 定义调用链各层的异常与面向用户的错误
  Application-level Exception Hierarchy - Pipeline errors and the user-facing error.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence


class MoodCardsError(Exception):
    """
    MoodCards 业务错误的基类

    Base exception for all MoodCards errors.
    """


class ConfigError(MoodCardsError):
    """
    配置缺失或无效（如未设置 DEEPSEEK_API_KEY）

    Raised when required configuration is missing. Never retried.
    """


class LLMError(MoodCardsError):
    """
    LLM调用失败异常

    Raised when the completion call fails (timeout, HTTP status, transport, bad response).
    """


class UpstreamTimeoutError(LLMError, TimeoutError):
    """上游在超时时间内未响应 / No upstream response within the timeout."""

    def __init__(self, timeout: float):
        super().__init__(f"upstream did not respond within {timeout:g}s")
        self.timeout = timeout


class UpstreamError(LLMError):
    """
    上游返回非 2xx 状态

    Raised on a non-2xx response. Carries the HTTP status and the upstream message.
    """

    def __init__(self, status_code: int, detail: str = ""):
        self.status_code = status_code
        self.detail = detail or ""
        message = f"upstream request failed ({status_code})"
        if self.detail:
            message = f"{message}: {self.detail}"
        super().__init__(message)


class NetworkError(LLMError):
    """传输层失败（DNS、连接重置等） / Transport-level failure."""


class MalformedResponseError(LLMError):
    """成功响应但缺少 choices[0].message.content / Success status without completion text."""


class ParseError(MoodCardsError):
    """
    模型输出不是合法 JSON

    Raised when the normalized model output is not valid JSON. The underlying
    json.JSONDecodeError is chained as __cause__.
    """


class TranscriptError(MoodCardsError):
    """对话记录不满足生成人格卡片的条件 / Transcript cannot produce a personality profile."""


@dataclass(frozen=True)
class FieldIssue:
    """单条校验失败：字段路径 + 原因 / One violated constraint: field path and reason."""

    path: str
    reason: str

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}"


class ValidationError(MoodCardsError):
    """
    数据验证失败异常

    Raised when a parsed payload violates its schema. Enumerates every
    offending field path and reason.
    """

    def __init__(self, schema: str, issues: Sequence[FieldIssue]):
        self.schema = schema
        self.issues: List[FieldIssue] = list(issues)
        joined = "; ".join(str(issue) for issue in self.issues) or "unknown violation"
        super().__init__(f"{schema} validation failed: {joined}")

    @property
    def paths(self) -> List[str]:
        return [issue.path for issue in self.issues]


class ErrorKind(str, Enum):
    """
    错误分类 / Error taxonomy surfaced to users

    retryable 表示用户手动重试是否有意义。
    `retryable` tells the caller whether a manual retry makes sense.
    """

    CONFIG = "config"
    TIMEOUT = "timeout"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    NOT_FOUND = "not_found"
    UPSTREAM = "upstream"
    NETWORK = "network"
    MALFORMED_RESPONSE = "malformed_response"
    PARSE = "parse"
    VALIDATION = "validation"
    UNKNOWN = "unknown"

    @property
    def retryable(self) -> bool:
        return self not in {
            ErrorKind.CONFIG,
            ErrorKind.INSUFFICIENT_BALANCE,
            ErrorKind.AUTH,
            ErrorKind.NOT_FOUND,
        }


class FeatureError(MoodCardsError):
    """
    面向用户的错误：分类 + 本地化提示

    User-facing error raised by every agent. `message` is safe to show;
    internal detail stays in the logs and on `__cause__`.
    """

    def __init__(self, kind: ErrorKind, message: str, feature: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.feature = feature

    @property
    def retryable(self) -> bool:
        return self.kind.retryable
