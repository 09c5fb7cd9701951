# -*- coding: utf-8 -*-
"""
心卡 MoodCards - 大模型驱动的情绪与运势卡片生成服务
MoodCards - LLM-Powered Mood & Fortune Card Generation Service

Copyright © 2025-2026 MoodCards Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  LLM错误分类 - 把调用链各层异常归入统一的错误分类，并生成面向用户的提示
  LLM Error Classification - Maps pipeline exceptions onto ErrorKind and builds the
  localized user-facing message.
"""

from typing import Optional

from moodcards.exceptions import (
    ConfigError,
    ErrorKind,
    MalformedResponseError,
    NetworkError,
    ParseError,
    UpstreamError,
    UpstreamTimeoutError,
    ValidationError,
)

TOP_UP_URL = "https://platform.deepseek.com/"

# Compatibility shim: the upstream reports balance exhaustion in the message text,
# sometimes with a status other than 402.
INSUFFICIENT_BALANCE_PATTERNS = (
    "insufficient balance",
    "余额不足",
)

STATUS_KINDS = {
    401: ErrorKind.AUTH,
    403: ErrorKind.AUTH,
    402: ErrorKind.INSUFFICIENT_BALANCE,
    404: ErrorKind.NOT_FOUND,
    429: ErrorKind.RATE_LIMIT,
}


def classify_error(error: BaseException) -> ErrorKind:
    """
    将异常归类到 ErrorKind

    Classify an exception by its type and HTTP status.

    Example:
        >>> classify_error(UpstreamError(401, "Authentication Fails"))
        <ErrorKind.AUTH: 'auth'>
        >>> classify_error(UpstreamError(400, "Insufficient Balance"))
        <ErrorKind.INSUFFICIENT_BALANCE: 'insufficient_balance'>
    """
    if isinstance(error, ConfigError):
        return ErrorKind.CONFIG
    if isinstance(error, UpstreamTimeoutError):
        return ErrorKind.TIMEOUT
    if isinstance(error, UpstreamError):
        detail = error.detail.lower()
        if any(pattern in detail for pattern in INSUFFICIENT_BALANCE_PATTERNS):
            return ErrorKind.INSUFFICIENT_BALANCE
        return STATUS_KINDS.get(error.status_code, ErrorKind.UPSTREAM)
    if isinstance(error, NetworkError):
        return ErrorKind.NETWORK
    if isinstance(error, MalformedResponseError):
        return ErrorKind.MALFORMED_RESPONSE
    if isinstance(error, ParseError):
        return ErrorKind.PARSE
    if isinstance(error, ValidationError):
        return ErrorKind.VALIDATION
    return ErrorKind.UNKNOWN


def build_user_message(kind: ErrorKind, feature_label: str, error: Optional[BaseException] = None) -> str:
    """
    生成面向用户的本地化提示（不含堆栈或上游原始载荷）

    Build the localized, actionable message shown to end users.
    """
    detail = str(error) if error is not None else ""

    if kind is ErrorKind.CONFIG:
        return "服务未配置 API Key，请在环境变量中设置 DEEPSEEK_API_KEY。"
    if kind is ErrorKind.TIMEOUT:
        timeout = getattr(error, "timeout", None)
        if isinstance(timeout, (int, float)):
            return f"请求超时：AI 服务响应时间超过 {timeout:g} 秒，请稍后重试。"
        return "请求超时：AI 服务响应超时，请稍后重试。"
    if kind is ErrorKind.INSUFFICIENT_BALANCE:
        return f"账户余额不足！请访问 {TOP_UP_URL} 充值账户余额。"
    if kind is ErrorKind.AUTH:
        return "API Key 认证失败 (401)。请检查环境变量 DEEPSEEK_API_KEY 是否正确。"
    if kind is ErrorKind.RATE_LIMIT:
        return "请求频率过高 (429)。请稍后再试。"
    if kind is ErrorKind.NOT_FOUND:
        return "API 端点未找到 (404)。请检查服务地址与模型配置是否正确。"
    if kind is ErrorKind.UPSTREAM:
        status = getattr(error, "status_code", "?")
        upstream_detail = getattr(error, "detail", "") or "未知错误"
        return f"AI 服务请求失败 ({status}): {upstream_detail}。请稍后重试。"
    if kind is ErrorKind.NETWORK:
        return "网络请求失败，请检查网络连接或稍后重试。"
    if kind is ErrorKind.MALFORMED_RESPONSE:
        return "AI 服务返回的数据格式不正确，请重试。"
    if kind is ErrorKind.PARSE:
        return f"数据解析失败: {detail}。请重试。"
    if kind is ErrorKind.VALIDATION:
        return f"数据验证失败: {detail}。AI 返回的数据格式不正确，请重试。"
    # Unclassified errors may carry internal text; it goes to the log only
    return f"{feature_label}失败：发生未知错误，请稍后重试。"
