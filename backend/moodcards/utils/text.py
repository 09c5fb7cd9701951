# -*- coding: utf-8 -*-
"""
心卡 MoodCards - 大模型驱动的情绪与运势卡片生成服务
MoodCards - LLM-Powered Mood & Fortune Card Generation Service

Copyright © 2025-2026 MoodCards Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  文本工具 - 换行规范化、凭证脱敏、UTF-16 计数
  Text Utilities - Newline normalization, credential masking and UTF-16 counting.
"""

from typing import Optional


def normalize_newlines(text: Optional[str]) -> str:
    """
    规范化换行符（\\r\\n 和 \\r 转换为 \\n）

    Normalize \\\\r\\\\n and \\\\r to \\\\n. Accepts *None* safely.

    Example:
        >>> normalize_newlines("line1\\r\\nline2")
        "line1\\nline2"
    """
    return (text or "").replace("\r\n", "\n").replace("\r", "\n")


def mask_secret(secret: Optional[str], visible: int = 6) -> str:
    """
    凭证脱敏，只保留前几位与长度

    Mask a credential for logging: keep the first `visible` characters and the length.

    Example:
        >>> mask_secret("sk-1234567890")
        "sk-123...(len=13)"
    """
    if not secret:
        return "<empty>"
    if len(secret) <= visible:
        return f"{'*' * len(secret)}(len={len(secret)})"
    return f"{secret[:visible]}...(len={len(secret)})"


def utf16_units(text: str) -> list:
    """Return the UTF-16 code units of `text` (what JavaScript calls charCodeAt)."""
    raw = (text or "").encode("utf-16-le")
    return [int.from_bytes(raw[i:i + 2], "little") for i in range(0, len(raw), 2)]


def utf16_length(text: str) -> int:
    """Length in UTF-16 code units; astral characters count twice."""
    return len((text or "").encode("utf-16-le")) // 2
