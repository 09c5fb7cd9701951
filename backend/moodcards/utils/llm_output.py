# -*- coding: utf-8 -*-
"""
心卡 MoodCards - 大模型驱动的情绪与运势卡片生成服务
MoodCards - LLM-Powered Mood & Fortune Card Generation Service

Copyright © 2025-2026 MoodCards Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  LLM输出规范化 - 去除 markdown 代码块包裹并解析 JSON
  LLM Output Normalizer - Strip markdown code fences and parse the remainder as JSON.
"""

from __future__ import annotations

import json
import re
from typing import Any

from moodcards.exceptions import ParseError

# ```json\n ... \n``` or ```\n ... \n```; the language tag is optional.
_FENCE_RE = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\r?\n?(?P<body>.*?)\r?\n?[ \t]*```$", re.DOTALL)


def strip_code_fence(text: str) -> str:
    """
    去除包裹整段文本的代码块标记

    Remove a fenced code block that wraps the whole text, with or without a
    language tag. Text that is not fully wrapped is returned trimmed.

    Example:
        >>> strip_code_fence('```json\\n{"a": 1}\\n```')
        '{"a": 1}'
    """
    cleaned = (text or "").strip()
    match = _FENCE_RE.match(cleaned)
    if match:
        return match.group("body").strip()
    return cleaned


def normalize_response(raw_text: str) -> Any:
    """
    将模型原始输出恢复为 JSON 对象

    Recover a JSON value from raw model text. Purely syntactic: no schema checks.

    Args:
        raw_text: 模型返回的原始文本 / Raw completion text

    Returns:
        解析后的 JSON 值 / Parsed JSON value

    Raises:
        ParseError: 文本不是合法 JSON，原始 JSONDecodeError 作为 __cause__
                    The text is not valid JSON; the JSONDecodeError is chained.

    Example:
        >>> normalize_response('```\\n{"a":1}\\n```')
        {'a': 1}
    """
    candidate = strip_code_fence(raw_text)
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise ParseError(f"JSON 解析失败: {exc.msg} (line {exc.lineno}, column {exc.colno})") from exc
