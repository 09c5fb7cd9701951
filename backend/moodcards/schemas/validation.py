# -*- coding: utf-8 -*-
"""
心卡 MoodCards - 大模型驱动的情绪与运势卡片生成服务
MoodCards - LLM-Powered Mood & Fortune Card Generation Service

Copyright © 2025-2026 MoodCards Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  结构化校验 - 按 SchemaKind 选择模型并把 Pydantic 错误转换为字段级问题列表
  Schema Validator - Selects the model for a SchemaKind and turns Pydantic errors into
  a field-path/reason list the agents can classify.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from moodcards.exceptions import FieldIssue, ValidationError
from moodcards.schemas.card import Card
from moodcards.schemas.daily_fortune import DailyFortune
from moodcards.schemas.diagnosis import Diagnosis, FortuneCard
from moodcards.schemas.personality import PersonalityCard


class SchemaKind(str, Enum):
    """校验模型标签 / Tag selecting which structural validator applies."""

    CARD = "card"
    DIAGNOSIS = "diagnosis"
    PERSONALITY_CARD = "personality_card"
    FORTUNE_CARD = "fortune_card"
    DAILY_FORTUNE = "daily_fortune"


SCHEMA_MODELS: Dict[SchemaKind, Type[BaseModel]] = {
    SchemaKind.CARD: Card,
    SchemaKind.DIAGNOSIS: Diagnosis,
    SchemaKind.PERSONALITY_CARD: PersonalityCard,
    SchemaKind.FORTUNE_CARD: FortuneCard,
    SchemaKind.DAILY_FORTUNE: DailyFortune,
}

_REASONS = {
    "missing": "missing required field",
    "literal_error": "value outside the allowed set",
    "string_pattern_mismatch": "not a #RGB or #RRGGBB hex color",
    "too_short": "too few items",
    "too_long": "too many items",
    "greater_than_equal": "below minimum",
    "less_than_equal": "above maximum",
}


def _format_path(loc: Iterable[Any]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "<root>"


def issues_from_pydantic(exc: PydanticValidationError) -> List[FieldIssue]:
    """Flatten a Pydantic error into (path, reason) pairs."""
    issues = []
    for error in exc.errors():
        error_type = error.get("type", "")
        reason = _REASONS.get(error_type)
        if reason:
            reason = f"{reason} ({error.get('msg')})"
        else:
            reason = error.get("msg", error_type)
        issues.append(FieldIssue(path=_format_path(error.get("loc", ())), reason=reason))
    return issues


def validate_payload(payload: Any, kind: SchemaKind) -> BaseModel:
    """
    按 schema 校验已解析的 JSON

    Validate a parsed JSON value against the schema selected by `kind`.

    Args:
        payload: 规范化后的 JSON 值 / Normalized JSON value
        kind: 目标 schema / Target schema kind

    Returns:
        不可变的结果模型 / Immutable typed result

    Raises:
        ValidationError: 列出所有违规字段及原因 / Lists every violated field and reason
    """
    model = SCHEMA_MODELS[SchemaKind(kind)]
    if not isinstance(payload, dict):
        raise ValidationError(
            model.__name__,
            [FieldIssue(path="<root>", reason=f"expected a JSON object, got {type(payload).__name__}")],
        )
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(model.__name__, issues_from_pydantic(exc)) from exc
