"""
Result schemas / 结果数据模型
"""

from .card import Card
from .daily_fortune import DailyFortune, theme_color_for_score
from .diagnosis import Diagnosis, FortuneBreakdown, FortuneCard
from .personality import ConversationTurn, PersonalityCard
from .validation import SchemaKind, validate_payload

__all__ = [
    "Card",
    "ConversationTurn",
    "DailyFortune",
    "Diagnosis",
    "FortuneBreakdown",
    "FortuneCard",
    "PersonalityCard",
    "SchemaKind",
    "theme_color_for_score",
    "validate_payload",
]
