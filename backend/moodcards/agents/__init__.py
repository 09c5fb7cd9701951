"""
Feature agents / 功能编排
Note card, mood diagnosis, fortune card, personality profile and daily fortune.
"""

from .base import BaseAgent
from .daily_fortune import DailyFortuneAgent, apply_local_fields, finalize_daily_fortune
from .diagnosis import DiagnosisAgent
from .fortune_card import FortuneCardAgent
from .note_card import NoteCardAgent
from .personality import PersonalityAgent

__all__ = [
    "BaseAgent",
    "DailyFortuneAgent",
    "DiagnosisAgent",
    "FortuneCardAgent",
    "NoteCardAgent",
    "PersonalityAgent",
    "apply_local_fields",
    "finalize_daily_fortune",
]
