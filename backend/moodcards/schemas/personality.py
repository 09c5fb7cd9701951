"""
Personality profiling models: conversation turns and the generated card.
"""

from typing import List, Literal, Sequence

from pydantic import BaseModel, ConfigDict, Field

from moodcards.schemas.common import HexColor, NonEmptyStr, Percent, ResultModel

Rarity = Literal["N", "R", "SR", "SSR", "UR"]
ChatMode = Literal["tieba", "tea", "savage", "cute"]

REQUIRED_USER_TURNS = 5


class ConversationTurn(BaseModel):
    """One exchange in the personality chat."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str = Field(..., min_length=1)


def count_user_turns(turns: Sequence[ConversationTurn]) -> int:
    return sum(1 for turn in turns if turn.role == "user")


def render_transcript(turns: Sequence[ConversationTurn]) -> str:
    """Render turns as `用户: ...` / `AI: ...` lines in chronological order."""
    return "\n".join(f"{'用户' if turn.role == 'user' else 'AI'}: {turn.content}" for turn in turns)


class PersonalityAnalysis(ResultModel):
    comment: NonEmptyStr
    hobbies: List[NonEmptyStr] = Field(..., min_length=1)
    compatible: NonEmptyStr


class PersonalityStats(ResultModel):
    introversion: Percent
    creativity: Percent
    humor: Percent
    logic: Percent
    empathy: Percent
    energy: Percent


class PersonalityVisual(ResultModel):
    bgColor: HexColor
    primaryColor: HexColor
    secondaryColor: HexColor


class PersonalityCard(ResultModel):
    """Chat-derived personality profile."""

    title: NonEmptyStr
    rarity: Rarity
    analysis: PersonalityAnalysis
    stats: PersonalityStats
    visual: PersonalityVisual
