"""
Mood diagnosis and emotion-linked fortune card models.
"""

from typing import List

from pydantic import Field

from moodcards.schemas.common import EmotionType, HexColor, NonEmptyStr, Percent, ResultModel


class Diagnosis(ResultModel):
    """Mood analysis result."""

    emotionType: EmotionType = Field(..., description="Dominant emotion")
    title: NonEmptyStr = Field(..., description="One-line verdict")
    analysis: NonEmptyStr = Field(..., description="Analysis text")
    tags: List[NonEmptyStr] = Field(..., min_length=2, max_length=5)
    emotionColor: HexColor = Field(..., description="Emotion color")
    suggestions: List[NonEmptyStr] = Field(..., min_length=1, max_length=3)
    intensity: Percent = Field(..., description="Emotion intensity 0-100")


class FortuneBreakdown(ResultModel):
    """Four-part fortune text."""

    overall: NonEmptyStr
    love: NonEmptyStr
    career: NonEmptyStr
    health: NonEmptyStr


class FortuneCard(ResultModel):
    """Fortune card derived from a Diagnosis; emotion fields mirror the source."""

    date: NonEmptyStr
    title: NonEmptyStr
    emotionType: EmotionType
    analysis: NonEmptyStr
    fortune: FortuneBreakdown
    tags: List[NonEmptyStr] = Field(..., min_length=2, max_length=5)
    emotionColor: HexColor
    suggestions: List[NonEmptyStr] = Field(..., min_length=1, max_length=3)
    intensity: Percent


# Fields a FortuneCard echoes verbatim from its source Diagnosis.
ECHOED_DIAGNOSIS_FIELDS = ("emotionType", "analysis", "tags", "emotionColor", "suggestions", "intensity")
