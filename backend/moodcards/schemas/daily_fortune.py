"""
Daily fortune model and the score -> theme color table.
"""

from typing import List, Optional

from pydantic import Field

from moodcards.schemas.common import HexColor, NonEmptyStr, Percent, ResultModel, StarRating

# (minimum score, color name, hex), checked top-down.
THEME_COLOR_BANDS = (
    (80, "green", "#10b981"),
    (60, "blue", "#3b82f6"),
    (40, "orange", "#f59e0b"),
    (0, "red", "#ef4444"),
)


def theme_color_name(score: int) -> str:
    for minimum, name, _ in THEME_COLOR_BANDS:
        if score >= minimum:
            return name
    return THEME_COLOR_BANDS[-1][1]


def theme_color_for_score(score: int) -> str:
    """score>=80 green, 60-79 blue, 40-59 orange, <40 red (hex)."""
    for minimum, _, hex_value in THEME_COLOR_BANDS:
        if score >= minimum:
            return hex_value
    return THEME_COLOR_BANDS[-1][2]


class DailyFortune(ResultModel):
    """Date-scoped astrological report."""

    date: NonEmptyStr
    zodiac: NonEmptyStr
    zodiacIcon: NonEmptyStr
    overallScore: Percent
    loveStars: StarRating
    careerStars: StarRating
    wealthStars: StarRating
    keywords: List[NonEmptyStr] = Field(..., min_length=1, max_length=3)
    luckyItem: NonEmptyStr
    luckyColor: NonEmptyStr
    luckyColorHex: HexColor
    shouldDo: List[NonEmptyStr] = Field(..., min_length=1, max_length=3)
    shouldNotDo: List[NonEmptyStr] = Field(..., min_length=1, max_length=3)
    zodiacFortune: NonEmptyStr
    zodiacAnimalFortune: NonEmptyStr
    loveFortune: NonEmptyStr
    careerFortune: NonEmptyStr
    wealthFortune: NonEmptyStr
    themeColor: HexColor
    birthTime: Optional[str] = None
    bazi: Optional[str] = None
    name: Optional[str] = None
