"""
Shared field types for result schemas.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints

HEX_COLOR_PATTERN = r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$"

HexColor = Annotated[str, StringConstraints(pattern=HEX_COLOR_PATTERN)]
NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]


def whole_number(value):
    """Accept ints and integer-valued floats (72.0 -> 72); reject bools, strings and fractions."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("must be an integer")
        return int(value)
    return value


Percent = Annotated[int, BeforeValidator(whole_number), Field(ge=0, le=100)]
StarRating = Annotated[int, BeforeValidator(whole_number), Field(ge=1, le=5)]

EmotionType = Literal["anxiety", "lovebrain", "emo", "happy", "confused", "angry", "sad", "excited"]

EMOTION_LABELS = {
    "anxiety": "焦虑",
    "lovebrain": "恋爱脑",
    "emo": "emo",
    "happy": "开心",
    "confused": "迷茫",
    "angry": "愤怒",
    "sad": "悲伤",
    "excited": "兴奋",
}


class ResultModel(BaseModel):
    """Immutable result value object; unknown keys from the model are dropped."""

    model_config = ConfigDict(frozen=True, extra="ignore")
