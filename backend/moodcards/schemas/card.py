"""
Note-to-card data models.
"""

from typing import List, Literal

from pydantic import Field

from moodcards.schemas.common import HexColor, NonEmptyStr, ResultModel

ColorTheme = Literal["blue", "green", "red", "purple", "yellow"]


class Card(ResultModel):
    """Summarized note card."""

    title: NonEmptyStr = Field(..., description="Concise title")
    summary: NonEmptyStr = Field(..., description="Content summary")
    tags: List[NonEmptyStr] = Field(..., min_length=3, max_length=3, description="Exactly three tags")
    colorTheme: ColorTheme = Field(..., description="blue | green | red | purple | yellow")
    borderColor: HexColor = Field(..., description="Border color, #RGB or #RRGGBB")
