"""
Daily fortune router.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from moodcards.agents import DailyFortuneAgent
from moodcards.dependencies import get_daily_fortune_agent
from moodcards.schemas.daily_fortune import DailyFortune
from moodcards.utils import almanac

router = APIRouter(prefix="/daily-fortune", tags=["daily-fortune"])


class BirthProfileRequest(BaseModel):
    birth_date: date = Field(..., description="Birth date, YYYY-MM-DD")
    birth_time: str = Field(..., description="Earthly-branch hour, e.g. 子")

    @field_validator("birth_time")
    @classmethod
    def check_birth_time(cls, value: str) -> str:
        if not almanac.is_hour_branch(value):
            raise ValueError(f"birth_time must be one of {', '.join(almanac.DI_ZHI)}")
        return value


class DailyFortuneRequest(BirthProfileRequest):
    name: str = Field(..., min_length=1, max_length=50)
    target_date: Optional[date] = Field(default=None, description="Defaults to today")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        # Runs before the length check, so a blank name is rejected
        return value.strip() if isinstance(value, str) else value


@router.post("", response_model=DailyFortune)
async def create_daily_fortune(
    request: DailyFortuneRequest,
    agent: DailyFortuneAgent = Depends(get_daily_fortune_agent),
):
    """Generate the fortune for a person and day."""
    return await agent.generate(
        name=request.name,
        birth_date=request.birth_date,
        birth_time=request.birth_time,
        target_date=request.target_date,
    )


@router.post("/profile")
async def birth_profile(request: BirthProfileRequest):
    """Zodiac, animal and BaZi for a birth moment (no LLM call)."""
    sign = almanac.zodiac_sign(request.birth_date)
    return {
        "zodiac": sign.cn_name,
        "zodiac_en": sign.name,
        "zodiac_icon": sign.icon,
        "zodiac_animal": almanac.zodiac_animal_cn(request.birth_date.year),
        "zodiac_animal_en": almanac.zodiac_animal(request.birth_date.year),
        "bazi": almanac.bazi_pillars(request.birth_date, request.birth_time),
    }


@router.get("/bazi-rule")
async def bazi_rule():
    """Explain the simplified BaZi method."""
    return {
        "tian_gan": list(almanac.TIAN_GAN),
        "di_zhi": list(almanac.DI_ZHI),
        "hours": [
            {"branch": branch, "span": span}
            for branch, span in zip(almanac.DI_ZHI, almanac.HOUR_BRANCH_SPANS)
        ],
        "pillars": {
            "year": "以 1900 年为基准推算，2 月 4 日前出生按上一年计算（粗略代替立春）。",
            "month": "地支按公历月份推算，天干由年干推出。",
            "day": f"按平均月长 {almanac.AVERAGE_MONTH_DAYS} 天推算日序，非真实干支历查表。",
            "hour": "地支取出生时辰，天干由日干推出。",
        },
        "disclaimer": "本计算为简化算法，未做节气与农历换算，结果仅供娱乐参考。",
    }
