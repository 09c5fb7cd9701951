"""
Daily Fortune Agent
Blends the deterministic almanac (zodiac, animal, BaZi) with an LLM-authored
narrative. The model only writes narrative and score fields; everything the
agent knows locally is written over the parsed payload before validation
(`apply_local_fields`) and again on the typed result (`finalize_daily_fortune`).
"""

from datetime import date
from typing import Any, Dict, Optional

from moodcards.agents.base import BaseAgent
from moodcards.prompts import DAILY_FORTUNE_SYSTEM_PROMPT, daily_fortune_prompt
from moodcards.schemas.daily_fortune import DailyFortune, theme_color_for_score
from moodcards.schemas.validation import SchemaKind
from moodcards.utils import almanac, seeded_score
from moodcards.utils.logger import get_logger

logger = get_logger(__name__)

STAR_CATEGORIES = {
    "loveStars": "love",
    "careerStars": "career",
    "wealthStars": "wealth",
}


def seeded_scores(name: str, birth_date: date, target_date: date) -> Dict[str, int]:
    """确定性分数与星级 / Reproducible score and star ratings for one person and day."""
    birth_ts = seeded_score.epoch_millis(birth_date)
    target_iso = target_date.isoformat()
    scores = {"overallScore": seeded_score.score(name, birth_ts, target_iso)}
    for field, category in STAR_CATEGORIES.items():
        scores[field] = seeded_score.stars(name, birth_ts, target_iso, category)
    return scores


def apply_local_fields(payload: Any, local_fields: Dict[str, Any]) -> Any:
    """
    校验前写入本地字段 / Pre-validation step

    Writes the locally known fields onto the parsed payload and derives
    themeColor from overallScore, so a missing or off-vocabulary value from
    the model (e.g. "green") never fails validation. Non-object payloads pass
    through for validation to reject.
    """
    if not isinstance(payload, dict):
        return payload
    prepared = dict(payload)
    prepared.update(local_fields)
    overall = prepared.get("overallScore")
    if isinstance(overall, (int, float)) and not isinstance(overall, bool):
        theme_color = theme_color_for_score(overall)
        if str(payload.get("themeColor", "")).lower() != theme_color:
            logger.info(
                "[daily_fortune] themeColor %r does not match score %s, using %s",
                payload.get("themeColor"),
                overall,
                theme_color,
            )
        prepared["themeColor"] = theme_color
    return prepared


def finalize_daily_fortune(
    fortune: DailyFortune,
    *,
    name: str,
    birth_time: str,
    bazi: str,
    zodiac: Optional[str] = None,
    zodiac_icon: Optional[str] = None,
    date_label: Optional[str] = None,
    score_overrides: Optional[Dict[str, int]] = None,
) -> DailyFortune:
    """
    校验后的定稿步骤

    Post-validation finalize step, the one sanctioned exception to result
    immutability: returns a new DailyFortune whose name, birthTime and bazi
    (and zodiac/date when given) are the locally supplied values, and whose
    themeColor is derived from overallScore.
    """
    updates = {"name": name, "birthTime": birth_time, "bazi": bazi}
    if zodiac is not None:
        updates["zodiac"] = zodiac
    if zodiac_icon is not None:
        updates["zodiacIcon"] = zodiac_icon
    if date_label is not None:
        updates["date"] = date_label
    if score_overrides:
        updates.update(score_overrides)

    overall = updates.get("overallScore", fortune.overallScore)
    updates["themeColor"] = theme_color_for_score(overall)
    if updates["themeColor"].lower() != fortune.themeColor.lower():
        logger.info(
            "[daily_fortune] themeColor %s does not match score %d, using %s",
            fortune.themeColor,
            overall,
            updates["themeColor"],
        )
    return fortune.model_copy(update=updates)


class DailyFortuneAgent(BaseAgent):
    """Date-scoped fortune report."""

    schema_kind = SchemaKind.DAILY_FORTUNE
    temperature = 0.8
    feature_label = "生成今日运势"

    def __init__(self, gateway, use_seeded_scores: bool = False):
        super().__init__(gateway)
        self.use_seeded_scores = use_seeded_scores

    def get_agent_name(self) -> str:
        return "daily_fortune"

    async def generate(
        self,
        name: str,
        birth_date: date,
        birth_time: str,
        target_date: Optional[date] = None,
    ) -> DailyFortune:
        """
        生成指定日期的运势

        Args:
            name: 用户姓名 / Display name
            birth_date: 出生日期 / Birth date
            birth_time: 出生时辰（子、丑、寅……） / Earthly-branch hour name
            target_date: 目标日期，默认今天 / Day to report on (defaults to today)

        Raises:
            ValueError: 未知时辰 / Unknown hour name
            FeatureError: 调用或校验失败 / Upstream, parse or validation failure
        """
        target = target_date or date.today()
        birth_time = almanac.DI_ZHI[almanac.hour_branch_index(birth_time)]
        sign = almanac.zodiac_sign(birth_date)
        animal = almanac.zodiac_animal_cn(birth_date.year)
        bazi = almanac.bazi_pillars(birth_date, birth_time)
        today_label = almanac.format_cn_date(target)

        logger.info(
            "[daily_fortune] bazi=%s zodiac=%s animal=%s target=%s",
            bazi,
            sign.cn_name,
            animal,
            target.isoformat(),
        )

        overrides = seeded_scores(name, birth_date, target) if self.use_seeded_scores else None
        local_fields = {
            "name": name,
            "birthTime": birth_time,
            "bazi": bazi,
            "zodiac": sign.cn_name,
            "zodiacIcon": sign.icon,
            "date": today_label,
            **(overrides or {}),
        }

        fortune = await self.run_pipeline(
            DAILY_FORTUNE_SYSTEM_PROMPT,
            daily_fortune_prompt(
                name=name,
                birth_date_label=f"{birth_date.year}/{birth_date.month}/{birth_date.day}",
                birth_time=birth_time,
                bazi=bazi,
                zodiac_name=sign.cn_name,
                zodiac_icon=sign.icon,
                zodiac_animal=animal,
                today=today_label,
            ),
            prepare=lambda payload: apply_local_fields(payload, local_fields),
        )

        return finalize_daily_fortune(
            fortune,
            name=name,
            birth_time=birth_time,
            bazi=bazi,
            zodiac=sign.cn_name,
            zodiac_icon=sign.icon,
            date_label=today_label,
            score_overrides=overrides,
        )
