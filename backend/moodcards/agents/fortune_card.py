"""
Fortune Card Agent
Extends a Diagnosis into a four-part fortune while keeping its emotion fields.
"""

from datetime import date
from typing import Optional

from moodcards.agents.base import BaseAgent
from moodcards.prompts import FORTUNE_CARD_SYSTEM_PROMPT, fortune_card_prompt
from moodcards.schemas.diagnosis import ECHOED_DIAGNOSIS_FIELDS, Diagnosis, FortuneCard
from moodcards.schemas.validation import SchemaKind
from moodcards.utils.almanac import format_cn_date
from moodcards.utils.logger import get_logger

logger = get_logger(__name__)


def reconcile_with_diagnosis(card: FortuneCard, diagnosis: Diagnosis, today: str) -> FortuneCard:
    """
    用源诊断覆盖回显字段

    The model is not authoritative for the echoed emotion fields: copy them
    from the source diagnosis and stamp the date. Returns a new instance.
    """
    updates = {field: getattr(diagnosis, field) for field in ECHOED_DIAGNOSIS_FIELDS}
    drifted = [field for field, value in updates.items() if getattr(card, field) != value]
    if drifted:
        logger.warning("[fortune_card] model altered echoed fields %s; restored from diagnosis", drifted)
    updates["date"] = today
    return card.model_copy(update=updates)


class FortuneCardAgent(BaseAgent):
    """Single-shot fortune card derived from a prior diagnosis."""

    schema_kind = SchemaKind.FORTUNE_CARD
    temperature = 0.8
    feature_label = "生成情感分析卡片"

    def get_agent_name(self) -> str:
        return "fortune_card"

    async def generate(self, diagnosis: Diagnosis, today: Optional[date] = None) -> FortuneCard:
        today_label = format_cn_date(today or date.today())
        card = await self.run_pipeline(
            FORTUNE_CARD_SYSTEM_PROMPT,
            fortune_card_prompt(diagnosis, today_label),
        )
        return reconcile_with_diagnosis(card, diagnosis, today_label)
