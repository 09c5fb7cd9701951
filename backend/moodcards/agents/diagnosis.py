"""
Diagnosis Agent
Reads the mood behind a piece of text. Two tonal modes share one schema.
"""

from typing import Literal

from moodcards.agents.base import BaseAgent
from moodcards.prompts import DIAGNOSIS_SYSTEM_PROMPTS, diagnosis_prompt
from moodcards.schemas.diagnosis import Diagnosis
from moodcards.schemas.validation import SchemaKind
from moodcards.utils.text import normalize_newlines

DiagnosisMode = Literal["blunt", "gentle"]


class DiagnosisAgent(BaseAgent):
    """Mood diagnosis; the blunt mode runs slightly hotter."""

    schema_kind = SchemaKind.DIAGNOSIS
    temperature = 0.7
    feature_label = "情绪诊断"

    MODE_TEMPERATURES = {
        "gentle": 0.7,
        "blunt": 0.85,
    }

    def get_agent_name(self) -> str:
        return "diagnosis"

    async def diagnose(self, text: str, mode: DiagnosisMode = "gentle") -> Diagnosis:
        if mode not in DIAGNOSIS_SYSTEM_PROMPTS:
            raise ValueError(f"unknown diagnosis mode: {mode!r}")
        return await self.run_pipeline(
            DIAGNOSIS_SYSTEM_PROMPTS[mode],
            diagnosis_prompt(normalize_newlines(text)),
            temperature=self.MODE_TEMPERATURES[mode],
        )
