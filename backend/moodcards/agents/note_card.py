"""
Note Card Agent
Summarizes a free-form note into a shareable Card.
"""

from moodcards.agents.base import BaseAgent
from moodcards.prompts import NOTE_CARD_SYSTEM_PROMPT, note_card_prompt
from moodcards.schemas.card import Card
from moodcards.schemas.validation import SchemaKind
from moodcards.utils.text import normalize_newlines


class NoteCardAgent(BaseAgent):
    """Single-shot note summarizer; moderate temperature for consistent structure."""

    schema_kind = SchemaKind.CARD
    temperature = 0.7
    feature_label = "生成卡片"

    def get_agent_name(self) -> str:
        return "note_card"

    async def generate_card(self, note_text: str) -> Card:
        return await self.run_pipeline(
            NOTE_CARD_SYSTEM_PROMPT,
            note_card_prompt(normalize_newlines(note_text)),
        )
