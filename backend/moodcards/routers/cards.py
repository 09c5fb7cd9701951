"""
Note card router.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from moodcards.agents import NoteCardAgent
from moodcards.dependencies import get_note_card_agent
from moodcards.schemas.card import Card

router = APIRouter(prefix="/cards", tags=["cards"])


class NoteCardRequest(BaseModel):
    """Request body for note summarization."""

    text: str = Field(..., description="Note text to summarize")


@router.post("", response_model=Card)
async def create_note_card(request: NoteCardRequest, agent: NoteCardAgent = Depends(get_note_card_agent)):
    """Summarize a note into a card."""
    text = (request.text or "").strip()
    if not text:
        raise HTTPException(status_code=400, detail="Content is required")
    return await agent.generate_card(text)
