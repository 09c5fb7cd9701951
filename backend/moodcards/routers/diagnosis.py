"""
Mood diagnosis router.
"""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from moodcards.agents import DiagnosisAgent, FortuneCardAgent
from moodcards.dependencies import get_diagnosis_agent, get_fortune_card_agent
from moodcards.schemas.diagnosis import Diagnosis, FortuneCard

router = APIRouter(prefix="/diagnosis", tags=["diagnosis"])


class DiagnosisRequest(BaseModel):
    """Request body for a mood diagnosis."""

    text: str = Field(..., description="What the user wants diagnosed")
    mode: Literal["blunt", "gentle"] = Field(default="gentle", description="Tone of the diagnosis")


@router.post("", response_model=Diagnosis)
async def diagnose(request: DiagnosisRequest, agent: DiagnosisAgent = Depends(get_diagnosis_agent)):
    """Diagnose the mood behind a text."""
    text = (request.text or "").strip()
    if not text:
        raise HTTPException(status_code=400, detail="Content is required")
    return await agent.diagnose(text, mode=request.mode)


@router.post("/fortune-card", response_model=FortuneCard)
async def create_fortune_card(diagnosis: Diagnosis, agent: FortuneCardAgent = Depends(get_fortune_card_agent)):
    """Extend a diagnosis into a fortune card."""
    return await agent.generate(diagnosis)
