"""
Personality chat router.
"""

from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from moodcards.agents import PersonalityAgent
from moodcards.dependencies import get_personality_agent
from moodcards.schemas.personality import (
    REQUIRED_USER_TURNS,
    ChatMode,
    ConversationTurn,
    PersonalityCard,
    count_user_turns,
)

router = APIRouter(prefix="/personality", tags=["personality"])


class ChatRequest(BaseModel):
    """Transcript so far, ending with the newest user message."""

    messages: List[ConversationTurn] = Field(default_factory=list)
    mode: ChatMode = "tieba"


class ChatResponse(BaseModel):
    reply: str
    user_turns: int
    ready: bool = Field(..., description="Five turns done; the card can be generated")


class PersonalityCardRequest(BaseModel):
    messages: List[ConversationTurn] = Field(default_factory=list)
    mode: ChatMode = "tieba"
    allow_partial: bool = Field(default=False, description="Generate from fewer than five turns")


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, agent: PersonalityAgent = Depends(get_personality_agent)):
    """Get the persona's reply to the latest user turn."""
    reply = await agent.reply(request.messages, mode=request.mode)
    user_turns = count_user_turns(request.messages)
    return ChatResponse(reply=reply, user_turns=user_turns, ready=user_turns >= REQUIRED_USER_TURNS)


@router.post("/card", response_model=PersonalityCard)
async def create_personality_card(
    request: PersonalityCardRequest,
    agent: PersonalityAgent = Depends(get_personality_agent),
):
    """Generate the personality card from the transcript."""
    return await agent.generate_card(request.messages, mode=request.mode, allow_partial=request.allow_partial)
