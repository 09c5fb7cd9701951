"""
Personality Agent
Runs the five-turn persona chat and turns the transcript into a PersonalityCard.

The transcript is owned by the caller and passed in on every call; the agent
keeps no session state.
"""

from typing import List, Sequence

from moodcards.agents.base import BaseAgent
from moodcards.exceptions import MalformedResponseError, TranscriptError
from moodcards.prompts import (
    DEFAULT_PERSONA,
    PERSONA_PROMPTS,
    persona_prompt,
    personality_card_prompt,
    personality_system_prompt,
)
from moodcards.schemas.personality import (
    REQUIRED_USER_TURNS,
    ConversationTurn,
    PersonalityCard,
    count_user_turns,
    render_transcript,
)
from moodcards.schemas.validation import SchemaKind
from moodcards.utils.logger import get_logger

logger = get_logger(__name__)

FALLBACK_REPLY = "抱歉，我无法回复。"


def resolve_mode(mode: str) -> str:
    return mode if mode in PERSONA_PROMPTS else DEFAULT_PERSONA


class PersonalityAgent(BaseAgent):
    """Persona chat plus profile generation (hotter temperature for variety)."""

    schema_kind = SchemaKind.PERSONALITY_CARD
    temperature = 0.9
    chat_temperature = 0.8
    feature_label = "生成人格卡片"

    def get_agent_name(self) -> str:
        return "personality"

    def check_chat_turns(self, turns: Sequence[ConversationTurn]) -> int:
        user_turns = count_user_turns(turns)
        if not turns or turns[-1].role != "user":
            raise TranscriptError("对话记录的最后一条必须是用户消息")
        if user_turns > REQUIRED_USER_TURNS:
            raise TranscriptError(f"最多进行 {REQUIRED_USER_TURNS} 轮对话")
        return user_turns

    def check_profile_turns(self, turns: Sequence[ConversationTurn], allow_partial: bool = False) -> int:
        user_turns = count_user_turns(turns)
        if user_turns == 0:
            raise TranscriptError("至少需要 1 轮对话才能生成人格卡片")
        if user_turns > REQUIRED_USER_TURNS:
            raise TranscriptError(f"最多进行 {REQUIRED_USER_TURNS} 轮对话")
        if allow_partial:
            return user_turns
        if user_turns < REQUIRED_USER_TURNS:
            raise TranscriptError(f"需要完成 {REQUIRED_USER_TURNS} 轮对话，当前 {user_turns} 轮")
        if turns[-1].role != "assistant":
            raise TranscriptError("请等待第 5 轮对话的回复后再生成人格卡片")
        return user_turns

    async def reply(self, turns: Sequence[ConversationTurn], mode: str = DEFAULT_PERSONA) -> str:
        """
        获取一轮助手回复（无 schema）

        Fetch the assistant reply for the latest user turn. No schema applies;
        an empty completion yields the fixed fallback reply.
        """
        self.check_chat_turns(turns)
        messages: List[dict] = [{"role": "system", "content": persona_prompt(resolve_mode(mode))}]
        messages.extend({"role": turn.role, "content": turn.content} for turn in turns)
        try:
            return await self.gateway.chat(messages, self.chat_temperature)
        except MalformedResponseError:
            logger.warning("[personality] empty chat completion, using fallback reply")
            return FALLBACK_REPLY
        except Exception as exc:
            raise self.to_feature_error(exc) from exc

    async def generate_card(
        self,
        turns: Sequence[ConversationTurn],
        mode: str = DEFAULT_PERSONA,
        allow_partial: bool = False,
    ) -> PersonalityCard:
        """
        根据对话记录生成人格卡片

        Requires five user turns with the fifth reply appended, unless
        `allow_partial` is set, in which case one user turn is enough.
        """
        user_turns = self.check_profile_turns(turns, allow_partial=allow_partial)
        logger.info("[personality] generating card: mode=%s user_turns=%d", mode, user_turns)
        mode = resolve_mode(mode)
        return await self.run_pipeline(
            personality_system_prompt(mode),
            personality_card_prompt(render_transcript(turns)),
        )
