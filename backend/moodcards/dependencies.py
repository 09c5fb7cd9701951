# -*- coding: utf-8 -*-
"""
心卡 MoodCards - 大模型驱动的情绪与运势卡片生成服务
MoodCards - LLM-Powered Mood & Fortune Card Generation Service

Copyright © 2025-2026 MoodCards Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  依赖注入工厂 - FastAPI Depends() 工厂函数，统一管理补全客户端与功能编排的创建
  Dependency Injection - FastAPI Depends() factories for the completion client and agents.

设计原则 / Design Principles:
  所有Router应通过 Depends() 获取Agent实例，测试中可通过 dependency_overrides 替换客户端。
  Routers obtain agents through Depends(); tests override get_completion_client.
"""

from fastapi import Depends

from moodcards.agents import (
    DailyFortuneAgent,
    DiagnosisAgent,
    FortuneCardAgent,
    NoteCardAgent,
    PersonalityAgent,
)
from moodcards.config import settings
from moodcards.llm_gateway import CompletionClient, get_gateway


def get_completion_client() -> CompletionClient:
    """
    获取进程级补全客户端

    Get the process-wide completion client (cached in llm_gateway.get_gateway).
    """
    return get_gateway()


def get_note_card_agent(gateway: CompletionClient = Depends(get_completion_client)) -> NoteCardAgent:
    return NoteCardAgent(gateway)


def get_diagnosis_agent(gateway: CompletionClient = Depends(get_completion_client)) -> DiagnosisAgent:
    return DiagnosisAgent(gateway)


def get_fortune_card_agent(gateway: CompletionClient = Depends(get_completion_client)) -> FortuneCardAgent:
    return FortuneCardAgent(gateway)


def get_personality_agent(gateway: CompletionClient = Depends(get_completion_client)) -> PersonalityAgent:
    return PersonalityAgent(gateway)


def get_daily_fortune_agent(gateway: CompletionClient = Depends(get_completion_client)) -> DailyFortuneAgent:
    return DailyFortuneAgent(gateway, use_seeded_scores=settings.daily_fortune_seeded_scores)
