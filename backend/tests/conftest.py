"""Pytest configuration for MoodCards backend tests."""
import json
import os
import sys
import tempfile
from pathlib import Path

import httpx
import pytest

# Ensure the backend package is importable
backend_root = Path(__file__).resolve().parent.parent
if str(backend_root) not in sys.path:
    sys.path.insert(0, str(backend_root))

# Settings are read once at import time
os.environ.setdefault("MOODCARDS_LOG_DIR", tempfile.mkdtemp(prefix="moodcards-logs-"))
os.environ.setdefault("MOODCARDS_RATE_LIMIT", "1000/minute")

from moodcards.llm_gateway.gateway import CompletionClient  # noqa: E402
from moodcards.llm_gateway.providers import OpenAICompatibleProvider  # noqa: E402

TEST_API_KEY = "sk-test-0123456789"
TEST_BASE_URL = "https://llm.test/v1"


def completion_body(content):
    """Chat-completion response body whose first choice carries `content`."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "deepseek-chat",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


def json_reply(payload, fenced=False):
    """Handler answering every request with `payload` serialized as the completion text."""
    text = json.dumps(payload, ensure_ascii=False)
    if fenced:
        text = f"```json\n{text}\n```"

    def handler(request):
        return httpx.Response(200, json=completion_body(text))

    return handler


class RecordingHandler:
    """MockTransport handler that records request bodies."""

    def __init__(self, handler):
        self.handler = handler
        self.requests = []

    def __call__(self, request):
        self.requests.append(json.loads(request.content))
        return self.handler(request)


@pytest.fixture
def make_client():
    """Build a CompletionClient whose upstream is an httpx MockTransport handler."""

    def factory(handler, api_key=TEST_API_KEY, timeout=5.0):
        def provider_factory():
            return OpenAICompatibleProvider(
                api_key=api_key,
                base_url=TEST_BASE_URL,
                timeout=timeout,
                http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
            )

        return CompletionClient(
            api_key=api_key,
            base_url=TEST_BASE_URL,
            timeout=timeout,
            provider_factory=provider_factory,
        )

    return factory


@pytest.fixture
def card_payload():
    return {
        "title": "新产品路线图会议",
        "summary": "会议讨论了新产品路线图，压力大但充满期待。",
        "tags": ["工作", "产品", "会议"],
        "colorTheme": "purple",
        "borderColor": "#8B5CF6",
    }


@pytest.fixture
def diagnosis_payload():
    return {
        "emotionType": "anxiety",
        "title": "焦虑值爆表",
        "analysis": "你对即将到来的截止日期感到紧张。",
        "tags": ["焦虑", "工作"],
        "emotionColor": "#f59e0b",
        "suggestions": ["先列出任务清单", "给自己留出休息时间"],
        "intensity": 72,
    }


@pytest.fixture
def daily_fortune_payload():
    return {
        "date": "随便写的日期",
        "zodiac": "错误星座",
        "zodiacIcon": "?",
        "overallScore": 85,
        "loveStars": 4,
        "careerStars": 5,
        "wealthStars": 3,
        "keywords": ["顺利", "贵人"],
        "luckyItem": "钢笔",
        "luckyColor": "天蓝色",
        "luckyColorHex": "#87CEEB",
        "shouldDo": ["整理计划"],
        "shouldNotDo": ["冲动消费"],
        "zodiacFortune": "今天思路清晰。",
        "zodiacAnimalFortune": "属猪的你人缘不错。",
        "loveFortune": "适合坦诚沟通。",
        "careerFortune": "推进关键任务。",
        "wealthFortune": "收支平衡。",
        "themeColor": "#ef4444",
        "name": "模型编的名字",
        "bazi": "甲子 甲子 甲子 甲子",
    }


@pytest.fixture
def personality_payload():
    return {
        "title": "深夜哲学家",
        "rarity": "SR",
        "analysis": {
            "comment": "你是一个表面佛系、内心戏很多的人。",
            "hobbies": ["看书", "散步"],
            "compatible": "话痨型朋友",
        },
        "stats": {
            "introversion": 70,
            "creativity": 80,
            "humor": 60,
            "logic": 75,
            "empathy": 65,
            "energy": 40,
        },
        "visual": {"bgColor": "#1e1b4b", "primaryColor": "#a78bfa", "secondaryColor": "#f472b6"},
    }
