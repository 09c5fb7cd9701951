# -*- coding: utf-8 -*-
"""
心卡 MoodCards - 大模型驱动的情绪与运势卡片生成服务
MoodCards - LLM-Powered Mood & Fortune Card Generation Service

Copyright © 2025-2026 MoodCards Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  应用配置 - 从环境变量与 .env 文件加载只读配置
  Application Settings - Read-only configuration loaded from the environment and an optional .env file.

使用示例 / Usage:
    from moodcards.config import settings

    client = CompletionClient(api_key=settings.deepseek_api_key, base_url=settings.llm_base_url)
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

BACKEND_ROOT = Path(__file__).resolve().parent.parent

load_dotenv(dotenv_path=BACKEND_ROOT / ".env")


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: List[str]) -> List[str]:
    value = os.getenv(name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseModel):
    """
    进程级只读配置 / Process-wide read-only settings

    Attributes:
        deepseek_api_key: 上游凭证，可为空（调用时报 ConfigError） / Upstream credential, may be absent.
        llm_base_url: 兼容 Chat Completions 的端点 / Chat-completion compatible base URL.
        llm_model: 固定模型标识 / Fixed model identifier.
        llm_timeout_seconds: 单次调用的硬超时 / Hard wall-clock timeout per call.
        api_key_prefix: 凭证预期前缀，仅用于告警 / Expected credential prefix (warning only).
        daily_fortune_seeded_scores: 今日运势是否使用确定性分数 / Use seeded scores for daily fortune.
    """

    model_config = ConfigDict(frozen=True)

    deepseek_api_key: Optional[str] = None
    llm_base_url: str = "https://api.deepseek.com/v1"
    llm_model: str = "deepseek-chat"
    llm_timeout_seconds: float = Field(default=30.0, gt=0)
    api_key_prefix: str = "sk-"
    daily_fortune_seeded_scores: bool = False

    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:8000",
            "http://127.0.0.1:8000",
        ]
    )
    rate_limit: str = "30/minute"
    log_dir: Path = BACKEND_ROOT / "logs"

    @property
    def llm_configured(self) -> bool:
        return bool((self.deepseek_api_key or "").strip())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    从环境变量构建配置（缓存单例）

    Build settings from environment variables (cached singleton).
    """
    defaults = Settings()
    return Settings(
        deepseek_api_key=os.getenv("DEEPSEEK_API_KEY") or None,
        llm_base_url=os.getenv("MOODCARDS_LLM_BASE_URL", defaults.llm_base_url),
        llm_model=os.getenv("MOODCARDS_LLM_MODEL", defaults.llm_model),
        llm_timeout_seconds=float(os.getenv("MOODCARDS_LLM_TIMEOUT", defaults.llm_timeout_seconds)),
        daily_fortune_seeded_scores=_env_bool("MOODCARDS_SEEDED_SCORES", False),
        debug=_env_bool("MOODCARDS_DEBUG", False),
        host=os.getenv("MOODCARDS_HOST", defaults.host),
        port=int(os.getenv("MOODCARDS_PORT") or os.getenv("PORT") or defaults.port),
        cors_origins=_env_list("MOODCARDS_CORS_ORIGINS", defaults.cors_origins),
        rate_limit=os.getenv("MOODCARDS_RATE_LIMIT", defaults.rate_limit),
        log_dir=Path(os.getenv("MOODCARDS_LOG_DIR") or defaults.log_dir),
    )


settings = get_settings()
