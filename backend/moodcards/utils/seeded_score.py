# -*- coding: utf-8 -*-
"""
心卡 MoodCards - 大模型驱动的情绪与运势卡片生成服务
MoodCards - LLM-Powered Mood & Fortune Card Generation Service

Copyright © 2025-2026 MoodCards Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  确定性运势分数 - 由 {姓名, 出生时间戳, 目标日期, 类别} 派生可复现的分数与星级
  Seeded Score Generator - Reproducible 0-100 scores and 1-5 star ratings derived from
  {subject label, birth timestamp, target date, category}.

说明 / Note:
  使用经典的 hash*31 + charCode 字符串哈希，按 32 位有符号整数回绕，保证与其他语言实现
  逐位一致。没有任何安全性承诺。
  Classic hash*31 + charCode with 32-bit signed wraparound so results match other
  implementations bit for bit. No security property is claimed.
"""

import calendar
from datetime import date
from typing import Tuple

from moodcards.utils.text import utf16_length, utf16_units

STAR_THRESHOLDS: Tuple[Tuple[int, int], ...] = ((80, 5), (60, 4), (40, 3), (20, 2))


def _to_int32(value: int) -> int:
    return (value + 2 ** 31) % 2 ** 32 - 2 ** 31


def _truncated_mod(value: int, modulus: int) -> int:
    """Remainder with the sign of the dividend (C/JavaScript `%`)."""
    remainder = abs(value) % modulus
    return -remainder if value < 0 else remainder


def string_hash(text: str) -> int:
    """
    32 位有符号字符串哈希

    32-bit signed `hash = hash * 31 + code` over UTF-16 code units.
    """
    value = 0
    for code in utf16_units(text):
        value = _to_int32((value << 5) - value + code)
    return value


def epoch_millis(day: date) -> int:
    """出生日期（UTC 零点）对应的毫秒时间戳 / Epoch milliseconds of `day` at UTC midnight."""
    return calendar.timegm(day.timetuple()) * 1000


def _base_seed(subject_label: str, birth_timestamp: int, target_date_iso: str) -> int:
    return (
        utf16_length(subject_label) * 1000
        + _truncated_mod(int(birth_timestamp), 10000)
        + utf16_length(target_date_iso) * 100
    )


def score(subject_label: str, birth_timestamp: int, target_date_iso: str) -> int:
    """
    综合运势分数 [0, 100]

    Overall score in [0, 100]; identical inputs always give identical output.

    Args:
        subject_label: 姓名等主体标识 / Subject identity string
        birth_timestamp: 出生时间戳（毫秒） / Birth timestamp in milliseconds
        target_date_iso: 目标日期 YYYY-MM-DD / Target date in ISO form
    """
    seed = _base_seed(subject_label, birth_timestamp, target_date_iso)
    return abs(string_hash(str(seed))) % 101


def stars(subject_label: str, birth_timestamp: int, target_date_iso: str, category: str) -> int:
    """
    分类星级 [1, 5]

    Star rating in [1, 5] for a category label (e.g. "love", "career", "wealth").
    """
    category_sum = sum(utf16_units(category))
    seed = _base_seed(subject_label, birth_timestamp, target_date_iso) + category_sum * 50
    category_score = abs(string_hash(str(seed))) % 100
    for threshold, rating in STAR_THRESHOLDS:
        if category_score >= threshold:
            return rating
    return 1
