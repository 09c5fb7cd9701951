# -*- coding: utf-8 -*-
"""
心卡 MoodCards - 大模型驱动的情绪与运势卡片生成服务
MoodCards - LLM-Powered Mood & Fortune Card Generation Service

Copyright © 2025-2026 MoodCards Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  历法工具 - 星座、生肖与简化版生辰八字
  Calendrical Helpers - Western zodiac sign, Chinese zodiac animal and a simplified four-pillar BaZi.

说明 / Note:
  八字算法是刻意简化的近似：年柱以 2 月 4 日为界，月柱按公历月份，日柱按平均月长
  30.44 天推算，不做节气与农历换算。这是产品内公开说明的近似，不是缺陷。
  The BaZi calculation is a documented approximation: it ignores true solar-term
  boundaries and lunar calendar conversion. Do not make it astronomically correct.
"""

import math
from datetime import date
from typing import Dict, NamedTuple, Tuple

# 十天干 / Ten heavenly stems
TIAN_GAN: Tuple[str, ...] = ("甲", "乙", "丙", "丁", "戊", "己", "庚", "辛", "壬", "癸")
# 十二地支 / Twelve earthly branches
DI_ZHI: Tuple[str, ...] = ("子", "丑", "寅", "卯", "辰", "巳", "午", "未", "申", "酉", "戌", "亥")

BRANCH_PINYIN: Tuple[str, ...] = (
    "zi", "chou", "yin", "mao", "chen", "si", "wu", "wei", "shen", "you", "xu", "hai",
)

# 时辰 -> 时间段 / Two-hour block spans, index-aligned with DI_ZHI
HOUR_BRANCH_SPANS: Tuple[str, ...] = (
    "23:00-01:00", "01:00-03:00", "03:00-05:00", "05:00-07:00",
    "07:00-09:00", "09:00-11:00", "11:00-13:00", "13:00-15:00",
    "15:00-17:00", "17:00-19:00", "19:00-21:00", "21:00-23:00",
)

ZODIAC_ANIMALS: Tuple[str, ...] = (
    "Rat", "Ox", "Tiger", "Rabbit", "Dragon", "Snake",
    "Horse", "Goat", "Monkey", "Rooster", "Dog", "Pig",
)
ZODIAC_ANIMALS_CN: Tuple[str, ...] = ("鼠", "牛", "虎", "兔", "龙", "蛇", "马", "羊", "猴", "鸡", "狗", "猪")

REFERENCE_YEAR = 1900
AVERAGE_MONTH_DAYS = 30.44


class ZodiacSign(NamedTuple):
    name: str
    cn_name: str
    icon: str


ARIES = ZodiacSign("Aries", "白羊座", "♈")
TAURUS = ZodiacSign("Taurus", "金牛座", "♉")
GEMINI = ZodiacSign("Gemini", "双子座", "♊")
CANCER = ZodiacSign("Cancer", "巨蟹座", "♋")
LEO = ZodiacSign("Leo", "狮子座", "♌")
VIRGO = ZodiacSign("Virgo", "处女座", "♍")
LIBRA = ZodiacSign("Libra", "天秤座", "♎")
SCORPIO = ZodiacSign("Scorpio", "天蝎座", "♏")
SAGITTARIUS = ZodiacSign("Sagittarius", "射手座", "♐")
CAPRICORN = ZodiacSign("Capricorn", "摩羯座", "♑")
AQUARIUS = ZodiacSign("Aquarius", "水瓶座", "♒")
PISCES = ZodiacSign("Pisces", "双鱼座", "♓")

# (start month, start day, sign); a sign runs until the next entry's start.
_SIGN_STARTS: Tuple[Tuple[int, int, ZodiacSign], ...] = (
    (1, 20, AQUARIUS),
    (2, 19, PISCES),
    (3, 21, ARIES),
    (4, 20, TAURUS),
    (5, 21, GEMINI),
    (6, 22, CANCER),
    (7, 23, LEO),
    (8, 23, VIRGO),
    (9, 23, LIBRA),
    (10, 24, SCORPIO),
    (11, 23, SAGITTARIUS),
    (12, 22, CAPRICORN),
)


def zodiac_sign(day: date) -> ZodiacSign:
    """
    根据月日计算星座（与年份无关）

    Western zodiac sign from (month, day) only.

    Example:
        >>> zodiac_sign(date(2000, 3, 21)).name
        'Aries'
    """
    key = (day.month, day.day)
    sign = CAPRICORN  # Jan 1 - Jan 19
    for month, start_day, candidate in _SIGN_STARTS:
        if key >= (month, start_day):
            sign = candidate
    return sign


def zodiac_animal_index(year: int) -> int:
    return (year - 4) % 12


def zodiac_animal(year: int) -> str:
    """生肖（英文名），(year - 4) mod 12，0 = Rat。"""
    return ZODIAC_ANIMALS[zodiac_animal_index(year)]


def zodiac_animal_cn(year: int) -> str:
    return ZODIAC_ANIMALS_CN[zodiac_animal_index(year)]


def _build_hour_lookup() -> Dict[str, int]:
    lookup: Dict[str, int] = {}
    for index, branch in enumerate(DI_ZHI):
        lookup[branch] = index
        lookup[f"{branch}时"] = index
        lookup[BRANCH_PINYIN[index]] = index
    return lookup


_HOUR_LOOKUP = _build_hour_lookup()


def hour_branch_index(name: str) -> int:
    """
    时辰名称 -> 地支索引

    Accepts the branch character ("子"), the character with 时 ("子时")
    or pinyin ("Zi", case-insensitive).

    Raises:
        ValueError: 未知时辰 / Unknown time-block name
    """
    key = (name or "").strip()
    index = _HOUR_LOOKUP.get(key, _HOUR_LOOKUP.get(key.lower()))
    if index is None:
        raise ValueError(f"未知时辰: {name!r}")
    return index


def is_hour_branch(name: str) -> bool:
    try:
        hour_branch_index(name)
    except ValueError:
        return False
    return True


def _pillar(stem: int, branch: int) -> str:
    return f"{TIAN_GAN[stem]}{DI_ZHI[branch]}"


def bazi_indices(birth_date: date, hour_branch: str) -> Tuple[Tuple[int, int], ...]:
    """
    四柱（天干索引, 地支索引）

    Return ((year_stem, year_branch), (month_stem, month_branch),
    (day_stem, day_branch), (hour_stem, hour_branch)).
    """
    year, month, day = birth_date.year, birth_date.month, birth_date.day

    # 年柱：以 2 月 4 日粗略代替立春 / Feb 4 stands in for the solar-term year boundary
    year_offset = year - REFERENCE_YEAR
    if month < 2 or (month == 2 and day < 4):
        year_offset -= 1
    year_stem = year_offset % 10
    year_branch = year_offset % 12

    month_branch = (month - 1 + 1) % 12
    month_stem = (year_stem * 2 + month_branch) % 10

    # 日柱：平均月长近似，不查真实干支历 / average month length, not a real day-cycle lookup
    day_offset = math.floor((year - REFERENCE_YEAR) * 365.25 + (month - 1) * AVERAGE_MONTH_DAYS + day)
    day_stem = day_offset % 10
    day_branch = day_offset % 12

    hour_branch_idx = hour_branch_index(hour_branch)
    hour_stem = (day_stem * 2 + hour_branch_idx) % 10

    return (
        (year_stem, year_branch),
        (month_stem, month_branch),
        (day_stem, day_branch),
        (hour_stem, hour_branch_idx),
    )


def bazi_pillars(birth_date: date, hour_branch: str) -> str:
    """
    简化版生辰八字，四组干支以空格分隔

    Simplified four-pillar string, e.g. "己亥 庚午 己巳 甲子".

    Example:
        >>> bazi_pillars(date(1995, 6, 15), "子")
        '己亥 庚午 己巳 甲子'
    """
    return " ".join(_pillar(stem, branch) for stem, branch in bazi_indices(birth_date, hour_branch))


WEEKDAYS_CN: Tuple[str, ...] = ("星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日")


def format_cn_date(day: date, with_weekday: bool = True) -> str:
    """2026年10月18日 星期日"""
    label = f"{day.year}年{day.month}月{day.day}日"
    if with_weekday:
        label = f"{label} {WEEKDAYS_CN[day.weekday()]}"
    return label
