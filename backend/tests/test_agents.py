"""End-to-end agent tests with a mocked upstream."""
from datetime import date

import httpx
import pytest

from conftest import RecordingHandler, completion_body, json_reply
from moodcards.agents import (
    DailyFortuneAgent,
    DiagnosisAgent,
    FortuneCardAgent,
    NoteCardAgent,
    PersonalityAgent,
    apply_local_fields,
    finalize_daily_fortune,
)
from moodcards.agents.personality import FALLBACK_REPLY, resolve_mode
from moodcards.exceptions import ErrorKind, FeatureError, TranscriptError, ValidationError
from moodcards.prompts import PERSONA_PROMPTS
from moodcards.schemas import SchemaKind, theme_color_for_score, validate_payload
from moodcards.schemas.diagnosis import Diagnosis
from moodcards.schemas.personality import ConversationTurn
from moodcards.utils import almanac, seeded_score

TARGET_DAY = date(2026, 10, 18)
BIRTH_DAY = date(1995, 6, 15)


def transcript(user_turns, end_with_assistant=True):
    turns = []
    for i in range(user_turns):
        turns.append(ConversationTurn(role="user", content=f"第{i + 1}个回答"))
        if i < user_turns - 1 or end_with_assistant:
            turns.append(ConversationTurn(role="assistant", content=f"第{i + 1}个回复"))
    return turns


class TestNoteCardAgent:
    @pytest.mark.asyncio
    async def test_valid_card_returned_unchanged(self, make_client, card_payload):
        handler = RecordingHandler(json_reply(card_payload))
        agent = NoteCardAgent(make_client(handler))

        card = await agent.generate_card("今天开会讨论了新产品路线图，压力很大但很兴奋")

        assert card.model_dump() == card_payload
        assert card.colorTheme == "purple"
        assert card.borderColor == "#8B5CF6"
        request = handler.requests[0]
        assert request["temperature"] == 0.7
        assert "新产品路线图" in request["messages"][1]["content"]

    @pytest.mark.asyncio
    async def test_auth_failure_is_classified(self, make_client):
        client = make_client(
            lambda request: httpx.Response(401, json={"error": {"message": "Authentication Fails"}})
        )
        with pytest.raises(FeatureError) as exc_info:
            await NoteCardAgent(client).generate_card("随便写点")
        error = exc_info.value
        assert error.kind is ErrorKind.AUTH
        assert error.retryable is False
        assert "DEEPSEEK_API_KEY" in error.message
        assert error.feature == "note_card"

    @pytest.mark.asyncio
    async def test_balance_exhausted(self, make_client):
        client = make_client(lambda request: httpx.Response(402, json={"error": {"message": "Insufficient Balance"}}))
        with pytest.raises(FeatureError) as exc_info:
            await NoteCardAgent(client).generate_card("随便写点")
        assert exc_info.value.kind is ErrorKind.INSUFFICIENT_BALANCE

    @pytest.mark.asyncio
    async def test_missing_key_is_config_error(self, make_client):
        with pytest.raises(FeatureError) as exc_info:
            await NoteCardAgent(make_client(json_reply({}), api_key=None)).generate_card("随便写点")
        assert exc_info.value.kind is ErrorKind.CONFIG

    @pytest.mark.asyncio
    async def test_timeout_message_uses_configured_timeout(self, make_client):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(FeatureError) as exc_info:
            await NoteCardAgent(make_client(handler, timeout=12)).generate_card("随便写点")
        assert exc_info.value.kind is ErrorKind.TIMEOUT
        assert "12 秒" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_prose_reply_is_parse_error(self, make_client):
        client = make_client(lambda request: httpx.Response(200, json=completion_body("好的，这是你的卡片！")))
        with pytest.raises(FeatureError) as exc_info:
            await NoteCardAgent(client).generate_card("随便写点")
        assert exc_info.value.kind is ErrorKind.PARSE
        assert exc_info.value.retryable is True


class TestDiagnosisAgent:
    @pytest.mark.asyncio
    async def test_fenced_payload_missing_intensity(self, make_client, diagnosis_payload):
        del diagnosis_payload["intensity"]
        client = make_client(json_reply(diagnosis_payload, fenced=True))

        with pytest.raises(FeatureError) as exc_info:
            await DiagnosisAgent(client).diagnose("最近总是睡不着", mode="gentle")

        error = exc_info.value
        assert error.kind is ErrorKind.VALIDATION
        assert "intensity" in error.message
        assert isinstance(error.__cause__, ValidationError)
        assert error.__cause__.paths == ["intensity"]

    @pytest.mark.asyncio
    async def test_fenced_valid_payload(self, make_client, diagnosis_payload):
        client = make_client(json_reply(diagnosis_payload, fenced=True))
        diagnosis = await DiagnosisAgent(client).diagnose("最近总是睡不着")
        assert diagnosis.intensity == 72

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mode, temperature", [("gentle", 0.7), ("blunt", 0.85)])
    async def test_mode_temperature(self, make_client, diagnosis_payload, mode, temperature):
        handler = RecordingHandler(json_reply(diagnosis_payload))
        await DiagnosisAgent(make_client(handler)).diagnose("最近总是睡不着", mode=mode)
        assert handler.requests[0]["temperature"] == temperature

    @pytest.mark.asyncio
    async def test_unknown_mode(self, make_client, diagnosis_payload):
        with pytest.raises(ValueError):
            await DiagnosisAgent(make_client(json_reply(diagnosis_payload))).diagnose("x", mode="harsh")


class TestFortuneCardAgent:
    @pytest.mark.asyncio
    async def test_echoed_fields_come_from_diagnosis(self, make_client, diagnosis_payload):
        diagnosis = Diagnosis.model_validate(diagnosis_payload)
        drifted = {
            "date": "昨天",
            "title": "情绪天气：多云转晴",
            "emotionType": "happy",
            "analysis": "模型改写了分析",
            "fortune": {"overall": "整体平稳", "love": "适合表达", "career": "稳步推进", "health": "注意睡眠"},
            "tags": ["被改的", "标签"],
            "emotionColor": "#000000",
            "suggestions": ["别的建议"],
            "intensity": 10,
        }
        handler = RecordingHandler(json_reply(drifted))

        card = await FortuneCardAgent(make_client(handler)).generate(diagnosis, today=TARGET_DAY)

        for field in ("emotionType", "analysis", "emotionColor", "intensity"):
            assert getattr(card, field) == diagnosis_payload[field]
        assert card.tags == diagnosis_payload["tags"]
        assert card.suggestions == diagnosis_payload["suggestions"]
        assert card.date == "2026年10月18日 星期日"
        assert card.title == "情绪天气：多云转晴"
        assert card.fortune.health == "注意睡眠"
        assert handler.requests[0]["temperature"] == 0.8


class TestDailyFortuneAgent:
    @pytest.mark.asyncio
    async def test_local_fields_override_model(self, make_client, daily_fortune_payload):
        agent = DailyFortuneAgent(make_client(json_reply(daily_fortune_payload)))

        fortune = await agent.generate("张三", BIRTH_DAY, "子时", target_date=TARGET_DAY)

        assert fortune.name == "张三"
        assert fortune.birthTime == "子"
        assert fortune.bazi == almanac.bazi_pillars(BIRTH_DAY, "子")
        assert fortune.zodiac == "双子座"
        assert fortune.zodiacIcon == "♊"
        assert fortune.date == "2026年10月18日 星期日"
        assert fortune.themeColor == "#10b981"
        assert fortune.overallScore == 85
        assert fortune.luckyItem == "钢笔"

    @pytest.mark.asyncio
    async def test_prompt_carries_almanac(self, make_client, daily_fortune_payload):
        handler = RecordingHandler(json_reply(daily_fortune_payload))
        await DailyFortuneAgent(make_client(handler)).generate("张三", BIRTH_DAY, "子", target_date=TARGET_DAY)
        prompt = handler.requests[0]["messages"][1]["content"]
        assert "己亥 庚午 己巳 甲子" in prompt
        assert "双子座" in prompt
        assert "猪" in prompt

    @pytest.mark.asyncio
    async def test_seeded_scores(self, make_client, daily_fortune_payload):
        agent = DailyFortuneAgent(make_client(json_reply(daily_fortune_payload)), use_seeded_scores=True)
        fortune = await agent.generate("张三", BIRTH_DAY, "子", target_date=TARGET_DAY)

        birth_ts = seeded_score.epoch_millis(BIRTH_DAY)
        expected = seeded_score.score("张三", birth_ts, "2026-10-18")
        assert fortune.overallScore == expected
        assert fortune.loveStars == seeded_score.stars("张三", birth_ts, "2026-10-18", "love")
        assert fortune.themeColor == theme_color_for_score(expected)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("theme_color", ["green", "", None])
    async def test_model_theme_color_replaced_before_validation(
        self, make_client, daily_fortune_payload, theme_color
    ):
        if theme_color is None:
            del daily_fortune_payload["themeColor"]
        else:
            daily_fortune_payload["themeColor"] = theme_color
        agent = DailyFortuneAgent(make_client(json_reply(daily_fortune_payload)))

        fortune = await agent.generate("张三", BIRTH_DAY, "子", target_date=TARGET_DAY)

        assert fortune.overallScore == 85
        assert fortune.themeColor == "#10b981"

    @pytest.mark.asyncio
    async def test_missing_local_fields_supplied(self, make_client, daily_fortune_payload):
        for key in ("date", "zodiac", "zodiacIcon", "themeColor"):
            del daily_fortune_payload[key]
        agent = DailyFortuneAgent(make_client(json_reply(daily_fortune_payload)))

        fortune = await agent.generate("张三", BIRTH_DAY, "子", target_date=TARGET_DAY)

        assert fortune.date == "2026年10月18日 星期日"
        assert fortune.zodiac == "双子座"
        assert fortune.zodiacIcon == "♊"

    @pytest.mark.asyncio
    async def test_invalid_score_still_fails_validation(self, make_client, daily_fortune_payload):
        daily_fortune_payload["overallScore"] = 150
        agent = DailyFortuneAgent(make_client(json_reply(daily_fortune_payload)))

        with pytest.raises(FeatureError) as exc_info:
            await agent.generate("张三", BIRTH_DAY, "子", target_date=TARGET_DAY)

        assert exc_info.value.kind is ErrorKind.VALIDATION
        assert exc_info.value.__cause__.paths == ["overallScore"]

    @pytest.mark.asyncio
    async def test_unknown_hour(self, make_client, daily_fortune_payload):
        agent = DailyFortuneAgent(make_client(json_reply(daily_fortune_payload)))
        with pytest.raises(ValueError):
            await agent.generate("张三", BIRTH_DAY, "午夜", target_date=TARGET_DAY)


class TestApplyLocalFields:
    def test_overwrites_and_derives_theme_color(self, daily_fortune_payload):
        daily_fortune_payload["overallScore"] = 65
        daily_fortune_payload["themeColor"] = "blue"
        prepared = apply_local_fields(daily_fortune_payload, {"name": "张三", "zodiac": "双子座"})
        assert prepared["name"] == "张三"
        assert prepared["zodiac"] == "双子座"
        assert prepared["themeColor"] == "#3b82f6"
        assert daily_fortune_payload["themeColor"] == "blue"

    def test_score_override_drives_theme_color(self, daily_fortune_payload):
        prepared = apply_local_fields(daily_fortune_payload, {"overallScore": 30})
        assert prepared["themeColor"] == "#ef4444"

    @pytest.mark.parametrize("score", ["85", True, None])
    def test_non_numeric_score_left_for_validation(self, daily_fortune_payload, score):
        daily_fortune_payload["overallScore"] = score
        prepared = apply_local_fields(daily_fortune_payload, {})
        assert prepared["themeColor"] == daily_fortune_payload["themeColor"]

    def test_non_object_passes_through(self):
        assert apply_local_fields(["not", "a", "dict"], {"name": "张三"}) == ["not", "a", "dict"]


class TestFinalizeDailyFortune:
    @pytest.mark.parametrize("score", range(0, 101, 5))
    def test_theme_color_follows_score(self, daily_fortune_payload, score):
        daily_fortune_payload["overallScore"] = score
        fortune = validate_payload(daily_fortune_payload, SchemaKind.DAILY_FORTUNE)
        final = finalize_daily_fortune(fortune, name="张三", birth_time="子", bazi="己亥 庚午 己巳 甲子")
        if score >= 80:
            assert final.themeColor == "#10b981"
        elif score >= 60:
            assert final.themeColor == "#3b82f6"
        elif score >= 40:
            assert final.themeColor == "#f59e0b"
        else:
            assert final.themeColor == "#ef4444"

    def test_returns_new_instance(self, daily_fortune_payload):
        fortune = validate_payload(daily_fortune_payload, SchemaKind.DAILY_FORTUNE)
        final = finalize_daily_fortune(fortune, name="张三", birth_time="子", bazi="己亥 庚午 己巳 甲子")
        assert final is not fortune
        assert fortune.name == "模型编的名字"
        assert final.name == "张三"


class TestPersonalityAgent:
    def test_profile_needs_five_turns(self, make_client):
        agent = PersonalityAgent(make_client(json_reply({})))
        assert agent.check_profile_turns(transcript(5)) == 5
        with pytest.raises(TranscriptError):
            agent.check_profile_turns(transcript(4))
        with pytest.raises(TranscriptError):
            agent.check_profile_turns(transcript(5, end_with_assistant=False))
        with pytest.raises(TranscriptError):
            agent.check_profile_turns(transcript(6))

    def test_partial_profile(self, make_client):
        agent = PersonalityAgent(make_client(json_reply({})))
        assert agent.check_profile_turns(transcript(2, end_with_assistant=False), allow_partial=True) == 2
        with pytest.raises(TranscriptError):
            agent.check_profile_turns([], allow_partial=True)

    @pytest.mark.asyncio
    async def test_short_transcript_makes_no_request(self, make_client):
        handler = RecordingHandler(json_reply({}))
        with pytest.raises(TranscriptError):
            await PersonalityAgent(make_client(handler)).generate_card(transcript(3))
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_generate_card(self, make_client, personality_payload):
        handler = RecordingHandler(json_reply(personality_payload))
        card = await PersonalityAgent(make_client(handler)).generate_card(transcript(5), mode="cute")

        assert card.title == "深夜哲学家"
        request = handler.requests[0]
        assert request["temperature"] == 0.9
        assert request["messages"][0]["content"].startswith(PERSONA_PROMPTS["cute"])
        assert "用户: 第5个回答" in request["messages"][1]["content"]
        assert "AI: 第5个回复" in request["messages"][1]["content"]

    @pytest.mark.asyncio
    async def test_stats_out_of_range_rejected(self, make_client, personality_payload):
        personality_payload["stats"]["energy"] = 120
        client = make_client(json_reply(personality_payload))
        with pytest.raises(FeatureError) as exc_info:
            await PersonalityAgent(client).generate_card(transcript(5))
        assert exc_info.value.kind is ErrorKind.VALIDATION

    @pytest.mark.asyncio
    async def test_chat_reply(self, make_client):
        handler = RecordingHandler(lambda request: httpx.Response(200, json=completion_body("老哥你这回答绝了")))
        agent = PersonalityAgent(make_client(handler))
        turns = transcript(2, end_with_assistant=False)

        reply = await agent.reply(turns, mode="savage")

        assert reply == "老哥你这回答绝了"
        request = handler.requests[0]
        assert request["temperature"] == 0.8
        assert request["messages"][0] == {"role": "system", "content": PERSONA_PROMPTS["savage"]}
        assert [m["role"] for m in request["messages"][1:]] == ["user", "assistant", "user"]

    @pytest.mark.asyncio
    async def test_empty_chat_reply_falls_back(self, make_client):
        client = make_client(lambda request: httpx.Response(200, json=completion_body("")))
        reply = await PersonalityAgent(client).reply(transcript(1, end_with_assistant=False))
        assert reply == FALLBACK_REPLY

    @pytest.mark.asyncio
    async def test_chat_requires_pending_user_turn(self, make_client):
        with pytest.raises(TranscriptError):
            await PersonalityAgent(make_client(json_reply({}))).reply(transcript(2))

    @pytest.mark.asyncio
    async def test_chat_upstream_failure_classified(self, make_client):
        client = make_client(lambda request: httpx.Response(429, json={"error": {"message": "Rate limit reached"}}))
        with pytest.raises(FeatureError) as exc_info:
            await PersonalityAgent(client).reply(transcript(1, end_with_assistant=False))
        assert exc_info.value.kind is ErrorKind.RATE_LIMIT

    def test_unknown_mode_falls_back(self):
        assert resolve_mode("pirate") == "tieba"
        assert resolve_mode("tea") == "tea"

