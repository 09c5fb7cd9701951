"""Tests for error classification and user-facing messages."""
import pytest

from moodcards.exceptions import (
    ConfigError,
    ErrorKind,
    FeatureError,
    FieldIssue,
    MalformedResponseError,
    NetworkError,
    ParseError,
    UpstreamError,
    UpstreamTimeoutError,
    ValidationError,
)
from moodcards.llm_gateway.errors import TOP_UP_URL, build_user_message, classify_error


class TestClassifyError:
    @pytest.mark.parametrize(
        "status, expected",
        [
            (401, ErrorKind.AUTH),
            (403, ErrorKind.AUTH),
            (402, ErrorKind.INSUFFICIENT_BALANCE),
            (404, ErrorKind.NOT_FOUND),
            (429, ErrorKind.RATE_LIMIT),
            (500, ErrorKind.UPSTREAM),
            (503, ErrorKind.UPSTREAM),
        ],
    )
    def test_by_status(self, status, expected):
        assert classify_error(UpstreamError(status, "boom")) is expected

    @pytest.mark.parametrize("detail", ["Insufficient Balance", "账户余额不足"])
    def test_balance_reported_in_text(self, detail):
        assert classify_error(UpstreamError(400, detail)) is ErrorKind.INSUFFICIENT_BALANCE

    @pytest.mark.parametrize(
        "error, expected",
        [
            (ConfigError("no key"), ErrorKind.CONFIG),
            (UpstreamTimeoutError(30), ErrorKind.TIMEOUT),
            (NetworkError("reset"), ErrorKind.NETWORK),
            (MalformedResponseError("no content"), ErrorKind.MALFORMED_RESPONSE),
            (ParseError("bad json"), ErrorKind.PARSE),
            (ValidationError("Card", [FieldIssue("tags", "too few items")]), ErrorKind.VALIDATION),
            (RuntimeError("surprise"), ErrorKind.UNKNOWN),
        ],
    )
    def test_by_type(self, error, expected):
        assert classify_error(error) is expected


class TestRetryable:
    @pytest.mark.parametrize(
        "kind", [ErrorKind.CONFIG, ErrorKind.AUTH, ErrorKind.INSUFFICIENT_BALANCE, ErrorKind.NOT_FOUND]
    )
    def test_not_retryable(self, kind):
        assert kind.retryable is False
        assert FeatureError(kind, "x").retryable is False

    @pytest.mark.parametrize(
        "kind", [ErrorKind.TIMEOUT, ErrorKind.RATE_LIMIT, ErrorKind.PARSE, ErrorKind.VALIDATION, ErrorKind.NETWORK]
    )
    def test_retryable(self, kind):
        assert kind.retryable is True


class TestUserMessage:
    def test_auth_points_at_key(self):
        message = build_user_message(ErrorKind.AUTH, "生成卡片", UpstreamError(401, "Authentication Fails"))
        assert "401" in message
        assert "DEEPSEEK_API_KEY" in message

    def test_balance_links_top_up(self):
        assert TOP_UP_URL in build_user_message(ErrorKind.INSUFFICIENT_BALANCE, "生成卡片")

    def test_upstream_includes_status_and_detail(self):
        message = build_user_message(ErrorKind.UPSTREAM, "生成卡片", UpstreamError(500, "server exploded"))
        assert "500" in message
        assert "server exploded" in message

    def test_validation_names_field(self):
        error = ValidationError("Diagnosis", [FieldIssue("intensity", "missing required field")])
        assert "intensity" in build_user_message(ErrorKind.VALIDATION, "情绪诊断", error)

    def test_unknown_uses_feature_label(self):
        assert build_user_message(ErrorKind.UNKNOWN, "生成今日运势", RuntimeError("x")).startswith("生成今日运势失败")

    def test_unknown_hides_internal_text(self):
        error = RuntimeError("KeyError at /srv/app/secret_module.py line 42")
        message = build_user_message(ErrorKind.UNKNOWN, "生成卡片", error)
        assert "secret_module" not in message
        assert "line 42" not in message
        assert message == "生成卡片失败：发生未知错误，请稍后重试。"

    @pytest.mark.parametrize("timeout, expected", [(12, "12 秒"), (30, "30 秒"), (7.5, "7.5 秒")])
    def test_timeout_reports_configured_seconds(self, timeout, expected):
        message = build_user_message(ErrorKind.TIMEOUT, "生成卡片", UpstreamTimeoutError(timeout))
        assert expected in message

    def test_timeout_without_duration(self):
        message = build_user_message(ErrorKind.TIMEOUT, "生成卡片", TimeoutError())
        assert "请求超时" in message
        assert "30 秒" not in message

    def test_distinct_messages_for_special_kinds(self):
        kinds = [ErrorKind.AUTH, ErrorKind.INSUFFICIENT_BALANCE, ErrorKind.RATE_LIMIT, ErrorKind.NOT_FOUND]
        messages = {build_user_message(kind, "生成卡片") for kind in kinds}
        assert len(messages) == len(kinds)


def test_validation_error_lists_issues():
    error = ValidationError("Card", [FieldIssue("tags", "too few items"), FieldIssue("borderColor", "bad hex")])
    assert error.paths == ["tags", "borderColor"]
    assert str(error) == "Card validation failed: tags: too few items; borderColor: bad hex"


def test_timeout_error_is_builtin_timeout():
    assert isinstance(UpstreamTimeoutError(30), TimeoutError)
