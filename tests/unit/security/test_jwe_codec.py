"""Unit tests for ClaimsCodec."""

from __future__ import annotations

import json
from datetime import datetime

import pytest

from service_tokens.security.jwe import ClaimsCodec


class _RecordingLogger:
    def __init__(self) -> None:
        self.warnings: list[tuple[str, dict]] = []

    def warning(self, event: str, **kw) -> None:
        self.warnings.append((event, kw))


@pytest.fixture
def logger() -> _RecordingLogger:
    return _RecordingLogger()


@pytest.fixture
def codec(logger: _RecordingLogger) -> ClaimsCodec:
    return ClaimsCodec(logger)  # type: ignore[arg-type]


class TestEncode:
    def test_compact_json(self, codec: ClaimsCodec) -> None:
        assert codec.encode({"foo": "bar", "n": 1}) == '{"foo":"bar","n":1}'

    def test_cyclic_returns_none(self, codec: ClaimsCodec, logger: _RecordingLogger) -> None:
        circular: dict = {}
        circular["b"] = {"circular": circular}
        assert codec.encode(circular) is None
        assert logger.warnings[0][0] == "claims_encode_failed"

    def test_non_json_value_returns_none(self, codec: ClaimsCodec) -> None:
        assert codec.encode({"when": datetime(2026, 1, 1)}) is None

    def test_nan_returns_none(self, codec: ClaimsCodec) -> None:
        assert codec.encode({"n": float("nan")}) is None

    def test_log_names_claims_but_not_values(self, codec: ClaimsCodec, logger: _RecordingLogger) -> None:
        codec.encode({"email": "alice@example.com", "when": datetime(2026, 1, 1)})
        _, fields = logger.warnings[0]
        assert "email" in fields["claim_names"]
        assert "alice@example.com" not in json.dumps(fields, default=str)


class TestDecode:
    def test_object(self, codec: ClaimsCodec) -> None:
        assert codec.decode('{"aud":"bob"}') == {"aud": "bob"}

    def test_bytes(self, codec: ClaimsCodec) -> None:
        assert codec.decode(b'{"aud":"bob"}') == {"aud": "bob"}

    @pytest.mark.parametrize("text", ["", "{not json", "null", "[1, 2]", '"str"', None, b"\xff\xfe"])
    def test_malformed_returns_none(self, codec: ClaimsCodec, text) -> None:
        assert codec.decode(text) is None

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_constants_return_none(self, codec: ClaimsCodec, constant: str) -> None:
        assert codec.decode(f'{{"exp":{constant}}}') is None

    def test_diagnostic_is_truncated(self, codec: ClaimsCodec, logger: _RecordingLogger) -> None:
        codec.decode("x" * 500)
        event, fields = logger.warnings[0]
        assert event == "claims_decode_failed"
        assert len(fields["preview"]) <= 35
        assert fields["preview"].endswith("...")
