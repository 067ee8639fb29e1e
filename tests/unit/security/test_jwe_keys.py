"""Unit tests for key reification and KeyManager."""

from __future__ import annotations

import asyncio

import pytest
from jose.utils import base64url_decode, base64url_encode

from service_tokens.kernel.errors import InvalidKeyDefinitionError
from service_tokens.security.jwe import (
    KEY_WRAP_KEY_SIZES,
    KeyManager,
    generate_key_definition,
    reify_oct_jwk,
)
from service_tokens.testing.fakes import CountingReifier


class _RecordingLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict]] = []

    def _log(self, level: str, event: str, **kw) -> None:
        self.records.append((level, event, kw))

    def debug(self, event: str, **kw) -> None:
        self._log("debug", event, **kw)

    def info(self, event: str, **kw) -> None:
        self._log("info", event, **kw)

    def warning(self, event: str, **kw) -> None:
        self._log("warning", event, **kw)

    def error(self, event: str, **kw) -> None:
        self._log("error", event, **kw)

    def critical(self, event: str, **kw) -> None:
        self._log("critical", event, **kw)


# ---------------------------------------------------------------------------
# generate_key_definition
# ---------------------------------------------------------------------------


class TestGenerateKeyDefinition:
    @pytest.mark.parametrize("algorithm", sorted(KEY_WRAP_KEY_SIZES))
    def test_key_length_matches_algorithm(self, algorithm: str) -> None:
        definition = generate_key_definition("k1", algorithm)
        material = base64url_decode(definition["k"].encode("ascii"))
        assert len(material) == KEY_WRAP_KEY_SIZES[algorithm]
        assert definition["kty"] == "oct"
        assert definition["alg"] == algorithm
        assert definition["kid"] == "k1"

    def test_keys_are_random(self) -> None:
        assert generate_key_definition("a")["k"] != generate_key_definition("a")["k"]

    def test_unsupported_algorithm(self) -> None:
        with pytest.raises(ValueError):
            generate_key_definition("k1", "RSA-OAEP")


# ---------------------------------------------------------------------------
# reify_oct_jwk
# ---------------------------------------------------------------------------


class TestReifyOctJwk:
    def test_reifies_raw_bytes(self) -> None:
        definition = generate_key_definition("svc")
        key = reify_oct_jwk(definition, "A256KW")
        assert key.kid == "svc"
        assert key.algorithm == "A256KW"
        assert len(key.material) == 32

    def test_repr_hides_material(self) -> None:
        key = reify_oct_jwk(generate_key_definition("svc"), "A256KW")
        assert key.material.hex() not in repr(key)

    def test_alg_member_is_optional(self) -> None:
        definition = generate_key_definition("svc")
        del definition["alg"]
        assert reify_oct_jwk(definition, "A256KW").kid == "svc"

    @pytest.mark.parametrize(
        "definition",
        [
            {"kty": "RSA", "k": base64url_encode(b"x" * 32).decode()},
            {"kty": "oct"},
            {"kty": "oct", "k": ""},
            {"kty": "oct", "k": 12345},
            {"kty": "oct", "k": base64url_encode(b"x" * 16).decode()},
            {"kty": "oct", "alg": "A128KW", "k": base64url_encode(b"x" * 32).decode()},
        ],
    )
    def test_rejects_unusable_definitions(self, definition: dict) -> None:
        with pytest.raises(InvalidKeyDefinitionError):
            reify_oct_jwk(definition, "A256KW")

    def test_rejects_unsupported_algorithm(self) -> None:
        definition = {"kty": "oct", "k": base64url_encode(b"x" * 32).decode()}
        with pytest.raises(InvalidKeyDefinitionError):
            reify_oct_jwk(definition, "dir")


# ---------------------------------------------------------------------------
# KeyManager
# ---------------------------------------------------------------------------


class TestKeyManager:
    def test_ready_after_first_call(self) -> None:
        manager = KeyManager(generate_key_definition("svc"))
        assert manager.key is None
        result = asyncio.run(manager.ensure_key_ready())
        assert result.is_ok() and result.unwrap() is True
        assert manager.key is not None and manager.key.kid == "svc"

    def test_idempotent(self) -> None:
        reifier = CountingReifier()
        manager = KeyManager(generate_key_definition("svc"), reifier=reifier)

        async def _run() -> list:
            return [await manager.ensure_key_ready() for _ in range(5)]

        results = asyncio.run(_run())
        assert all(r.is_ok() for r in results)
        assert reifier.calls == 1
        assert manager.reify_count == 1

    def test_same_key_object_is_kept(self) -> None:
        manager = KeyManager(generate_key_definition("svc"))
        asyncio.run(manager.ensure_key_ready())
        first = manager.key
        asyncio.run(manager.ensure_key_ready())
        assert manager.key is first

    def test_concurrent_first_calls_converge(self) -> None:
        manager = KeyManager(generate_key_definition("svc"))

        async def _run() -> list:
            return await asyncio.gather(*(manager.ensure_key_ready() for _ in range(4)))

        results = asyncio.run(_run())
        assert all(r.is_ok() for r in results)
        assert 1 <= manager.reify_count <= 4
        assert manager.key is not None

    @pytest.mark.parametrize("definition", ["a-string", None, 42, ["kty", "oct"]])
    def test_non_mapping_definition(self, definition: object) -> None:
        reifier = CountingReifier()
        manager = KeyManager(definition, reifier=reifier)
        result = asyncio.run(manager.ensure_key_ready())
        assert result.is_err()
        assert isinstance(result.error, InvalidKeyDefinitionError)
        assert reifier.calls == 0
        assert manager.key is None

    def test_reifier_rejection_is_returned(self) -> None:
        logger = _RecordingLogger()
        manager = KeyManager({"kty": "oct", "k": "dG9vLXNob3J0"}, logger=logger)
        result = asyncio.run(manager.ensure_key_ready())
        assert isinstance(result.error, InvalidKeyDefinitionError)
        assert manager.reify_count == 0
        assert logger.records[-1][:2] == ("error", "key_reification_failed")

    def test_reifier_value_error_is_wrapped(self) -> None:
        def _broken(definition, algorithm):
            raise ValueError("boom")

        result = asyncio.run(KeyManager({"kty": "oct"}, reifier=_broken).ensure_key_ready())
        assert isinstance(result.error, InvalidKeyDefinitionError)

    def test_unexpected_reifier_error_is_returned(self) -> None:
        def _key_store_down(definition, algorithm):
            raise RuntimeError("key store unavailable")

        logger = _RecordingLogger()
        manager = KeyManager(generate_key_definition("svc"), reifier=_key_store_down, logger=logger)
        result = asyncio.run(manager.ensure_key_ready())
        assert isinstance(result.error, InvalidKeyDefinitionError)
        assert manager.key is None
        assert logger.records[-1] == ("error", "key_reification_failed", {"reason": "RuntimeError"})

    def test_failure_is_retried_on_next_call(self) -> None:
        reifier = CountingReifier()
        manager = KeyManager({"kty": "oct", "k": "dG9vLXNob3J0"}, reifier=reifier)
        asyncio.run(manager.ensure_key_ready())
        asyncio.run(manager.ensure_key_ready())
        assert reifier.calls == 2

    def test_non_callable_reifier_is_usage_error(self) -> None:
        with pytest.raises(TypeError):
            KeyManager(generate_key_definition("svc"), reifier="not-callable")  # type: ignore[arg-type]
