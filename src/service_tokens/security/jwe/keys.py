"""Key readiness – turns a JWK definition into cipher-ready key material once.

The cached key is a lazily populated cell with no lock: concurrent first
callers may each reify, and every run yields an equivalent key.
"""
from __future__ import annotations

import asyncio
import os
from typing import Any, Callable, Mapping

from jose.utils import base64url_decode, base64url_encode

from service_tokens.kernel.errors import InvalidKeyDefinitionError
from service_tokens.kernel.types import Err, Ok, Result
from service_tokens.observability.logging import Logger, get_logger
from service_tokens.security.jwe.cipher import ReifiedKey

__all__ = [
    "KEY_WRAP_KEY_SIZES",
    "KeyManager",
    "Reifier",
    "generate_key_definition",
    "reify_oct_jwk",
]

#: Key length in bytes required by each AES key-wrap algorithm.
KEY_WRAP_KEY_SIZES: dict[str, int] = {"A128KW": 16, "A192KW": 24, "A256KW": 32}

type Reifier = Callable[[Mapping[str, Any], str], ReifiedKey]


def reify_oct_jwk(definition: Mapping[str, Any], algorithm: str) -> ReifiedKey:
    """Decode a symmetric (``kty="oct"``) JWK into raw key bytes.

    Raises :class:`InvalidKeyDefinitionError` when the definition cannot
    serve *algorithm*.
    """
    if definition.get("kty") != "oct":
        raise InvalidKeyDefinitionError("Key definition must be a symmetric 'oct' JWK")
    declared = definition.get("alg")
    if declared is not None and declared != algorithm:
        raise InvalidKeyDefinitionError(f"Key is declared for {declared}, expected {algorithm}")
    encoded = definition.get("k")
    if not isinstance(encoded, str) or not encoded:
        raise InvalidKeyDefinitionError("Key definition has no 'k' member")
    try:
        material = base64url_decode(encoded.encode("ascii"))
    except ValueError as exc:
        raise InvalidKeyDefinitionError("Key definition 'k' is not base64url") from exc

    expected = KEY_WRAP_KEY_SIZES.get(algorithm)
    if expected is None:
        raise InvalidKeyDefinitionError(f"Unsupported key wrapping algorithm {algorithm}")
    if len(material) != expected:
        raise InvalidKeyDefinitionError(f"{algorithm} requires a {expected * 8}-bit key")
    return ReifiedKey(kid=definition.get("kid"), algorithm=algorithm, material=material)


def generate_key_definition(kid: str, algorithm: str = "A256KW") -> dict[str, str]:
    """Return a fresh random ``oct`` JWK suitable for *algorithm*."""
    size = KEY_WRAP_KEY_SIZES.get(algorithm)
    if size is None:
        raise ValueError(f"Unsupported key wrapping algorithm {algorithm}")
    return {
        "kty": "oct",
        "kid": kid,
        "alg": algorithm,
        "use": "enc",
        "k": base64url_encode(os.urandom(size)).decode("ascii"),
    }


class KeyManager:
    """Owns the reified key for one key definition."""

    def __init__(
        self,
        definition: Any,
        algorithm: str = "A256KW",
        *,
        reifier: Reifier = reify_oct_jwk,
        logger: Logger | None = None,
    ) -> None:
        if not callable(reifier):
            raise TypeError("reifier must be callable")
        self._definition = definition
        self._algorithm = algorithm
        self._reifier = reifier
        self._logger = logger or get_logger(__name__)
        self._key: ReifiedKey | None = None
        self._reify_count = 0

    @property
    def key(self) -> ReifiedKey | None:
        return self._key

    @property
    def reify_count(self) -> int:
        return self._reify_count

    async def ensure_key_ready(self) -> Result[bool, InvalidKeyDefinitionError]:
        """Reify the key on first use; later calls return immediately."""
        if self._key is not None:
            return Ok(True)
        if not isinstance(self._definition, Mapping):
            return Err(InvalidKeyDefinitionError("Key definition must be a mapping"))

        try:
            key = await asyncio.to_thread(self._reifier, self._definition, self._algorithm)
        except InvalidKeyDefinitionError as exc:
            self._logger.error("key_reification_failed", reason=exc.message)
            return Err(exc)
        except Exception as exc:  # noqa: BLE001
            self._logger.error("key_reification_failed", reason=type(exc).__name__)
            return Err(InvalidKeyDefinitionError())

        self._key = key
        self._reify_count += 1
        self._logger.info("key_ready", kid=key.kid, algorithm=key.algorithm)
        return Ok(True)
