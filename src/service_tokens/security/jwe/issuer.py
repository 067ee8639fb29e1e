"""TokenIssuer – enrich a claim set with standard claims and encrypt it."""
from __future__ import annotations

from typing import Any, Mapping

from service_tokens.config.settings import TokenSettings
from service_tokens.kernel.errors import (
    EncryptionFailedError,
    InvalidClaimsError,
    NoEncryptionKeyError,
    TokenError,
    UnserializableClaimsError,
)
from service_tokens.kernel.time import Clock, epoch_seconds
from service_tokens.kernel.types import Err, Ok, Result
from service_tokens.observability.logging import Logger, get_logger
from service_tokens.security.jwe.cipher import JweCipher
from service_tokens.security.jwe.codec import ClaimsCodec
from service_tokens.security.jwe.keys import KeyManager

__all__ = ["TokenIssuer"]


class TokenIssuer:
    """Issues compact JWE tokens.

    ``iss``, ``iat`` and ``exp`` are always set by the issuer, overwriting any
    value the caller supplied.  The caller's mapping is never mutated.
    """

    def __init__(
        self,
        settings: TokenSettings,
        keys: KeyManager,
        cipher: JweCipher,
        codec: ClaimsCodec,
        clock: Clock,
        logger: Logger | None = None,
    ) -> None:
        self._settings = settings
        self._keys = keys
        self._cipher = cipher
        self._codec = codec
        self._clock = clock
        self._logger = logger or get_logger(__name__)

    def enrich(self, claims: Mapping[str, Any]) -> dict[str, Any]:
        iat = epoch_seconds(self._clock)
        enriched = dict(claims)
        enriched["iss"] = self._settings.issuer
        enriched["iat"] = iat
        enriched["exp"] = iat + self._settings.expiry_seconds
        return enriched

    async def issue(self, claims: Mapping[str, Any]) -> Result[str, TokenError]:
        if not isinstance(claims, Mapping):
            return Err(InvalidClaimsError())

        payload = self._codec.encode(self.enrich(claims))
        if payload is None:
            return Err(UnserializableClaimsError())

        ready = await self._keys.ensure_key_ready()
        key = self._keys.key
        if ready.is_err() or key is None:
            return Err(NoEncryptionKeyError())

        try:
            token = await self._cipher.encrypt_compact(
                key,
                algorithm=self._settings.key_wrap_algorithm,
                encryption=self._settings.content_encryption,
                payload=payload.encode("utf-8"),
            )
        except Exception as exc:  # noqa: BLE001 – any primitive failure is reported uniformly
            self._logger.error("token_encryption_failed", error=repr(exc))
            return Err(EncryptionFailedError())

        self._logger.debug("token_issued", kid=key.kid)
        return Ok(token)
