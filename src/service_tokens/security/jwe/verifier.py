"""TokenVerifier – the ordered verification pipeline.

Stages run in this order and the first failure is returned:

1. shape            -> InvalidTokenStringError
2. header algorithms -> InvalidHeaderError
3. key readiness    -> NoEncryptionKeyError
4. decryption       -> SuspectedTamperingError
5. payload          -> UnparsablePayloadError
6. mandatory claims -> MissingClaimsError
7. time window      -> TokenNotYetValidError / TokenExpiredError
8. audience         -> InvalidAudienceError

Every cipher failure (wrong key, corrupt ciphertext, bad tag, disallowed
algorithm) collapses into :class:`SuspectedTamperingError` so callers cannot
tell them apart.  The underlying exception is logged only.
"""
from __future__ import annotations

import base64
import binascii
import math
from typing import Any

from service_tokens.config.settings import TokenSettings
from service_tokens.kernel.errors import (
    InvalidAudienceError,
    InvalidHeaderError,
    InvalidTokenStringError,
    MissingClaimsError,
    NoEncryptionKeyError,
    SuspectedTamperingError,
    TokenError,
    TokenExpiredError,
    TokenNotYetValidError,
    UnparsablePayloadError,
)
from service_tokens.kernel.time import Clock, epoch_seconds
from service_tokens.kernel.types import Err, Ok, Result
from service_tokens.observability.logging import Logger, get_logger
from service_tokens.security.jwe.cipher import JweCipher
from service_tokens.security.jwe.codec import ClaimsCodec
from service_tokens.security.jwe.keys import KeyManager

__all__ = ["MANDATORY_CLAIMS", "TokenVerifier", "decode_header"]

MANDATORY_CLAIMS: tuple[str, ...] = ("iat", "exp", "iss", "aud")

_URL_TO_STANDARD = str.maketrans("-_", "+/")


def decode_header(token: str, codec: ClaimsCodec) -> dict[str, Any] | None:
    """Decode the first segment of *token* into a JSON object.

    Accepts both the url-safe and the standard base64 alphabet, with or
    without padding.  Returns ``None`` when the segment is not a JSON object.
    """
    segment = token.split(".", 1)[0].translate(_URL_TO_STANDARD).rstrip("=")
    try:
        raw = base64.b64decode(segment + "=" * (-len(segment) % 4))
        text = raw.decode("utf-8")
    except (binascii.Error, ValueError):
        return None
    return codec.decode(text)


class TokenVerifier:
    """Decrypts compact JWE tokens and validates their claims."""

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

    async def verify(self, token: str) -> Result[dict[str, Any], TokenError]:
        if not isinstance(token, str) or len(token) < self._settings.min_token_length:
            return Err(InvalidTokenStringError())

        header = decode_header(token, self._codec)
        if header is None or not self._algorithms_match(header):
            return Err(InvalidHeaderError())

        ready = await self._keys.ensure_key_ready()
        key = self._keys.key
        if ready.is_err() or key is None:
            return Err(NoEncryptionKeyError())

        try:
            decrypted = await self._cipher.decrypt_compact(
                key, [self._settings.key_wrap_algorithm], token
            )
        except Exception as exc:  # noqa: BLE001
            self._logger.error("token_decryption_failed", error=repr(exc))
            return Err(SuspectedTamperingError())
        if not self._algorithms_match(decrypted.header):
            self._logger.error("token_header_mismatch_after_decrypt", kid=decrypted.header.get("kid"))
            return Err(SuspectedTamperingError())

        try:
            text = decrypted.payload.decode("utf-8")
        except UnicodeDecodeError:
            return Err(UnparsablePayloadError())
        claims = self._codec.decode(text)
        if claims is None:
            return Err(UnparsablePayloadError())

        return self.validate_claims(claims)

    def validate_claims(self, claims: dict[str, Any]) -> Result[dict[str, Any], TokenError]:
        """Run the mandatory-claim, time-window and audience checks."""
        missing = [name for name in MANDATORY_CLAIMS if claims.get(name) in (None, "")]
        if missing:
            return Err(MissingClaimsError(missing))

        iat, exp = claims["iat"], claims["exp"]
        if not (_is_number(iat) and _is_number(exp)):
            return Err(UnparsablePayloadError("Claims 'iat' and 'exp' must be numeric"))

        now = epoch_seconds(self._clock)
        skew = self._settings.clock_skew_seconds
        if now < iat - skew:
            return Err(TokenNotYetValidError())
        if now > exp + skew:
            return Err(TokenExpiredError())

        audience = claims["aud"]
        if not isinstance(audience, str) or audience not in self._settings.valid_audiences:
            return Err(InvalidAudienceError())

        return Ok(claims)

    def _algorithms_match(self, header: Any) -> bool:
        return (
            header.get("enc") == self._settings.content_encryption
            and header.get("alg") == self._settings.key_wrap_algorithm
        )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)
