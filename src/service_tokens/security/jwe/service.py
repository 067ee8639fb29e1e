"""TokenService – one object wiring settings, key, codec, issuer and verifier."""
from __future__ import annotations

from typing import Any, Mapping

from service_tokens.config.settings import EnvSettingsLoader, SettingsLoader, TokenSettings
from service_tokens.config.validation import ConfigError
from service_tokens.kernel.errors import InvalidKeyDefinitionError, TokenError
from service_tokens.kernel.time import Clock, SystemClock
from service_tokens.kernel.types import Result
from service_tokens.observability.logging import Logger, get_logger
from service_tokens.security.jwe.cipher import JoseJweCipher, JweCipher
from service_tokens.security.jwe.codec import ClaimsCodec
from service_tokens.security.jwe.guard import check_development_key
from service_tokens.security.jwe.issuer import TokenIssuer
from service_tokens.security.jwe.keys import KeyManager, Reifier, reify_oct_jwk
from service_tokens.security.jwe.verifier import TokenVerifier

__all__ = ["TokenService"]


class TokenService:
    """Issue and verify encrypted service tokens.

    Constructing the service runs the development-key startup guard, which
    exits the process when the development key is configured in production.

    Usage::

        service = TokenService(settings)
        await service.warm_up()
        token = (await service.issue({"sub": "billing", "aud": "ledger"})).unwrap()
        claims = (await service.verify(token)).unwrap()
    """

    def __init__(
        self,
        settings: TokenSettings,
        *,
        cipher: JweCipher | None = None,
        clock: Clock | None = None,
        logger: Logger | None = None,
        reifier: Reifier = reify_oct_jwk,
    ) -> None:
        if not isinstance(settings, TokenSettings):
            raise ConfigError("TokenService requires TokenSettings")
        self._settings = settings
        self._logger = logger or get_logger(__name__, issuer=settings.issuer)

        check_development_key(settings, logger=self._logger)

        clock = clock or SystemClock()
        cipher = cipher or JoseJweCipher()
        codec = ClaimsCodec(self._logger)
        self._keys = KeyManager(
            settings.key_definition,
            settings.key_wrap_algorithm,
            reifier=reifier,
            logger=self._logger,
        )
        self._issuer = TokenIssuer(settings, self._keys, cipher, codec, clock, self._logger)
        self._verifier = TokenVerifier(settings, self._keys, cipher, codec, clock, self._logger)

    @classmethod
    def from_env(cls, loader: SettingsLoader | None = None, **kwargs: Any) -> TokenService:
        """Build the service from ``SERVICE_TOKENS_*`` environment variables."""
        settings = (loader or EnvSettingsLoader()).load(TokenSettings)
        return cls(settings, **kwargs)

    @property
    def settings(self) -> TokenSettings:
        return self._settings

    @property
    def keys(self) -> KeyManager:
        return self._keys

    async def ensure_key_ready(self) -> Result[bool, InvalidKeyDefinitionError]:
        return await self._keys.ensure_key_ready()

    async def warm_up(self) -> Result[bool, InvalidKeyDefinitionError]:
        """Reify the key before the first request needs it."""
        result = await self._keys.ensure_key_ready()
        if result.is_err():
            self._logger.warning("key_warm_up_failed", code=result.error.code)
        return result

    async def issue(self, claims: Mapping[str, Any]) -> Result[str, TokenError]:
        return await self._issuer.issue(claims)

    async def verify(self, token: str) -> Result[dict[str, Any], TokenError]:
        return await self._verifier.verify(token)
