"""Config settings – TokenSettings.

Everything the issuer and verifier need, fixed at construction::

    SERVICE_TOKENS_KEY_DEFINITION='{"kty":"oct","kid":"svc-2026","k":"..."}'
    SERVICE_TOKENS_ISSUER=billing
    SERVICE_TOKENS_EXPIRY_SECONDS=300
    SERVICE_TOKENS_VALID_AUDIENCES=ledger,invoices
    SERVICE_TOKENS_DEVELOPMENT_KEY_ID=SERVICE_TOKENS_DEVELOPMENT
    SERVICE_TOKENS_ENVIRONMENT=production
"""
from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import Any, ClassVar, Mapping

from service_tokens.config.settings.base import Settings
from service_tokens.config.validation import InvalidSettingValueError

PRODUCTION_ENVIRONMENTS = frozenset({"production", "prod"})


@dataclasses.dataclass(frozen=True)
class TokenSettings(Settings):
    """Immutable configuration for issuing and verifying tokens."""

    _prefix: ClassVar[str] = "SERVICE_TOKENS"

    key_definition: Mapping[str, Any]
    issuer: str
    expiry_seconds: int
    valid_audiences: frozenset[str]
    development_key_id: str
    environment: str = "development"
    key_wrap_algorithm: str = "A256KW"
    content_encryption: str = "A128CBC-HS256"
    clock_skew_seconds: int = 0
    min_token_length: int = 65

    @property
    def key_id(self) -> str | None:
        if isinstance(self.key_definition, Mapping):
            return self.key_definition.get("kid")
        return None

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() in PRODUCTION_ENVIRONMENTS

    def _validate(self) -> None:
        if not self.key_definition:
            raise InvalidSettingValueError("key_definition", self.key_definition, "must not be empty")
        if isinstance(self.key_definition, Mapping):
            object.__setattr__(self, "key_definition", MappingProxyType(dict(self.key_definition)))

        if not isinstance(self.issuer, str) or not self.issuer:
            raise InvalidSettingValueError("issuer", self.issuer, "must be a non-empty string")
        if not self.development_key_id:
            raise InvalidSettingValueError(
                "development_key_id", self.development_key_id, "must be a non-empty string"
            )

        _require_int("expiry_seconds", self.expiry_seconds, minimum=1)
        _require_int("clock_skew_seconds", self.clock_skew_seconds, minimum=0)
        _require_int("min_token_length", self.min_token_length, minimum=1)

        if isinstance(self.valid_audiences, str):
            raise InvalidSettingValueError(
                "valid_audiences", self.valid_audiences, "must be a collection of strings"
            )
        audiences = frozenset(self.valid_audiences)
        if not audiences:
            raise InvalidSettingValueError("valid_audiences", self.valid_audiences, "must not be empty")
        object.__setattr__(self, "valid_audiences", audiences)


def _require_int(name: str, value: Any, *, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidSettingValueError(name, value, "must be an integer")
    if value < minimum:
        raise InvalidSettingValueError(name, value, f"must be >= {minimum}")


__all__ = ["PRODUCTION_ENVIRONMENTS", "TokenSettings"]
