"""Domain errors – every reason a token cannot be issued or accepted.

These travel back to callers inside ``Err(...)``.  Each subclass carries a
stable ``default_code`` so callers can branch on the failed check without
parsing messages.  Cryptographic failures never carry their original cause.
"""

from __future__ import annotations

from typing import Any, Sequence

from service_tokens.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a claims or crypto rule is violated."""

    default_code = "domain_error"


class TokenError(DomainError):
    """Base class for issuance and verification failures."""

    default_code = "token_error"
    default_message = "Token operation failed"

    def __init__(self, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or self.default_message, **kwargs)


# ---------------------------------------------------------------------------
# Key readiness
# ---------------------------------------------------------------------------


class InvalidKeyDefinitionError(TokenError):
    default_code = "invalid_key_definition"
    default_message = "Key definition is not a usable symmetric key"


class NoEncryptionKeyError(TokenError):
    default_code = "no_encryption_key"
    default_message = "No suitable encryption key found"


# ---------------------------------------------------------------------------
# Issuance
# ---------------------------------------------------------------------------


class InvalidClaimsError(TokenError):
    default_code = "invalid_claims"
    default_message = "Claims must be a mapping"


class UnserializableClaimsError(InvalidClaimsError):
    """Claims are a mapping but cannot be encoded (cycles, non-JSON values)."""

    default_code = "unserializable_claims"
    default_message = "Claims could not be serialised"


class EncryptionFailedError(TokenError):
    default_code = "encryption_failed"
    default_message = "Error encrypting token"


# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------


class InvalidTokenStringError(TokenError):
    default_code = "invalid_token_string"
    default_message = "Invalid token string"


class InvalidHeaderError(TokenError):
    default_code = "invalid_header"
    default_message = "Invalid algorithm in token header"


class SuspectedTamperingError(TokenError):
    default_code = "suspected_tampering"
    default_message = "Suspected tampering of token"


class UnparsablePayloadError(TokenError):
    default_code = "unparsable_payload"
    default_message = "Unparsable token payload"


class MissingClaimsError(TokenError):
    """Lists every mandatory claim that is absent, not only the first."""

    default_code = "missing_claims"

    def __init__(self, missing: Sequence[str], **kwargs: Any) -> None:
        names = list(missing)
        super().__init__(
            f"Missing mandatory claims: {','.join(names)}",
            detail={"missing": names},
            **kwargs,
        )
        self.missing = names


class TokenNotYetValidError(TokenError):
    default_code = "token_not_yet_valid"
    default_message = "Token issued in the future"


class TokenExpiredError(TokenError):
    default_code = "token_expired"
    default_message = "Token has expired"


class InvalidAudienceError(TokenError):
    default_code = "invalid_audience"
    default_message = "Invalid audience"


__all__ = [
    "DomainError",
    "EncryptionFailedError",
    "InvalidAudienceError",
    "InvalidClaimsError",
    "InvalidHeaderError",
    "InvalidKeyDefinitionError",
    "InvalidTokenStringError",
    "MissingClaimsError",
    "NoEncryptionKeyError",
    "SuspectedTamperingError",
    "TokenError",
    "TokenExpiredError",
    "TokenNotYetValidError",
    "UnparsablePayloadError",
    "UnserializableClaimsError",
]
