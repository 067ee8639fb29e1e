"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError                    (domain.py, returned inside Err)
    │   └── TokenError
    │       ├── InvalidKeyDefinitionError
    │       ├── NoEncryptionKeyError
    │       ├── InvalidClaimsError
    │       │   └── UnserializableClaimsError
    │       ├── EncryptionFailedError
    │       ├── InvalidTokenStringError
    │       ├── InvalidHeaderError
    │       ├── SuspectedTamperingError
    │       ├── UnparsablePayloadError
    │       ├── MissingClaimsError
    │       ├── TokenNotYetValidError
    │       ├── TokenExpiredError
    │       └── InvalidAudienceError
    └── ApplicationError               (application.py, raised)
"""

from service_tokens.kernel.errors.application import ApplicationError
from service_tokens.kernel.errors.base import BaseError
from service_tokens.kernel.errors.domain import (
    DomainError,
    EncryptionFailedError,
    InvalidAudienceError,
    InvalidClaimsError,
    InvalidHeaderError,
    InvalidKeyDefinitionError,
    InvalidTokenStringError,
    MissingClaimsError,
    NoEncryptionKeyError,
    SuspectedTamperingError,
    TokenError,
    TokenExpiredError,
    TokenNotYetValidError,
    UnparsablePayloadError,
    UnserializableClaimsError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
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
