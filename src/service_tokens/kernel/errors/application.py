"""Application-layer errors – misuse and misconfiguration raised at the call site."""

from __future__ import annotations

from service_tokens.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Caller contract violation; raised immediately, never returned in a Result."""

    default_code = "application_error"


__all__ = ["ApplicationError"]
