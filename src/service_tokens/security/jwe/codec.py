"""ClaimsCodec – JSON claim sets in and out, without ever raising.

Malformed input is reported by returning ``None`` so the caller can turn it
into a domain error.
"""
from __future__ import annotations

import json
from typing import Any, Mapping

from service_tokens.observability.logging import Logger, get_logger

__all__ = ["ClaimsCodec"]

_PREVIEW_CHARS = 32


class ClaimsCodec:
    def __init__(self, logger: Logger | None = None) -> None:
        self._logger = logger or get_logger(__name__)

    def encode(self, claims: Mapping[str, Any]) -> str | None:
        try:
            return json.dumps(claims, separators=(",", ":"), allow_nan=False)
        except (TypeError, ValueError, RecursionError) as exc:
            # claim values may be personal data; only the names are logged
            self._logger.warning(
                "claims_encode_failed",
                error=str(exc),
                claim_names=_preview(",".join(str(name) for name in claims)),
            )
            return None

    def decode(self, text: str | bytes) -> dict[str, Any] | None:
        try:
            parsed = json.loads(text, parse_constant=_reject_constant)
        except (TypeError, ValueError, RecursionError) as exc:
            self._logger.warning("claims_decode_failed", error=str(exc), preview=_preview(text))
            return None
        if not isinstance(parsed, dict):
            self._logger.warning("claims_decode_failed", error="not a JSON object", preview=_preview(text))
            return None
        return parsed


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite number {name} is not valid JSON")


def _preview(value: Any) -> str:
    text = value.decode("utf-8", "replace") if isinstance(value, bytes) else str(value)
    return text if len(text) <= _PREVIEW_CHARS else text[:_PREVIEW_CHARS] + "..."
