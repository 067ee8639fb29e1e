"""Startup guard – refuse to run production traffic on the development key."""
from __future__ import annotations

import sys
from typing import Callable

from service_tokens.config.settings import TokenSettings
from service_tokens.observability.logging import Logger, get_logger

__all__ = ["check_development_key"]


def check_development_key(
    settings: TokenSettings,
    *,
    logger: Logger | None = None,
    exit_fn: Callable[[int], object] = sys.exit,
) -> None:
    """Terminate the process when production is configured with the development key.

    Production is read from ``settings.environment`` only, never from the
    ambient process environment.
    """
    if settings.is_production and settings.key_id == settings.development_key_id:
        (logger or get_logger(__name__)).critical(
            "development_key_in_production",
            kid=settings.key_id,
            environment=settings.environment,
        )
        exit_fn(1)
