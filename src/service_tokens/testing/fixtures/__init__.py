"""Testing fixtures – pytest fixtures for token services.

Import in your ``conftest.py``::

    from service_tokens.testing.fixtures import *  # noqa: F403
"""
from __future__ import annotations

import pytest

from service_tokens.config.settings import TokenSettings
from service_tokens.security.jwe import TokenService, generate_key_definition
from service_tokens.testing.fakes import CountingReifier, FakeClock

DEVELOPMENT_KEY_ID = "SERVICE_TOKENS_DEVELOPMENT"


@pytest.fixture
def fake_clock():
    """A FakeClock pinned to 2026-01-01 12:00 UTC."""
    return FakeClock()


@pytest.fixture
def key_definition():
    return generate_key_definition(DEVELOPMENT_KEY_ID)


@pytest.fixture
def token_settings(key_definition):
    return TokenSettings(
        key_definition=key_definition,
        issuer="test-issuer",
        expiry_seconds=2,
        valid_audiences=frozenset({"bob", "alice"}),
        development_key_id=DEVELOPMENT_KEY_ID,
        environment="test",
    )


@pytest.fixture
def counting_reifier():
    return CountingReifier()


@pytest.fixture
def token_service(token_settings, fake_clock, counting_reifier):
    return TokenService(token_settings, clock=fake_clock, reifier=counting_reifier)


__all__ = [
    "DEVELOPMENT_KEY_ID",
    "counting_reifier",
    "fake_clock",
    "key_definition",
    "token_service",
    "token_settings",
]
