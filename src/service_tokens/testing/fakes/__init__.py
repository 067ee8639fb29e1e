"""Testing fakes – in-memory doubles for the clock, reifier and cipher ports."""
from service_tokens.testing.fakes.cipher import FailingCipher, StaticCipher
from service_tokens.testing.fakes.clock import FakeClock
from service_tokens.testing.fakes.keys import CountingReifier

__all__ = ["CountingReifier", "FailingCipher", "FakeClock", "StaticCipher"]
