"""Testing support – fakes and fixtures.

Import in your ``conftest.py``::

    from service_tokens.testing.fixtures import *  # noqa: F403
"""

from service_tokens.testing.fakes import CountingReifier, FailingCipher, FakeClock, StaticCipher

__all__ = ["CountingReifier", "FailingCipher", "FakeClock", "StaticCipher"]
