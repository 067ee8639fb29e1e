from service_tokens.testing.fixtures import (  # noqa: F401
    counting_reifier,
    fake_clock,
    key_definition,
    token_service,
    token_settings,
)
