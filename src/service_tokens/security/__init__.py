"""Security — encrypted service tokens."""
from service_tokens.security.jwe import (
    ClaimsCodec,
    JoseJweCipher,
    JweCipher,
    KeyManager,
    TokenIssuer,
    TokenService,
    TokenVerifier,
    generate_key_definition,
)

__all__ = [
    "ClaimsCodec",
    "JoseJweCipher",
    "JweCipher",
    "KeyManager",
    "TokenIssuer",
    "TokenService",
    "TokenVerifier",
    "generate_key_definition",
]
