"""Security – compact JWE service tokens (python-jose backed)."""
from service_tokens.security.jwe.cipher import DecryptedJwe, JoseJweCipher, JweCipher, ReifiedKey
from service_tokens.security.jwe.codec import ClaimsCodec
from service_tokens.security.jwe.guard import check_development_key
from service_tokens.security.jwe.issuer import TokenIssuer
from service_tokens.security.jwe.keys import (
    KEY_WRAP_KEY_SIZES,
    KeyManager,
    Reifier,
    generate_key_definition,
    reify_oct_jwk,
)
from service_tokens.security.jwe.service import TokenService
from service_tokens.security.jwe.verifier import MANDATORY_CLAIMS, TokenVerifier, decode_header

__all__ = [
    "KEY_WRAP_KEY_SIZES",
    "MANDATORY_CLAIMS",
    "ClaimsCodec",
    "DecryptedJwe",
    "JoseJweCipher",
    "JweCipher",
    "KeyManager",
    "Reifier",
    "ReifiedKey",
    "TokenIssuer",
    "TokenService",
    "TokenVerifier",
    "check_development_key",
    "decode_header",
    "generate_key_definition",
    "reify_oct_jwk",
]
