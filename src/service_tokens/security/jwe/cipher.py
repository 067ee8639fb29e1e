"""JWE cipher boundary – the authenticated-encryption collaborator.

The issuer and verifier only speak :class:`JweCipher`.  The default
:class:`JoseJweCipher` delegates the key wrapping and content encryption to
python-jose (cryptography backend) and runs it off the event loop.
"""
from __future__ import annotations

import asyncio
import dataclasses
from types import MappingProxyType
from typing import Any, Mapping, Protocol, Sequence

from jose import jwe
from jose.exceptions import JWEError

__all__ = [
    "DecryptedJwe",
    "JoseJweCipher",
    "JweCipher",
    "ReifiedKey",
]


@dataclasses.dataclass(frozen=True, repr=False)
class ReifiedKey:
    """Key material in the form the cipher consumes."""

    kid: str | None
    algorithm: str
    material: bytes

    def __repr__(self) -> str:
        return f"ReifiedKey(kid={self.kid!r}, algorithm={self.algorithm!r})"


@dataclasses.dataclass(frozen=True)
class DecryptedJwe:
    payload: bytes
    header: Mapping[str, Any]


class JweCipher(Protocol):
    """Compact-serialisation encrypt/decrypt contract."""

    async def encrypt_compact(
        self,
        key: ReifiedKey,
        *,
        algorithm: str,
        encryption: str,
        payload: bytes,
    ) -> str: ...

    async def decrypt_compact(
        self,
        key: ReifiedKey,
        allowed_algorithms: Sequence[str],
        token: str,
    ) -> DecryptedJwe: ...


class JoseJweCipher:
    """python-jose backed :class:`JweCipher`.

    python-jose does not restrict the key-management algorithm on decrypt,
    so the allow-list is enforced here against the unverified header before
    any key is touched.
    """

    async def encrypt_compact(
        self,
        key: ReifiedKey,
        *,
        algorithm: str,
        encryption: str,
        payload: bytes,
    ) -> str:
        token = await asyncio.to_thread(
            jwe.encrypt,
            payload,
            key.material,
            encryption=encryption,
            algorithm=algorithm,
            kid=key.kid,
        )
        return token.decode("ascii") if isinstance(token, bytes) else token

    async def decrypt_compact(
        self,
        key: ReifiedKey,
        allowed_algorithms: Sequence[str],
        token: str,
    ) -> DecryptedJwe:
        return await asyncio.to_thread(self._decrypt, key, tuple(allowed_algorithms), token)

    @staticmethod
    def _decrypt(key: ReifiedKey, allowed_algorithms: tuple[str, ...], token: str) -> DecryptedJwe:
        compact = token.encode("ascii")
        header = jwe.get_unverified_header(compact)
        if header.get("alg") not in allowed_algorithms:
            raise JWEError(f"Key management algorithm {header.get('alg')!r} is not allowed")
        payload = jwe.decrypt(compact, key.material)
        if payload is None:
            raise JWEError("Decryption produced no payload")
        return DecryptedJwe(payload=payload, header=MappingProxyType(dict(header)))
