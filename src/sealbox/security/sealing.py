"""
Password sealing: the two operations callers actually use.

``seal`` draws a fresh salt, derives a key from the password and encrypts;
``open`` re-derives the key from the artifact's salt and decrypts. Neither
keeps any state between calls, and the derived key never leaves the call.
"""

from __future__ import annotations

from ..core.models import EncryptedArtifact
from . import encryption
from .kdf import derive_key, generate_salt


def seal(plaintext: bytes, password: str | bytes) -> EncryptedArtifact:
    """
    Encrypt ``plaintext`` under ``password``.

    Raises :class:`SecureRandomUnavailable` if the platform random source
    cannot be read. Key derivation makes this deliberately slow (hundreds of
    milliseconds); run it off latency-sensitive threads.
    """
    if not isinstance(plaintext, bytes):
        raise TypeError("plaintext must be bytes")
    salt = generate_salt()
    key = derive_key(password, salt)
    return EncryptedArtifact(salt=salt, token=encryption.encrypt(key, plaintext))


def open(artifact: EncryptedArtifact, password: str | bytes, ttl: int | None = None) -> bytes:
    """
    Recover the plaintext sealed in ``artifact``.

    A wrong password or an altered token raises :class:`AuthenticationError`;
    a token that is not shaped like one of ours raises
    :class:`MalformedTokenError`. Both are :class:`DecryptionError` with the
    same message. ``ttl`` (seconds) is passed through to the engine and is
    off by default.
    """
    if not isinstance(artifact, EncryptedArtifact):
        raise TypeError("artifact must be an EncryptedArtifact")
    key = derive_key(password, artifact.salt)
    return encryption.decrypt(key, artifact.token, ttl=ttl)
