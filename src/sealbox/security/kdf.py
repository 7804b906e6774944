"""Password-based key derivation (PBKDF2-HMAC-SHA512) and salt generation."""
from __future__ import annotations

import base64
import os

from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..constants import KEY_LENGTH, PBKDF2_HASH, PBKDF2_ITERATIONS, SALT_LENGTH
from ..core.exceptions import InvalidKeyError, SecureRandomUnavailable


class DerivedKey:
    """A 32-byte symmetric key that is always valid Fernet key material.

    Construction checks the shape once, so the encryption engine never has to.
    The raw bytes are kept out of ``repr`` so a key cannot leak through logs.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: bytes):
        if not isinstance(raw, bytes) or len(raw) != KEY_LENGTH:
            raise InvalidKeyError(f"derived key must be exactly {KEY_LENGTH} bytes")
        self._raw = raw

    @property
    def raw(self) -> bytes:
        return self._raw

    @property
    def fernet_key(self) -> bytes:
        """URL-safe base64 form expected by :class:`cryptography.fernet.Fernet`."""
        return base64.urlsafe_b64encode(self._raw)

    def __eq__(self, other):
        if not isinstance(other, DerivedKey):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self):
        return hash(self._raw)

    def __repr__(self):
        return "DerivedKey(<redacted>)"


def generate_salt(length: int = SALT_LENGTH) -> bytes:
    """Return a cryptographically secure random salt."""
    try:
        return os.urandom(length)
    except (OSError, NotImplementedError) as exc:
        raise SecureRandomUnavailable("secure random source unavailable") from exc


def derive_key(
    password: bytes | str,
    salt: bytes,
    iterations: int = PBKDF2_ITERATIONS,
) -> DerivedKey:
    """
    Derive a symmetric key from a password using PBKDF2-HMAC-SHA512.

    String passwords are UTF-8 encoded, so ``"pw"`` and ``b"pw"`` give the same
    key. ``iterations`` is only overridden by tests; artifacts are always
    sealed and opened with :data:`PBKDF2_ITERATIONS`.
    """
    if isinstance(password, str):
        password = password.encode("utf-8")
    if not isinstance(salt, bytes):
        raise TypeError("salt must be bytes")
    if len(salt) != SALT_LENGTH:
        raise ValueError(f"salt must be exactly {SALT_LENGTH} bytes, got {len(salt)}")

    kdf = PBKDF2HMAC(
        algorithm=PBKDF2_HASH(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=iterations,
    )
    return DerivedKey(kdf.derive(password))
