"""SealBox: password-based authenticated encryption for byte payloads.

    >>> from sealbox import seal, open
    >>> artifact = seal(b"test", "password")
    >>> open(artifact, "password")
    b'test'
"""

from .core.exceptions import (
    SealBoxError,
    SecureRandomUnavailable,
    DecryptionError,
    AuthenticationError,
    TokenExpiredError,
    MalformedTokenError,
    InvalidArtifactError,
    InvalidKeyError,
)
from .core.models import EncryptedArtifact
from .security.kdf import DerivedKey, derive_key
from .security.sealing import seal, open

__version__ = "0.1.0"

__all__ = [
    "seal",
    "open",
    "derive_key",
    "DerivedKey",
    "EncryptedArtifact",
    "SealBoxError",
    "SecureRandomUnavailable",
    "DecryptionError",
    "AuthenticationError",
    "TokenExpiredError",
    "MalformedTokenError",
    "InvalidArtifactError",
    "InvalidKeyError",
]
