"""Core data model and error taxonomy of SealBox."""

from .exceptions import (
    SealBoxError,
    SecureRandomUnavailable,
    DecryptionError,
    AuthenticationError,
    TokenExpiredError,
    MalformedTokenError,
    InvalidArtifactError,
    InvalidKeyError,
)
from .models import EncryptedArtifact

__all__ = [
    "SealBoxError",
    "SecureRandomUnavailable",
    "DecryptionError",
    "AuthenticationError",
    "TokenExpiredError",
    "MalformedTokenError",
    "InvalidArtifactError",
    "InvalidKeyError",
    "EncryptedArtifact",
]
