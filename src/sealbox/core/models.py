"""
Base data model for sealed payloads
"""

from typing import Any, Dict

from .exceptions import InvalidArtifactError
from ..constants import SALT_LENGTH, TOKEN_ALPHABET


class EncryptedArtifact:
    """
    Caller-visible result of ``seal``: the KDF salt plus the opaque token.

    Instances are immutable. How they are stored or transmitted is up to the
    caller; ``to_dict``/``to_bytes`` are offered as conveniences and round-trip
    both fields exactly.
    """

    __slots__ = ("salt", "token")

    def __init__(self, salt: bytes, token: str):
        if not isinstance(salt, bytes):
            raise InvalidArtifactError("salt must be bytes")
        if len(salt) != SALT_LENGTH:
            raise InvalidArtifactError(
                f"salt must be exactly {SALT_LENGTH} bytes, got {len(salt)}"
            )
        if not isinstance(token, str) or not token:
            raise InvalidArtifactError("token must be a non-empty string")
        if not set(token) <= TOKEN_ALPHABET:
            raise InvalidArtifactError("token must be url-safe base64 text")
        object.__setattr__(self, "salt", salt)
        object.__setattr__(self, "token", token)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        # rebuild through __init__; slot-by-slot setattr is blocked above
        return (type(self), (self.salt, self.token))

    def __repr__(self):
        # token body stays out of reprs and logs
        return f"EncryptedArtifact(salt='{self.salt.hex()}', token=<{len(self.token)} chars>)"

    def __eq__(self, other):
        if not isinstance(other, EncryptedArtifact):
            return NotImplemented
        return self.salt == other.salt and self.token == other.token

    def __hash__(self):
        return hash((self.salt, self.token))

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert artifact to a JSON-friendly dict (salt as hex)
        """
        return {"salt": self.salt.hex(), "token": self.token}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EncryptedArtifact":
        """
        Rebuild an artifact from :meth:`to_dict` output
        """
        try:
            salt = bytes.fromhex(data["salt"])
            token = data["token"]
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidArtifactError(f"invalid artifact dict: {exc}") from exc
        return cls(salt, token)

    def to_bytes(self) -> bytes:
        """
        Raw salt followed by the ASCII token
        """
        return self.salt + self.token.encode("ascii")

    @classmethod
    def from_bytes(cls, blob: bytes) -> "EncryptedArtifact":
        """
        Rebuild an artifact from :meth:`to_bytes` output
        """
        if len(blob) <= SALT_LENGTH:
            raise InvalidArtifactError("blob too short to contain salt and token")
        salt, raw_token = blob[:SALT_LENGTH], blob[SALT_LENGTH:]
        try:
            token = raw_token.decode("ascii")
        except UnicodeDecodeError as exc:
            raise InvalidArtifactError("token is not ASCII") from exc
        return cls(salt, token)
