"""Security helpers: password KDF, Fernet engine and the seal/open pair.

- PBKDF2-HMAC-SHA512 key derivation into a validated ``DerivedKey``
- Fernet authenticated encryption with shape-checked decryption
- ``seal``/``open`` composing the two around a random per-call salt
"""

from .kdf import DerivedKey, generate_salt, derive_key
from .encryption import encrypt, decrypt, token_timestamp
from .sealing import seal, open

__all__ = [
    "DerivedKey",
    "generate_salt",
    "derive_key",
    "encrypt",
    "decrypt",
    "token_timestamp",
    "seal",
    "open",
]
