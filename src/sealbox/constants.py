"""Protocol constants shared by key derivation and the encryption engine.

Changing any of these breaks every artifact sealed before the change. A new
parameter set needs its own version tag rather than an in-place edit.
"""

from cryptography.hazmat.primitives import hashes

# Key derivation
SALT_LENGTH = 16
KEY_LENGTH = 32
PBKDF2_ITERATIONS = 480_000
PBKDF2_HASH = hashes.SHA512

# Fernet token layout (after base64 decoding)
FERNET_VERSION = 0x80
VERSION_LENGTH = 1
TIMESTAMP_LENGTH = 8
IV_LENGTH = 16
BLOCK_SIZE = 16
HMAC_LENGTH = 32
MIN_TOKEN_LENGTH = VERSION_LENGTH + TIMESTAMP_LENGTH + IV_LENGTH + BLOCK_SIZE + HMAC_LENGTH

# Characters a token may contain (url-safe base64 with padding)
TOKEN_ALPHABET = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_="
)
