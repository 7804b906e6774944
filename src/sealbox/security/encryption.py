"""
Authenticated encryption engine for SealBox.

Tokens are standard Fernet tokens (:mod:`cryptography.fernet`). Once base64
decoded the layout is::

    version (1) | timestamp (8, big-endian) | IV (16) | ciphertext (16*n) | HMAC-SHA256 (32)

The engine checks that shape itself before handing the token to Fernet, so a
token that was never produced by this scheme is reported as
:class:`MalformedTokenError`, while an HMAC mismatch is reported as
:class:`AuthenticationError`. Both carry the same public message.
"""

from __future__ import annotations

import base64
import binascii
import logging
import time

from cryptography.fernet import Fernet, InvalidToken

from ..constants import (
    BLOCK_SIZE,
    FERNET_VERSION,
    HMAC_LENGTH,
    IV_LENGTH,
    MIN_TOKEN_LENGTH,
    TIMESTAMP_LENGTH,
    VERSION_LENGTH,
)
from ..core.exceptions import (
    AuthenticationError,
    MalformedTokenError,
    SecureRandomUnavailable,
    TokenExpiredError,
)
from .kdf import DerivedKey

logger = logging.getLogger(__name__)

_HEADER_LENGTH = VERSION_LENGTH + TIMESTAMP_LENGTH + IV_LENGTH


def _require_key(key: DerivedKey) -> Fernet:
    if not isinstance(key, DerivedKey):
        raise TypeError("key must be a DerivedKey")
    return Fernet(key.fernet_key)


def _check_token_shape(token: str | bytes) -> bytes:
    """Return the token as ASCII bytes or raise MalformedTokenError."""
    if isinstance(token, str):
        try:
            token = token.encode("ascii")
        except UnicodeEncodeError as exc:
            raise MalformedTokenError() from exc
    elif not isinstance(token, bytes):
        raise MalformedTokenError()

    try:
        data = base64.urlsafe_b64decode(token)
    except (binascii.Error, ValueError) as exc:
        logger.debug("token rejected: not url-safe base64")
        raise MalformedTokenError() from exc

    # Non-canonical encodings (stray characters, non-zero padding bits) would
    # otherwise decode to the same bytes and slip past the HMAC.
    if base64.urlsafe_b64encode(data) != token:
        logger.debug("token rejected: non-canonical base64")
        raise MalformedTokenError()

    if len(data) < MIN_TOKEN_LENGTH:
        logger.debug("token rejected: %d bytes is too short", len(data))
        raise MalformedTokenError()
    if data[0] != FERNET_VERSION:
        logger.debug("token rejected: unsupported version 0x%02x", data[0])
        raise MalformedTokenError()
    if (len(data) - _HEADER_LENGTH - HMAC_LENGTH) % BLOCK_SIZE != 0:
        logger.debug("token rejected: ciphertext is not block aligned")
        raise MalformedTokenError()
    return token


def encrypt(key: DerivedKey, plaintext: bytes) -> str:
    """
    Encrypt ``plaintext`` under ``key`` and return a Fernet token string.

    Every call uses a fresh random IV and embeds the current time, so the same
    inputs never produce the same token.
    """
    fernet = _require_key(key)
    if not isinstance(plaintext, bytes):
        raise TypeError("plaintext must be bytes")
    try:
        token = fernet.encrypt(plaintext)
    except (OSError, NotImplementedError) as exc:
        raise SecureRandomUnavailable("secure random source unavailable") from exc
    return token.decode("ascii")


def decrypt(key: DerivedKey, token: str | bytes, ttl: int | None = None) -> bytes:
    """
    Verify and decrypt ``token`` with ``key``.

    Raises :class:`MalformedTokenError` if the token is not shaped like one of
    ours and :class:`AuthenticationError` if its HMAC does not verify (wrong key
    or tampering). Expiry is only enforced when the caller passes ``ttl`` in
    seconds; an older token then raises :class:`TokenExpiredError`.
    """
    fernet = _require_key(key)
    raw_token = _check_token_shape(token)

    try:
        plaintext = fernet.decrypt(raw_token)
    except InvalidToken as exc:
        logger.debug("token rejected: authentication failed")
        raise AuthenticationError() from exc

    if ttl is not None:
        issued_at = fernet.extract_timestamp(raw_token)
        if issued_at + ttl < int(time.time()):
            logger.debug("token rejected: older than ttl=%ss", ttl)
            raise TokenExpiredError()
    return plaintext


def token_timestamp(key: DerivedKey, token: str | bytes) -> int:
    """Return the authenticated creation time of ``token`` (Unix seconds)."""
    fernet = _require_key(key)
    raw_token = _check_token_shape(token)
    try:
        return fernet.extract_timestamp(raw_token)
    except InvalidToken as exc:
        logger.debug("token rejected: authentication failed")
        raise AuthenticationError() from exc
