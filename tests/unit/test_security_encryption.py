"""
Unit tests for the Fernet-based encryption engine.
"""

import base64
import time

import pytest
from unittest.mock import patch

from sealbox.core.exceptions import (
    AuthenticationError,
    DecryptionError,
    MalformedTokenError,
    SecureRandomUnavailable,
    TokenExpiredError,
)
from sealbox.security import encryption
from sealbox.security.kdf import DerivedKey, derive_key


# ==============================================================================
# Fixtures
# ==============================================================================

@pytest.fixture
def key():
    return derive_key(b"password", b"s" * 16, iterations=1_000)


@pytest.fixture
def other_key():
    return derive_key(b"incorrect password", b"s" * 16, iterations=1_000)


@pytest.fixture
def token(key):
    return encryption.encrypt(key, b"test")


def _reencode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii")


# ==============================================================================
# Tests: Round trip
# ==============================================================================

@pytest.mark.parametrize("plaintext", [b"", b"test", b"\x00" * 15, b"\xff" * 16, bytes(range(256)) * 40])
def test_encrypt_decrypt_roundtrip(key, plaintext):
    token = encryption.encrypt(key, plaintext)
    assert encryption.decrypt(key, token) == plaintext


def test_token_is_url_safe_text(token):
    assert isinstance(token, str)
    assert set(token) <= set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_=")


def test_token_layout(token):
    data = base64.urlsafe_b64decode(token)
    assert data[0] == 0x80
    # version + timestamp + iv + one block + hmac
    assert len(data) == 1 + 8 + 16 + 16 + 32


def test_same_inputs_give_different_tokens(key):
    assert encryption.encrypt(key, b"test") != encryption.encrypt(key, b"test")


def test_decrypt_accepts_bytes_token(key, token):
    assert encryption.decrypt(key, token.encode("ascii")) == b"test"


def test_encrypt_rejects_non_bytes(key):
    with pytest.raises(TypeError):
        encryption.encrypt(key, "text")


def test_engine_requires_derived_key(token):
    with pytest.raises(TypeError):
        encryption.decrypt(b"\x00" * 32, token)


def test_encrypt_random_source_unavailable(key):
    with patch("cryptography.fernet.os.urandom", side_effect=OSError("no entropy")):
        with pytest.raises(SecureRandomUnavailable):
            encryption.encrypt(key, b"test")


# ==============================================================================
# Tests: Authentication failures
# ==============================================================================

def test_wrong_key_is_authentication_error(other_key, token):
    with pytest.raises(AuthenticationError, match="decryption failed"):
        encryption.decrypt(other_key, token)


def test_every_single_bit_flip_is_detected(key, token):
    """Flipping any bit of any character of the token must never decrypt."""
    for i, ch in enumerate(token):
        for bit in range(8):
            flipped = chr(ord(ch) ^ (1 << bit))
            tampered = token[:i] + flipped + token[i + 1:]
            with pytest.raises(DecryptionError):
                encryption.decrypt(key, tampered)


def test_altered_ciphertext_is_authentication_error(key, token):
    data = bytearray(base64.urlsafe_b64decode(token))
    data[30] ^= 0x01
    with pytest.raises(AuthenticationError):
        encryption.decrypt(key, _reencode(bytes(data)))


# ==============================================================================
# Tests: Malformed tokens
# ==============================================================================

@pytest.mark.parametrize("bad", ["", "not base64 at all!", "abc", "é" * 100, 12345, None])
def test_garbage_is_malformed(key, bad):
    with pytest.raises(MalformedTokenError, match="decryption failed"):
        encryption.decrypt(key, bad)


def test_unsupported_version_is_malformed(key, token):
    data = bytearray(base64.urlsafe_b64decode(token))
    data[0] = 0x81
    with pytest.raises(MalformedTokenError):
        encryption.decrypt(key, _reencode(bytes(data)))


def test_truncated_token_is_malformed(key, token):
    data = base64.urlsafe_b64decode(token)
    with pytest.raises(MalformedTokenError):
        encryption.decrypt(key, _reencode(data[:-10]))


def test_unaligned_ciphertext_is_malformed(key, token):
    data = base64.urlsafe_b64decode(token)
    with pytest.raises(MalformedTokenError):
        encryption.decrypt(key, _reencode(data + b"\x00"))


def test_non_canonical_padding_is_malformed(key, token):
    # "test" gives 73 bytes, so the final base64 group carries unused bits.
    assert token.endswith("==")
    last = token[-3]
    alphabet = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
    sibling = alphabet[alphabet.index(last) ^ 0x01]
    with pytest.raises(MalformedTokenError):
        encryption.decrypt(key, token[:-3] + sibling + "==")


def test_failure_kinds_share_public_message(key, other_key, token):
    with pytest.raises(DecryptionError) as auth:
        encryption.decrypt(other_key, token)
    with pytest.raises(DecryptionError) as malformed:
        encryption.decrypt(key, "garbage")
    assert str(auth.value) == str(malformed.value)


def test_failures_logged_without_secrets(key, other_key, token, caplog):
    with caplog.at_level("DEBUG", logger="sealbox.security.encryption"):
        with pytest.raises(AuthenticationError):
            encryption.decrypt(other_key, token)
        with pytest.raises(MalformedTokenError):
            encryption.decrypt(key, token[:20])
    messages = " ".join(r.getMessage() for r in caplog.records)
    assert "authentication failed" in messages
    assert token not in messages


# ==============================================================================
# Tests: Timestamps and ttl
# ==============================================================================

def test_token_timestamp(key):
    before = int(time.time())
    token = encryption.encrypt(key, b"test")
    after = int(time.time())
    assert before <= encryption.token_timestamp(key, token) <= after


def test_token_timestamp_wrong_key(other_key, token):
    with pytest.raises(AuthenticationError):
        encryption.token_timestamp(other_key, token)


def test_no_expiry_without_ttl(key, token):
    with patch.object(encryption, "time") as fake_time:
        fake_time.time.return_value = time.time() + 10 * 365 * 24 * 3600
        assert encryption.decrypt(key, token) == b"test"


def test_ttl_within_window(key, token):
    assert encryption.decrypt(key, token, ttl=60) == b"test"


def test_ttl_exceeded(key, token):
    with patch.object(encryption, "time") as fake_time:
        fake_time.time.return_value = time.time() + 120
        with pytest.raises(TokenExpiredError):
            encryption.decrypt(key, token, ttl=60)


def test_expired_is_an_authentication_error():
    assert issubclass(TokenExpiredError, AuthenticationError)
    assert issubclass(MalformedTokenError, DecryptionError)
    assert not issubclass(MalformedTokenError, AuthenticationError)


def test_fixed_key_interoperates_with_fernet():
    """Tokens are plain Fernet tokens for the urlsafe-base64 form of the key."""
    from cryptography.fernet import Fernet

    key = DerivedKey(b"\x07" * 32)
    token = Fernet(base64.urlsafe_b64encode(b"\x07" * 32)).encrypt(b"external")
    assert encryption.decrypt(key, token.decode("ascii")) == b"external"
