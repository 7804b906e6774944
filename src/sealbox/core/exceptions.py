"""
Exceptions for SealBox
Everything derives from SealBoxError so callers have a single error catcher
"""


class SealBoxError(Exception):
    # general container for errors
    pass


class SecureRandomUnavailable(SealBoxError):
    # raised when the platform CSPRNG cannot be read (fatal, never retried)
    pass


class DecryptionError(SealBoxError):
    # common base for every failure to recover a plaintext.
    # the public message is identical for all subclasses; the subclass is only
    # there for diagnostics
    message = "decryption failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class AuthenticationError(DecryptionError):
    # raised when the integrity check fails (wrong password or altered token)
    pass


class TokenExpiredError(AuthenticationError):
    # raised when a caller-supplied ttl is exceeded
    pass


class MalformedTokenError(DecryptionError):
    # raised when a token is not a well-formed artifact of the scheme
    pass


class InvalidArtifactError(SealBoxError, ValueError):
    # raised when an artifact is built from bad salt / token values
    pass


class InvalidKeyError(SealBoxError, ValueError):
    # raised when key material has the wrong shape
    pass
