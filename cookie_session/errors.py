"""Exception hierarchy for cookie sessions."""
from __future__ import annotations


class SessionError(Exception):
    """Base class for every error raised by cookie_session."""


class ConfigError(SessionError):
    """Session configuration is malformed and cannot be auto-corrected."""


class AuthKeyWrongSize(ConfigError):
    def __init__(self, size: int | None = None):
        super().__init__("session: auth key is invalid, must be exactly 64 characters")
        self.size = size


class EncryptKeyWrongSize(ConfigError):
    def __init__(self, size: int | None = None):
        super().__init__("session: encrypt key is invalid, must be exactly 32 characters")
        self.size = size


class MaxAgeTooShort(ConfigError):
    def __init__(self):
        super().__init__("session: max age is invalid, must be at least 1 second")


class SessionNotInitialized(SessionError):
    def __init__(self):
        super().__init__("session: store is not initialized, call init() first")


class KeyNotFound(SessionError):
    def __init__(self, key: str):
        super().__init__("session: key not found in session data")
        self.key = key


class ValueParseError(SessionError, ValueError):
    """Stored value could not be parsed into the requested type."""

    def __init__(self, key: str, raw: str):
        super().__init__(f"session: value for {key!r} is not a base-10 integer: {raw!r}")
        self.key = key
        self.raw = raw


class CodecError(SessionError):
    """Secure cookie codec failure."""


class SealError(CodecError):
    pass


class UnsealError(CodecError):
    pass
