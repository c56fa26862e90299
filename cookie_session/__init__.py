"""Signed and encrypted cookie sessions for Starlette/FastAPI apps."""
from cookie_session.config import SessionSettings
from cookie_session.errors import (
    AuthKeyWrongSize,
    CodecError,
    ConfigError,
    EncryptKeyWrongSize,
    KeyNotFound,
    MaxAgeTooShort,
    SealError,
    SessionError,
    SessionNotInitialized,
    UnsealError,
    ValueParseError,
)
from cookie_session.schemas.cookie import CookieOptions, SameSite
from cookie_session.services.session_accessor import SessionAccessor
from cookie_session.services.session_manager import SessionConfig
from cookie_session.services.session_store import CookieStore, Session
from cookie_session.utils.encryption import SecureCookieCodec

__version__ = "0.1.0"
