from __future__ import annotations

import logging
import secrets
from datetime import timedelta

from starlette.requests import Request
from starlette.responses import Response

from cookie_session.config import SessionSettings
from cookie_session.errors import (
    AuthKeyWrongSize,
    EncryptKeyWrongSize,
    MaxAgeTooShort,
    SessionNotInitialized,
)
from cookie_session.schemas.cookie import CookieOptions, SameSite
from cookie_session.services.session_accessor import SessionAccessor
from cookie_session.services.session_store import CookieStore, Session
from cookie_session.utils.encryption import SecureCookieCodec
from cookie_session.utils.logging import audit_log

logger = logging.getLogger(__name__)

DEFAULT_DOMAIN = "."
DEFAULT_PATH = "/"
DEFAULT_MAX_AGE = timedelta(hours=1)
DEFAULT_HTTP_ONLY = True
DEFAULT_SECURE = False
DEFAULT_SAME_SITE = SameSite.STRICT
DEFAULT_COOKIE_NAME = "session"

MIN_MAX_AGE = timedelta(seconds=1)
AUTH_KEY_LENGTH = 64
ENCRYPT_KEY_LENGTH = 32


def generate_key(length: int) -> str:
    """Random hex key of exactly `length` characters (length must be even)."""
    return secrets.token_hex(length // 2)


def _as_timedelta(value: timedelta | int | float) -> timedelta:
    if isinstance(value, timedelta):
        return value
    return timedelta(seconds=value)


def _key_size(key: str | bytes) -> int:
    return len(key.encode("utf-8")) if isinstance(key, str) else len(key)


class SessionConfig:
    """
    Cookie session configuration and the store bound to it.

    Lifecycle: construct (defaults) -> adjust fields -> init() -> serve
    requests via accessor()/get_session(). Cookie attributes are re-read on
    every write, so changing e.g. max_age after init() applies to the next
    cookie; new keys only apply after init() runs again.

    auth_key must be 64 bytes and encrypt_key 32 bytes. Leaving either blank
    generates a random one during validation, which invalidates every issued
    cookie when the process restarts.
    """

    def __init__(
        self,
        *,
        domain: str = DEFAULT_DOMAIN,
        path: str = DEFAULT_PATH,
        max_age: timedelta = DEFAULT_MAX_AGE,
        http_only: bool = DEFAULT_HTTP_ONLY,
        secure: bool = DEFAULT_SECURE,
        same_site: SameSite | int | str = DEFAULT_SAME_SITE,
        cookie_name: str = DEFAULT_COOKIE_NAME,
        auth_key: str | bytes = "",
        encrypt_key: str | bytes = "",
    ):
        self.domain = domain
        self.path = path
        self.max_age = max_age
        self.http_only = http_only
        self.secure = secure
        self.same_site = same_site
        self.cookie_name = cookie_name
        self.auth_key = auth_key
        self.encrypt_key = encrypt_key
        self._store: CookieStore | None = None

    @classmethod
    def zero(cls) -> SessionConfig:
        """Blank config with nothing set; init() on it fails until it is filled in."""
        return cls(
            domain="",
            path="",
            max_age=timedelta(0),
            http_only=False,
            secure=False,
            same_site=0,
            cookie_name="",
        )

    @classmethod
    def from_settings(cls, settings: SessionSettings) -> SessionConfig:
        return cls(
            domain=settings.domain,
            path=settings.path,
            max_age=timedelta(seconds=settings.max_age_seconds),
            http_only=settings.http_only,
            secure=settings.secure,
            same_site=settings.same_site,
            cookie_name=settings.cookie_name,
            auth_key=settings.auth_key,
            encrypt_key=settings.encrypt_key,
        )

    def __repr__(self) -> str:
        return (
            f"SessionConfig(cookie_name={self.cookie_name!r}, domain={self.domain!r}, "
            f"path={self.path!r}, max_age={self.max_age!r}, initialized={self.is_initialized})"
        )

    def validate(self) -> None:
        """Fill in blank fields and check the rest.

        Raises MaxAgeTooShort, AuthKeyWrongSize or EncryptKeyWrongSize. Nothing
        is modified when an error is raised.
        """
        domain = self.domain if (self.domain or "").strip() else DEFAULT_DOMAIN
        path = self.path if (self.path or "").strip() else DEFAULT_PATH
        cookie_name = self.cookie_name if (self.cookie_name or "").strip() else DEFAULT_COOKIE_NAME

        if _as_timedelta(self.max_age) < MIN_MAX_AGE:
            raise MaxAgeTooShort()

        same_site = SameSite.coerce(self.same_site) or DEFAULT_SAME_SITE

        auth_key = self.auth_key
        size = _key_size(auth_key)
        if size == 0:
            auth_key = generate_key(AUTH_KEY_LENGTH)
            logger.warning("No session auth key configured, generated an ephemeral one")
        elif size != AUTH_KEY_LENGTH:
            raise AuthKeyWrongSize(size)

        encrypt_key = self.encrypt_key
        size = _key_size(encrypt_key)
        if size == 0:
            encrypt_key = generate_key(ENCRYPT_KEY_LENGTH)
            logger.warning("No session encrypt key configured, generated an ephemeral one")
        elif size != ENCRYPT_KEY_LENGTH:
            raise EncryptKeyWrongSize(size)

        self.domain = domain
        self.path = path
        self.cookie_name = cookie_name
        self.same_site = same_site
        self.auth_key = auth_key
        self.encrypt_key = encrypt_key

    def cookie_options(self) -> CookieOptions:
        """Cookie attributes from the current field values."""
        return CookieOptions(
            domain=self.domain,
            path=self.path,
            max_age=int(_as_timedelta(self.max_age).total_seconds()),
            http_only=self.http_only,
            secure=self.secure,
            same_site=SameSite.coerce(self.same_site) or DEFAULT_SAME_SITE,
        )

    def init(self) -> None:
        """Validate and (re)build the cookie store from the current keys."""
        self.validate()
        self._store = CookieStore(SecureCookieCodec(self.auth_key, self.encrypt_key))
        logger.info("Session store initialized", extra={"cookie": self.cookie_name})
        audit_log("session_store_initialized", self.cookie_name)

    @property
    def is_initialized(self) -> bool:
        return self._store is not None

    @property
    def store(self) -> CookieStore:
        if self._store is None:
            raise SessionNotInitialized()
        return self._store

    def get_session(self, request: Request) -> Session:
        """Session for the request; a fresh one (is_new=True) if no valid cookie was sent."""
        return self.store.get(request, self.cookie_name, self.cookie_options())

    def accessor(self, request: Request, response: Response | None = None) -> SessionAccessor:
        return SessionAccessor(self, request, response)
