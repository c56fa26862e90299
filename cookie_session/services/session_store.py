from __future__ import annotations

import logging

from starlette.requests import Request
from starlette.responses import Response

from cookie_session.errors import UnsealError
from cookie_session.schemas.cookie import CookieOptions
from cookie_session.utils.encryption import SecureCookieCodec
from cookie_session.utils.metrics import SESSION_COOKIE_BYTES, SESSION_WRITES, SESSIONS_LOADED

logger = logging.getLogger(__name__)

# Per-request session cache, kept in the ASGI scope so every Request object
# built for the same request sees it.
REGISTRY_SCOPE_KEY = "cookie_session.registry"


class Session:
    """Session data for one request: str->str values plus the cookie options to save with."""

    def __init__(
        self,
        name: str,
        values: dict[str, str] | None = None,
        is_new: bool = True,
        options: CookieOptions | None = None,
    ):
        self.name = name
        self.values: dict[str, str] = values if values is not None else {}
        self.is_new = is_new
        self.options = options

    def __repr__(self) -> str:
        return f"Session(name={self.name!r}, keys={sorted(self.values)}, is_new={self.is_new})"


def _registry(request: Request) -> dict[tuple[CookieStore, str], Session]:
    return request.scope.setdefault(REGISTRY_SCOPE_KEY, {})


class CookieStore:
    """
    Materializes sessions from request cookies and writes them back.
    - one Session per (request, store, cookie name), cached for the rest of the request;
      stores with different keys never share a cached session
    - a missing, tampered, foreign or expired cookie yields a new empty session
    """

    def __init__(self, codec: SecureCookieCodec):
        self._codec = codec

    def new(self, name: str, options: CookieOptions) -> Session:
        return Session(name, {}, is_new=True, options=options)

    def get(self, request: Request, name: str, options: CookieOptions) -> Session:
        """Return the session for this request, loading it from the cookie on first use."""
        registry = _registry(request)
        cache_key = (self, name)
        session = registry.get(cache_key)
        if session is None:
            session = self._load(request, name, options)
            registry[cache_key] = session
        return session

    def _load(self, request: Request, name: str, options: CookieOptions) -> Session:
        # Verification failures are indistinguishable from "no cookie sent":
        # the caller always gets a usable session back, never an error.
        cookie = request.cookies.get(name)
        if not cookie:
            SESSIONS_LOADED.labels(result="new").inc()
            return self.new(name, options)

        try:
            values = self._codec.unseal(name, cookie)
        except UnsealError as e:
            logger.debug("Rejected session cookie, starting fresh: %s", e, extra={"cookie": name})
            SESSIONS_LOADED.labels(result="rejected").inc()
            return self.new(name, options)

        SESSIONS_LOADED.labels(result="loaded").inc()
        return Session(name, values, is_new=False, options=options)

    def save(self, response: Response, session: Session, action: str = "write") -> None:
        """Seal the session and append its Set-Cookie header. Raises SealError."""
        token = self._codec.seal(session.name, session.values, session.options.max_age)
        response.set_cookie(session.name, token, **session.options.set_cookie_kwargs())
        logger.debug(
            "Wrote session cookie",
            extra={"cookie": session.name, "action": action, "cookie_bytes": len(token)},
        )
        SESSION_COOKIE_BYTES.observe(len(token))
        SESSION_WRITES.labels(action=action).inc()
