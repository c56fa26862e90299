from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.requests import Request
from starlette.responses import Response

from cookie_session.errors import KeyNotFound, SealError, SessionError
from cookie_session.services.session_store import Session
from cookie_session.services.typed_fields import TypedFieldsMixin
from cookie_session.utils.logging import audit_log

if TYPE_CHECKING:
    from cookie_session.services.session_manager import SessionConfig

logger = logging.getLogger(__name__)


class SessionAccessor(TypedFieldsMixin):
    """
    Session operations for one request/response pair.
    Reads only need the request; every write reseals the whole session into a
    Set-Cookie header on the response, with cookie options re-derived from the
    config at that moment.
    """

    def __init__(self, config: SessionConfig, request: Request, response: Response | None = None):
        self._config = config
        self._request = request
        self._response = response

    @property
    def session(self) -> Session:
        return self._config.get_session(self._request)

    @property
    def is_new(self) -> bool:
        return self.session.is_new

    def _save(self, session: Session, action: str) -> None:
        if self._response is None:
            raise SessionError("session: cannot save without a response")
        self._config.store.save(self._response, session, action=action)

    def add_value(self, key: str, value: str) -> None:
        """Set key in the session and write the cookie. Raises SealError if it can't be sealed."""
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError("session keys and values must be str")
        session = self.session
        previous = session.values.get(key)
        session.values[key] = value
        session.options = self._config.cookie_options()
        try:
            self._save(session, "write")
        except SealError:
            # keep the cached session equal to what the client holds
            if previous is None:
                del session.values[key]
            else:
                session.values[key] = previous
            raise

    def get_value(self, key: str) -> str:
        value = self.session.values.get(key)
        if value is None:
            raise KeyNotFound(key)
        return value

    def get_all_values(self) -> dict[str, str]:
        return dict(self.session.values)

    def extend(self) -> None:
        """Rewrite the cookie unchanged with a new expiration computed from max_age."""
        session = self.session
        session.options = self._config.cookie_options()
        self._save(session, "extend")

    def destroy(self) -> None:
        """Write an already expired cookie so the client drops the session."""
        session = self.session
        session.options = self._config.cookie_options().expired()
        self._save(session, "destroy")
        audit_log("session_destroyed", session.name, was_new=session.is_new)
