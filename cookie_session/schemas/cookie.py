from __future__ import annotations

from datetime import UTC, datetime, timedelta
from enum import IntEnum
from typing import Any

from pydantic import BaseModel

# Expires value written for deleted cookies.
EXPIRED_AT = datetime(1970, 1, 1, 0, 0, 1, tzinfo=UTC)


class SameSite(IntEnum):
    """SameSite cookie policy. Values match the ones browsers/stdlib number them by."""

    DEFAULT = 1
    LAX = 2
    STRICT = 3
    NONE = 4

    @classmethod
    def coerce(cls, value: Any) -> SameSite | None:
        """Map an enum member, its number or its name to a member; None when invalid."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                return None
        if isinstance(value, str):
            name = value.strip().upper()
            if name.isdigit():
                return cls.coerce(int(name))
            return cls.__members__.get(name)
        return None

    @property
    def attribute(self) -> str | None:
        """Value for the SameSite cookie attribute (DEFAULT omits it)."""
        if self is SameSite.DEFAULT:
            return None
        return self.name.lower()


class CookieOptions(BaseModel):
    """Transport-level attributes for the session cookie."""

    domain: str
    path: str
    max_age: int
    http_only: bool
    secure: bool
    same_site: SameSite

    def expired(self) -> CookieOptions:
        return self.model_copy(update={"max_age": -1})

    def set_cookie_kwargs(self, now: datetime | None = None) -> dict[str, Any]:
        """Keyword arguments for starlette's Response.set_cookie().

        A negative max_age deletes the cookie (Max-Age=0 and an Expires in the
        past), a positive one sets the absolute expiration from now.
        """
        kwargs: dict[str, Any] = {
            "domain": self.domain,
            "path": self.path,
            "httponly": self.http_only,
            "secure": self.secure,
            "samesite": self.same_site.attribute,
        }
        if self.max_age < 0:
            kwargs["max_age"] = 0
            kwargs["expires"] = EXPIRED_AT
        elif self.max_age > 0:
            now = now or datetime.now(UTC)
            kwargs["max_age"] = self.max_age
            kwargs["expires"] = now + timedelta(seconds=self.max_age)
        return kwargs
