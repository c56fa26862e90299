"""Helpers for the values most apps keep in a session."""
from __future__ import annotations

import re
from abc import ABC, abstractmethod

from cookie_session.errors import ValueParseError

KEY_USERNAME = "username"
KEY_USER_ID = "user_id"
KEY_TOKEN = "token"
KEY_SESSION_ID = "session_id"

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_DECIMAL = re.compile(r"[+-]?[0-9]+")


def format_int(value: int) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected int, got {type(value).__name__}")
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"{value} does not fit in a signed 64-bit integer")
    return str(value)


def parse_int(key: str, raw: str) -> int:
    """Strict base-10 parse: optional sign, ASCII digits, signed 64-bit range."""
    if not _DECIMAL.fullmatch(raw):
        raise ValueParseError(key, raw)
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueParseError(key, raw)
    return value


class TypedFieldsMixin(ABC):
    """Typed add_*/get_* pairs over add_value()/get_value()."""

    @abstractmethod
    def add_value(self, key: str, value: str) -> None:
        """Store value under key and persist it."""

    @abstractmethod
    def get_value(self, key: str) -> str:
        """Return the value under key or raise KeyNotFound."""

    def add_username(self, value: str) -> None:
        self.add_value(KEY_USERNAME, value)

    def get_username(self) -> str:
        return self.get_value(KEY_USERNAME)

    def add_user_id(self, value: int) -> None:
        self.add_value(KEY_USER_ID, format_int(value))

    def get_user_id(self) -> int:
        """Raises KeyNotFound when absent, ValueParseError when not an integer."""
        return parse_int(KEY_USER_ID, self.get_value(KEY_USER_ID))

    def add_token(self, value: str) -> None:
        self.add_value(KEY_TOKEN, value)

    def get_token(self) -> str:
        return self.get_value(KEY_TOKEN)

    def add_session_id(self, value: int) -> None:
        self.add_value(KEY_SESSION_ID, format_int(value))

    def get_session_id(self) -> int:
        return parse_int(KEY_SESSION_ID, self.get_value(KEY_SESSION_ID))
