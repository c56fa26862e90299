"""
Process-wide default SessionConfig.

For apps that don't want to pass a SessionConfig around. Typical startup:

    from cookie_session import default as session

    session.default_config()
    session.set_secure(True)
    session.set_keys(auth_key, encrypt_key)
    session.init()

and then per request `session.add_value(request, response, "k", "v")`.

This is plain module state without locking: configure and init() once at
startup, before requests are served. Setters only change fields; key changes
need another init() to reach the cookie store.
"""
from __future__ import annotations

from datetime import timedelta

from starlette.requests import Request
from starlette.responses import Response

from cookie_session.config import SessionSettings
from cookie_session.schemas.cookie import SameSite
from cookie_session.services.session_manager import SessionConfig
from cookie_session.services.session_store import Session

_config: SessionConfig = SessionConfig.zero()


def default_config() -> None:
    """Replace the default instance with a freshly defaulted, uninitialized config."""
    global _config
    _config = SessionConfig()


def load_config(settings: SessionSettings | None = None) -> None:
    """Replace the default instance with one built from settings (environment by default)."""
    global _config
    _config = SessionConfig.from_settings(settings or SessionSettings())


def get_config() -> SessionConfig:
    return _config


def init() -> None:
    _config.init()


def get_session(request: Request) -> Session:
    return _config.get_session(request)


def add_value(request: Request, response: Response, key: str, value: str) -> None:
    _config.accessor(request, response).add_value(key, value)


def get_value(request: Request, key: str) -> str:
    return _config.accessor(request).get_value(key)


def get_all_values(request: Request) -> dict[str, str]:
    return _config.accessor(request).get_all_values()


def extend(request: Request, response: Response) -> None:
    _config.accessor(request, response).extend()


def destroy(request: Request, response: Response) -> None:
    _config.accessor(request, response).destroy()


# Typed fields

def add_username(request: Request, response: Response, value: str) -> None:
    _config.accessor(request, response).add_username(value)


def get_username(request: Request) -> str:
    return _config.accessor(request).get_username()


def add_user_id(request: Request, response: Response, value: int) -> None:
    _config.accessor(request, response).add_user_id(value)


def get_user_id(request: Request) -> int:
    return _config.accessor(request).get_user_id()


def add_token(request: Request, response: Response, value: str) -> None:
    _config.accessor(request, response).add_token(value)


def get_token(request: Request) -> str:
    return _config.accessor(request).get_token()


def add_session_id(request: Request, response: Response, value: int) -> None:
    _config.accessor(request, response).add_session_id(value)


def get_session_id(request: Request) -> int:
    return _config.accessor(request).get_session_id()


# Setters

def set_secure(yes: bool) -> None:
    _config.secure = yes


def set_http_only(yes: bool) -> None:
    _config.http_only = yes


def set_domain(domain: str) -> None:
    _config.domain = domain


def set_path(path: str) -> None:
    _config.path = path


def set_max_age(max_age: timedelta) -> None:
    _config.max_age = max_age


def set_keys(auth_key: str | bytes, encrypt_key: str | bytes) -> None:
    _config.auth_key = auth_key
    _config.encrypt_key = encrypt_key


def set_cookie_name(cookie_name: str) -> None:
    _config.cookie_name = cookie_name


def set_same_site(same_site: SameSite | int | str) -> None:
    _config.same_site = same_site
