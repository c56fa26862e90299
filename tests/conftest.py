"""Root conftest — request/response builders and session config fixtures."""
from __future__ import annotations

import pytest
from starlette.requests import Request
from starlette.responses import Response

AUTH_KEY = "asdfasdfasdfasdfasdfasdfasdfasdfasdfasdfasdfasdfasdfasdfasdfasdf"
ENCRYPT_KEY = "asdfasdfasdfasdfasdfasdfasdfasdf"


def _make_request(cookies: dict[str, str] | None = None, path: str = "/") -> Request:
    """Bare ASGI GET request carrying the given cookies."""
    headers = []
    if cookies:
        cookie_header = "; ".join(f"{k}={v}" for k, v in cookies.items())
        headers.append((b"cookie", cookie_header.encode("latin-1")))
    scope = {
        "type": "http",
        "method": "GET",
        "path": path,
        "query_string": b"",
        "headers": headers,
    }
    return Request(scope)


def _last_cookie(response: Response) -> str:
    """Value of the last Set-Cookie header: 'name=value; Path=/; ...' -> value"""
    headers = response.headers.getlist("set-cookie")
    assert headers, "response has no Set-Cookie header"
    return headers[-1].split(";", 1)[0].split("=", 1)[1]


@pytest.fixture
def make_request():
    return _make_request


@pytest.fixture
def last_cookie():
    return _last_cookie


@pytest.fixture
def keys():
    return AUTH_KEY, ENCRYPT_KEY


@pytest.fixture
def session_config():
    """Initialized SessionConfig with fixed keys."""
    from cookie_session.services.session_manager import SessionConfig

    config = SessionConfig(auth_key=AUTH_KEY, encrypt_key=ENCRYPT_KEY)
    config.init()
    return config


@pytest.fixture
def default_session():
    """The process-wide default module, reset to defaults and restored afterwards."""
    from cookie_session import default

    saved = default.get_config()
    default.default_config()
    yield default
    default._config = saved
