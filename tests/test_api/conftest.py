"""API test fixtures — a small FastAPI app wired to cookie sessions."""
from __future__ import annotations

import pytest_asyncio
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import RedirectResponse
from httpx import ASGITransport, AsyncClient

from cookie_session.dependencies import get_session_accessor, get_session_config
from cookie_session.errors import KeyNotFound, ValueParseError
from cookie_session.services.session_accessor import SessionAccessor
from cookie_session.services.session_manager import SessionConfig


def build_app(session_config=None) -> FastAPI:
    app = FastAPI()
    if session_config is not None:
        app.state.session_config = session_config

    @app.post("/values/{key}")
    def add_value(key: str, value: str, session: SessionAccessor = Depends(get_session_accessor)):
        session.add_value(key, value)
        return {"ok": True}

    @app.get("/values/{key}")
    def get_value(key: str, session: SessionAccessor = Depends(get_session_accessor)):
        try:
            return {"value": session.get_value(key)}
        except KeyNotFound:
            raise HTTPException(status_code=404, detail="not found")

    @app.get("/values")
    def get_all_values(session: SessionAccessor = Depends(get_session_accessor)):
        return {"values": session.get_all_values(), "is_new": session.is_new}

    @app.post("/login/{user_id}")
    def login(user_id: int, session: SessionAccessor = Depends(get_session_accessor)):
        session.add_user_id(user_id)
        return {"ok": True}

    @app.get("/me")
    def me(session: SessionAccessor = Depends(get_session_accessor)):
        try:
            return {"user_id": session.get_user_id()}
        except KeyNotFound:
            raise HTTPException(status_code=401, detail="Not authenticated")
        except ValueParseError:
            raise HTTPException(status_code=400, detail="Corrupt session")

    @app.post("/extend")
    def extend(session: SessionAccessor = Depends(get_session_accessor)):
        session.extend()
        return {"ok": True}

    @app.post("/logout")
    def logout(session: SessionAccessor = Depends(get_session_accessor)):
        session.destroy()
        return {"ok": True}

    @app.post("/logout/redirect")
    def logout_redirect_dropped(session: SessionAccessor = Depends(get_session_accessor)):
        # cookie goes to the sub-response, which FastAPI discards here
        session.destroy()
        return RedirectResponse("/", status_code=303)

    @app.post("/logout/redirect-bound")
    def logout_redirect(request: Request, config: SessionConfig = Depends(get_session_config)):
        redirect = RedirectResponse("/", status_code=303)
        config.accessor(request, redirect).destroy()
        return redirect

    return app


@pytest_asyncio.fixture
async def app_client(session_config):
    """httpx AsyncClient for an app carrying session_config in app.state."""
    transport = ASGITransport(app=build_app(session_config))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def default_app_client(default_session):
    """httpx AsyncClient for an app relying on the process-wide default config."""
    default_session.init()
    transport = ASGITransport(app=build_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
