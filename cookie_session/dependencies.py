from fastapi import Depends, Request, Response

from cookie_session import default
from cookie_session.services.session_accessor import SessionAccessor
from cookie_session.services.session_manager import SessionConfig


def get_session_config(request: Request) -> SessionConfig:
    """SessionConfig from app state, or the process-wide default when none is set"""
    config = getattr(request.app.state, "session_config", None)
    return config if config is not None else default.get_config()


def get_session_accessor(
    request: Request,
    response: Response,
    config: SessionConfig = Depends(get_session_config),
) -> SessionAccessor:
    """
    Session bound to this request and FastAPI's sub-response.
    Cookies it writes are merged into the final response only when the endpoint
    returns plain data. An endpoint that returns its own Response (a
    RedirectResponse on logout, say) drops them; call
    config.accessor(request, that_response) instead.
    """
    return config.accessor(request, response)
