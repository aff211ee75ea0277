"""Session registry dependency for FastAPI."""
from fastapi import Request

from portal.services.session_registry import SessionRegistry


def get_session_registry(request: Request) -> SessionRegistry:
    """Get the application's session registry."""
    return request.app.state.session_registry
