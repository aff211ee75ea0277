"""FastAPI dependencies."""
from portal.dependencies.sessions import get_session_registry

__all__ = ["get_session_registry"]
