"""API route modules."""
from portal.routes import attempts, sessions, tests

__all__ = ["attempts", "sessions", "tests"]
