"""Application configuration and constants."""
import os
from pathlib import Path


def _resource_path(relative: str) -> Path:
    """Get path to a resource under the project root."""
    return Path(__file__).resolve().parent.parent / relative


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_bool_env(name: str, default: bool) -> bool:
    """Parse boolean flag from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# Directories
STATIC_DIR = Path(os.environ.get("STATIC_DIR", _resource_path("static")))

# Database
DB_DIR = Path(os.environ.get("DB_DIR", Path.cwd() / "data"))
DB_DIR.mkdir(parents=True, exist_ok=True)
DATABASE_URL = os.environ.get(
    "DATABASE_URL", f"sqlite:///{DB_DIR / 'portal.db'}"
)

# Catalog
SEED_SAMPLE_TESTS = _parse_bool_env("SEED_SAMPLE_TESTS", True)
DEFAULT_DURATION_MINUTES = 60
OPTION_LABELS = ("A", "B", "C", "D")

# Attempt sessions
TIMER_TICK_SECONDS = _parse_int_env("TIMER_TICK_SECONDS", 1)
SESSION_RETENTION_MINUTES = _parse_int_env("SESSION_RETENTION_MINUTES", 30)
SESSION_CLEANUP_INTERVAL_SECONDS = _parse_int_env(
    "SESSION_CLEANUP_INTERVAL_SECONDS", 5 * 60
)

# Server
HOST = os.environ.get("HOST", "127.0.0.1")
PORT = _parse_int_env("PORT", 8000)
