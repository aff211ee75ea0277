"""Service for cleanup operations."""
import logging
import threading

from portal.config import SESSION_CLEANUP_INTERVAL_SECONDS, SESSION_RETENTION_MINUTES
from portal.services.session_registry import SessionRegistry

logger = logging.getLogger(__name__)


def cleanup_finished_sessions(registry: SessionRegistry) -> int:
    """Drop finished sessions older than the retention window from memory."""
    if SESSION_RETENTION_MINUTES < 0:
        return 0

    removed = registry.purge_finished(SESSION_RETENTION_MINUTES * 60)
    if removed > 0:
        logger.info(f"Cleaned up {removed} finished sessions")
    return removed


def schedule_sessions_cleanup(registry: SessionRegistry) -> threading.Event:
    """Schedule periodic cleanup of finished sessions.

    Returns:
        Event that stops the worker when set.
    """
    stopped = threading.Event()

    def _worker() -> None:
        while not stopped.wait(SESSION_CLEANUP_INTERVAL_SECONDS):
            try:
                cleanup_finished_sessions(registry)
            except Exception:
                logger.exception("Session cleanup failed")

    thread = threading.Thread(
        target=_worker,
        name="sessions_cleanup",
        daemon=True,
    )
    thread.start()
    return stopped
