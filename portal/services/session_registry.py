"""Service owning live attempt sessions, their timers and recording."""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable

from sqlalchemy.orm import Session as DbSession

from portal.exceptions import (
    APIException,
    InvalidInputError,
    NotFoundError,
    SessionClosedError,
)
from portal.services import attempt_service
from portal.services.attempt_service import AttemptResult
from portal.services.catalog_service import get_test
from portal.services.session_service import (
    AttemptSession,
    SessionStatus,
    Submission,
    TestSnapshot,
)
from portal.services.timer_service import Cancellable, Scheduler, start_ticker

logger = logging.getLogger(__name__)


@dataclass
class ManagedSession:
    """A session plus what the registry tracks around it."""

    session: AttemptSession
    ticker: Cancellable | None = None
    # Identity given at start; only used when the timer runs out.
    student_name: str | None = None
    student_email: str | None = None
    pending: Submission | None = None
    result: AttemptResult | None = None
    time_taken: int | None = None
    last_error: str | None = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def session_id(self) -> str:
        return self.session.session_id


class SessionRegistry:
    """
    Keeps every live session of one application.

    Each session records at most one attempt. Whichever finalizes first,
    the timer or a manual submit, produces the submission; recording it is
    guarded per session so a retry after a storage failure cannot store it
    twice.
    """

    def __init__(
        self,
        session_factory: Callable[[], DbSession],
        scheduler: Scheduler = start_ticker,
    ) -> None:
        self._session_factory = session_factory
        self._scheduler = scheduler
        self._sessions: dict[str, ManagedSession] = {}
        self._lock = threading.Lock()

    def start(
        self,
        db: DbSession,
        test_id: int,
        student_name: str | None = None,
        student_email: str | None = None,
    ) -> ManagedSession:
        """Start a session on an active test and begin the countdown."""
        snapshot = TestSnapshot.from_model(get_test(db, test_id))
        managed = ManagedSession(
            session=AttemptSession.start(snapshot),
            student_name=(student_name or "").strip() or None,
            student_email=(student_email or "").strip() or None,
        )
        with self._lock:
            self._sessions[managed.session_id] = managed

        managed.ticker = self._scheduler(
            lambda: self._on_tick(managed), f"session-{managed.session_id[:8]}"
        )
        return managed

    def get(self, session_id: str) -> ManagedSession:
        with self._lock:
            managed = self._sessions.get(session_id)
        if managed is None:
            raise NotFoundError("Session", session_id)
        return managed

    def select_answer(self, session_id: str, index: int, label: str) -> ManagedSession:
        managed = self.get(session_id)
        managed.session.select_answer(index, label)
        return managed

    def navigate(self, session_id: str, direction: int) -> ManagedSession:
        managed = self.get(session_id)
        managed.session.navigate(direction)
        return managed

    def submit(
        self,
        session_id: str,
        student_name: str | None,
        student_email: str | None = None,
    ) -> ManagedSession:
        """
        Submit an active session, or finish recording one that expired or
        whose earlier recording failed.
        """
        managed = self.get(session_id)
        session = managed.session

        if session.is_active:
            try:
                submission = session.submit(student_name, student_email)
            except SessionClosedError:
                # Lost the race against the timer; fall through to the
                # expiry submission it left pending.
                if session.status is not SessionStatus.EXPIRED:
                    raise
            else:
                with managed.lock:
                    managed.pending = submission
                self._cancel_ticker(managed)

        self._record_pending(managed, student_name, student_email)
        return managed

    def exit(self, session_id: str) -> None:
        """Discard an active session without recording anything."""
        managed = self.get(session_id)
        managed.session.exit()
        self._cancel_ticker(managed)
        with self._lock:
            self._sessions.pop(session_id, None)

    def purge_finished(self, older_than_seconds: float) -> int:
        """Forget sessions that left the active state before the cutoff."""
        cutoff = time.monotonic() - older_than_seconds
        stale = []
        with self._lock:
            for session_id, managed in self._sessions.items():
                finished_at = managed.session.finished_at
                if finished_at is None or finished_at >= cutoff:
                    continue
                if managed.pending is not None:
                    # Still waiting for a name or a storage retry.
                    logger.warning(
                        f"Keeping session {session_id} of test "
                        f"{managed.session.test.id}: submission not recorded yet"
                    )
                    continue
                stale.append(session_id)
            for session_id in stale:
                self._sessions.pop(session_id)
        return len(stale)

    def shutdown(self) -> None:
        """Stop every timer."""
        with self._lock:
            managed_sessions = list(self._sessions.values())
        for managed in managed_sessions:
            self._cancel_ticker(managed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _on_tick(self, managed: ManagedSession) -> bool:
        with managed.lock:
            submission = managed.session.tick()
            if submission is not None and managed.result is None:
                managed.pending = submission
        if submission is None:
            return managed.session.is_active

        if managed.student_name:
            try:
                self._record_pending(managed, managed.student_name, managed.student_email)
            except APIException as exc:
                # Kept pending; the client sees last_error and can submit again.
                logger.warning(
                    f"Could not record expired session {managed.session_id}: {exc.detail}"
                )
        return False

    def _record_pending(
        self,
        managed: ManagedSession,
        student_name: str | None,
        student_email: str | None,
    ) -> AttemptResult:
        with managed.lock:
            if (
                managed.pending is None
                and managed.result is None
                and managed.session.status is SessionStatus.EXPIRED
            ):
                # Expired outside a registry tick; adopt its submission.
                managed.pending = managed.session.submission
            if managed.result is not None or managed.pending is None:
                raise SessionClosedError(managed.session.status.value)

            submission = managed.pending
            if not submission.student_name:
                name = (student_name or "").strip()
                if not name:
                    raise InvalidInputError("Student name is required")
                submission = submission.with_identity(
                    name, (student_email or "").strip() or None
                )
                managed.pending = submission

            db = self._session_factory()
            try:
                result = attempt_service.record_attempt(
                    db,
                    submission.test_id,
                    submission.student_name,
                    submission.student_email,
                    list(submission.answers),
                    submission.time_taken,
                )
            except APIException as exc:
                managed.last_error = exc.detail
                raise
            finally:
                db.close()

            managed.result = result
            managed.time_taken = submission.time_taken
            managed.pending = None
            managed.last_error = None
            return result

    @staticmethod
    def _cancel_ticker(managed: ManagedSession) -> None:
        if managed.ticker is not None:
            managed.ticker.cancel()
