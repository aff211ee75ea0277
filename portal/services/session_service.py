"""
Attempt session: the in-progress state of one student taking one test.

The session works on a frozen snapshot of the test taken at start, so its
answer vector keeps its length even if the test is edited meanwhile. All
transitions out of ``active`` go through one lock-guarded compare-and-set,
so a timer expiry and a manual submit can never both finalize a session.
"""
from __future__ import annotations

import enum
import logging
import threading
import time
import uuid
from dataclasses import dataclass, field, replace

from portal.config import OPTION_LABELS
from portal.exceptions import InvalidInputError, SessionClosedError
from portal.models.db.mock_test import MockTest

logger = logging.getLogger(__name__)


class SessionStatus(str, enum.Enum):
    """Status of an attempt session."""

    ACTIVE = "active"
    SUBMITTED = "submitted"
    EXPIRED = "expired"
    EXITED = "exited"


@dataclass(frozen=True)
class QuestionSnapshot:
    id: int
    question_text: str
    option_a: str
    option_b: str
    option_c: str
    option_d: str
    correct_answer: str
    difficulty_level: str = "medium"
    question_order: int = 1


@dataclass(frozen=True)
class TestSnapshot:
    """Copy of a test taken when a session starts."""

    id: int
    title: str
    duration_minutes: int
    questions: tuple[QuestionSnapshot, ...]
    subject: str = ""

    @classmethod
    def from_model(cls, test: MockTest) -> TestSnapshot:
        return cls(
            id=test.id,
            title=test.title,
            subject=test.subject,
            duration_minutes=test.duration_minutes,
            questions=tuple(
                QuestionSnapshot(
                    id=q.id,
                    question_text=q.question_text,
                    option_a=q.option_a,
                    option_b=q.option_b,
                    option_c=q.option_c,
                    option_d=q.option_d,
                    correct_answer=q.correct_answer,
                    difficulty_level=q.difficulty_level,
                    question_order=q.question_order,
                )
                for q in test.questions
            ),
        )


@dataclass(frozen=True)
class Submission:
    """Answers frozen at the moment a session left the active state."""

    session_id: str
    test_id: int
    answers: tuple[str | None, ...]
    time_taken: int
    status: SessionStatus
    student_name: str | None = None
    student_email: str | None = None

    def with_identity(self, student_name: str, student_email: str | None = None) -> Submission:
        return replace(self, student_name=student_name, student_email=student_email)


@dataclass
class AttemptSession:
    """Timed run through a test snapshot.

    Use :meth:`start` to build one; the constructor does not validate.
    """

    test: TestSnapshot
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    answers: list[str | None] = field(default_factory=list)
    remaining_seconds: int = 0
    cursor: int = 0
    status: SessionStatus = SessionStatus.ACTIVE
    finished_at: float | None = None
    # Set once, when the session leaves the active state by tick or submit.
    submission: Submission | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @classmethod
    def start(cls, test: TestSnapshot) -> AttemptSession:
        """Open a session: every slot unanswered, full time on the clock."""
        if test.duration_minutes <= 0:
            raise InvalidInputError("Test duration must be positive")
        if not test.questions:
            raise InvalidInputError(f"Test {test.id} has no questions")

        session = cls(
            test=test,
            answers=[None] * len(test.questions),
            remaining_seconds=test.duration_minutes * 60,
        )
        logger.info(f"Started session {session.session_id} for test {test.id}")
        return session

    @property
    def question_count(self) -> int:
        return len(self.answers)

    @property
    def time_limit_seconds(self) -> int:
        return self.test.duration_minutes * 60

    @property
    def elapsed_seconds(self) -> int:
        return self.time_limit_seconds - self.remaining_seconds

    @property
    def is_active(self) -> bool:
        return self.status is SessionStatus.ACTIVE

    def select_answer(self, index: int, label: str) -> None:
        """Set or overwrite the answer for one question."""
        with self._lock:
            self._ensure_active()
            if not isinstance(index, int) or not 0 <= index < self.question_count:
                raise InvalidInputError(
                    f"Question index must be between 0 and {self.question_count - 1}"
                )
            if label not in OPTION_LABELS:
                raise InvalidInputError("Answer must be one of A, B, C, D")
            self.answers[index] = label

    def navigate(self, direction: int) -> int:
        """Move the cursor one question back or forward, clamped to the test."""
        if direction not in (-1, 1):
            raise InvalidInputError("Direction must be -1 or 1")
        with self._lock:
            self.cursor = min(max(self.cursor + direction, 0), self.question_count - 1)
            return self.cursor

    def tick(self) -> Submission | None:
        """
        Count one second down. Returns the expiry submission when this tick
        used up the last second, otherwise None.

        Ticking a closed session does nothing.
        """
        with self._lock:
            if self.status is not SessionStatus.ACTIVE:
                return None
            self.remaining_seconds = max(self.remaining_seconds - 1, 0)
            if self.remaining_seconds > 0:
                return None
            submission = self._finalize(SessionStatus.EXPIRED)

        logger.info(f"Session {self.session_id} expired")
        return submission

    def submit(self, student_name: str | None, student_email: str | None = None) -> Submission:
        """Finalize the session by hand.

        Raises:
            InvalidInputError: empty name; the session stays active.
            SessionClosedError: the session already left the active state.
        """
        name = student_name.strip() if isinstance(student_name, str) else ""
        if not name:
            raise InvalidInputError("Student name is required")

        with self._lock:
            self._ensure_active()
            submission = self._finalize(SessionStatus.SUBMITTED)

        logger.info(
            f"Session {self.session_id} submitted after {submission.time_taken}s"
        )
        return submission.with_identity(name, (student_email or "").strip() or None)

    def exit(self) -> None:
        """Abandon the session. Nothing is recorded."""
        with self._lock:
            self._ensure_active()
            self.status = SessionStatus.EXITED
            self.finished_at = time.monotonic()
        logger.info(f"Session {self.session_id} exited without submitting")

    def _ensure_active(self) -> None:
        if self.status is not SessionStatus.ACTIVE:
            logger.warning(
                f"Rejected change to session {self.session_id}: already {self.status.value}"
            )
            raise SessionClosedError(self.status.value)

    def _finalize(self, status: SessionStatus) -> Submission:
        # Caller holds the lock and has checked the session is active.
        self.status = status
        self.finished_at = time.monotonic()
        self.submission = Submission(
            session_id=self.session_id,
            test_id=self.test.id,
            answers=tuple(self.answers),
            time_taken=self.elapsed_seconds,
            status=status,
        )
        return self.submission
