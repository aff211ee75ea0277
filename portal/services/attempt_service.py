"""Service layer for recording mock-test attempts."""
import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session as DbSession

from portal.database import storage_errors
from portal.exceptions import InvalidInputError, NotFoundError
from portal.models.db.attempt import Attempt
from portal.services import scoring
from portal.services.catalog_service import get_answer_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttemptResult:
    """Outcome returned to the caller after an attempt is stored."""

    attempt_id: int
    score: int
    total_questions: int
    percentage: int


def _validate_time_taken(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidInputError("time_taken must be a non-negative integer")
    return value


def record_attempt(
    db: DbSession,
    test_id: int,
    student_name: str | None,
    student_email: str | None,
    answers: Any,
    time_taken: Any = 0,
) -> AttemptResult:
    """
    Score an answer vector against the test's current questions and store it.

    Inactive tests are accepted so late submissions still count. Nothing
    about earlier attempts is read or changed.

    Raises:
        InvalidInputError: missing name, non-list answers, bad time_taken,
            or a test without questions.
        NotFoundError: the test id does not exist.
        UnavailableError: storage failure.
    """
    name = student_name.strip() if isinstance(student_name, str) else ""
    if not name:
        raise InvalidInputError("Student name and answers are required")
    if not isinstance(answers, list):
        raise InvalidInputError("Student name and answers are required")
    seconds = _validate_time_taken(time_taken)

    _, questions = get_answer_key(db, test_id)
    if not questions:
        raise InvalidInputError(f"Test {test_id} has no questions")

    correct = scoring.score(questions, answers)
    total = len(questions)

    attempt = Attempt(
        test_id=test_id,
        student_name=name,
        student_email=(student_email or "").strip() or None,
        score=correct,
        total_questions=total,
        time_taken=seconds,
    )
    attempt.answers = answers

    with storage_errors(db, "save attempt"):
        db.add(attempt)
        db.commit()
        db.refresh(attempt)

    logger.info(
        f"Recorded attempt {attempt.id} for test {test_id}: {correct}/{total} in {seconds}s"
    )
    return AttemptResult(
        attempt_id=attempt.id,
        score=correct,
        total_questions=total,
        percentage=scoring.percentage(correct, total),
    )


def get_attempt(db: DbSession, attempt_id: int) -> Attempt:
    """Get a recorded attempt by ID."""
    with storage_errors(db, "fetch attempt"):
        attempt = db.get(Attempt, attempt_id)
    if attempt is None:
        raise NotFoundError("Attempt", attempt_id)
    return attempt
