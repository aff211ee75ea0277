"""Service layer for the mock-test catalog."""
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session as DbSession, selectinload

from portal.database import storage_errors
from portal.exceptions import InvalidInputError, NotFoundError
from portal.models.db.mock_test import MockQuestion, MockTest
from portal.models.tests import TestCreate

logger = logging.getLogger(__name__)


def list_tests(
    db: DbSession,
    subject: str | None = None,
    semester: str | None = None,
) -> list[MockTest]:
    """
    List active tests, newest first, optionally filtered by subject and semester.
    """
    query = select(MockTest).where(MockTest.is_active.is_(True))

    if subject:
        query = query.where(MockTest.subject == subject)
    if semester:
        query = query.where(MockTest.semester == semester)

    query = query.order_by(MockTest.created_at.desc(), MockTest.id.desc())

    with storage_errors(db, "fetch mock tests"):
        return list(db.execute(query).scalars().all())


def get_test(db: DbSession, test_id: int) -> MockTest:
    """Get an active test with its ordered questions loaded."""
    query = (
        select(MockTest)
        .options(selectinload(MockTest.questions))
        .where(MockTest.id == test_id, MockTest.is_active.is_(True))
    )
    with storage_errors(db, "fetch mock test"):
        test = db.execute(query).scalar_one_or_none()

    if test is None:
        raise NotFoundError("Mock test", test_id)
    return test


def get_answer_key(db: DbSession, test_id: int) -> tuple[MockTest, list[MockQuestion]]:
    """
    Get a test and its ordered questions, whether or not it is active.
    """
    with storage_errors(db, "fetch test"):
        test = db.get(MockTest, test_id)
        if test is None:
            raise NotFoundError("Test", test_id)
        questions = db.execute(
            select(MockQuestion)
            .where(MockQuestion.test_id == test_id)
            .order_by(MockQuestion.question_order)
        ).scalars().all()

    return test, list(questions)


def create_test(db: DbSession, payload: TestCreate) -> MockTest:
    """Create a test and its questions; question order follows the payload."""
    title = payload.title.strip()
    subject = payload.subject.strip()
    if not title or not subject:
        raise InvalidInputError("Title and subject are required")

    test = MockTest(
        title=title,
        subject=subject,
        semester=payload.semester or None,
        year=payload.year or None,
        description=payload.description or None,
        duration_minutes=payload.duration_minutes,
        total_questions=len(payload.questions),
    )
    for order, question in enumerate(payload.questions, start=1):
        test.questions.append(
            MockQuestion(
                question_text=question.question_text,
                option_a=question.option_a,
                option_b=question.option_b,
                option_c=question.option_c,
                option_d=question.option_d,
                correct_answer=question.correct_answer,
                explanation=question.explanation or None,
                difficulty_level=question.difficulty_level or "medium",
                question_order=order,
            )
        )

    with storage_errors(db, "create mock test"):
        db.add(test)
        db.commit()
        db.refresh(test)

    logger.info(f"Created mock test {test.id} '{test.title}' with {test.total_questions} questions")
    return test


def deactivate_test(db: DbSession, test_id: int) -> MockTest:
    """Hide a test from the catalog. Recorded attempts stay valid."""
    with storage_errors(db, "deactivate mock test"):
        test = db.get(MockTest, test_id)
        if test is None:
            raise NotFoundError("Mock test", test_id)
        if test.is_active:
            test.is_active = False
            db.commit()
            db.refresh(test)
            logger.info(f"Deactivated mock test {test_id}")

    return test
