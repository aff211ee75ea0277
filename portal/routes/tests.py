"""Mock test catalog endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session as DbSession

from portal.database import get_db
from portal.models import (
    AttemptResultResponse,
    AttemptSubmitRequest,
    TestCreate,
    TestCreatedResponse,
    TestDetail,
    TestSummary,
)
from portal.services import attempt_service, catalog_service

router = APIRouter(prefix="/api/mock-tests", tags=["mock-tests"])


@router.get("", response_model=list[TestSummary])
def list_tests(
    db: Annotated[DbSession, Depends(get_db)],
    subject: Annotated[str | None, Query()] = None,
    semester: Annotated[str | None, Query()] = None,
) -> list[object]:
    """List active mock tests, newest first."""
    return catalog_service.list_tests(db, subject=subject, semester=semester)


@router.post("", response_model=TestCreatedResponse)
def create_test(
    payload: TestCreate,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Create a new mock test with its questions."""
    test = catalog_service.create_test(db, payload)
    return {"message": "Mock test created successfully", "testId": test.id}


@router.get("/{test_id}", response_model=TestDetail)
def get_test(
    test_id: int,
    db: Annotated[DbSession, Depends(get_db)],
) -> object:
    """Get an active mock test with its questions."""
    return catalog_service.get_test(db, test_id)


@router.delete("/{test_id}")
def deactivate_test(
    test_id: int,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Hide a mock test from the catalog."""
    catalog_service.deactivate_test(db, test_id)
    return {"status": "deactivated", "testId": test_id}


@router.post("/{test_id}/attempt", response_model=AttemptResultResponse)
def submit_attempt(
    test_id: int,
    payload: AttemptSubmitRequest,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Score and record a finished attempt."""
    result = attempt_service.record_attempt(
        db,
        test_id,
        payload.student_name,
        payload.student_email,
        payload.answers,
        payload.time_taken,
    )
    return {
        "message": "Test submitted successfully",
        "attemptId": result.attempt_id,
        "score": result.score,
        "totalQuestions": result.total_questions,
        "percentage": result.percentage,
    }
