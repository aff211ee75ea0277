"""Timed attempt session endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session as DbSession

from portal.database import get_db
from portal.dependencies import get_session_registry
from portal.models import (
    AnswerSelectRequest,
    NavigateRequest,
    QuestionOut,
    SessionResult,
    SessionStartRequest,
    SessionState,
    SessionSubmitRequest,
)
from portal.services.session_registry import ManagedSession, SessionRegistry

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


def serialize_session(managed: ManagedSession) -> dict[str, object]:
    """Build the client-visible state of a managed session."""
    session = managed.session
    result = None
    if managed.result is not None:
        result = SessionResult(
            attemptId=managed.result.attempt_id,
            score=managed.result.score,
            totalQuestions=managed.result.total_questions,
            percentage=managed.result.percentage,
            timeTaken=managed.time_taken or 0,
        )
    return {
        "sessionId": session.session_id,
        "testId": session.test.id,
        "title": session.test.title,
        "status": session.status.value,
        "durationMinutes": session.test.duration_minutes,
        "remainingSeconds": session.remaining_seconds,
        "elapsedSeconds": session.elapsed_seconds,
        "currentIndex": session.cursor,
        "answers": list(session.answers),
        "questions": [QuestionOut.model_validate(q) for q in session.test.questions],
        "pendingSubmission": managed.pending is not None,
        "result": result,
        "lastError": managed.last_error,
    }


@router.post("", response_model=SessionState)
def start_session(
    payload: SessionStartRequest,
    db: Annotated[DbSession, Depends(get_db)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> dict[str, object]:
    """Start a timed session on an active test."""
    managed = registry.start(
        db, payload.test_id, payload.student_name, payload.student_email
    )
    return serialize_session(managed)


@router.get("/{session_id}", response_model=SessionState)
def read_session(
    session_id: str,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> dict[str, object]:
    """Get the current state of a session."""
    return serialize_session(registry.get(session_id))


@router.put("/{session_id}/answers/{index}", response_model=SessionState)
def select_answer(
    session_id: str,
    index: int,
    payload: AnswerSelectRequest,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> dict[str, object]:
    """Choose (or change) the answer for one question."""
    return serialize_session(registry.select_answer(session_id, index, payload.answer))


@router.post("/{session_id}/navigate", response_model=SessionState)
def navigate(
    session_id: str,
    payload: NavigateRequest,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> dict[str, object]:
    """Move to the previous or next question."""
    return serialize_session(registry.navigate(session_id, payload.direction))


@router.post("/{session_id}/submit", response_model=SessionState)
def submit_session(
    session_id: str,
    payload: SessionSubmitRequest,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> dict[str, object]:
    """Submit the session and record the attempt."""
    managed = registry.submit(session_id, payload.student_name, payload.student_email)
    return serialize_session(managed)


@router.delete("/{session_id}")
def exit_session(
    session_id: str,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> dict[str, str]:
    """Leave the session without submitting. Answers are discarded."""
    registry.exit(session_id)
    return {"status": "exited"}
