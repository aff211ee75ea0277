"""Attempt-session Pydantic models."""
from pydantic import BaseModel, Field

from portal.models.tests import QuestionOut


class SessionStartRequest(BaseModel):
    """Model for starting a session.

    The optional identity is only used if the timer runs out before a
    manual submit.
    """

    test_id: int
    student_name: str | None = None
    student_email: str | None = None


class AnswerSelectRequest(BaseModel):
    """Model for choosing an option."""

    answer: str = Field(..., min_length=1)


class NavigateRequest(BaseModel):
    """Model for moving the question cursor."""

    direction: int


class SessionSubmitRequest(BaseModel):
    """Model for submitting a session."""

    student_name: str | None = None
    student_email: str | None = None


class SessionResult(BaseModel):
    """Recorded outcome of a session."""

    attemptId: int
    score: int
    totalQuestions: int
    percentage: int
    timeTaken: int


class SessionState(BaseModel):
    """Client-visible state of an attempt session."""

    sessionId: str
    testId: int
    title: str
    status: str
    durationMinutes: int
    remainingSeconds: int
    elapsedSeconds: int
    currentIndex: int
    answers: list[str | None]
    questions: list[QuestionOut]
    pendingSubmission: bool
    result: SessionResult | None = None
    lastError: str | None = None
