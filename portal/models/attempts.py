"""Attempt-related Pydantic models."""
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class AttemptSubmitRequest(BaseModel):
    """Model for recording a finished attempt.

    Fields are loosely typed on purpose: the recorder validates them and
    answers with a 400 rather than a schema error.
    """

    student_name: str | None = None
    student_email: str | None = None
    answers: Any = None
    time_taken: Any = 0


class AttemptResultResponse(BaseModel):
    """Model for a recorded attempt's result."""

    message: str
    attemptId: int
    score: int
    totalQuestions: int
    percentage: int


class AttemptDetail(BaseModel):
    """Stored attempt as read back for display."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    test_id: int
    student_name: str
    student_email: str | None = None
    score: int
    total_questions: int
    percentage: int
    time_taken: int
    answers: list[Any]
    attempt_date: datetime
