"""Pydantic models."""
from portal.models.attempts import (
    AttemptDetail,
    AttemptResultResponse,
    AttemptSubmitRequest,
)
from portal.models.sessions import (
    AnswerSelectRequest,
    NavigateRequest,
    SessionResult,
    SessionStartRequest,
    SessionState,
    SessionSubmitRequest,
)
from portal.models.tests import (
    QuestionCreate,
    QuestionOut,
    TestCreate,
    TestCreatedResponse,
    TestDetail,
    TestSummary,
)

__all__ = [
    "AnswerSelectRequest",
    "AttemptDetail",
    "AttemptResultResponse",
    "AttemptSubmitRequest",
    "NavigateRequest",
    "QuestionCreate",
    "QuestionOut",
    "SessionResult",
    "SessionStartRequest",
    "SessionState",
    "SessionSubmitRequest",
    "TestCreate",
    "TestCreatedResponse",
    "TestDetail",
    "TestSummary",
]
