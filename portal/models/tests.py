"""Mock-test Pydantic models."""
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from portal.config import DEFAULT_DURATION_MINUTES

OptionLabel = Literal["A", "B", "C", "D"]


class QuestionCreate(BaseModel):
    """Model for a question inside a new test."""

    question_text: str = Field(..., min_length=1)
    option_a: str
    option_b: str
    option_c: str
    option_d: str
    correct_answer: OptionLabel
    explanation: str | None = None
    difficulty_level: str = "medium"


class TestCreate(BaseModel):
    """Model for creating a new mock test."""

    title: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    semester: str | None = None
    year: str | None = None
    description: str | None = None
    duration_minutes: int = Field(DEFAULT_DURATION_MINUTES, gt=0)
    questions: list[QuestionCreate] = Field(..., min_length=1)


class TestSummary(BaseModel):
    """Catalog entry without questions."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    subject: str
    semester: str | None = None
    year: str | None = None
    description: str | None = None
    total_questions: int
    duration_minutes: int
    created_at: datetime
    is_active: bool


class QuestionOut(BaseModel):
    """Question as shown to a student (no answer key)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    question_text: str
    option_a: str
    option_b: str
    option_c: str
    option_d: str
    difficulty_level: str
    question_order: int


class TestDetail(TestSummary):
    """Catalog entry with its ordered questions."""

    questions: list[QuestionOut]


class TestCreatedResponse(BaseModel):
    """Response after creating a test."""

    message: str
    testId: int
