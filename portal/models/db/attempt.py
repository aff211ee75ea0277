"""
Attempt database model for recorded mock-test submissions.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import sqlalchemy as sa
from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portal.database import Base
from portal.services import scoring

if TYPE_CHECKING:
    from portal.models.db.mock_test import MockTest


class Attempt(Base):
    """
    One submitted (or expired) run through a mock test.
    Append-only: rows are written once and never updated.
    """

    __tablename__ = "test_attempts"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    test_id: Mapped[int] = mapped_column(
        ForeignKey("mock_tests.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Identity supplied at submit time
    student_name: Mapped[str] = mapped_column(String(100), nullable=False)
    student_email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Results
    score: Mapped[int] = mapped_column(default=0, nullable=False)
    total_questions: Mapped[int] = mapped_column(default=0, nullable=False)
    time_taken: Mapped[int] = mapped_column(default=0, nullable=False)  # seconds

    # Answer vector as submitted (stored as JSON string)
    answers_json: Mapped[str | None] = mapped_column(Text, nullable=True)

    attempt_date: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # Relationships
    test: Mapped["MockTest"] = relationship("MockTest")

    @property
    def answers(self) -> list[Any]:
        """Parse answers from JSON."""
        if not self.answers_json:
            return []
        try:
            return json.loads(self.answers_json)
        except (json.JSONDecodeError, TypeError):
            return []

    @answers.setter
    def answers(self, value: list[Any]) -> None:
        """Serialize answers to JSON."""
        self.answers_json = json.dumps(value, ensure_ascii=False)

    @property
    def percentage(self) -> int:
        """Whole-number percentage of correct answers."""
        if self.total_questions <= 0:
            return 0
        return scoring.percentage(self.score, self.total_questions)
