"""Scoring of answer vectors against a test's answer key."""
from typing import Any, Protocol, Sequence

from portal.config import OPTION_LABELS


class Scorable(Protocol):
    correct_answer: str


def normalize_answer(value: Any) -> str | None:
    """Return the option label for a slot, or None when unanswered."""
    if isinstance(value, str) and value in OPTION_LABELS:
        return value
    return None


def score(questions: Sequence[Scorable], answers: Sequence[Any]) -> int:
    """
    Count positions where the answer equals the question's correct option.

    Slots past the end of ``answers`` count as unanswered and slots past the
    end of ``questions`` are ignored. Unanswered never matches.
    """
    correct = 0
    for index, question in enumerate(questions):
        if index >= len(answers):
            break
        answer = normalize_answer(answers[index])
        if answer is not None and answer == question.correct_answer:
            correct += 1
    return correct


def percentage(correct: int, total: int) -> int:
    """Whole-number percentage, halves rounded up.

    Raises:
        ValueError: if total is not positive.
    """
    if total <= 0:
        raise ValueError("total must be positive")
    return (correct * 200 + total) // (2 * total)
