"""Sample chapter-wise mock tests for an empty catalog."""
import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session as DbSession

from portal.database import storage_errors
from portal.models.db.mock_test import MockQuestion, MockTest

logger = logging.getLogger(__name__)

SUBJECTS_BY_SEMESTER: dict[str, list[str]] = {
    "1": ["M1", "Applied Physics", "PPS-1", "BEE"],
    "2": ["M2", "Chemistry", "English", "PPS-2"],
    "3": ["CS-1", "DS", "Python", "FSE", "P&S", "Java"],
    "4": ["DWV", "DAA", "FAI", "DBMS"],
    "5": ["EML", "CS2", "WPM", "ED"],
}

# (question, option A, option B, option C, option D, correct label)
TOPICAL_BANK: dict[str, list[tuple[str, str, str, str, str, str]]] = {
    "M1": [
        ("Limits: lim x→0 (sin x)/x = ?", "0", "1", "x", "Does not exist", "B"),
        ("Derivatives: d/dx (x^n) = ?", "nx^(n-1)", "x^n", "n^x", "ln x", "A"),
        ("Integrals: ∫ x dx = ?", "x^2", "x^2/2 + C", "2x + C", "ln x + C", "B"),
        ("Continuity: f is continuous at a if?", "lim f(x)=f(a)", "f is differentiable", "f(a)=0", "f(x)=x", "A"),
    ],
    "Applied Physics": [
        ("Kinematics: Unit of acceleration?", "m/s", "m/s^2", "N", "kg", "B"),
        ("Waves: v = fλ, increase f, λ?", "Increases", "Decreases", "Same", "Zero", "B"),
        ("Optics: Lens forming real inverted image?", "Concave", "Convex", "Plano", "Cylindrical", "B"),
        ("Thermo: Zeroth law defines?", "Entropy", "Temperature", "Work", "Heat", "B"),
    ],
    "PPS-1": [
        ("C: Which is valid identifier?", "2var", "_count", "int", "return", "B"),
        ("C: Which header for printf?", "stdlib.h", "stdio.h", "string.h", "math.h", "B"),
        ("C: Array index starts at?", "0", "1", "-1", "Depends", "A"),
        ("C: while loop runs until?", "Condition true", "Condition false", "n times", "Never", "A"),
    ],
    "BEE": [
        ("Ohm’s Law: V = ?", "IR", "I/R", "R/I", "I+R", "A"),
        ("Power: P = ?", "VI", "V/I", "I/V", "V+I", "A"),
        ("Series resistors total?", "Sum", "Product", "Average", "Max", "A"),
        ("AC frequency (India)?", "50 Hz", "60 Hz", "100 Hz", "10 Hz", "A"),
    ],
}

GENERIC_BANK: list[tuple[str, str, str, str, str, str, str]] = [
    ("Concept check 1", "A", "B", "C", "D", "A", "easy"),
    ("Concept check 2", "A1", "B1", "C1", "D1", "B", "medium"),
    ("Concept check 3", "True", "False", "Maybe", "Never", "A", "medium"),
    ("Concept check 4", "Opt1", "Opt2", "Opt3", "Opt4", "C", "easy"),
]

CHAPTERS = (
    ("Chapter 1", "Basics", "Fundamentals of {subject} - Chapter 1", 20),
    ("Chapter 2", "Practice", "Practice questions for {subject} - Chapter 2", 25),
)


def sample_questions(subject: str, chapter: str) -> list[MockQuestion]:
    """Four questions for one chapter test of a subject."""
    bank = TOPICAL_BANK.get(subject)
    if bank:
        return [
            MockQuestion(
                question_text=f"[{subject}] {chapter}: {text}",
                option_a=a,
                option_b=b,
                option_c=c,
                option_d=d,
                correct_answer=correct,
                explanation=f"{subject} - {chapter} concept check",
                difficulty_level="easy" if order <= 2 else "medium",
                question_order=order,
            )
            for order, (text, a, b, c, d, correct) in enumerate(bank[:4], start=1)
        ]

    return [
        MockQuestion(
            question_text=f"[{subject}] {chapter}: {text}",
            option_a=a,
            option_b=b,
            option_c=c,
            option_d=d,
            correct_answer=correct,
            explanation="Sample explanation",
            difficulty_level=difficulty,
            question_order=order,
        )
        for order, (text, a, b, c, d, correct, difficulty) in enumerate(GENERIC_BANK, start=1)
    ]


def seed_mock_tests_if_empty(db: DbSession, year: str = "2024") -> int:
    """Insert two chapter tests per subject when no tests exist yet.

    Returns:
        Number of tests inserted (0 if the catalog already had tests).
    """
    with storage_errors(db, "check mock tests"):
        existing = db.execute(select(func.count(MockTest.id))).scalar() or 0
    if existing > 0:
        return 0

    logger.info("Seeding chapter-wise mock tests...")
    tests = []
    for semester, subjects in SUBJECTS_BY_SEMESTER.items():
        for subject in subjects:
            for chapter, suffix, description, duration in CHAPTERS:
                questions = sample_questions(subject, chapter)
                tests.append(
                    MockTest(
                        title=f"{subject} - {chapter} {suffix}",
                        subject=subject,
                        semester=semester,
                        year=year,
                        description=description.format(subject=subject),
                        duration_minutes=duration,
                        total_questions=len(questions),
                        questions=questions,
                    )
                )

    with storage_errors(db, "seed mock tests"):
        db.add_all(tests)
        db.commit()

    logger.info(f"Mock tests seeding completed: {len(tests)} tests")
    return len(tests)
