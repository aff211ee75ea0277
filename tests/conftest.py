"""Shared fixtures: a throwaway SQLite file and seeded tests."""
import os
import tempfile
from pathlib import Path

_TMP_DIR = Path(tempfile.mkdtemp(prefix="portal-tests-"))
os.environ["DB_DIR"] = str(_TMP_DIR)
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'portal-test.db'}"
os.environ["SEED_SAMPLE_TESTS"] = "0"
os.environ["STATIC_DIR"] = str(_TMP_DIR / "static")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

import portal.models.db  # noqa: E402,F401
from portal.database import Base, SessionLocal, engine  # noqa: E402
from portal.models.db import MockQuestion, MockTest  # noqa: E402
from portal.services.session_registry import SessionRegistry  # noqa: E402


class ManualTicker:
    """Ticker stand-in driven by the test instead of a thread."""

    def __init__(self, callback) -> None:
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            if self.cancelled:
                return
            if self.callback() is False:
                self.cancelled = True


class ManualScheduler:
    """Scheduler that hands out ManualTickers and remembers them."""

    def __init__(self) -> None:
        self.tickers: list[ManualTicker] = []

    def __call__(self, callback, name: str = "ticker") -> ManualTicker:
        ticker = ManualTicker(callback)
        self.tickers.append(ticker)
        return ticker

    @property
    def last(self) -> ManualTicker:
        return self.tickers[-1]


def _insert_test(
    db,
    answers: list[str],
    duration_minutes: int = 1,
    subject: str = "DBMS",
    semester: str | None = "4",
    title: str = "DBMS - Chapter 1 Basics",
    is_active: bool = True,
) -> MockTest:
    """Insert a test whose correct answers are ``answers``, in order."""
    test = MockTest(
        title=title,
        subject=subject,
        semester=semester,
        year="2024",
        duration_minutes=duration_minutes,
        total_questions=len(answers),
        is_active=is_active,
        questions=[
            MockQuestion(
                question_text=f"Question {order}",
                option_a="first",
                option_b="second",
                option_c="third",
                option_d="fourth",
                correct_answer=correct,
                question_order=order,
            )
            for order, correct in enumerate(answers, start=1)
        ],
    )
    db.add(test)
    db.commit()
    db.refresh(test)
    return test


@pytest.fixture(autouse=True)
def _fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_test(db):
    def _make(answers: list[str], **kwargs) -> MockTest:
        return _insert_test(db, answers, **kwargs)

    return _make


@pytest.fixture
def two_question_test(db) -> MockTest:
    return _insert_test(db, ["A", "B"], duration_minutes=1)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def registry(scheduler) -> SessionRegistry:
    return SessionRegistry(SessionLocal, scheduler=scheduler)


@pytest.fixture
def client(registry):
    from portal.app import app

    with TestClient(app) as test_client:
        app.state.session_registry = registry
        yield test_client
