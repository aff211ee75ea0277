from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from portal.exceptions import InvalidInputError, NotFoundError, UnavailableError
from portal.models.tests import QuestionCreate
from portal.models import tests as catalog_models
from portal.services import catalog_service


def test_list_tests_filters_and_orders_newest_first(db, make_test) -> None:
    older = make_test(["A"], subject="DBMS", semester="4", title="older")
    newer = make_test(["A"], subject="DBMS", semester="4", title="newer")
    make_test(["A"], subject="Java", semester="3", title="java")
    make_test(["A"], subject="DBMS", semester="4", title="hidden", is_active=False)
    older.created_at = datetime.now(timezone.utc) - timedelta(days=1)
    db.commit()

    titles = [test.title for test in catalog_service.list_tests(db, subject="DBMS")]
    assert titles == ["newer", "older"]

    by_semester = catalog_service.list_tests(db, semester="3")
    assert [test.title for test in by_semester] == ["java"]

    assert {test.id for test in catalog_service.list_tests(db)} == {
        older.id,
        newer.id,
        by_semester[0].id,
    }


def test_get_test_returns_questions_in_order(db, make_test) -> None:
    test = make_test(["B", "D", "A"])

    loaded = catalog_service.get_test(db, test.id)

    assert [q.question_order for q in loaded.questions] == [1, 2, 3]
    assert [q.correct_answer for q in loaded.questions] == ["B", "D", "A"]


def test_get_test_hides_inactive_and_missing(db, make_test) -> None:
    inactive = make_test(["A"], is_active=False)

    with pytest.raises(NotFoundError):
        catalog_service.get_test(db, inactive.id)
    with pytest.raises(NotFoundError):
        catalog_service.get_test(db, 9999)


def test_answer_key_includes_inactive_tests(db, make_test) -> None:
    inactive = make_test(["C", "A"], is_active=False)

    test, questions = catalog_service.get_answer_key(db, inactive.id)

    assert test.id == inactive.id
    assert [q.correct_answer for q in questions] == ["C", "A"]
    with pytest.raises(NotFoundError):
        catalog_service.get_answer_key(db, 9999)


def test_create_test_numbers_questions(db) -> None:
    payload = catalog_models.TestCreate(
        title=" Python - Chapter 3 ",
        subject="Python",
        semester="3",
        duration_minutes=15,
        questions=[
            QuestionCreate(
                question_text="len([1, 2]) = ?",
                option_a="1",
                option_b="2",
                option_c="3",
                option_d="0",
                correct_answer="B",
            ),
            QuestionCreate(
                question_text="Which is immutable?",
                option_a="list",
                option_b="dict",
                option_c="tuple",
                option_d="set",
                correct_answer="C",
                difficulty_level="easy",
            ),
        ],
    )

    test = catalog_service.create_test(db, payload)

    assert test.title == "Python - Chapter 3"
    assert test.total_questions == 2
    assert test.is_active is True
    assert [(q.question_order, q.correct_answer) for q in test.questions] == [
        (1, "B"),
        (2, "C"),
    ]
    assert test.questions[0].difficulty_level == "medium"


def test_create_test_rejects_blank_title(db) -> None:
    payload = catalog_models.TestCreate(
        title="   ",
        subject="Python",
        questions=[
            QuestionCreate(
                question_text="q",
                option_a="a",
                option_b="b",
                option_c="c",
                option_d="d",
                correct_answer="A",
            )
        ],
    )
    with pytest.raises(InvalidInputError):
        catalog_service.create_test(db, payload)


def test_deactivate_test_is_idempotent(db, make_test) -> None:
    test = make_test(["A"])

    catalog_service.deactivate_test(db, test.id)
    catalog_service.deactivate_test(db, test.id)

    assert catalog_service.list_tests(db) == []
    with pytest.raises(NotFoundError):
        catalog_service.deactivate_test(db, 9999)


def test_storage_failure_is_reported_as_unavailable(db, monkeypatch) -> None:
    def _fail(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "execute", _fail)

    with pytest.raises(UnavailableError) as excinfo:
        catalog_service.list_tests(db)
    assert excinfo.value.status_code == 503
