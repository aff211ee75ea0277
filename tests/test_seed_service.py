from portal.models.db import MockTest
from portal.services.catalog_service import get_test, list_tests
from portal.services.seed_service import SUBJECTS_BY_SEMESTER, seed_mock_tests_if_empty


def test_seed_fills_empty_catalog(db) -> None:
    inserted = seed_mock_tests_if_empty(db)

    subject_count = sum(len(subjects) for subjects in SUBJECTS_BY_SEMESTER.values())
    assert inserted == subject_count * 2
    assert len(list_tests(db)) == inserted

    m1 = list_tests(db, subject="M1")
    assert sorted(test.title for test in m1) == [
        "M1 - Chapter 1 Basics",
        "M1 - Chapter 2 Practice",
    ]
    assert {test.duration_minutes for test in m1} == {20, 25}

    chapter_one = get_test(db, next(t.id for t in m1 if "Chapter 1" in t.title))
    assert [q.correct_answer for q in chapter_one.questions] == ["B", "A", "B", "A"]
    assert chapter_one.questions[0].question_text.startswith("[M1] Chapter 1: Limits")
    assert [q.difficulty_level for q in chapter_one.questions] == ["easy", "easy", "medium", "medium"]


def test_seed_uses_generic_bank_for_other_subjects(db) -> None:
    seed_mock_tests_if_empty(db)

    [java] = [t for t in list_tests(db, subject="Java") if "Chapter 2" in t.title]
    questions = get_test(db, java.id).questions
    assert [q.correct_answer for q in questions] == ["A", "B", "A", "C"]
    assert java.semester == "3"
    assert java.total_questions == 4


def test_seed_skips_non_empty_catalog(db, make_test) -> None:
    make_test(["A"])

    assert seed_mock_tests_if_empty(db) == 0
    assert db.query(MockTest).count() == 1
