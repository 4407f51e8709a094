import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

import main
from coaching.core.constants import AttemptStatusEnum
from coaching.crud.answer import answer as crud_answer
from coaching.crud.test_attempt import test_attempt as crud_test_attempt
from tests.helpers.asserts import api_call, assert_error, data_of
from tests.helpers.factories import question_data


class TestExamLifecycle:
    def test_author_import_take_and_rank(self, client: TestClient, teacher_headers, batch_factory,
                                         student_factory, auth_headers, db_session):
        batch = batch_factory(name="JEE 2026")
        top = student_factory(batch=batch, full_name="Top Scorer")
        low = student_factory(batch=batch, full_name="Low Scorer")

        exam_id = data_of(api_call(client, "POST", "/erp/exams", headers=teacher_headers,
                                   json={"title": "Weekly Test", "batch_id": batch.id}))["id"]
        imported = data_of(api_call(client, "POST", f"/erp/exams/{exam_id}/import", headers=teacher_headers, json={
            "questions": [
                {"question_text": "F = ?", "correct_option": "b", "subject": "Physics"},
                {"question_text": "NaCl is", "correct_option": "a", "subject": "Chemistry"},
                {"question_text": "Roots of x^2-1", "correct_option": "[A, C]", "subject": "Maths"},
            ]
        }))
        assert imported["total_marks"] == 12

        for student, answers in [(top, ["b", "a", "c,a"]), (low, ["a", None, "a"])]:
            headers = auth_headers(student.user)
            started = data_of(api_call(client, "POST", f"/exams/{exam_id}/attempt", headers=headers))
            submission = [
                {"question_id": q["id"], "selected_option": choice, "time_taken": 20}
                for q, choice in zip(started["questions"], answers)
            ]
            api_call(client, "POST", f"/exams/{exam_id}/submit", headers=headers, json={"answers": submission})

            attempt = crud_test_attempt.get(db_session, id=started["attempt_id"])
            assert crud_answer.count_by_attempt(db_session, attempt_id=attempt.id) == 3

        ranked = data_of(api_call(client, "GET", "/erp/academics/results", headers=teacher_headers,
                                  params={"exam_id": exam_id, "batch_id": batch.id}))
        assert [(r["rank"], r["student_name"]) for r in ranked] == [(1, "Top Scorer"), (2, "Low Scorer")]
        assert ranked[0]["total_score"] == 12
        assert (ranked[0]["physics"], ranked[0]["chemistry"], ranked[0]["maths"]) == (4, 4, 4)
        assert ranked[1]["total_score"] == -2
        assert ranked[1]["chemistry"] == 0

    def test_failed_submission_leaves_attempt_open(self, client: TestClient, exam_factory, student_factory,
                                                   auth_headers, db_session, monkeypatch):
        exam = exam_factory()
        student = student_factory()
        headers = auth_headers(student.user)
        attempt_id = data_of(api_call(client, "POST", f"/exams/{exam.id}/attempt", headers=headers))["attempt_id"]
        question_id = exam.questions[0].id

        def broken_insert(*args, **kwargs):
            raise RuntimeError("database went away")

        monkeypatch.setattr(crud_answer, "create_multi", broken_insert)
        lenient_client = TestClient(main.app, raise_server_exceptions=False)
        response = lenient_client.post(f"/exams/{exam.id}/submit", headers=headers, json={"answers": [
            {"question_id": question_id, "selected_option": "b", "time_taken": 3},
        ]})
        assert_error(response, 500, "INTERNAL_SERVER_ERROR")

        assert crud_answer.count_by_attempt(db_session, attempt_id=attempt_id) == 0
        assert crud_test_attempt.get(db_session, id=attempt_id).status == AttemptStatusEnum.IN_PROGRESS

        monkeypatch.undo()
        retried = data_of(api_call(client, "POST", f"/exams/{exam.id}/submit", headers=headers, json={"answers": [
            {"question_id": question_id, "selected_option": "b", "time_taken": 3},
        ]}))
        assert retried["score"] == 4

    def test_stale_second_submission_writes_no_answers(self, client: TestClient, exam_factory, student_factory,
                                                       auth_headers, db_session, monkeypatch):
        exam = exam_factory(questions=[question_data(), question_data(correct_option="a")])
        student = student_factory()
        headers = auth_headers(student.user)
        attempt_id = data_of(api_call(client, "POST", f"/exams/{exam.id}/attempt", headers=headers))["attempt_id"]
        answers = [{"question_id": q.id, "selected_option": "b", "time_taken": 1} for q in exam.questions]
        api_call(client, "POST", f"/exams/{exam.id}/submit", headers=headers, json={"answers": answers})

        # A double-click: the second request read the attempt before the first one closed it.
        monkeypatch.setattr(crud_test_attempt, "get_in_progress",
                            lambda db, **kwargs: crud_test_attempt.get(db, id=attempt_id))
        response = client.post(f"/exams/{exam.id}/submit", headers=headers, json={"answers": answers})

        assert_error(response, 400, "NO_ACTIVE_ATTEMPT")
        assert crud_answer.count_by_attempt(db_session, attempt_id=attempt_id) == 2
        assert crud_test_attempt.get(db_session, id=attempt_id).total_score == 3

    def test_answer_rows_are_unique_per_question(self, exam_factory, student_factory, db_session):
        exam = exam_factory()
        student = student_factory()
        attempt = crud_test_attempt.create(db_session, obj_in={"user_id": student.user_id, "exam_id": exam.id})
        row = {"attempt_id": attempt.id, "question_id": exam.questions[0].id, "selected_option": "b"}
        crud_answer.create(db_session, obj_in=row)

        with pytest.raises(IntegrityError):
            crud_answer.create(db_session, obj_in=dict(row))
        db_session.rollback()
