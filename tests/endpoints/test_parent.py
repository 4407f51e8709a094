from fastapi.testclient import TestClient

from coaching.core.constants import AttemptStatusEnum, RoleEnum
from coaching.crud.test_attempt import test_attempt as crud_test_attempt
from tests.helpers.asserts import api_call, assert_error, data_of


class TestParentEndpoints:
    def test_parent_sees_child_results(self, client: TestClient, parent_factory, student_factory,
                                       exam_factory, auth_headers, db_session):
        parent = parent_factory()
        child = student_factory(parent=parent)
        finished = exam_factory(title="Finished")
        ongoing = exam_factory(title="Ongoing")
        crud_test_attempt.create(db_session, obj_in={
            "user_id": child.user_id, "exam_id": finished.id,
            "status": AttemptStatusEnum.SUBMITTED, "total_score": 12,
        })
        crud_test_attempt.create(db_session, obj_in={"user_id": child.user_id, "exam_id": ongoing.id})
        db_session.commit()

        results = data_of(api_call(client, "GET", f"/parent/children/{child.user_id}/attempts",
                                   headers=auth_headers(parent.user)))
        assert [(r["exam_title"], r["total_score"]) for r in results] == [("Finished", 12)]

    def test_parent_cannot_see_other_children(self, client: TestClient, parent_factory, student_factory, auth_headers):
        parent = parent_factory()
        stranger = student_factory(parent=parent_factory(mobile="9000000009"))
        response = client.get(f"/parent/children/{stranger.user_id}/attempts", headers=auth_headers(parent.user))
        assert_error(response, 403, "FORBIDDEN")

    def test_students_cannot_use_parent_routes(self, client: TestClient, student_factory, token_for_role):
        child = student_factory()
        response = client.get(f"/parent/children/{child.user_id}/attempts", headers=token_for_role(RoleEnum.STUDENT))
        assert_error(response, 403, "FORBIDDEN")
