from fastapi.testclient import TestClient

from tests.helpers.asserts import api_call, assert_error, data_of


class TestEnquiries:
    def test_enquiry_starts_pending_and_moves_through_followups(self, client: TestClient, director_headers):
        created = data_of(api_call(client, "POST", "/erp/enquiries", headers=director_headers, json={
            "student_name": "Rohan", "mobile": "9988776655", "course": "JEE", "source": "Walk-in",
        }))
        assert created["status"] == "PENDING"
        assert created["follow_up_count"] == 0

        updated = data_of(api_call(client, "PATCH", f"/erp/enquiries/{created['id']}/status", headers=director_headers,
                                   json={"status": "CALLED", "follow_up_count": 1, "remarks": "Call back Monday"}))
        assert (updated["status"], updated["follow_up_count"], updated["remarks"]) == ("CALLED", 1, "Call back Monday")
        assert updated["course"] == "JEE"

        listed = data_of(api_call(client, "GET", "/erp/enquiries", headers=director_headers))
        assert [e["id"] for e in listed] == [created["id"]]

    def test_unknown_status_is_rejected(self, client: TestClient, director_headers):
        created = data_of(api_call(client, "POST", "/erp/enquiries", headers=director_headers,
                                   json={"student_name": "Rohan", "mobile": "9988776655"}))
        response = client.patch(f"/erp/enquiries/{created['id']}/status", headers=director_headers,
                                json={"status": "MAYBE"})
        assert_error(response, 422, "VALIDATION_ERROR")

    def test_update_missing_enquiry(self, client: TestClient, director_headers):
        response = client.patch("/erp/enquiries/500/status", headers=director_headers, json={"status": "CLOSED"})
        assert_error(response, 404, "NOT_FOUND")

    def test_teacher_cannot_see_enquiries(self, client: TestClient, teacher_headers):
        assert_error(client.get("/erp/enquiries", headers=teacher_headers), 403, "FORBIDDEN")


class TestResources:
    def test_students_see_their_batch_and_shared_resources(self, client: TestClient, teacher_headers,
                                                           batch_factory, student_factory, auth_headers):
        mine = batch_factory(name="Mine")
        other = batch_factory(name="Other")
        student = student_factory(batch=mine)
        for title, batch_id in [("Shared notes", None), ("Mine lecture", mine.id), ("Other lecture", other.id)]:
            api_call(client, "POST", "/erp/resources", headers=teacher_headers,
                     json={"title": title, "url": f"https://videos.example.com/{title}", "batch_id": batch_id})

        everything = data_of(api_call(client, "GET", "/erp/resources", headers=teacher_headers))
        assert len(everything) == 3
        named = {r["title"]: r["batch_name"] for r in everything}
        assert named["Mine lecture"] == "Mine"
        assert named["Shared notes"] is None

        visible = data_of(api_call(client, "GET", "/student/resources", headers=auth_headers(student.user)))
        assert sorted(r["title"] for r in visible) == ["Mine lecture", "Shared notes"]

    def test_unbatched_student_sees_shared_only(self, client: TestClient, teacher_headers, batch_factory,
                                                student_factory, auth_headers):
        batch = batch_factory()
        student = student_factory()
        api_call(client, "POST", "/erp/resources", headers=teacher_headers,
                 json={"title": "Shared", "url": "https://x.example.com/1"})
        api_call(client, "POST", "/erp/resources", headers=teacher_headers,
                 json={"title": "Batch only", "url": "https://x.example.com/2", "batch_id": batch.id})
        visible = data_of(api_call(client, "GET", "/student/resources", headers=auth_headers(student.user)))
        assert [r["title"] for r in visible] == ["Shared"]

    def test_resource_for_unknown_batch(self, client: TestClient, teacher_headers):
        response = client.post("/erp/resources", headers=teacher_headers,
                               json={"title": "t", "url": "https://x.example.com", "batch_id": 77})
        assert_error(response, 404, "NOT_FOUND")

    def test_delete_resource(self, client: TestClient, teacher_headers):
        created = data_of(api_call(client, "POST", "/erp/resources", headers=teacher_headers,
                                   json={"title": "Old", "url": "https://x.example.com/old"}))
        api_call(client, "DELETE", f"/erp/resources/{created['id']}", headers=teacher_headers)
        assert data_of(api_call(client, "GET", "/erp/resources", headers=teacher_headers)) == []
        assert_error(client.delete(f"/erp/resources/{created['id']}", headers=teacher_headers), 404, "NOT_FOUND")


class TestStudentAttendance:
    def test_student_history(self, client: TestClient, teacher_headers, batch_factory, student_factory, auth_headers):
        batch = batch_factory()
        student = student_factory(batch=batch)
        for day, present in [("2025-06-02", True), ("2025-06-03", False), ("2025-06-04", True)]:
            api_call(client, "POST", "/erp/attendance", headers=teacher_headers,
                     json={"batch_id": batch.id, "date": day, "records": {str(student.id): present}})

        history = data_of(api_call(client, "GET", "/student/attendance", headers=auth_headers(student.user)))
        assert (history["present"], history["total"], history["percentage"]) == (2, 3, 67)
        assert [h["date"] for h in history["history"]] == ["2025-06-04", "2025-06-03", "2025-06-02"]

    def test_student_without_profile(self, client: TestClient, user_factory, auth_headers):
        bare = user_factory()
        assert_error(client.get("/student/attendance", headers=auth_headers(bare)), 404, "NOT_FOUND")
