from fastapi.testclient import TestClient

from coaching.core.constants import RoleEnum
from coaching.crud.teacher_profile import teacher_profile as crud_teacher_profile
from coaching.crud.user import user as crud_user
from tests.helpers.asserts import api_call, assert_error, data_of


def admission(**overrides):
    data = {
        "full_name": "Meera Iyer",
        "username": "meera.iyer",
        "fee_agreed": 150000,
        "waive_off": 10000,
        "installment_schedule": [
            {"amount": 70000, "due_date": "2025-04-10"},
            {"amount": 70000, "due_date": "2025-08-10"},
        ],
        "parent_username": "iyer.parent",
        "parent_mobile": "9845012345",
    }
    data.update(overrides)
    return data


class TestBatches:
    def test_create_and_list_sorted(self, client: TestClient, director_headers, teacher_headers):
        for name in ["NEET 2026", "JEE 2026"]:
            response = api_call(client, "POST", "/erp/batches", headers=director_headers,
                                json={"name": name, "start_year": "2025", "fee": 120000})
            assert response.status_code == 201
        batches = data_of(api_call(client, "GET", "/erp/batches", headers=teacher_headers))
        assert [b["name"] for b in batches] == ["JEE 2026", "NEET 2026"]

    def test_teacher_cannot_create_batch(self, client: TestClient, teacher_headers):
        assert_error(client.post("/erp/batches", headers=teacher_headers, json={"name": "X"}), 403, "FORBIDDEN")


class TestAdmissions:
    def test_admission_creates_student_and_parent(self, client: TestClient, director_headers, batch_factory, db_session):
        batch = batch_factory(name="JEE 2026")
        result = data_of(api_call(client, "POST", "/erp/admissions", headers=director_headers,
                                  json=admission(batch_id=batch.id)))
        assert result["username"] == "meera.iyer"
        assert result["parent_username"] == "iyer.parent"

        parent_user = crud_user.get_by_username(db_session, username="iyer.parent")
        assert parent_user.role == RoleEnum.PARENT
        assert parent_user.parent_profile.mobile == "9845012345"

        login = client.post("/auth/login", json={"username": "meera.iyer", "password": "student123"})
        assert login.status_code == 200

    def test_second_child_reuses_parent(self, client: TestClient, director_headers):
        first = data_of(api_call(client, "POST", "/erp/admissions", headers=director_headers, json=admission()))
        second = data_of(api_call(client, "POST", "/erp/admissions", headers=director_headers,
                                  json=admission(full_name="Arjun Iyer", username="arjun.iyer")))
        assert first["parent_id"] == second["parent_id"]

    def test_duplicate_username_conflicts_and_rolls_back(self, client: TestClient, director_headers,
                                                         user_factory, db_session):
        user_factory(username="taken.name")
        response = client.post("/erp/admissions", headers=director_headers,
                               json=admission(username="taken.name", parent_username="fresh.parent"))
        assert_error(response, 409, "CONFLICT")
        assert crud_user.get_by_username(db_session, username="fresh.parent") is None

    def test_parent_username_owned_by_non_parent(self, client: TestClient, director_headers, user_factory):
        user_factory(role=RoleEnum.TEACHER, username="not.a.parent")
        response = client.post("/erp/admissions", headers=director_headers,
                               json=admission(parent_username="not.a.parent"))
        assert_error(response, 409, "CONFLICT")

    def test_admission_into_unknown_batch(self, client: TestClient, director_headers):
        response = client.post("/erp/admissions", headers=director_headers, json=admission(batch_id=404))
        assert_error(response, 404, "NOT_FOUND")


class TestStudentDirectory:
    def test_directory_masks_hidden_parent_mobile(self, client: TestClient, teacher_headers, batch_factory,
                                                  parent_factory, student_factory):
        batch = batch_factory(name="Foundation")
        hidden = parent_factory(mobile="9876543210", is_mobile_visible=False)
        shown = parent_factory(mobile="9123456780", is_mobile_visible=True)
        student_factory(batch=batch, parent=hidden, full_name="A Hidden")
        student_factory(batch=batch, parent=shown, full_name="B Shown")
        student_factory(full_name="C Elsewhere")

        entries = data_of(api_call(client, "GET", "/erp/students", headers=teacher_headers,
                                   params={"batch_id": batch.id}))
        assert [e["full_name"] for e in entries] == ["A Hidden", "B Shown"]
        assert entries[0]["parent_mobile"] == "987*******"
        assert entries[1]["parent_mobile"] == "9123456780"
        assert entries[0]["batch_name"] == "Foundation"

    def test_directory_fee_columns(self, client: TestClient, teacher_headers, director_headers, student_factory):
        student = student_factory(full_name="Fee Case", fee_agreed=100000, waive_off=5000)
        api_call(client, "POST", "/finance/collect", headers=director_headers,
                 json={"student_id": student.id, "amount": 25000})
        entry = data_of(api_call(client, "GET", "/erp/students", headers=teacher_headers))[0]
        assert (entry["fee_total"], entry["fee_paid"], entry["fee_remaining"]) == (95000, 25000, 70000)


class TestSecurityPanel:
    def test_create_teacher_admin_gets_profile(self, client: TestClient, director_headers, db_session):
        created = data_of(api_call(client, "POST", "/erp/security/admins", headers=director_headers, json={
            "username": "physics.teacher", "password": "changeme123", "role": "TEACHER",
            "full_name": "R. Sharma", "qualification": "M.Sc Physics",
        }))
        assert created["role"] == "TEACHER"
        assert created["full_name"] == "R. Sharma"
        assert crud_teacher_profile.get_by_user(db_session, user_id=created["id"]) is not None

        listed = data_of(api_call(client, "GET", "/erp/security/admins", headers=director_headers))
        assert "physics.teacher" in [a["username"] for a in listed]

    def test_create_admin_rejects_other_roles_and_short_passwords(self, client: TestClient, director_headers):
        bad_role = client.post("/erp/security/admins", headers=director_headers,
                               json={"username": "x.parent", "password": "longenough", "role": "PARENT"})
        assert_error(bad_role, 422, "VALIDATION_ERROR")
        short = client.post("/erp/security/admins", headers=director_headers,
                            json={"username": "x.teacher", "password": "123", "role": "TEACHER"})
        assert_error(short, 422, "VALIDATION_ERROR")

    def test_duplicate_admin_username(self, client: TestClient, director_headers, user_factory):
        user_factory(username="dup.admin")
        response = client.post("/erp/security/admins", headers=director_headers,
                               json={"username": "dup.admin", "password": "changeme123", "role": "TEACHER"})
        assert_error(response, 409, "CONFLICT")

    def test_security_admin_toggles_visibility(self, client: TestClient, token_for_role, parent_factory,
                                               student_factory):
        headers = token_for_role(RoleEnum.SECURITY_ADMIN)
        first = parent_factory(mobile="9000000001")
        parent_factory(mobile="9000000002")
        student_factory(parent=first, full_name="Kid One")

        directory = data_of(api_call(client, "GET", "/erp/security/directory", headers=headers))
        assert directory[0]["mobile"] == "9000000001"
        assert directory[0]["children"] == ["Kid One"]
        assert directory[0]["is_mobile_visible"] is False

        single = data_of(api_call(client, "PATCH", "/erp/security/mobile-visibility", headers=headers,
                                  json={"parent_id": first.id, "is_visible": True}))
        assert single == {"updated": 1, "is_visible": True}

        everyone = data_of(api_call(client, "PATCH", "/erp/security/mobile-visibility/all", headers=headers,
                                    json={"is_visible": True}))
        assert everyone == {"updated": 2, "is_visible": True}
        directory = data_of(api_call(client, "GET", "/erp/security/directory", headers=headers))
        assert all(entry["is_mobile_visible"] for entry in directory)

    def test_visibility_for_unknown_parent(self, client: TestClient, director_headers):
        response = client.patch("/erp/security/mobile-visibility", headers=director_headers,
                                json={"parent_id": 999, "is_visible": True})
        assert_error(response, 404, "NOT_FOUND")

    def test_teacher_cannot_open_security_panel(self, client: TestClient, teacher_headers):
        assert_error(client.get("/erp/security/directory", headers=teacher_headers), 403, "FORBIDDEN")
