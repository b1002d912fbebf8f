import pytest

from classroll.main import app
from classroll.dependencies.firebase_deps import get_verified_firebase_user

TEST_PASSWORD = "testpassword123!"

ROSTER = {"full_name": "Jane Doe", "student_id": "S100", "email": "jane@school.edu"}


@pytest.fixture()
def roster_entry(teacher, create_class, create_student):
    classroom = create_class(teacher["headers"], name="Biology")
    return create_student(
        teacher["headers"],
        name=ROSTER["full_name"],
        email=ROSTER["email"],
        student_id=ROSTER["student_id"],
        class_id=classroom["id"]
    )


def test_student_sign_up_with_exact_roster_match(client, roster_entry):
    resp = client.post("/api/v1/student-auth/sign-up", json={**ROSTER, "password": TEST_PASSWORD})
    assert resp.status_code == 200
    data = resp.json()
    assert data["role"] == "student"
    assert data["redirect_to"] == "/student-dashboard"
    assert data["full_name"] == "Jane Doe"

    resp = client.post("/api/v1/student-auth/sign-in", json={
        "email": ROSTER["email"],
        "password": TEST_PASSWORD
    })
    assert resp.status_code == 200
    assert resp.json()["role"] == "student"


@pytest.mark.parametrize("field, value", [
    ("full_name", "Jane Smith"),
    ("full_name", "jane doe"),
    ("student_id", "S101"),
    ("email", "jane@other.edu"),
])
def test_student_sign_up_rejects_any_mismatch(client, roster_entry, field, value):
    """
    이름/학번/이메일 중 하나라도 다르면 가입 거절, 계정도 만들어지지 않음
    """
    body = {**ROSTER, "password": TEST_PASSWORD, field: value}
    resp = client.post("/api/v1/student-auth/sign-up", json=body)
    assert resp.status_code == 404
    assert resp.json()["detail"].startswith("Student not found.")

    resp = client.post("/api/v1/student-auth/sign-in", json={
        "email": body["email"],
        "password": TEST_PASSWORD
    })
    assert resp.status_code == 401


def test_student_sign_up_twice(client, roster_entry, sign_up_student):
    sign_up_student(**ROSTER)
    resp = client.post("/api/v1/student-auth/sign-up", json={**ROSTER, "password": TEST_PASSWORD})
    assert resp.status_code == 409


def test_student_token_is_rejected_on_teacher_routes(client, roster_entry, sign_up_student):
    student = sign_up_student(**ROSTER)
    resp = client.get("/api/v1/classes", headers=student["headers"])
    assert resp.status_code == 403
    assert resp.json()["detail"] == "This page is only available to teachers"


def test_teacher_token_is_rejected_on_student_dashboard(client, teacher):
    resp = client.get("/api/v1/student-dashboard", headers=teacher["headers"])
    assert resp.status_code == 403


def _override_firebase(decoded: dict):
    app.dependency_overrides[get_verified_firebase_user] = lambda: decoded


def test_student_oauth_requires_roster_email(client, roster_entry):
    _override_firebase({"uid": "uid-stranger", "email": "stranger@school.edu", "name": "Stranger", "email_verified": True})
    resp = client.post("/api/v1/student-auth/oauth")
    assert resp.status_code == 404

    _override_firebase({"uid": "uid-jane", "email": ROSTER["email"], "name": "J. Doe", "email_verified": True})
    resp = client.post("/api/v1/student-auth/oauth")
    assert resp.status_code == 200
    data = resp.json()
    assert data["role"] == "student"
    # 이름은 명단 기준
    assert data["full_name"] == "Jane Doe"


def test_oauth_token_without_email(client):
    _override_firebase({"uid": "uid-no-email"})
    resp = client.post("/api/v1/student-auth/oauth")
    assert resp.status_code == 400


def test_student_oauth_rejects_unverified_roster_email(client, roster_entry):
    _override_firebase({"uid": "uid-fake-jane", "email": ROSTER["email"], "email_verified": False})
    resp = client.post("/api/v1/student-auth/oauth")
    assert resp.status_code == 403

    resp = client.post("/api/v1/student-auth/sign-up", json={**ROSTER, "password": TEST_PASSWORD})
    assert resp.status_code == 200
