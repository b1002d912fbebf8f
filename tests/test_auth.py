import pytest

from classroll.main import app
from classroll.dependencies.firebase_deps import get_verified_firebase_user

TEST_PASSWORD = "testpassword123!"


def test_teacher_sign_up_and_sign_in(client):
    resp = client.post("/api/v1/auth/sign-up", json={
        "email": "kim@example.com",
        "password": TEST_PASSWORD,
        "full_name": "Kim Teacher"
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["role"] == "teacher"
    assert data["redirect_to"] == "/demo"
    assert data["full_name"] == "Kim Teacher"
    assert "access_token" in data
    assert "refresh_token" in data

    resp = client.post("/api/v1/auth/sign-in", json={
        "email": "kim@example.com",
        "password": TEST_PASSWORD
    })
    assert resp.status_code == 200
    assert resp.json()["user_id"] == data["user_id"]
    assert resp.json()["redirect_to"] == "/demo"


def test_sign_up_rejects_short_password(client):
    resp = client.post("/api/v1/auth/sign-up", json={
        "email": "short@example.com",
        "password": "12345",
        "full_name": "Short"
    })
    assert resp.status_code == 422


def test_sign_up_duplicate_email(client, sign_up_teacher):
    sign_up_teacher(email="dup@example.com")
    resp = client.post("/api/v1/auth/sign-up", json={
        "email": "dup@example.com",
        "password": TEST_PASSWORD,
        "full_name": "Again"
    })
    assert resp.status_code == 409


def test_sign_in_wrong_password(client, sign_up_teacher):
    sign_up_teacher(email="wrong@example.com")
    resp = client.post("/api/v1/auth/sign-in", json={
        "email": "wrong@example.com",
        "password": "not-the-password"
    })
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid login credentials"


def test_get_session(client, teacher):
    resp = client.get("/api/v1/auth/session", headers=teacher["headers"])
    assert resp.status_code == 200
    data = resp.json()
    assert data["user_id"] == teacher["user_id"]
    assert data["role"] == "teacher"
    assert data["full_name"] == "Test Teacher"


def test_refresh_rotates_token(client, teacher):
    old_refresh = teacher["refresh_token"]
    resp = client.post("/api/v1/auth/refresh", json={"refresh_token": old_refresh})
    assert resp.status_code == 200
    data = resp.json()
    assert data["refresh_token"] != old_refresh

    # 새 access token도 역할 정보를 유지
    resp = client.get("/api/v1/classes", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert resp.status_code == 200

    # 한 번 쓴 리프레시 토큰은 재사용 불가
    resp = client.post("/api/v1/auth/refresh", json={"refresh_token": old_refresh})
    assert resp.status_code == 401


def test_sign_out_revokes_refresh_token(client, teacher):
    resp = client.post(
        "/api/v1/auth/sign-out",
        headers=teacher["headers"],
        json={"refresh_token": teacher["refresh_token"]}
    )
    assert resp.status_code == 200

    resp = client.post("/api/v1/auth/refresh", json={"refresh_token": teacher["refresh_token"]})
    assert resp.status_code == 401


def test_teacher_routes_require_token(client):
    resp = client.get("/api/v1/classes")
    assert resp.status_code in (401, 403)

    resp = client.get("/api/v1/classes", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_oauth_without_firebase_configured(client):
    resp = client.post("/api/v1/auth/oauth", headers={"Authorization": "Bearer some-id-token"})
    assert resp.status_code == 503


@pytest.fixture()
def firebase_user():
    decoded = {"uid": "firebase-uid-1", "email": "social@example.com", "name": "Social Teacher",
               "email_verified": True}
    app.dependency_overrides[get_verified_firebase_user] = lambda: decoded
    yield decoded
    app.dependency_overrides.pop(get_verified_firebase_user, None)


def test_teacher_oauth_creates_then_signs_in(client, firebase_user):
    resp = client.post("/api/v1/auth/oauth")
    assert resp.status_code == 200
    first = resp.json()
    assert first["role"] == "teacher"
    assert first["full_name"] == "Social Teacher"
    assert first["message"] == "New account created and signed in."

    resp = client.post("/api/v1/auth/oauth")
    assert resp.status_code == 200
    assert resp.json()["user_id"] == first["user_id"]
    assert resp.json()["message"] == "Successfully signed in."


def test_oauth_links_existing_password_account(client, sign_up_teacher, firebase_user):
    existing = sign_up_teacher(email=firebase_user["email"])
    resp = client.post("/api/v1/auth/oauth")
    assert resp.status_code == 200
    assert resp.json()["user_id"] == existing["user_id"]


def test_oauth_unverified_email_cannot_take_over_account(client, sign_up_teacher):
    """
    인증되지 않은 이메일로는 같은 이메일의 기존 계정에 연결되지 않음
    """
    victim = sign_up_teacher(email="victim@example.com")
    app.dependency_overrides[get_verified_firebase_user] = lambda: {
        "uid": "attacker-uid", "email": "victim@example.com", "email_verified": False
    }
    resp = client.post("/api/v1/auth/oauth")
    assert resp.status_code == 403
    assert "user_id" not in resp.json()

    # 기존 비밀번호 로그인은 그대로
    resp = client.post("/api/v1/auth/sign-in", json={"email": "victim@example.com", "password": TEST_PASSWORD})
    assert resp.json()["user_id"] == victim["user_id"]


def test_oauth_unverified_email_cannot_create_account(client):
    app.dependency_overrides[get_verified_firebase_user] = lambda: {
        "uid": "new-uid", "email": "fresh@example.com"
    }
    resp = client.post("/api/v1/auth/oauth")
    assert resp.status_code == 403
