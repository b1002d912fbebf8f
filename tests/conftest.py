import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from classroll.main import app
from classroll.db.base import Base
from classroll.dependencies.db import get_db

# 테스트는 메모리 SQLite 한 개의 커넥션을 공유한다
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "testpassword123!"


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client():
    # 테스트마다 빈 DB로 시작
    Base.metadata.create_all(bind=engine)
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session(client):
    """ API를 거치지 않고 행을 직접 고치거나 확인할 때 사용 """
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def auth_headers(access_token: str) -> dict:
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture()
def sign_up_teacher(client):
    def _sign_up(email: str = None, full_name: str = "Test Teacher") -> dict:
        email = email or f"teacher_{uuid.uuid4().hex[:8]}@example.com"
        resp = client.post("/api/v1/auth/sign-up", json={
            "email": email,
            "password": TEST_PASSWORD,
            "full_name": full_name
        })
        assert resp.status_code == 200, resp.text
        data = resp.json()
        data["headers"] = auth_headers(data["access_token"])
        return data
    return _sign_up


@pytest.fixture()
def teacher(sign_up_teacher):
    return sign_up_teacher()


@pytest.fixture()
def create_class(client):
    def _create(headers: dict, name: str = "Math", **fields) -> dict:
        resp = client.post("/api/v1/classes", headers=headers, json={"name": name, **fields})
        assert resp.status_code == 200, resp.text
        return resp.json()
    return _create


@pytest.fixture()
def create_student(client):
    def _create(headers: dict, name: str, **fields) -> dict:
        resp = client.post("/api/v1/students", headers=headers, json={"name": name, **fields})
        assert resp.status_code == 200, resp.text
        return resp.json()
    return _create


@pytest.fixture()
def sign_up_student(client):
    def _sign_up(full_name: str, student_id: str, email: str) -> dict:
        resp = client.post("/api/v1/student-auth/sign-up", json={
            "full_name": full_name,
            "student_id": student_id,
            "email": email,
            "password": TEST_PASSWORD
        })
        assert resp.status_code == 200, resp.text
        data = resp.json()
        data["headers"] = auth_headers(data["access_token"])
        return data
    return _sign_up
