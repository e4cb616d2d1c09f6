import os
os.environ["TESTING"] = "1"
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import uuid

from rookie_guide.main import app
from rookie_guide.config import get_settings
from rookie_guide.database import Base, build_engine, get_db

engine = build_engine(get_settings())
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base.metadata.drop_all(bind=engine)
Base.metadata.create_all(bind=engine)

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def ensure_access_token(client, *, email: str | None = None, password: str = "secret123"):
    """Register (or log in) a user and return its token, id and email."""

    normalized_email = email or f"user-{uuid.uuid4()}@example.com"
    payload = {"email": normalized_email, "password": password, "nickname": "tester"}
    resp = client.post("/api/auth/register", json=payload)
    if resp.status_code == 200:
        data = resp.json()
    elif resp.status_code == 400 and resp.json().get("detail") == "Email already registered":
        login_resp = client.post("/api/auth/login", json={"email": normalized_email, "password": password})
        assert login_resp.status_code == 200, f"Login failed for existing user {normalized_email}: {login_resp.text}"
        data = login_resp.json()
    else:
        raise AssertionError(f"Unexpected auth bootstrap failure for {normalized_email}: {resp.status_code} {resp.text}")
    token = data.get("access_token")
    if not token:
        raise AssertionError(f"Authentication response missing token for {normalized_email}: {data}")
    return token, data["user"]["id"], normalized_email


def ensure_auth_headers(client, *, email: str | None = None, password: str = "secret123"):
    token, user_id, _ = ensure_access_token(client, email=email, password=password)
    return {"Authorization": f"Bearer {token}"}, user_id


def template_payload(title="第一次租房", location_tag="CN", step_count=3, **overrides):
    payload = {
        "title": title,
        "description": f"{title} 的完整步骤",
        "location_tag": location_tag,
        "steps": [
            {"title": f"步骤 {index + 1}", "description": None, "order": index}
            for index in range(step_count)
        ],
    }
    payload.update(overrides)
    return payload


def create_template(client, headers, **kwargs):
    resp = client.post("/api/templates", json=template_payload(**kwargs), headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()
