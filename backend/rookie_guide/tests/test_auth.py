import uuid
from datetime import datetime, timedelta, timezone

import pytest

from rookie_guide.auth import CredentialService
from rookie_guide.config import get_settings
from rookie_guide.errors import AuthError
from .conftest import client


def _phone():
    return f"1{uuid.uuid4().int % 10**10:010d}"


def test_register_and_login_with_email(client):
    email = f"{uuid.uuid4()}@example.com"
    resp = client.post(
        "/api/auth/register", json={"email": email, "password": "secret123", "nickname": "小白"}
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["user"]["nickname"] == "小白"
    assert "password_hash" not in data["user"]

    resp2 = client.post("/api/auth/login", json={"email": email, "password": "secret123"})
    assert resp2.status_code == 200
    assert resp2.json()["user"]["id"] == data["user"]["id"]


def test_register_and_login_with_phone(client):
    phone = _phone()
    resp = client.post(
        "/api/auth/register", json={"phone": phone, "password": "secret123", "nickname": "新人"}
    )
    assert resp.status_code == 200
    resp2 = client.post("/api/auth/login", json={"phone": phone, "password": "secret123"})
    assert resp2.status_code == 200


def test_register_requires_phone_or_email(client):
    resp = client.post("/api/auth/register", json={"password": "secret123", "nickname": "nobody"})
    assert resp.status_code == 400
    assert resp.json() == {"detail": "Phone or email required", "kind": "validation_error"}


def test_register_rejects_duplicates(client):
    email = f"{uuid.uuid4()}@example.com"
    phone = _phone()
    first = client.post(
        "/api/auth/register",
        json={"email": email, "phone": phone, "password": "secret123", "nickname": "a"},
    )
    assert first.status_code == 200

    by_email = client.post(
        "/api/auth/register", json={"email": email, "password": "secret123", "nickname": "b"}
    )
    assert by_email.status_code == 400
    assert by_email.json()["detail"] == "Email already registered"

    by_phone = client.post(
        "/api/auth/register", json={"phone": phone, "password": "secret123", "nickname": "c"}
    )
    assert by_phone.status_code == 400
    assert by_phone.json()["detail"] == "Phone already registered"


def test_register_validates_payload(client):
    resp = client.post(
        "/api/auth/register", json={"email": "not-an-email", "password": "123", "nickname": ""}
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["kind"] == "validation_error"
    fields = {tuple(err["loc"])[-1] for err in body["detail"]}
    assert {"email", "password", "nickname"} <= fields


def test_login_with_wrong_password(client):
    email = f"{uuid.uuid4()}@example.com"
    client.post("/api/auth/register", json={"email": email, "password": "secret123", "nickname": "x"})
    resp = client.post("/api/auth/login", json={"email": email, "password": "wrong-pass"})
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Invalid credentials", "kind": "auth_error"}
    assert resp.headers["www-authenticate"] == "Bearer"


def test_login_unknown_user_matches_wrong_password(client):
    resp = client.post(
        "/api/auth/login", json={"email": f"{uuid.uuid4()}@example.com", "password": "secret123"}
    )
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid credentials"


def test_token_round_trip():
    service = CredentialService(get_settings())
    user_id = uuid.uuid4()
    assert service.decode_token(service.create_access_token(user_id)) == user_id


def test_expired_token_is_rejected():
    service = CredentialService(get_settings())
    issued = datetime.now(timezone.utc) - timedelta(seconds=service.expiration.total_seconds() + 60)
    token = service.create_access_token(uuid.uuid4(), now=issued)
    with pytest.raises(AuthError, match="expired"):
        service.decode_token(token)


def test_token_signed_with_other_key_is_rejected():
    settings = get_settings().model_copy(update={"secret_key": "another-secret"})
    foreign = CredentialService(settings).create_access_token(uuid.uuid4())
    with pytest.raises(AuthError):
        CredentialService(get_settings()).decode_token(foreign)


def test_password_hashing():
    service = CredentialService(get_settings())
    hashed = service.hash_password("secret123")
    assert hashed != "secret123"
    assert service.verify_password("secret123", hashed)
    assert not service.verify_password("secret124", hashed)
