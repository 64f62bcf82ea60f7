# tests/test_auth_api.py

from tests.utils import auth_header


def test_register_returns_token_and_public_user(client, token_service):
    r = client.post("/api/auth/register", json={"email": "bob@example.com", "name": "Bob", "password": "secret1"})
    assert r.status_code == 201
    body = r.json()
    assert body["user"]["email"] == "bob@example.com"
    assert body["user"]["name"] == "Bob"
    assert body["user"]["role"] == "USER"
    assert "password_hash" not in body["user"]
    assert "passwordHash" not in body["user"]
    identity = token_service.verify(body["token"])
    assert identity.user_id == body["user"]["id"]
    assert identity.role.value == "USER"


def test_register_same_email_twice_conflicts(client, register):
    register(email="dup@example.com")
    r = client.post("/api/auth/register", json={"email": "dup@example.com", "name": "Other", "password": "secret2"})
    assert r.status_code == 409
    assert r.json() == {"error": "Email already registered"}


def test_register_rejects_invalid_email(client):
    r = client.post("/api/auth/register", json={"email": "not-an-email", "name": "Bob", "password": "secret1"})
    assert r.status_code == 400
    assert "email" in r.json()["error"]


def test_register_rejects_short_password(client):
    r = client.post("/api/auth/register", json={"email": "bob@example.com", "name": "Bob", "password": "123"})
    assert r.status_code == 400
    assert r.json()["error"] == "String should have at least 6 characters"


def test_register_reports_only_first_violation(client):
    r = client.post("/api/auth/register", json={"email": "nope", "name": "", "password": "1"})
    assert r.status_code == 400
    assert isinstance(r.json()["error"], str)


def test_register_ignores_client_supplied_role(client):
    r = client.post(
        "/api/auth/register",
        json={"email": "sneaky@example.com", "name": "Sneaky", "password": "secret1", "role": "ADMIN"},
    )
    assert r.status_code == 201
    assert r.json()["user"]["role"] == "USER"


def test_login_recovers_registered_user(client, register, token_service):
    registered = register(email="carol@example.com", password="secret1")
    r = client.post("/api/auth/login", json={"email": "carol@example.com", "password": "secret1"})
    assert r.status_code == 200
    body = r.json()
    assert body["user"] == registered["user"]
    assert token_service.verify(body["token"]).user_id == registered["user"]["id"]


def test_login_wrong_password_and_unknown_email_look_the_same(client, register):
    register(email="dave@example.com", password="secret1")
    wrong = client.post("/api/auth/login", json={"email": "dave@example.com", "password": "wrong-pass"})
    unknown = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "secret1"})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json() == {"error": "Invalid credentials"}


def test_login_without_password_hash_is_rejected(client, db):
    from models import User

    db.add(User(email="sso@example.com", name="SSO", password_hash=None))
    db.commit()
    r = client.post("/api/auth/login", json={"email": "sso@example.com", "password": "anything"})
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid credentials"}


def test_login_validation_error(client):
    r = client.post("/api/auth/login", json={"email": "erin@example.com"})
    assert r.status_code == 400
    assert r.json()["error"] == "Field required"


def test_issued_token_authenticates(client, register):
    token = register()["token"]
    r = client.get("/api/users/me", headers=auth_header(token))
    assert r.status_code == 200
    assert r.json()["email"] == "alice@example.com"


def test_root_and_health(client):
    assert client.get("/").text == "API is working"
    assert client.get("/health").json() == {"status": "ok"}
