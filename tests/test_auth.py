import bcrypt
import pytest
from google.auth.exceptions import TransportError

from estate.config import Settings, get_settings
from estate.services import auth_service
from tests.helpers import signup_and_signin


def _signup(client, username="alice", email="alice@estate.io", password="s3cret-pass"):
    return client.post(
        "/api/auth/signup",
        json={"username": username, "email": email, "password": password},
    )


def test_signup_stores_hash_and_returns_no_session(client, user_store):
    response = _signup(client)

    assert response.status_code == 201
    assert response.json() == "User created successfully!"
    assert "set-cookie" not in response.headers
    assert "s3cret-pass" not in response.text

    (stored,) = user_store.users.values()
    assert stored["password"] != "s3cret-pass"
    assert bcrypt.checkpw(b"s3cret-pass", stored["password"].encode())


@pytest.mark.parametrize(
    "username, email",
    [("alice", "other@estate.io"), ("someone", "alice@estate.io")],
)
def test_signup_duplicate_is_conflict(client, username, email):
    assert _signup(client).status_code == 201

    response = _signup(client, username=username, email=email)

    assert response.status_code == 409
    body = response.json()
    assert body["success"] is False
    assert body["statusCode"] == 409
    assert "already exists" in body["message"]


def test_signup_rejects_bad_email(client):
    response = _signup(client, email="not-an-email")

    assert response.status_code == 422
    assert response.json()["success"] is False


def test_signin_unknown_email_is_not_found(client):
    response = client.post("/api/auth/signin", json={"email": "ghost@estate.io", "password": "x"})

    assert response.status_code == 404
    assert response.json() == {"success": False, "statusCode": 404, "message": "User not found!"}


@pytest.mark.parametrize("email", ["ghost", "ghost@estate.test", "bob@corp.local"])
def test_signin_any_unknown_email_is_not_found(client, email):
    response = client.post("/api/auth/signin", json={"email": email, "password": "x"})

    assert response.status_code == 404
    assert response.json()["message"] == "User not found!"


@pytest.mark.parametrize("email", ["bob@corp.local", "ghost@estate.test"])
def test_signup_rejects_special_use_domains(client, user_store, email):
    response = _signup(client, email=email)

    assert response.status_code == 422
    assert user_store.users == {}


def test_signin_wrong_password_is_unauthorized(client):
    _signup(client)

    response = client.post(
        "/api/auth/signin", json={"email": "alice@estate.io", "password": "wrong-pass"}
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Wrong credentials!"
    assert "access_token" not in client.cookies


def test_signin_sets_http_only_cookie_and_hides_password(client):
    _signup(client)

    response = client.post(
        "/api/auth/signin", json={"email": "alice@estate.io", "password": "s3cret-pass"}
    )

    assert response.status_code == 200
    user = response.json()
    assert "password" not in user
    assert user["username"] == "alice"
    assert user["email"] == "alice@estate.io"
    assert user["_id"]
    assert user["avatar"]
    assert "access_token" in client.cookies
    assert "httponly" in response.headers["set-cookie"].lower()


def test_me_and_signout(client):
    user = signup_and_signin(client, "alice", "alice@estate.io")

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["_id"] == user["_id"]

    response = client.get("/api/auth/signout")
    assert response.status_code == 200
    assert response.json() == "User has been logged out!"

    assert client.get("/api/auth/me").status_code == 401


def test_bearer_token_is_accepted(client, make_client):
    user = signup_and_signin(client, "alice", "alice@estate.io")
    token = client.cookies["access_token"]

    other = make_client()
    response = other.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["_id"] == user["_id"]


def test_missing_token_is_unauthorized_and_bad_token_forbidden(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json()["message"] == "Unauthorized"

    response = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 403
    assert response.json()["message"] == "Forbidden"


def test_google_signin_provisions_once(client, make_client, user_store):
    payload = {"name": "John Doe", "email": "john@estate.io", "photo": "https://pics.estate.io/j.png"}

    first = client.post("/api/auth/google", json=payload)
    assert first.status_code == 200
    assert "access_token" in client.cookies
    user = first.json()
    assert "password" not in user
    assert user["avatar"] == payload["photo"]
    assert user["username"].startswith("johndoe")
    assert len(user["username"]) == len("johndoe") + 4

    second = make_client().post("/api/auth/google", json=payload)
    assert second.status_code == 200
    assert second.json()["_id"] == user["_id"]
    assert len(user_store.users) == 1


def test_google_signin_reuses_password_account(client, user_store):
    _signup(client)

    response = client.post(
        "/api/auth/google",
        json={"name": "Alice A", "email": "alice@estate.io", "photo": None},
    )

    assert response.status_code == 200
    assert response.json()["username"] == "alice"
    assert len(user_store.users) == 1


def test_google_provisioned_password_is_random(client, user_store):
    client.post("/api/auth/google", json={"name": "John Doe", "email": "john@estate.io"})

    (stored,) = user_store.users.values()
    assert stored["password"].startswith("$2")


@pytest.fixture
def verifying_settings(api_app):
    settings = Settings(
        SECRET_KEY="test-secret-key",
        GOOGLE_VERIFY_ID_TOKEN=True,
        GOOGLE_CLIENT_ID="client-id.apps.googleusercontent.com",
    )
    api_app.dependency_overrides[get_settings] = lambda: settings
    return settings


def test_google_signin_requires_id_token_when_verifying(client, verifying_settings):
    response = client.post("/api/auth/google", json={"name": "John", "email": "john@estate.io"})

    assert response.status_code == 401
    assert response.json()["message"] == "Google ID token is required"


def test_google_signin_checks_token_email(client, verifying_settings, monkeypatch):
    monkeypatch.setattr(
        auth_service.google_id_token,
        "verify_oauth2_token",
        lambda token, request, audience: {"email": "john@estate.io"},
    )

    mismatch = client.post(
        "/api/auth/google",
        json={"name": "Eve", "email": "eve@estate.io", "idToken": "tok"},
    )
    assert mismatch.status_code == 401

    match = client.post(
        "/api/auth/google",
        json={"name": "John", "email": "john@estate.io", "idToken": "tok"},
    )
    assert match.status_code == 200
    assert match.json()["email"] == "john@estate.io"


def test_google_signin_unreachable_certs_is_unavailable(client, verifying_settings, monkeypatch, user_store):
    def unreachable(token, request, audience):
        raise TransportError("Could not fetch certificates")

    monkeypatch.setattr(auth_service.google_id_token, "verify_oauth2_token", unreachable)

    response = client.post(
        "/api/auth/google",
        json={"name": "John", "email": "john@estate.io", "idToken": "tok"},
    )

    assert response.status_code == 503
    assert response.json()["success"] is False
    assert user_store.users == {}


def test_google_signin_rejects_malformed_token(client, verifying_settings, monkeypatch):
    def malformed(token, request, audience):
        raise ValueError("Wrong number of segments in token")

    monkeypatch.setattr(auth_service.google_id_token, "verify_oauth2_token", malformed)

    response = client.post(
        "/api/auth/google",
        json={"name": "John", "email": "john@estate.io", "idToken": "tok"},
    )

    assert response.status_code == 401
    assert response.json()["message"].startswith("Invalid Google token")
