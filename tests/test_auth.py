import pytest
from jose.utils import base64url_encode

from drivepro.config import settings
from drivepro.infrastructure.security import create_access_token, parse_user_from_token

PASSWORD = "password123"


def _login(client, email, password=PASSWORD, user_type="student", path="/api/login"):
    return client.post(path, json={"email": email, "password": password, "userType": user_type})


def test_login_success(client, store, student):
    """Login returns a token that resolves to the same user"""
    response = _login(client, "student@drivepro.com")
    assert response.status_code == 200
    data = response.json()
    assert data["user"] == {
        "id": student.id,
        "name": "Sarah Student",
        "email": "student@drivepro.com",
        "role": "student",
        "isActive": True,
    }
    user = parse_user_from_token(data["token"], store.users)
    assert user.id == student.id


def test_login_alias_path(client):
    """/api/auth/login behaves like /api/login"""
    response = _login(client, "instructor@drivepro.com", user_type="instructor", path="/api/auth/login")
    assert response.status_code == 200
    assert response.json()["user"]["role"] == "instructor"


def test_login_email_case_insensitive(client):
    """Email matching ignores case"""
    response = _login(client, "ADMIN@DrivePro.com", user_type="admin")
    assert response.status_code == 200


def test_login_missing_fields(client):
    """All three fields are required"""
    response = client.post("/api/login", json={"email": "student@drivepro.com", "password": PASSWORD})
    assert response.status_code == 400
    assert response.json()["message"] == "email, password and userType are required in the request body"


def test_login_without_body(client):
    """No body at all is a 400, not a validation 422"""
    response = client.post("/api/login")
    assert response.status_code == 400


def test_login_role_mismatch(client):
    """A student account cannot log in as instructor"""
    response = _login(client, "student@drivepro.com", user_type="instructor")
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_login_wrong_password(client):
    response = _login(client, "student@drivepro.com", password="nope")
    assert response.status_code == 401


def test_login_unknown_email(client):
    response = _login(client, "ghost@drivepro.com")
    assert response.status_code == 401


def test_login_inactive_account(client, student):
    """Inactive accounts with correct credentials get 403"""
    student.is_active = False
    response = _login(client, "student@drivepro.com")
    assert response.status_code == 403
    assert response.json()["message"] == "Account is inactive"


def test_login_rate_limited(client):
    """The eleventh attempt within a minute is rejected"""
    for _ in range(10):
        assert _login(client, "student@drivepro.com", password="nope").status_code == 401
    response = _login(client, "student@drivepro.com")
    assert response.status_code == 429
    assert "message" in response.json()


def test_profile(client, auth, instructor):
    """Profile returns the caller without the password"""
    response = client.get("/api/profile", headers=auth(instructor))
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == instructor.id
    assert "password" not in data


def test_profile_without_header(client):
    response = client.get("/api/profile")
    assert response.status_code == 401
    assert response.json()["message"] == "Missing or invalid Authorization header"


def test_profile_wrong_scheme(client, student):
    """Only the Bearer scheme is understood"""
    token = create_access_token(student)
    response = client.get("/api/profile", headers={"Authorization": f"Token {token}"})
    assert response.status_code == 401
    assert response.json()["message"] == "Missing or invalid Authorization header"


def test_profile_invalid_token(client):
    response = client.get("/api/profile", headers={"Authorization": "Bearer invalid_token"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid auth token"


@pytest.mark.parametrize("signing", [True, False])
def test_profile_deeply_nested_token(monkeypatch, client, signing):
    monkeypatch.setattr(settings, "TOKEN_SIGNING_ENABLED", signing)
    nested = base64url_encode(b"[" * 5000).decode()
    response = client.get("/api/profile", headers={"Authorization": f"Bearer {nested}.{nested}."})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid auth token"


def test_token_of_deleted_user(client, auth, store, other_student):
    """Tokens stop working once their user is deleted"""
    headers = auth(other_student)
    store.users.remove(other_student.id)
    response = client.get("/api/profile", headers=headers)
    assert response.status_code == 401


def test_role_guard_forbidden(client, auth, student, instructor):
    """Admin-only endpoints answer 403 to other roles"""
    for user in (student, instructor):
        response = client.get("/api/admin/stats", headers=auth(user))
        assert response.status_code == 403
        assert response.json()["message"] == "Forbidden"


def test_any_role_guard_forbidden(client, auth, student):
    """Staff-only lesson creation answers 403 to students"""
    response = client.post("/api/lessons", json={}, headers=auth(student))
    assert response.status_code == 403
