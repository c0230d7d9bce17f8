"""Tests for registration and profile updates."""

from __future__ import annotations

import asyncio
import string

from easyalert.repositories import UserLookup
from easyalert.security import verify_password
from tests.test_constants import TEST_EMAIL, TEST_PASSWORD

JSON_CONTENT_TYPE = "application/json; charset=UTF-8"


def _stored(user_repo, email):
    return asyncio.run(user_repo.find_user(UserLookup.EMAIL, email))


# ---------------------------------------------------------------------------
# POST /api/users
# ---------------------------------------------------------------------------


class TestRegister:
    def test_creates_user(self, client, user_repo):
        response = client.post("/api/users", json={"email": TEST_EMAIL, "password": TEST_PASSWORD})

        assert response.status_code == 201
        assert response.headers["content-type"] == JSON_CONTENT_TYPE
        token = response.json()["token"]
        assert len(token) == 32
        assert all(c in string.ascii_letters for c in token)
        assert response.text == '{\n  "token": "%s"\n}' % token

        user = _stored(user_repo, TEST_EMAIL)
        assert user.token == token
        assert user.admin is False
        assert user.password_digest != TEST_PASSWORD
        assert verify_password(user.password_digest, TEST_PASSWORD)

    def test_empty_email_or_password(self, client):
        for body in (
            {"email": "", "password": TEST_PASSWORD},
            {"email": TEST_EMAIL, "password": ""},
            {"email": TEST_EMAIL},
            {},
        ):
            response = client.post("/api/users", json=body)
            assert response.status_code == 400
            assert response.json() == {"error": "Empty email or password."}

    def test_invalid_json(self, client):
        response = client.post("/api/users", content=b"{not json")
        assert response.status_code == 422
        assert response.json() == {"error": "invalid json"}

    def test_missing_body(self, client):
        response = client.post("/api/users")
        assert response.status_code == 422
        assert response.json() == {"error": "invalid json"}

    def test_null_body_counts_as_empty(self, client, user_repo):
        response = client.post("/api/users", content=b"null")

        assert response.status_code == 400
        assert response.json() == {"error": "Empty email or password."}
        assert asyncio.run(user_repo.find_users()) == []

    def test_email_taken(self, client, registered_user):
        response = client.post("/api/users", json={"email": registered_user.email, "password": "other"})

        assert response.status_code == 400
        assert response.json() == {"error": "Email is already taken."}

    def test_persistence_failure(self, client, user_repo):
        user_repo.failing.add("create_user")

        response = client.post("/api/users", json={"email": TEST_EMAIL, "password": TEST_PASSWORD})

        assert response.status_code == 500
        assert response.json() == {"error": "an unknown error occured"}

    def test_register_then_authenticate(self, client):
        registered = client.post("/api/users", json={"email": "c@d.com", "password": "s3cret"})
        authenticated = client.post("/api/auth", json={"email": "c@d.com", "password": "s3cret"})

        assert authenticated.status_code == 200
        assert authenticated.json()["token"] == registered.json()["token"]


# ---------------------------------------------------------------------------
# PUT /api/users/me
# ---------------------------------------------------------------------------


class TestUpdateProfile:
    def test_requires_auth(self, client):
        response = client.put("/api/users/me", json={"email": "new@mail.com"})

        assert response.status_code == 401
        assert response.json() == {"error": "Missing or invalid Authorization header."}

    def test_invalid_token(self, client, registered_user):
        response = client.put(
            "/api/users/me",
            json={"email": "new@mail.com"},
            headers={"Authorization": "Bearer unknown"},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token."}

    def test_update_email(self, client, user_repo, registered_user, auth_headers):
        response = client.put("/api/users/me", json={"email": "new@mail.com"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"email": "new@mail.com", "token": registered_user.token}
        user = _stored(user_repo, "new@mail.com")
        assert verify_password(user.password_digest, TEST_PASSWORD)

    def test_update_password(self, client, user_repo, registered_user, auth_headers):
        response = client.put("/api/users/me", json={"password": "changed"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"email": TEST_EMAIL, "token": registered_user.token}
        user = _stored(user_repo, TEST_EMAIL)
        assert verify_password(user.password_digest, "changed")
        assert not verify_password(user.password_digest, TEST_PASSWORD)

    def test_empty_fields_leave_user_untouched(self, client, user_repo, registered_user, auth_headers):
        response = client.put("/api/users/me", json={"email": "", "password": ""}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"email": TEST_EMAIL, "token": registered_user.token}
        user = _stored(user_repo, TEST_EMAIL)
        assert user.password_digest == registered_user.password_digest

    def test_email_taken(self, client, user_repo, auth_headers):
        client.post("/api/users", json={"email": "taken@mail.com", "password": "x"})

        response = client.put("/api/users/me", json={"email": "taken@mail.com"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Email is already taken."}

    def test_persistence_failure(self, client, user_repo, auth_headers):
        user_repo.failing.add("update_user")

        response = client.put("/api/users/me", json={"email": "new@mail.com"}, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "an unknown error occured"}
