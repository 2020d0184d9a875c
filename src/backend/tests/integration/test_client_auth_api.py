"""
Integration tests for client portal authentication.

Tests:
- Signup stores a hashed password and rejects duplicate emails
- Login sets the session cookie; failed login does not
- Profile requires the cookie and hides the password hash
- Logout clears the session
- Malformed bodies are rejected with a generic 400
"""

import pytest
from sqlalchemy import select

from core.config import settings
from db.models import Client

COOKIE = settings.security.client_cookie_name


class TestSignup:
    """Tests for POST /api/client/signup."""

    @pytest.mark.asyncio
    async def test_signup_creates_client(self, client, db_session):
        response = await client.post(
            "/api/client/signup",
            json={
                "name": "Layla Salem",
                "email": "Layla@Example.com",
                "phone": "5550101",
                "password": "hunter22",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Account created successfully"

        stored = (
            await db_session.execute(select(Client).where(Client.id == body["clientId"]))
        ).scalar_one()
        assert stored.email == "layla@example.com"
        assert stored.password_hash != "hunter22"
        assert stored.is_active is True

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, client, portal_client):
        response = await client.post(
            "/api/client/signup",
            json={
                "name": "Someone Else",
                "email": portal_client.email.upper(),
                "password": "another1",
            },
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Email already registered"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "A", "email": "a@example.com", "password": "longenough"},
            {"name": "Valid Name", "email": "not-an-email", "password": "longenough"},
            {"name": "Valid Name", "email": "a@example.com", "password": "short"},
            {"email": "a@example.com", "password": "longenough"},
        ],
    )
    async def test_invalid_signup_is_generic_400(self, client, payload):
        response = await client.post("/api/client/signup", json=payload)

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid request data"}


class TestLogin:
    """Tests for POST /api/client/login and the session cookie."""

    @pytest.mark.asyncio
    async def test_login_sets_cookie(self, client, portal_client, login_as):
        token = await login_as(portal_client.email)
        assert token

        profile = await client.get("/api/client/profile")

        assert profile.status_code == 200
        body = profile.json()
        assert body["id"] == portal_client.id
        assert body["email"] == portal_client.email
        assert "passwordHash" not in body
        assert "password" not in body

    @pytest.mark.asyncio
    async def test_wrong_password(self, client, portal_client):
        response = await client.post(
            "/api/client/login",
            json={"email": portal_client.email, "password": "not-the-password"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"
        assert COOKIE not in response.cookies

    @pytest.mark.asyncio
    async def test_unknown_email(self, client):
        response = await client.post(
            "/api/client/login",
            json={"email": "nobody@example.com", "password": "whatever"},
        )

        assert response.status_code == 401
        assert COOKIE not in response.cookies

    @pytest.mark.asyncio
    async def test_profile_requires_session(self, client):
        response = await client.get("/api/client/profile")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_staff_token_does_not_open_portal(self, client, staff_headers):
        response = await client.get("/api/client/profile", headers=staff_headers)
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_profile_of_deleted_client(
        self, client, db_session, portal_client, login_as
    ):
        await login_as(portal_client.email)
        await db_session.delete(portal_client)
        await db_session.commit()

        response = await client.get("/api/client/profile")

        assert response.status_code == 404
        assert response.json()["detail"] == "Client not found"

    @pytest.mark.asyncio
    async def test_logout(self, client, portal_client, login_as):
        await login_as(portal_client.email)

        response = await client.post("/api/client/logout")

        assert response.status_code == 200
        assert response.json()["message"] == "Logout successful"
        assert "Max-Age=0" in response.headers["set-cookie"]
        client.cookies.clear()
        assert (await client.get("/api/client/profile")).status_code == 401


class TestStaffLogin:
    """Tests for POST /api/auth/login."""

    @pytest.mark.asyncio
    async def test_staff_login_and_current_user(self, client, db_session):
        from tests.factories import UserFactory

        user = UserFactory.create(username="omar.tech", password="desk-pass-1")
        db_session.add(user)
        await db_session.commit()

        response = await client.post(
            "/api/auth/login",
            json={"username": "omar.tech", "password": "desk-pass-1"},
        )
        assert response.status_code == 200
        token = response.json()["accessToken"]

        me = await client.get(
            "/api/auth/user", headers={"Authorization": f"Bearer {token}"}
        )
        assert me.status_code == 200
        assert me.json()["username"] == "omar.tech"

    @pytest.mark.asyncio
    async def test_staff_login_wrong_password(self, client, staff_user):
        response = await client.post(
            "/api/auth/login",
            json={"username": staff_user.username, "password": "nope"},
        )
        assert response.status_code == 401
