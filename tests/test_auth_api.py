"""
Tests for register / login / me.
"""
import pytest


class TestRegister:

    async def test_register_returns_token(self, client):
        response = await client.post(
            "/api/auth/register", json={"email": " New@Example.com ", "password": "longenough"}
        )
        assert response.status_code == 201
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["access_token"]
        assert body["user"]["email"] == "new@example.com"
        assert body["user"]["role"] == "user"

    @pytest.mark.parametrize(
        "email,password,message",
        [
            ("not-an-email", "longenough", "Invalid email"),
            ("a@b.co", "short", "Password too short"),
            ("a@b.co", "x" * 73, "Password too long"),
        ],
    )
    async def test_register_rejects(self, client, email, password, message):
        response = await client.post("/api/auth/register", json={"email": email, "password": password})
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": message}

    async def test_register_duplicate(self, client):
        payload = {"email": "dup@example.com", "password": "longenough"}
        await client.post("/api/auth/register", json=payload)
        response = await client.post("/api/auth/register", json=payload)
        assert response.status_code == 400
        assert response.json()["message"] == "User already exists"


class TestLoginAndMe:

    async def test_login_then_me(self, client):
        payload = {"email": "me@example.com", "password": "longenough"}
        await client.post("/api/auth/register", json=payload)

        login = await client.post("/api/auth/login", json=payload)
        assert login.status_code == 200
        token = login.json()["access_token"]

        me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["email"] == "me@example.com"

    async def test_login_wrong_password(self, client):
        await client.post("/api/auth/register", json={"email": "me@example.com", "password": "longenough"})
        response = await client.post("/api/auth/login", json={"email": "me@example.com", "password": "wrong-pass"})
        assert response.status_code == 401

    async def test_login_unknown_user(self, client):
        response = await client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "whatever1"})
        assert response.status_code == 401

    async def test_me_requires_token(self, client):
        response = await client.get("/api/auth/me")
        assert response.status_code == 401
