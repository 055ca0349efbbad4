"""
Tests for the gamification HTTP routes.
"""
from unittest.mock import AsyncMock, patch

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from nuancevault.core.security import create_access_token

BASE = "/api/tools/nuancevault/gamification"


class TestGamificationEndpointsAuth:

    async def test_read_no_auth(self, client):
        response = await client.get(BASE)
        assert response.status_code == 401
        assert response.json()["success"] is False

    async def test_practice_no_auth(self, client):
        response = await client.post(f"{BASE}/practice", json={"set_id": "abc", "was_correct": True})
        assert response.status_code == 401

    async def test_reset_no_auth(self, client):
        response = await client.post(f"{BASE}/reset")
        assert response.status_code == 401

    async def test_garbage_token(self, client):
        response = await client.get(BASE, headers={"Authorization": "Bearer not.a.jwt"})
        assert response.status_code == 401

    async def test_token_for_missing_user(self, client):
        headers = {"Authorization": f"Bearer {create_access_token(9999)}"}
        response = await client.get(BASE, headers=headers)
        assert response.status_code == 401


class TestGamificationFlow:

    async def test_never_practised_returns_null(self, client, auth_headers):
        response = await client.get(BASE, headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": None}

    async def test_practice_returns_record_and_xp_gain(self, client, auth_headers, user):
        response = await client.post(
            f"{BASE}/practice", json={"set_id": "abc", "was_correct": True}, headers=auth_headers
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["xp_gain"] == 12
        data = body["data"]
        assert data["user_id"] == user.id
        assert data["total_xp"] == 12
        assert data["daily_streak"] == 1
        assert data["level"] == 1
        assert data["next_level_xp"] == 88
        [entry] = data["set_progress"]
        assert entry["set_id"] == "abc"
        assert (entry["attempts"], entry["correct"], entry["streak"], entry["mastery"]) == (1, 1, 1, 100)

    async def test_camel_case_body_accepted(self, client, auth_headers):
        response = await client.post(
            f"{BASE}/practice", json={"setId": "abc", "wasCorrect": False}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["xp_gain"] == 2

    async def test_streak_and_miss_through_api(self, client, auth_headers):
        gains = []
        for outcome in [True, True, False]:
            response = await client.post(
                f"{BASE}/practice", json={"set_id": "abc", "was_correct": outcome}, headers=auth_headers
            )
            gains.append(response.json()["xp_gain"])
        assert gains == [12, 14, 2]

        data = (await client.get(BASE, headers=auth_headers)).json()["data"]
        assert data["total_xp"] == 28
        assert data["daily_streak"] == 1
        [entry] = data["set_progress"]
        assert (entry["attempts"], entry["correct"], entry["streak"], entry["mastery"]) == (3, 2, 0, 67)

    async def test_reset(self, client, auth_headers):
        await client.post(f"{BASE}/practice", json={"set_id": "abc", "was_correct": True}, headers=auth_headers)

        first = await client.post(f"{BASE}/reset", headers=auth_headers)
        second = await client.post(f"{BASE}/reset", headers=auth_headers)

        assert first.status_code == second.status_code == 200
        assert first.json() == {"success": True, "message": "Gamification reset"}
        assert (await client.get(BASE, headers=auth_headers)).json()["data"] is None


class TestStorageFailures:

    async def test_practice_commit_failure_is_server_error(self, client, auth_headers):
        failing_commit = AsyncMock(side_effect=SQLAlchemyError("disk I/O error"))
        with patch.object(AsyncSession, "commit", failing_commit):
            response = await client.post(
                f"{BASE}/practice", json={"set_id": "abc", "was_correct": True}, headers=auth_headers
            )

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Failed to record practice"}
        failing_commit.assert_awaited_once()
        assert (await client.get(BASE, headers=auth_headers)).json()["data"] is None

    async def test_reset_commit_failure_keeps_record(self, client, auth_headers):
        await client.post(f"{BASE}/practice", json={"set_id": "abc", "was_correct": True}, headers=auth_headers)

        with patch.object(AsyncSession, "commit", AsyncMock(side_effect=SQLAlchemyError("locked"))):
            response = await client.post(f"{BASE}/reset", headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Failed to reset"}
        data = (await client.get(BASE, headers=auth_headers)).json()["data"]
        assert data["total_xp"] == 12


class TestPracticeValidation:

    async def _post(self, client, auth_headers, body):
        return await client.post(f"{BASE}/practice", json=body, headers=auth_headers)

    async def test_missing_set_id(self, client, auth_headers):
        response = await self._post(client, auth_headers, {"was_correct": True})
        assert response.status_code == 400
        assert response.json()["success"] is False

    async def test_empty_set_id(self, client, auth_headers):
        response = await self._post(client, auth_headers, {"set_id": "", "was_correct": True})
        assert response.status_code == 400

    async def test_blank_set_id(self, client, auth_headers):
        response = await self._post(client, auth_headers, {"set_id": "   ", "was_correct": True})
        assert response.status_code == 400
        assert response.json()["message"] == "set_id and was_correct required"

    async def test_string_was_correct(self, client, auth_headers):
        response = await self._post(client, auth_headers, {"set_id": "abc", "was_correct": "true"})
        assert response.status_code == 400

    async def test_integer_was_correct(self, client, auth_headers):
        response = await self._post(client, auth_headers, {"set_id": "abc", "was_correct": 1})
        assert response.status_code == 400

    async def test_rejected_practice_creates_nothing(self, client, auth_headers):
        await self._post(client, auth_headers, {"set_id": "abc", "was_correct": "yes"})
        response = await client.get(BASE, headers=auth_headers)
        assert response.json()["data"] is None


class TestHealth:

    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
