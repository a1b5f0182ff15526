"""Tests for progress endpoints."""

import asyncio
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from training.web.api import create_app


class TestGetProgress:
    """Tests for GET /api/progress."""

    def test_fresh_progress(self, client, auth_headers):
        response = client.get("/api/progress", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["completedModules"] == []
        assert data["currentModule"] is None
        assert data["totalProgress"] == 0

        course = data["courses"]["welding-101"]
        assert course["title"] == "Welding 101"
        assert course["progress"] == 0
        assert course["completed"] is False
        assert len(course["steps"]) == 4
        assert all(s["completed"] is False for s in course["steps"])

    def test_requires_token(self, client):
        assert client.get("/api/progress").status_code == 401

    def test_expired_token(self, client, auth_headers, platform):
        old = datetime.now(timezone.utc) - timedelta(days=3)
        token = platform.tokens.issue(1, "ana@example.com", now=old)
        response = client.get("/api/progress", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403

    def test_missing_record(self, client, platform):
        token = platform.tokens.issue(99, "ghost@example.com")
        response = client.get("/api/progress", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 404
        assert response.json()["message"] == "Progress not found"


class TestCompleteStep:
    """Tests for POST /api/progress/{course_id}/step/{step_id}."""

    def test_complete_one_step(self, client, auth_headers):
        response = client.post("/api/progress/welding-101/step/1", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Progress updated"
        course = data["progress"]["courses"]["welding-101"]
        assert course["progress"] == 25
        assert course["steps"][0]["completed"] is True

    def test_full_course_scenario(self, client, auth_headers):
        for step_id in (1, 2, 3):
            response = client.post(
                f"/api/progress/welding-101/step/{step_id}", headers=auth_headers
            )
        progress = response.json()["progress"]
        assert progress["courses"]["welding-101"]["progress"] == 75
        assert progress["courses"]["welding-101"]["completed"] is False

        response = client.post("/api/progress/welding-101/step/4", headers=auth_headers)
        progress = response.json()["progress"]
        assert progress["courses"]["welding-101"]["progress"] == 100
        assert progress["courses"]["welding-101"]["completed"] is True
        assert progress["completedModules"] == ["welding-101"]
        assert progress["totalProgress"] == 100

        fetched = client.get("/api/progress", headers=auth_headers).json()
        assert fetched == progress

    def test_repeat_is_idempotent(self, client, auth_headers):
        first = client.post("/api/progress/welding-101/step/2", headers=auth_headers).json()
        second = client.post("/api/progress/welding-101/step/2", headers=auth_headers).json()
        assert first == second

    def test_unknown_course(self, client, auth_headers):
        client.post("/api/progress/welding-101/step/1", headers=auth_headers)
        before = client.get("/api/progress", headers=auth_headers).json()

        response = client.post("/api/progress/plumbing-101/step/1", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Module not found"
        assert client.get("/api/progress", headers=auth_headers).json() == before

    def test_unknown_step(self, client, auth_headers):
        response = client.post("/api/progress/welding-101/step/9", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Step not found"

    @pytest.mark.parametrize("step_id", ["first", "0_4"])
    def test_non_numeric_step(self, client, auth_headers, step_id):
        response = client.post(f"/api/progress/welding-101/step/{step_id}", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Step not found"
        progress = client.get("/api/progress", headers=auth_headers).json()
        assert progress["courses"]["welding-101"]["progress"] == 0

    def test_requires_token(self, client):
        response = client.post("/api/progress/welding-101/step/1")
        assert response.status_code == 401

    def test_users_do_not_share_progress(self, client, auth_headers, register_user):
        client.post("/api/progress/welding-101/step/1", headers=auth_headers)

        token = register_user(email="bob@example.com", name="Bob").json()["token"]
        bob = client.get("/api/progress", headers={"Authorization": f"Bearer {token}"})
        assert bob.json()["courses"]["welding-101"]["progress"] == 0


class TestConcurrentRequests:
    """Simultaneous completions for one user all land."""

    @pytest.mark.asyncio
    async def test_parallel_step_requests(self, platform):
        user, token = platform.register("ana@example.com", "secret123", "Ana")
        headers = {"Authorization": f"Bearer {token}"}
        transport = httpx.ASGITransport(app=create_app(platform=platform))

        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            responses = await asyncio.gather(
                *(
                    ac.post(f"/api/progress/welding-101/step/{i}", headers=headers)
                    for i in (1, 2, 3, 4)
                )
            )

        assert all(r.status_code == 200 for r in responses)
        record = platform.progress.get(user.id)
        assert record.courses["welding-101"].completed is True
        assert record.completed_modules == ["welding-101"]
        assert record.total_progress == 100
