"""Tests for the batch endpoints."""

from fastapi.testclient import TestClient


LEADERSHIP = "batch-leadership-2024"


class TestBatchesApi:
    def test_requires_auth(self, client: TestClient) -> None:
        response = client.get("/v1/batches")
        assert response.status_code == 401

    def test_list(self, client: TestClient, auth_headers: dict) -> None:
        response = client.get("/v1/batches", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["total"] == 5

    def test_create_update_delete(self, client: TestClient, auth_headers: dict) -> None:
        created = client.post(
            "/v1/batches",
            json={"title": "Winter Cohort", "description": "Year-end refresh"},
            headers=auth_headers,
        )
        assert created.status_code == 201
        batch_id = created.json()["id"]
        assert created.json()["published_at"] is None

        published = client.patch(
            f"/v1/batches/{batch_id}",
            json={"is_published": True},
            headers=auth_headers,
        )
        assert published.status_code == 200
        assert published.json()["published_at"] is not None

        deleted = client.delete(f"/v1/batches/{batch_id}", headers=auth_headers)
        assert deleted.status_code == 204
        missing = client.get(f"/v1/batches/{batch_id}", headers=auth_headers)
        assert missing.status_code == 404

    def test_create_requires_title(self, client: TestClient, auth_headers: dict) -> None:
        response = client.post("/v1/batches", json={"title": ""}, headers=auth_headers)
        assert response.status_code == 422

    def test_blank_title_rejected(self, client: TestClient, auth_headers: dict) -> None:
        created = client.post("/v1/batches", json={"title": "   "}, headers=auth_headers)
        assert created.status_code == 422

        updated = client.patch(
            "/v1/batches/batch-leadership-2024",
            json={"title": "   "},
            headers=auth_headers,
        )
        assert updated.status_code == 422

    def test_update_strips_title(self, client: TestClient, auth_headers: dict) -> None:
        response = client.patch(
            "/v1/batches/batch-leadership-2024",
            json={"title": "  Leaders 2025  "},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["title"] == "Leaders 2025"

    def test_detail(self, client: TestClient, auth_headers: dict) -> None:
        response = client.get(f"/v1/batches/{LEADERSHIP}", headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["batch"]["title"] == "Q1 Leadership Immersion"
        assert len(body["employees"]) == 2
        assert len(body["modules"]) == 2

    def test_set_employees_unknown(self, client: TestClient, auth_headers: dict) -> None:
        response = client.put(
            f"/v1/batches/{LEADERSHIP}/employees",
            json={"employee_ids": ["ghost"]},
            headers=auth_headers,
        )
        assert response.status_code == 422
        assert "ghost" in response.json()["message"]

    def test_set_modules(self, client: TestClient, auth_headers: dict) -> None:
        response = client.put(
            f"/v1/batches/{LEADERSHIP}/modules",
            json={"module_ids": ["module-digital-marketing", "module-soft-communications"]},
            headers=auth_headers,
        )
        assert response.status_code == 200
        modules = response.json()["modules"]
        assert modules[0]["module_id"] == "module-digital-marketing"
        assert modules[0]["order_index"] == 0

    def test_insights(self, client: TestClient, auth_headers: dict) -> None:
        response = client.get(f"/v1/batches/{LEADERSHIP}/insights", headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["leaderboard"][0]["employee_name"] == "Marcus Lee"
        assert body["stats"]["average_score"] == 43

    def test_insights_unknown_batch(self, client: TestClient, auth_headers: dict) -> None:
        response = client.get("/v1/batches/missing/insights", headers=auth_headers)
        assert response.status_code == 404
