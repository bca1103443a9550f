"""Tests for the progress endpoints."""

from fastapi.testclient import TestClient


class TestProgressApi:
    def test_list_by_status(self, client: TestClient, auth_headers: dict) -> None:
        response = client.get(
            "/v1/progress", params={"status": "in_progress"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["total"] == 5

    def test_get(self, client: TestClient, auth_headers: dict) -> None:
        response = client.get("/v1/progress/progress-8", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["test_score"] == 92

    def test_get_unknown(self, client: TestClient, auth_headers: dict) -> None:
        response = client.get("/v1/progress/missing", headers=auth_headers)
        assert response.status_code == 404

    def test_update(self, client: TestClient, auth_headers: dict) -> None:
        response = client.put(
            "/v1/progress",
            json={"id": "progress-3", "status": "completed", "test_status": "completed",
                  "test_score": 77},
            headers=auth_headers,
        )
        assert response.status_code == 200
        body = response.json()
        assert body["progress_percentage"] == 100
        assert body["completed_at"] is not None
        assert body["test_score"] == 77

    def test_create_requires_keys(self, client: TestClient, auth_headers: dict) -> None:
        response = client.put(
            "/v1/progress", json={"status": "in_progress"}, headers=auth_headers
        )
        assert response.status_code == 422

    def test_score_out_of_range(self, client: TestClient, auth_headers: dict) -> None:
        response = client.put(
            "/v1/progress",
            json={"id": "progress-3", "test_score": 101},
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_create_duplicate(self, client: TestClient, auth_headers: dict) -> None:
        response = client.put(
            "/v1/progress",
            json={
                "employee_id": "employee-it-01",
                "batch_id": "batch-onboarding-may",
                "module_id": "module-dei-foundations",
            },
            headers=auth_headers,
        )
        assert response.status_code == 409

    def test_create_not_enrolled(self, client: TestClient, auth_headers: dict) -> None:
        response = client.put(
            "/v1/progress",
            json={
                "employee_id": "employee-cxo-01",
                "batch_id": "batch-onboarding-may",
                "module_id": "module-dei-foundations",
            },
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_review(self, client: TestClient, auth_headers: dict) -> None:
        response = client.get("/v1/progress/progress-1/review", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["metrics"] == {
            "effectiveness": 93,
            "attentiveness": 98,
            "proactiveness": 99,
            "collaboration": 97,
        }

    def test_unknown_id_creates_record(self, client: TestClient, auth_headers: dict) -> None:
        response = client.put(
            "/v1/progress",
            json={
                "id": "client-progress-1",
                "employee_id": "employee-sr-exec-01",
                "batch_id": "batch-leadership-2024",
                "module_id": "module-digital-marketing",
                "status": "in_progress",
            },
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["id"] == "client-progress-1"

        fetched = client.get("/v1/progress/client-progress-1", headers=auth_headers)
        assert fetched.status_code == 200
        assert fetched.json()["status"] == "in_progress"

    def test_unknown_id_without_keys(self, client: TestClient, auth_headers: dict) -> None:
        response = client.put(
            "/v1/progress", json={"id": "missing", "status": "completed"}, headers=auth_headers
        )
        assert response.status_code == 404
