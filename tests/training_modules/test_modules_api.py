"""Tests for the training module endpoints."""

from fastapi.testclient import TestClient


class TestModulesApi:
    def test_list_modules(self, client: TestClient, auth_headers: dict) -> None:
        response = client.get("/v1/modules", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 11
        soft = data["items"][0]
        assert soft["id"] == "module-soft-communications"
        assert soft["assessment"]["questions"]

    def test_filter_by_category(self, client: TestClient, auth_headers: dict) -> None:
        response = client.get(
            "/v1/modules", params={"module_name": "POSH"}, headers=auth_headers
        )
        assert [m["id"] for m in response.json()["items"]] == ["module-posh-basics"]

    def test_options_route_not_shadowed(
        self, client: TestClient, auth_headers: dict
    ) -> None:
        response = client.get("/v1/modules/options", headers=auth_headers)
        assert response.status_code == 200
        assert "module_names" in response.json()

    def test_create_with_assessment(self, client: TestClient, auth_headers: dict) -> None:
        response = client.post(
            "/v1/modules",
            json={
                "module_name": "Compliance",
                "sub_module_title": "Anti-Bribery",
                "designations": ["Manager"],
                "has_test": True,
                "assessment": {
                    "title": "Bribery Quiz",
                    "passing_score": 75,
                    "questions": [
                        {"question": "Gifts over $100?", "options": ["Yes", "No"], "answer": 1}
                    ],
                },
            },
            headers=auth_headers,
        )
        assert response.status_code == 201
        assessment = response.json()["assessment"]
        assert assessment["title"] == "Bribery Quiz"
        assert assessment["passing_score"] == 75
        assert assessment["questions"][0]["answer"] == 1

    def test_create_invalid_answer(self, client: TestClient, auth_headers: dict) -> None:
        response = client.post(
            "/v1/modules",
            json={
                "module_name": "Compliance",
                "sub_module_title": "Anti-Bribery",
                "assessment": {
                    "title": "Quiz",
                    "questions": [{"question": "?", "options": ["a"], "answer": 3}],
                },
            },
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_blank_names_rejected(self, client: TestClient, auth_headers: dict) -> None:
        created = client.post(
            "/v1/modules",
            json={"module_name": "   ", "sub_module_title": "Intro"},
            headers=auth_headers,
        )
        assert created.status_code == 422

        updated = client.patch(
            "/v1/modules/module-posh-basics",
            json={"sub_module_title": "  "},
            headers=auth_headers,
        )
        assert updated.status_code == 422

    def test_update_strips_names(self, client: TestClient, auth_headers: dict) -> None:
        response = client.patch(
            "/v1/modules/module-posh-basics",
            json={"module_name": " Compliance ", "sub_module_title": " POSH 101 "},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["module_name"] == "Compliance"
        assert response.json()["sub_module_title"] == "POSH 101"

    def test_remove_assessment(self, client: TestClient, auth_headers: dict) -> None:
        response = client.patch(
            "/v1/modules/module-posh-basics",
            json={"assessment": None},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["assessment"] is None

    def test_get_unknown(self, client: TestClient, auth_headers: dict) -> None:
        response = client.get("/v1/modules/missing", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Training module not found"

    def test_delete(self, client: TestClient, auth_headers: dict) -> None:
        response = client.delete("/v1/modules/module-crm-mastery", headers=auth_headers)
        assert response.status_code == 204
        assert (
            client.get("/v1/modules/module-crm-mastery", headers=auth_headers).status_code
            == 404
        )
