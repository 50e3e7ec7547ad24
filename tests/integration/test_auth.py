"""Integration tests for the API-key gate.

Covers:
- Missing / wrong / correct ``X-API-KEY`` header on product routes.
- Public routes (health check, OpenAPI schema and docs).
- Empty ``API_KEY`` disabling the gate.
"""

import pytest

pytestmark = pytest.mark.integration

URL = "/api/v1/products/"


class TestApiKeyGate:
    def test_missing_key_is_401(self, api_client):
        response = api_client.get(URL)
        assert response.status_code == 401
        assert response.data["type"] == "unauthorized"
        assert response.data["errors"][0]["detail"] == "Missing X-API-KEY header."
        assert response["WWW-Authenticate"] == 'ApiKey header="X-API-KEY"'

    def test_wrong_key_is_401(self, api_client):
        api_client.credentials(HTTP_X_API_KEY="wrong-key")
        response = api_client.post(URL, {"name": "Mouse", "price": "1.00"}, format="json")
        assert response.status_code == 401
        assert response.data["errors"][0]["detail"] == "Invalid API key."

    def test_correct_key_passes(self, auth_client):
        assert auth_client.get(URL).status_code == 200

    @pytest.mark.parametrize("method", ["get", "put", "patch", "delete"])
    def test_detail_routes_are_gated(self, api_client, method):
        response = getattr(api_client, method)(f"{URL}1/")
        assert response.status_code == 401

    def test_empty_api_key_disables_gate(self, api_client, settings):
        settings.API_KEY = ""
        assert api_client.get(URL).status_code == 200


class TestPublicRoutes:
    def test_health_check_is_public(self, api_client):
        assert api_client.get("/health").status_code == 200

    def test_schema_is_public(self, api_client):
        response = api_client.get("/api/schema/")
        assert response.status_code == 200
        assert b"/api/v1/products/" in response.content

    @pytest.mark.parametrize("path", ["/api/docs/", "/api/redoc/"])
    def test_docs_are_public(self, api_client, path):
        assert api_client.get(path).status_code == 200
