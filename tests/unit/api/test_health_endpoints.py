"""Tests for service information and health endpoints."""

from fastapi.testclient import TestClient

from api.main import app


class TestHealthEndpoints:
    """Test health and info endpoints."""

    async def test_health(self, client):
        response = await client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["uptime"] >= 0
        assert "timestamp" in body

    async def test_service_info(self, client):
        response = await client.get("/api")

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "interview-service"
        assert body["status"] == "running"
        assert body["endpoints"]["interviews"] == "http://test/api/interviews"

    def test_health_without_message_bus(self):
        """Health does not depend on the message bus."""
        client = TestClient(app)

        response = client.get("/api/health")
        assert response.status_code == 200

    def test_resource_without_message_bus(self):
        """Creation verifies references over the bus; without it the request is refused."""
        client = TestClient(app)

        response = client.post("/api/interview-results", json={
            "interview_id": "6f1c2a4e-8f7b-4d2a-9c1e-3b5d7f9a1c01",
            "question_id": "6f1c2a4e-8f7b-4d2a-9c1e-3b5d7f9a1c02",
            "rating": 3,
        })

        assert response.status_code == 503
        assert response.json()["error"]["message"] == "Message bus is not available"
