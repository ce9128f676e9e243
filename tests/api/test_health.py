"""API tests for health endpoints."""


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert data["uptime_seconds"] >= 0

    def test_root_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_unknown_route(self, client):
        response = client.get("/api/nope")
        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"
