"""
API Integration Tests for System Router Endpoints
"""


class TestSystemRouterAPI:
    """Integration tests for system router endpoints"""

    def test_health_check(self, client):
        """Test basic health check endpoint"""
        response = client.get("/api/system/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["uptime"] >= 0
        # Timestamp should be ISO format
        assert "T" in data["timestamp"]

    def test_get_config(self, client):
        """Test active configuration is reported"""
        response = client.get("/api/system/config")

        assert response.status_code == 200
        data = response.json()
        assert data["blur"]["radius"] == 2
        assert data["blur"]["edge_mode"] == "in_bounds"
        assert data["grayscale"]["preserve_alpha"] is False
        assert data["flip"]["axis"] == "horizontal"
        assert data["stages"] == ["blur", "grayscale", "flip"]

    def test_root(self, client):
        """Test root endpoint lists routes"""
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["endpoints"]["pipeline"] == "/api/pipeline"
