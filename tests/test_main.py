from fastapi.middleware.trustedhost import TrustedHostMiddleware

from eduappoint.core.config import get_settings
from eduappoint.main import app


class TestServiceEndpoints:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_unknown_route(self, client):
        response = client.get("/no-such-route")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestMiddleware:

    def test_trusted_hosts_follow_settings(self):
        assert get_settings().TESTING is True
        assert all(m.cls is not TrustedHostMiddleware for m in app.user_middleware)

    def test_process_time_header(self, client):
        response = client.get("/health")
        assert "X-Process-Time" in response.headers
