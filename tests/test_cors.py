#!/usr/bin/env python3
"""
Pytest tests for CORS configuration
Tests that the FastAPI application properly handles CORS requests from localhost:3000
"""

import pytest
from fastapi.testclient import TestClient

from app.main import app


class TestCORSConfiguration:
    """Test CORS middleware configuration"""

    def setup_method(self):
        """Set up test fixtures"""
        self.client = TestClient(app)
        self.frontend_origin = "http://localhost:3000"

    def test_cors_simple_get_request(self):
        """Test simple GET request with CORS headers"""
        response = self.client.get(
            "/",
            headers={"Origin": self.frontend_origin},
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == self.frontend_origin
        assert response.headers["access-control-allow-credentials"] == "true"
        assert response.json() == {"message": "Focused quiz grading service"}

    def test_cors_preflight_on_submit_endpoint(self):
        """Test CORS preflight for the quiz submission endpoint"""
        response = self.client.options(
            "/quiz/submit",
            headers={
                "Origin": self.frontend_origin,
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type,X-User-ID,X-User-Role",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == self.frontend_origin
        assert "POST" in response.headers.get("access-control-allow-methods", "").upper()
        assert response.headers.get("access-control-allow-headers")

    def test_random_origin_not_allowed(self):
        """Test that random origins are not allowed"""
        response = self.client.get(
            "/",
            headers={"Origin": "http://evil-site.com"},
        )

        assert response.status_code == 200

        # Should not get the evil origin back
        if "access-control-allow-origin" in response.headers:
            assert (
                response.headers["access-control-allow-origin"]
                != "http://evil-site.com"
            )


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
