"""
End-to-end tests for the monitoring forwarder API.

These tests call a deployed stage (``API_BASE_URL``) and write real rows to
its Supabase project. They are skipped unless ``API_BASE_URL`` is set.
"""

import os

import httpx
import pytest

pytestmark = pytest.mark.skipif(
    not os.environ.get("API_BASE_URL"),
    reason="API_BASE_URL not set",
)


@pytest.mark.e2e
class TestMonitoringAPI:
    """End-to-end tests for the monitoring endpoints."""

    def test_preflight(self, integration_client: httpx.Client):
        """Test that pre-flight requests are answered with the CORS headers."""
        response = integration_client.options("/monitoring-business")

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_business_event_success(self, integration_client: httpx.Client):
        """Test forwarding a business event."""
        response = integration_client.post("/monitoring-business", json={
            "event": "e2e_test_event",
            "value": 2,
            "properties": {"source": "pytest"},
        })

        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_business_event_missing_name(self, integration_client: httpx.Client):
        """Test that a business event without name is rejected."""
        response = integration_client.post("/monitoring-business", json={"value": 2})

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Event name is required"}

    def test_performance_metric_success(self, integration_client: httpx.Client):
        """Test forwarding a performance measurement."""
        response = integration_client.post("/monitoring-performance", json={
            "name": "e2e_latency",
            "value": 0,
            "unit": "ms",
        })

        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_client_error_success(self, integration_client: httpx.Client):
        """Test forwarding a client error report."""
        response = integration_client.post("/monitoring-errors", json={
            "message": "e2e test error",
            "context": {"url": "https://example.com/e2e", "component": "pytest"},
        })

        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_invalid_json(self, integration_client: httpx.Client):
        """Test that a malformed body is rejected with an error message."""
        response = integration_client.post(
            "/monitoring-business",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 500
        assert response.json()["success"] is False
        assert response.json()["error"]
