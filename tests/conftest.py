"""
Pytest configuration and shared fixtures for the monitoring forwarder.

This module provides common test fixtures and configuration used across
unit, integration, and end-to-end tests.
"""

import json
import os

# Powertools reads these when the service modules are imported
os.environ.update({
    "POWERTOOLS_SERVICE_NAME": "test-monitoring-forwarder",
    "POWERTOOLS_METRICS_NAMESPACE": "TestMonitoringForwarder",
    "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
    "LOG_LEVEL": "DEBUG",
})

import httpx
import pytest
from typing import Any, Dict, List
from unittest.mock import Mock, patch

from service.dal import InsertResult
from service.handlers.models.env_vars import SupabaseEnvVars

SUPABASE_URL = "https://project-ref.supabase.co"
SERVICE_ROLE_KEY = "test-service-role-key"


class RecordingDal:
    """Fake storage backend remembering every insert."""

    def __init__(self, status_code: int = 201, text: str = "[]"):
        self.status_code = status_code
        self.text = text
        self.inserts: List[Dict[str, Any]] = []

    def insert_record(self, table: str, record: Dict[str, Any]) -> InsertResult:
        self.inserts.append({"table": table, "record": record})
        return InsertResult(status_code=self.status_code, text=self.text)


class FakeSupabase:
    """``httpx.MockTransport`` handler standing in for the PostgREST API."""

    def __init__(self):
        self.status_code = 201
        self.text = "[]"
        self.error: Exception | None = None
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.text)

    @property
    def last_row(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def supabase_env():
    """Supabase connection settings in the process environment."""
    with patch.dict(os.environ, {
        "SUPABASE_URL": SUPABASE_URL,
        "SUPABASE_SERVICE_ROLE_KEY": SERVICE_ROLE_KEY,
    }):
        yield


@pytest.fixture
def missing_supabase_env():
    """Process environment without Supabase connection settings."""
    with patch.dict(os.environ, {}):
        os.environ.pop("SUPABASE_URL", None)
        os.environ.pop("SUPABASE_SERVICE_ROLE_KEY", None)
        yield


@pytest.fixture
def supabase_settings() -> SupabaseEnvVars:
    """Complete Supabase settings."""
    return SupabaseEnvVars(
        SUPABASE_URL=SUPABASE_URL,
        SUPABASE_SERVICE_ROLE_KEY=SERVICE_ROLE_KEY,
    )


@pytest.fixture
def recording_dal() -> RecordingDal:
    """Fake DAL answering 201 Created."""
    return RecordingDal()


@pytest.fixture
def fake_supabase():
    """Route every ``httpx.Client`` created by the DAL to a fake PostgREST API."""
    backend = FakeSupabase()
    real_client = httpx.Client

    def client_factory(*args, **kwargs):
        return real_client(*args, transport=httpx.MockTransport(backend), **kwargs)

    with patch("service.dal.supabase_handler.httpx.Client", side_effect=client_factory):
        yield backend


@pytest.fixture
def business_event() -> Dict[str, Any]:
    """Sample business event payload."""
    return {
        "event": "checkout_completed",
        "value": 49.99,
        "properties": {"plan": "pro", "items": 3},
        "timestamp": "2024-05-01T12:00:00.000Z",
        "userId": "user-123",
    }


@pytest.fixture
def api_gateway_event():
    """Build an API Gateway REST proxy event for testing."""

    def build(body: Any = None, method: str = "POST", path: str = "/monitoring-business") -> Dict[str, Any]:
        if body is not None and not isinstance(body, str):
            body = json.dumps(body)
        return {
            "httpMethod": method,
            "path": path,
            "headers": {
                "Content-Type": "application/json",
                "Origin": "https://app.example.com",
            },
            "body": body,
            "requestContext": {
                "requestId": "test-request-id-123",
                "accountId": "123456789012",
                "stage": "test",
                "httpMethod": method,
                "path": path,
                "identity": {
                    "sourceIp": "127.0.0.1",
                    "userAgent": "test-agent/1.0",
                },
            },
            "pathParameters": None,
            "queryStringParameters": None,
            "stageVariables": None,
            "isBase64Encoded": False,
        }

    return build


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-lambda-function"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-lambda-function"
    context.memory_limit_in_mb = "512"
    context.get_remaining_time_in_millis.return_value = 30000
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-lambda-function"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    return context


# Integration test fixtures
@pytest.fixture
def integration_client():
    """HTTP client for end-to-end testing against a deployed stage."""
    base_url = os.environ.get("API_BASE_URL", "http://localhost:3000")

    with httpx.Client(base_url=base_url, timeout=30.0) as client:
        yield client


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Add markers based on test location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "e2e" in str(item.fspath):
            item.add_marker(pytest.mark.e2e)
