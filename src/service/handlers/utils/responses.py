"""
API Gateway response helpers shared by the forwarder endpoints.
"""

import json
from typing import Any, Dict, Optional

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS, PUT, DELETE, PATCH",
    "Access-Control-Max-Age": "86400",
    "Access-Control-Allow-Credentials": "false",
}

JSON_CONTENT_TYPE = {"Content-Type": "application/json"}


def create_api_response(
    status_code: int,
    body: Optional[Any] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """Create an API Gateway proxy response carrying the CORS headers."""

    response_headers = dict(CORS_HEADERS)
    if headers:
        response_headers.update(headers)

    if body is None:
        payload = ""
    elif isinstance(body, str):
        payload = body
    else:
        payload = json.dumps(body)

    return {
        "statusCode": status_code,
        "headers": response_headers,
        "body": payload,
    }


def preflight_response() -> Dict[str, Any]:
    """Answer a CORS pre-flight request."""
    return create_api_response(status_code=200)


def success_response() -> Dict[str, Any]:
    return create_api_response(
        status_code=200,
        body={"success": True},
        headers=JSON_CONTENT_TYPE,
    )


def failure_response(message: str) -> Dict[str, Any]:
    return create_api_response(
        status_code=500,
        body={"success": False, "error": message},
        headers=JSON_CONTENT_TYPE,
    )
