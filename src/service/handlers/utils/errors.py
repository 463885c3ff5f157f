"""
Error handling utilities for the monitoring Lambda handlers.

Every failure a forwarder can hit is raised as a ``BaseServiceError`` subclass
so it can be logged and counted by category. At the HTTP boundary they all
collapse to the same 500 envelope carrying the error message.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from aws_lambda_powertools.metrics import MetricUnit

from service.handlers.utils.observability import logger, metrics, tracer


class ErrorSeverity(str, Enum):
    """Error severity levels for classification."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    VALIDATION = "VALIDATION"
    CONFIGURATION = "CONFIGURATION"
    UPSTREAM = "UPSTREAM"
    TRANSPORT_OR_PARSE = "TRANSPORT_OR_PARSE"


class BaseServiceError(Exception):
    """Base exception class for service errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.TRANSPORT_OR_PARSE,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.category = category
        self.error_id = str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "error_id": self.error_id,
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "category": self.category.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


class ValidationError(BaseServiceError):
    """Raised when a required input field is missing."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.VALIDATION,
        )


class ConfigurationError(BaseServiceError):
    """Raised when required environment configuration is missing."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.CONFIGURATION,
        )


class UpstreamError(BaseServiceError):
    """Raised when the storage backend rejects the insert or cannot be reached."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        timed_out: bool = False,
    ):
        super().__init__(
            message=message,
            error_code="UPSTREAM_TIMEOUT" if timed_out else "UPSTREAM_ERROR",
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.UPSTREAM,
        )
        self.status_code = status_code
        self.timed_out = timed_out


class RequestParseError(BaseServiceError):
    """Raised when the inbound body is not a JSON object."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="REQUEST_PARSE_ERROR",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.TRANSPORT_OR_PARSE,
        )


def classify_error(error: Exception) -> BaseServiceError:
    """Wrap unexpected exceptions so every failure carries a category."""
    if isinstance(error, BaseServiceError):
        return error

    return BaseServiceError(
        message=str(error) or error.__class__.__name__,
        error_code="UNEXPECTED_ERROR",
        severity=ErrorSeverity.CRITICAL,
        category=ErrorCategory.TRANSPORT_OR_PARSE,
    )


@tracer.capture_method
def log_error_metrics(error: BaseServiceError, operation: str) -> None:
    """Log and count a failed invocation."""

    metrics.add_metric(name="ErrorCount", unit=MetricUnit.Count, value=1)
    metrics.add_metric(name=f"Error{error.category.value}Count", unit=MetricUnit.Count, value=1)

    tracer.put_annotation("error_code", error.error_code)
    tracer.put_annotation("error_category", error.category.value)

    logger.error(
        f"{operation} failed: {error.message}",
        extra={
            "error_id": error.error_id,
            "error_code": error.error_code,
            "error_severity": error.severity.value,
            "error_category": error.category.value,
        }
    )
