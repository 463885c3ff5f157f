"""
Service Models Package

This package contains the Pydantic models used throughout the service:
input models for the inbound requests and record models for the rows written
to Supabase.
"""

from .input import BusinessEventRequest, ClientErrorRequest, PerformanceMetricRequest
from .output import ErrorLogRecord, SystemHealthRecord

__all__ = [
    # Input models
    "BusinessEventRequest",
    "PerformanceMetricRequest",
    "ClientErrorRequest",

    # Record models
    "SystemHealthRecord",
    "ErrorLogRecord",
]
