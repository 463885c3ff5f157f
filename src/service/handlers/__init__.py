"""
AWS Lambda Handlers Module.

This module contains the Lambda function handlers that serve as entry points
for the forwarder. Each handler follows the three-layer architecture pattern:

1. Handler Layer (this module): Request/response handling, validation, CORS
2. Logic Layer: Row construction and the single insert
3. Data Access Layer: Supabase REST API integration

The handlers use AWS Lambda Powertools for structured logging with correlation
IDs, distributed tracing with X-Ray and custom metrics collection.
"""

__version__ = "1.0.0"
