"""
Record models written to the Supabase REST API.

Each record is built once from a validated request, serialized with
``to_row`` and discarded after the insert.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, Literal

from pydantic import BaseModel, Field

from service.models.input import BusinessEventRequest, ClientErrorRequest, PerformanceMetricRequest, is_truthy

SYSTEM_HEALTH_TABLE = 'system_health'
ERROR_LOGS_TABLE = 'error_logs'


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def _timestamp_or_now(timestamp: Any) -> Any:
    return timestamp if is_truthy(timestamp) else utc_now_iso()


class SystemHealthRecord(BaseModel):
    """Row of the ``system_health`` table."""

    component: Annotated[str, Field(
        description='Producer of the record',
        examples=['business_metrics', 'performance']
    )]

    status: Annotated[Literal['healthy'], Field(
        description='Reported state, forwarders only ever report healthy'
    )] = 'healthy'

    message: Annotated[str, Field(
        description='Human readable summary',
        examples=['Business event: signup']
    )]

    details: Annotated[Dict[str, Any], Field(
        description='Request fields passed through verbatim'
    )]

    metrics: Annotated[Dict[str, Any], Field(
        description='Resolved metric values'
    )]

    checked_at: Annotated[Any, Field(
        description='Time the measurement refers to'
    )]

    created_at: Annotated[str, Field(
        description='Time the record was built'
    )]

    @classmethod
    def from_business_event(cls, request: BusinessEventRequest) -> 'SystemHealthRecord':
        """
        Build the record for a business event.

        ``metrics.timestamp`` and ``checked_at`` fall back to the current time
        independently of each other when the request carries no timestamp.
        """
        return cls(
            component='business_metrics',
            message=f'Business event: {request.event}',
            details=request.sent('event', 'value', 'properties', 'user_id'),
            metrics={
                'event': request.event,
                'value': request.value if is_truthy(request.value) else 1,
                'timestamp': _timestamp_or_now(request.timestamp),
            },
            checked_at=_timestamp_or_now(request.timestamp),
            created_at=utc_now_iso(),
        )

    @classmethod
    def from_performance_metric(cls, request: PerformanceMetricRequest) -> 'SystemHealthRecord':
        """Build the record for a performance measurement."""
        details = request.sent('value', 'unit', 'metadata')
        details = {'metric_name': request.name, **details}

        measured = request.sent('unit', 'timestamp')
        measured = {str(request.name): request.value, **measured}

        return cls(
            component='performance',
            message=f'Performance metric: {request.name}',
            details=details,
            metrics=measured,
            checked_at=_timestamp_or_now(request.timestamp),
            created_at=utc_now_iso(),
        )

    def to_row(self) -> Dict[str, Any]:
        return self.model_dump()


class ErrorLogRecord(BaseModel):
    """Row of the ``error_logs`` table."""

    error_type: Literal['client_error'] = 'client_error'
    error_message: Any
    error_details: Dict[str, Any]
    stack_trace: Any = None
    url: Any = None
    user_agent: Any = None
    session_id: Any = None
    severity: Literal['error'] = 'error'
    created_at: str

    @classmethod
    def from_client_error(cls, request: ClientErrorRequest) -> 'ErrorLogRecord':
        """Build the record for an error reported by a browser client."""
        context = request.context_values()
        from_context = {
            column: context[key]
            for column, key in (
                ('user_agent', 'userAgent'),
                ('url', 'url'),
                ('session_id', 'sessionId'),
                ('component', 'component'),
                ('action', 'action'),
                ('metadata', 'metadata'),
            )
            if key in context
        }

        top_level = {
            column: from_context[column]
            for column in ('url', 'user_agent', 'session_id')
            if column in from_context
        }
        if 'stack' in request.model_fields_set:
            top_level['stack_trace'] = request.stack

        return cls(
            error_message=request.message,
            error_details={**request.sent('stack', 'context'), **from_context},
            created_at=utc_now_iso(),
            **top_level,
        )

    def to_row(self) -> Dict[str, Any]:
        # columns the client did not report are left out of the insert
        return self.model_dump(exclude_unset=True) | {
            'error_type': self.error_type,
            'severity': self.severity,
        }
