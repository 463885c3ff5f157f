"""
Business Logic Layer for monitoring forwarding.

A ``MonitoringOperation`` describes one forwarder endpoint: which request model
it accepts, how the row is derived from it, which table receives it and how
failures are worded. ``MonitoringService`` performs the single insert.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Type

from aws_lambda_powertools.metrics import MetricUnit

from service.dal import DalHandler
from service.handlers.utils.errors import UpstreamError
from service.handlers.utils.observability import logger, metrics, tracer
from service.models.input import (
    BusinessEventRequest,
    ClientErrorRequest,
    ForwardedRequest,
    PerformanceMetricRequest,
)
from service.models.output import (
    ERROR_LOGS_TABLE,
    SYSTEM_HEALTH_TABLE,
    ErrorLogRecord,
    SystemHealthRecord,
)


@dataclass(frozen=True)
class MonitoringOperation:
    """Static description of a forwarder endpoint."""

    name: str
    request_model: Type[ForwardedRequest]
    table: str
    build_row: Callable[[Any], Dict[str, Any]]
    failure_prefix: str


BUSINESS_EVENT = MonitoringOperation(
    name='Business metric logging',
    request_model=BusinessEventRequest,
    table=SYSTEM_HEALTH_TABLE,
    build_row=lambda request: SystemHealthRecord.from_business_event(request).to_row(),
    failure_prefix='Failed to log business metric: ',
)

PERFORMANCE_METRIC = MonitoringOperation(
    name='Performance logging',
    request_model=PerformanceMetricRequest,
    table=SYSTEM_HEALTH_TABLE,
    build_row=lambda request: SystemHealthRecord.from_performance_metric(request).to_row(),
    failure_prefix='Failed to log performance metric: ',
)

CLIENT_ERROR = MonitoringOperation(
    name='Error logging',
    request_model=ClientErrorRequest,
    table=ERROR_LOGS_TABLE,
    build_row=lambda request: ErrorLogRecord.from_client_error(request).to_row(),
    failure_prefix='Failed to log error: ',
)


class MonitoringService:
    """Forwards validated monitoring requests to the storage backend."""

    def __init__(self, dal: DalHandler) -> None:
        self.dal = dal

    @tracer.capture_method
    def forward(self, operation: MonitoringOperation, request: ForwardedRequest) -> Dict[str, Any]:
        """
        Build the row for ``request`` and insert it once.

        Args:
            operation: Endpoint the request was received on
            request: Request that already passed ``ensure_required``

        Returns:
            The row that was inserted

        Raises:
            UpstreamError: If the backend rejected the row or could not be reached
        """
        row = operation.build_row(request)

        try:
            result = self.dal.insert_record(operation.table, row)
        except UpstreamError as e:
            raise UpstreamError(
                f'{operation.failure_prefix}{e.message}',
                status_code=e.status_code,
                timed_out=e.timed_out,
            ) from e

        if not result.ok:
            raise UpstreamError(f'{operation.failure_prefix}{result.text}', status_code=result.status_code)

        metrics.add_metric(name='RecordsForwarded', unit=MetricUnit.Count, value=1)
        logger.info(f'{operation.name} succeeded', extra={
            'table': operation.table,
            'status_code': result.status_code,
        })
        return row
