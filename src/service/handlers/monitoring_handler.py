"""
Monitoring Handler - Lambda functions forwarding monitoring data to Supabase.

Each endpoint accepts one API Gateway request, validates its required field,
inserts a single derived row through the Supabase REST API and answers with
``{"success": true}``. Every failure is answered with a 500 carrying
``{"success": false, "error": <message>}``.
"""

import base64
import json
from typing import Any, Dict, Optional

from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from service.dal import DalHandler
from service.dal.supabase_handler import SupabaseRestHandler
from service.handlers.models.env_vars import SupabaseEnvVars, get_supabase_env_vars
from service.handlers.utils.errors import RequestParseError, classify_error, log_error_metrics
from service.handlers.utils.observability import logger, metrics, tracer
from service.handlers.utils.responses import failure_response, preflight_response, success_response
from service.logic.monitoring_service import (
    BUSINESS_EVENT,
    CLIENT_ERROR,
    PERFORMANCE_METRIC,
    MonitoringOperation,
    MonitoringService,
)
from service.models.input import ForwardedRequest


def _reject_constant(token: str) -> Any:
    raise ValueError(f'{token} is not valid JSON')


def parse_json_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Decode the JSON payload carried by an API Gateway proxy event.

    A JSON value that is not an object carries none of the request fields and
    is returned as an empty payload, so the required-field check reports it.

    Raises:
        RequestParseError: If the body is missing, not JSON or ``null``
    """
    body = event.get('body')
    if body is None or body == '':
        raise RequestParseError('Request body is empty')

    try:
        if event.get('isBase64Encoded'):
            body = base64.b64decode(body).decode('utf-8')
        # NaN and Infinity are accepted by json.loads but are not JSON
        payload = json.loads(body, parse_constant=_reject_constant)
    except (ValueError, TypeError) as e:
        raise RequestParseError(f'Invalid JSON body: {e}') from e

    if payload is None:
        raise RequestParseError('Request body must not be null')
    if not isinstance(payload, dict):
        return {}
    return payload


class MonitoringForwarder:
    """Turns one inbound request into one row insert."""

    def __init__(
        self,
        operation: MonitoringOperation,
        settings: Optional[SupabaseEnvVars] = None,
        dal: Optional[DalHandler] = None,
    ) -> None:
        """
        Args:
            operation: Endpoint description
            settings: Supabase settings, read from the environment on each
                request when omitted
            dal: Storage backend, a ``SupabaseRestHandler`` is created per
                request when omitted
        """
        self.operation = operation
        self.settings = settings
        self.dal = dal

    @tracer.capture_method
    def handle(self, event: Dict[str, Any]) -> Dict[str, Any]:
        """Process one API Gateway proxy event into a proxy response."""
        if str(event.get('httpMethod', '')).upper() == 'OPTIONS':
            return preflight_response()

        try:
            request = self.operation.request_model.model_validate(parse_json_body(event))
            request.ensure_required()

            settings = self.settings if self.settings is not None else get_supabase_env_vars()
            settings.require()
            self._forward(settings, request)
        except Exception as e:
            error = classify_error(e)
            log_error_metrics(error, self.operation.name)
            return failure_response(error.message)

        return success_response()

    def _forward(self, settings: SupabaseEnvVars, request: ForwardedRequest) -> None:
        if self.dal is not None:
            MonitoringService(self.dal).forward(self.operation, request)
            return

        with SupabaseRestHandler(settings) as dal:
            MonitoringService(dal).forward(self.operation, request)


def _invoke(operation: MonitoringOperation, event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    tracer.put_annotation('operation', operation.name)
    metrics.add_metric(name='RequestCount', unit=MetricUnit.Count, value=1)

    logger.info('Lambda invocation started', extra={
        'request_id': context.aws_request_id,
        'http_method': event.get('httpMethod'),
        'path': event.get('path'),
    })

    return MonitoringForwarder(operation).handle(event)


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
def business_event_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """Record a business event in the ``system_health`` table."""
    return _invoke(BUSINESS_EVENT, event, context)


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
def performance_metric_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """Record a performance measurement in the ``system_health`` table."""
    return _invoke(PERFORMANCE_METRIC, event, context)


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
def client_error_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """Record a client side error in the ``error_logs`` table."""
    return _invoke(CLIENT_ERROR, event, context)
