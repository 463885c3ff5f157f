"""
Powertools instances shared by the monitoring forwarder endpoints.

Service name, log level and metrics namespace can be overridden through the
POWERTOOLS_SERVICE_NAME, LOG_LEVEL and POWERTOOLS_METRICS_NAMESPACE environment
variables. Tracing is switched off with POWERTOOLS_TRACE_DISABLED.
"""

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.metrics import Metrics
from aws_lambda_powertools.tracing import Tracer

# RecordsForwarded, RequestCount and Error*Count are emitted here
METRICS_NAMESPACE = 'MonitoringForwarder'

logger: Logger = Logger()

tracer: Tracer = Tracer()

metrics = Metrics(namespace=METRICS_NAMESPACE)
