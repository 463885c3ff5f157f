"""
Input models for the monitoring forwarder requests.

Fields are typed loosely on purpose: payloads are forwarded verbatim to the
storage backend, and the only validation performed is the required-field check
of each request kind (``ensure_required``). ``model_fields_set`` records which
keys the caller actually sent, so absent keys can be left out of the record
while explicit nulls are kept.
"""

from abc import abstractmethod
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from service.handlers.utils.errors import ValidationError


def is_truthy(value: Any) -> bool:
    """Truthiness of a decoded JSON value, where empty arrays and objects count as present."""
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


class ForwardedRequest(BaseModel):
    """Base model for payloads forwarded to the storage backend."""

    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    @abstractmethod
    def ensure_required(self) -> None:
        """Raise ``ValidationError`` if a required field is missing."""

    def sent(self, *names: str) -> dict[str, Any]:
        """Return the given fields the caller sent, keyed by their wire name."""
        return self.model_dump(include=set(names), by_alias=True, exclude_unset=True)


class BusinessEventRequest(ForwardedRequest):
    """Request model for a business event."""

    event: Annotated[Any, Field(
        description='Name of the business event',
        examples=['checkout_completed', 'signup']
    )] = None

    value: Annotated[Any, Field(
        description='Magnitude of the event, defaults to 1 in the metrics block',
        examples=[1, 49.99]
    )] = None

    properties: Annotated[Any, Field(
        description='Opaque event context'
    )] = None

    timestamp: Annotated[Any, Field(
        description='ISO-8601 time of the event',
        examples=['2024-05-01T12:00:00.000Z']
    )] = None

    user_id: Annotated[Any, Field(
        alias='userId',
        description='Identifier of the acting user'
    )] = None

    def ensure_required(self) -> None:
        if not is_truthy(self.event):
            raise ValidationError('Event name is required')


class PerformanceMetricRequest(ForwardedRequest):
    """Request model for a performance measurement."""

    name: Annotated[Any, Field(
        description='Metric name',
        examples=['page_load', 'api_latency']
    )] = None

    value: Annotated[Any, Field(
        description='Measured value; zero and null are accepted'
    )] = None

    unit: Annotated[Any, Field(
        description='Unit of the measured value',
        examples=['ms', 'bytes']
    )] = None

    timestamp: Annotated[Any, Field(
        description='ISO-8601 time of the measurement'
    )] = None

    metadata: Annotated[Any, Field(
        description='Opaque measurement context'
    )] = None

    def ensure_required(self) -> None:
        # value only has to be present, falsy measurements are legitimate
        if not is_truthy(self.name) or 'value' not in self.model_fields_set:
            raise ValidationError('Metric name and value are required')


class ClientErrorRequest(ForwardedRequest):
    """Request model for an error reported by a browser client."""

    message: Annotated[Any, Field(
        description='Error message',
        examples=['TypeError: undefined is not a function']
    )] = None

    stack: Annotated[Any, Field(
        description='Stack trace captured by the client'
    )] = None

    context: Annotated[Any, Field(
        description='Client context (userAgent, url, sessionId, component, action, metadata)'
    )] = None

    def ensure_required(self) -> None:
        if not is_truthy(self.message):
            raise ValidationError('Error message is required')

    def context_values(self) -> dict[str, Any]:
        """Return the context object, or an empty one when none was sent."""
        return self.context if isinstance(self.context, dict) else {}
