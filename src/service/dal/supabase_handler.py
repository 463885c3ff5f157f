"""
Supabase implementation of the Data Access Layer (DAL).

Rows are inserted through the PostgREST endpoint of the project
(``POST <SUPABASE_URL>/rest/v1/<table>``) authenticated with the service
role key.
"""

import json
from typing import Any, Dict, Optional

import httpx

from service.dal import InsertResult
from service.handlers.models.env_vars import SupabaseEnvVars
from service.handlers.utils.errors import UpstreamError
from service.handlers.utils.observability import logger, tracer


class SupabaseRestHandler:
    """PostgREST implementation of the data access layer."""

    def __init__(self, settings: SupabaseEnvVars, client: Optional[httpx.Client] = None) -> None:
        """
        Initialize the Supabase handler.

        Args:
            settings: Connection settings, must pass ``SupabaseEnvVars.require``
            client: HTTP client to send requests with, one is created and owned
                by the handler when omitted
        """
        settings.require()
        self._rest_url = settings.rest_url
        self._service_role_key = settings.SUPABASE_SERVICE_ROLE_KEY
        self._timeout = settings.SUPABASE_TIMEOUT_SECONDS
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=self._timeout)

    def __enter__(self) -> 'SupabaseRestHandler':
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _headers(self) -> Dict[str, str]:
        return {
            'Authorization': f'Bearer {self._service_role_key}',
            'apikey': self._service_role_key,
            'Content-Type': 'application/json',
            'Prefer': 'return=representation',
        }

    @tracer.capture_method
    def insert_record(self, table: str, record: Dict[str, Any]) -> InsertResult:
        """
        Insert one row into a Supabase table.

        Args:
            table: Target table name
            record: JSON serializable row

        Returns:
            Status code and body text of the backend response

        Raises:
            UpstreamError: If the request timed out or the transport failed
        """
        url = f'{self._rest_url}/{table}'
        tracer.put_annotation('table', table)

        try:
            response = self._client.post(
                url,
                headers=self._headers(),
                content=json.dumps(record, allow_nan=False),
                timeout=self._timeout,
            )
        except httpx.TimeoutException as e:
            raise UpstreamError(f'request timed out after {self._timeout:g}s', timed_out=True) from e
        except httpx.HTTPError as e:
            raise UpstreamError(str(e)) from e

        logger.debug(f'Supabase insert completed: {table}', extra={'status_code': response.status_code})
        return InsertResult(status_code=response.status_code, text=response.text)
