"""
Environment variable models for type-safe configuration.

This module defines the Pydantic model for the Supabase settings consumed by the
forwarder handlers. Both connection values are optional at load time: their
absence is reported by the forwarder as a configuration failure of the
request, not as a cold start crash.
"""

import os
from typing import Annotated, Mapping, Optional

from aws_lambda_env_modeler import BaseModel
from pydantic import Field, ValidationError

from service.handlers.utils.errors import ConfigurationError

CONFIGURATION_MISSING_MESSAGE = 'Supabase configuration missing'


class SupabaseEnvVars(BaseModel):
    """Environment variables for the Supabase REST backend."""

    # Project URL, e.g. https://abcd.supabase.co
    SUPABASE_URL: Annotated[Optional[str], Field(
        description='Base URL of the Supabase project'
    )] = None

    # Service role key, sent both as bearer token and apikey header
    SUPABASE_SERVICE_ROLE_KEY: Annotated[Optional[str], Field(
        description='Supabase service role key',
        repr=False
    )] = None

    SUPABASE_TIMEOUT_SECONDS: Annotated[float, Field(
        description='Timeout in seconds for the outbound insert request',
        gt=0,
        le=60
    )] = 10.0

    @property
    def is_configured(self) -> bool:
        """Check if both the base URL and the service role key are present."""
        return bool(self.SUPABASE_URL) and bool(self.SUPABASE_SERVICE_ROLE_KEY)

    @property
    def rest_url(self) -> str:
        """PostgREST root of the project."""
        return f'{self.SUPABASE_URL.rstrip("/")}/rest/v1'

    def require(self) -> 'SupabaseEnvVars':
        """
        Ensure the connection settings are usable.

        Raises:
            ConfigurationError: If the base URL or the service role key is missing
        """
        if not self.is_configured:
            raise ConfigurationError(CONFIGURATION_MISSING_MESSAGE)
        return self


def get_supabase_env_vars(environ: Optional[Mapping[str, str]] = None) -> SupabaseEnvVars:
    """
    Read the Supabase settings from the environment.

    The environment is read on every call instead of going through
    ``get_environment_variables``, which caches the parsed model for the
    lifetime of the execution environment.

    Args:
        environ: Mapping to read from, defaults to ``os.environ``

    Returns:
        Validated settings model instance

    Raises:
        ConfigurationError: If a setting is present but invalid
    """
    source = os.environ if environ is None else environ
    try:
        return SupabaseEnvVars.model_validate(dict(source))
    except ValidationError as e:
        invalid = sorted({str(error['loc'][0]) for error in e.errors() if error['loc']})
        raise ConfigurationError(f'Invalid Supabase configuration: {", ".join(invalid)}') from e
