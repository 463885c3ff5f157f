"""
Monitoring Forwarder Service Module.

This package contains the core service implementation following the three-layer
architecture pattern:

- handlers: API handlers and entry points
- logic: Forwarding operations
- dal: Data access layer for the Supabase REST API
- models: Request and record models
"""

__version__ = "1.0.0"
__description__ = "Forwards monitoring data from API Gateway to Supabase"
