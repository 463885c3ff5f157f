"""
Client error Lambda Function - Entry point for the client error reports API.

This module serves as the Lambda function entry point that delegates to the
monitoring handler, which forwards the request to Supabase.
"""

import os
import sys
from typing import Any, Dict

# Add the service module to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from aws_lambda_powertools.utilities.typing import LambdaContext
from service.handlers.monitoring_handler import client_error_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Lambda function entry point for the client error reports API.

    Args:
        event: Lambda event payload (API Gateway event)
        context: Lambda context object

    Returns:
        API Gateway response dictionary
    """
    return client_error_handler(event, context)
