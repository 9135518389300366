"""
STACKIT IaaS API handle - HTTP transport, typed API errors and key-flow auth.
"""

from .exceptions import GenericOpenAPIError, ServiceAccountKeyError, TokenRequestError
from .auth import KeyFlowAuth, parse_service_account_key
from .api_client import IaaSAPIClient

__all__ = [
    'GenericOpenAPIError',
    'ServiceAccountKeyError',
    'TokenRequestError',
    'KeyFlowAuth',
    'parse_service_account_key',
    'IaaSAPIClient',
]
