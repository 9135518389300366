"""
STACKIT client implementations - Strategy Pattern.
The IaaS-backed client and an in-memory test double share one interface.
"""

from .base_client import StackitClient
from .sdk_client import SdkStackitClient, new_stackit_client
from .mock_client import MockStackitClient

__all__ = [
    'StackitClient',
    'SdkStackitClient',
    'new_stackit_client',
    'MockStackitClient',
]
