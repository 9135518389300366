"""
Data models and value objects.
Following Domain-Driven Design patterns for immutable data structures.
"""

from .server import Server, NIC
from .server_request import (
    CreateServerRequest,
    ServerNetworkingRequest,
    BootVolumeRequest,
    BootVolumeSourceRequest,
    AgentRequest,
)
from .service_account import ServiceAccountKey, ServiceAccountCredentials

__all__ = [
    'Server',
    'NIC',
    'CreateServerRequest',
    'ServerNetworkingRequest',
    'BootVolumeRequest',
    'BootVolumeSourceRequest',
    'AgentRequest',
    'ServiceAccountKey',
    'ServiceAccountCredentials',
]
