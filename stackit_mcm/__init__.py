"""
STACKIT Machine Client Package

This package provides the server and NIC client used by a
machine-controller-manager driver for STACKIT, on top of the STACKIT IaaS API.

Architecture:
- Strategy Pattern for client implementations (API-backed and mock)
- Factory Pattern for creating clients
- Value Object Pattern for immutable data models
- Caller-side services for not-found handling and NIC reconciliation
"""

from .models import Server, NIC, CreateServerRequest, ServerNetworkingRequest, BootVolumeRequest
from .clients import StackitClient, SdkStackitClient, MockStackitClient, new_stackit_client
from .repositories import ClientFactory, ClientKind
from .errors import ClientCreationError, GenericOpenAPIError, is_not_found
from .config import StackitConfig

__all__ = [
    # Models
    "Server",
    "NIC",
    "CreateServerRequest",
    "ServerNetworkingRequest",
    "BootVolumeRequest",
    # Clients
    "StackitClient",
    "SdkStackitClient",
    "MockStackitClient",
    "new_stackit_client",
    # Factory
    "ClientFactory",
    "ClientKind",
    # Errors
    "ClientCreationError",
    "GenericOpenAPIError",
    "is_not_found",
    # Config
    "StackitConfig",
]
