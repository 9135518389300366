"""
Client Factory - Factory Pattern implementation.
Creates STACKIT client instances based on client kind.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Optional

from ..clients import StackitClient, MockStackitClient, new_stackit_client
from ..config import StackitConfig

logger = logging.getLogger(__name__)


class ClientKind(Enum):
    """Client kind enumeration"""
    SDK = "sdk"
    MOCK = "mock"


ClientBuilder = Callable[[str, Optional[StackitConfig]], StackitClient]


class ClientFactory:
    """
    Factory for creating STACKIT client instances.

    Design Pattern: Factory Pattern + Registry Pattern
    Registers all available client builders and creates instances on demand.
    Every call builds a new client; nothing is memoized.
    """

    # Builder registry
    _BUILDERS: Dict[ClientKind, ClientBuilder] = {
        ClientKind.SDK: new_stackit_client,
        ClientKind.MOCK: lambda service_account_key, config: MockStackitClient(),
    }

    @classmethod
    def create_client(cls,
                      kind: ClientKind,
                      service_account_key: str = "",
                      config: Optional[StackitConfig] = None) -> StackitClient:
        """
        Create a client instance.

        Args:
            kind: Kind of client
            service_account_key: Content of serviceaccount.json
            config: Optional settings, read from the environment when omitted

        Returns:
            New client instance

        Raises:
            ValueError: If client kind is not supported
            ClientCreationError: If the client cannot be built
        """
        builder = cls._BUILDERS.get(kind)

        if not builder:
            raise ValueError(f"Unknown client kind: {kind}")

        logger.debug(f"Creating STACKIT client of kind: {kind.value}")
        return builder(service_account_key, config)

    @classmethod
    def get_supported_kinds(cls) -> list[ClientKind]:
        """
        Get list of supported client kinds.

        Returns:
            List of supported ClientKind values
        """
        return list(cls._BUILDERS.keys())

    @classmethod
    def register_builder(cls, kind: ClientKind, builder: ClientBuilder):
        """
        Register a new client builder (for extensibility).

        Args:
            kind: Client kind
            builder: Callable taking (service_account_key, config)
        """
        cls._BUILDERS[kind] = builder
        logger.info(f"Registered client builder for kind: {kind.value}")
