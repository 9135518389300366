"""
Base STACKIT client - Abstract base class for the server/NIC operations.
Defines the interface that the SDK-backed client and the test double implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ..models import Server, NIC, CreateServerRequest


class StackitClient(ABC):
    """
    Abstract base class for STACKIT IaaS clients.

    Design Pattern: Strategy Pattern
    The reconciliation loop talks to this interface; the real API client
    and the mock are interchangeable behind it.

    Every operation is a single backend call. Backend errors propagate as
    they are; deciding that a 404 means "already gone" is up to the caller
    (see errors.is_not_found).
    """

    @abstractmethod
    def create_server(self, project_id: str, region: str, request: CreateServerRequest) -> Server:
        """
        Create a server.

        Args:
            project_id: Project UUID
            region: Region, e.g. eu01
            request: Creation parameters, name must be non-empty

        Returns:
            Server in its initial state (usually CREATING)
        """
        pass

    @abstractmethod
    def get_server(self, project_id: str, region: str, server_id: str) -> Server:
        """Get a server by ID."""
        pass

    @abstractmethod
    def delete_server(self, project_id: str, region: str, server_id: str) -> None:
        """Delete a server by ID."""
        pass

    @abstractmethod
    def list_servers(self,
                     project_id: str,
                     region: str,
                     label_selector: Optional[Dict[str, str]] = None) -> List[Server]:
        """
        List servers, optionally filtered by labels.

        Args:
            project_id: Project UUID
            region: Region
            label_selector: Labels every returned server must carry;
                None or an empty dict returns all servers

        Returns:
            List of servers (possibly empty, never None), in backend order
        """
        pass

    @abstractmethod
    def get_nics_for_server(self, project_id: str, region: str, server_id: str) -> List[NIC]:
        """List the network interfaces attached to a server (empty list if none)."""
        pass

    @abstractmethod
    def update_nic(self,
                   project_id: str,
                   region: str,
                   network_id: str,
                   nic_id: str,
                   allowed_addresses: List[str]) -> NIC:
        """
        Replace the allowed-address set of a NIC.

        Args:
            project_id: Project UUID
            region: Region
            network_id: Network the NIC belongs to
            nic_id: NIC UUID
            allowed_addresses: New complete set; an empty list clears it

        Returns:
            Updated NIC
        """
        pass

    def close(self) -> None:
        """Release resources held by the client"""
        pass

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.close()
