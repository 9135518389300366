"""
In-memory test double for StackitClient.

Each operation can be overridden with a callable taking the same arguments;
without an override it returns a fixed, deterministic value.
"""

from typing import Callable, Dict, List, Optional

from ..models import Server, NIC, CreateServerRequest
from .base_client import StackitClient

DEFAULT_SERVER_ID = "550e8400-e29b-41d4-a716-446655440000"
DEFAULT_SERVER_NAME = "test-machine"


class MockStackitClient(StackitClient):
    """Mock STACKIT client bound to no backend at all"""

    def __init__(self,
                 create_server_func: Optional[Callable[..., Server]] = None,
                 get_server_func: Optional[Callable[..., Server]] = None,
                 delete_server_func: Optional[Callable[..., None]] = None,
                 list_servers_func: Optional[Callable[..., List[Server]]] = None,
                 get_nics_func: Optional[Callable[..., List[NIC]]] = None,
                 update_nic_func: Optional[Callable[..., NIC]] = None):
        self.create_server_func = create_server_func
        self.get_server_func = get_server_func
        self.delete_server_func = delete_server_func
        self.list_servers_func = list_servers_func
        self.get_nics_func = get_nics_func
        self.update_nic_func = update_nic_func

    def create_server(self, project_id: str, region: str, request: CreateServerRequest) -> Server:
        if self.create_server_func is not None:
            return self.create_server_func(project_id, region, request)
        return Server(id=DEFAULT_SERVER_ID, name=request.name, status="CREATING")

    def get_server(self, project_id: str, region: str, server_id: str) -> Server:
        if self.get_server_func is not None:
            return self.get_server_func(project_id, region, server_id)
        return Server(id=server_id, name=DEFAULT_SERVER_NAME, status="ACTIVE")

    def delete_server(self, project_id: str, region: str, server_id: str) -> None:
        if self.delete_server_func is not None:
            return self.delete_server_func(project_id, region, server_id)
        return None

    def list_servers(self,
                     project_id: str,
                     region: str,
                     label_selector: Optional[Dict[str, str]] = None) -> List[Server]:
        if self.list_servers_func is not None:
            return self.list_servers_func(project_id, region, label_selector)
        return []

    def get_nics_for_server(self, project_id: str, region: str, server_id: str) -> List[NIC]:
        if self.get_nics_func is not None:
            return self.get_nics_func(project_id, region, server_id)
        return []

    def update_nic(self,
                   project_id: str,
                   region: str,
                   network_id: str,
                   nic_id: str,
                   allowed_addresses: List[str]) -> NIC:
        if self.update_nic_func is not None:
            return self.update_nic_func(project_id, region, network_id, nic_id, allowed_addresses)
        return NIC(id=nic_id, network_id=network_id, allowed_addresses=list(allowed_addresses))
