"""
STACKIT client backed by the IaaS API handle.

Each instance handles one set of credentials. The API handle is created once
at construction and reused for every call; the key flow refreshes tokens on
its own.
"""

import logging
from typing import Dict, List, Optional

from ..config import StackitConfig, configure_tls_warnings
from ..converters import string_sequence_to_wire
from ..errors import ClientCreationError
from ..iaas import IaaSAPIClient, KeyFlowAuth, parse_service_account_key
from ..models import Server, NIC, CreateServerRequest
from .base_client import StackitClient

logger = logging.getLogger(__name__)


def _create_iaas_client(service_account_key: str, config: StackitConfig) -> IaaSAPIClient:
    """
    Build the IaaS API handle for one set of credentials.

    Raises:
        ServiceAccountKeyError: If authentication is on and the key is unusable
        ValueError: If a setting is invalid
    """
    auth = None
    if config.no_auth:
        logger.info("STACKIT_NO_AUTH is set, creating client without authentication")
    else:
        key = parse_service_account_key(service_account_key)
        auth = KeyFlowAuth(key, config.token_endpoint, timeout=config.request_timeout)

    if config.api_endpoint:
        logger.info(f"Using custom STACKIT API endpoint: {config.endpoint}")

    configure_tls_warnings(config)
    return IaaSAPIClient(
        config.endpoint,
        auth=auth,
        timeout=config.request_timeout,
        verify=config.verify_tls,
    )


def new_stackit_client(service_account_key: str, config: Optional[StackitConfig] = None) -> 'SdkStackitClient':
    """
    Create a STACKIT client for one service account.

    Args:
        service_account_key: Content of serviceaccount.json (ignored when
            STACKIT_NO_AUTH=true)
        config: Settings, read from the environment when omitted

    Returns:
        Ready-to-use SdkStackitClient

    Raises:
        ClientCreationError: If the key is empty, not JSON or incomplete, or
            a STACKIT_* setting is invalid
    """
    try:
        config = config or StackitConfig.from_env()
        iaas_client = _create_iaas_client(service_account_key, config)
    except ValueError as e:
        logger.error(f"Failed to create STACKIT client: {e}")
        raise ClientCreationError(e) from e

    return SdkStackitClient(iaas_client)


def _label_selector_to_query(label_selector: Optional[Dict[str, str]]) -> Optional[str]:
    if not label_selector:
        return None
    return ",".join(f"{key}={value}" for key, value in label_selector.items())


class SdkStackitClient(StackitClient):
    """StackitClient implementation talking to the STACKIT IaaS API"""

    def __init__(self, iaas_client: IaaSAPIClient):
        self._iaas_client = iaas_client

    @property
    def iaas_client(self) -> IaaSAPIClient:
        return self._iaas_client

    def create_server(self, project_id: str, region: str, request: CreateServerRequest) -> Server:
        if not request.name:
            raise ValueError("Server name cannot be empty")

        logger.debug(f"Creating server {request.name} in project {project_id} ({region})")
        data = self._iaas_client.create_server(project_id, region, request.to_wire())
        server = Server.from_wire(data)
        logger.info(f"Created server {server.name} with ID {server.id} (status: {server.status})")
        return server

    def get_server(self, project_id: str, region: str, server_id: str) -> Server:
        data = self._iaas_client.get_server(project_id, region, server_id)
        return Server.from_wire(data)

    def delete_server(self, project_id: str, region: str, server_id: str) -> None:
        self._iaas_client.delete_server(project_id, region, server_id)
        logger.info(f"Deleted server {server_id} in project {project_id}")

    def list_servers(self,
                     project_id: str,
                     region: str,
                     label_selector: Optional[Dict[str, str]] = None) -> List[Server]:
        data = self._iaas_client.list_servers(
            project_id,
            region,
            label_selector=_label_selector_to_query(label_selector),
        )
        servers = [Server.from_wire(item) for item in data.get("items") or []]
        logger.debug(f"Found {len(servers)} servers in project {project_id} (selector: {label_selector})")
        return servers

    def get_nics_for_server(self, project_id: str, region: str, server_id: str) -> List[NIC]:
        data = self._iaas_client.list_server_nics(project_id, region, server_id)
        return [NIC.from_wire(item) for item in data.get("items") or []]

    def update_nic(self,
                   project_id: str,
                   region: str,
                   network_id: str,
                   nic_id: str,
                   allowed_addresses: List[str]) -> NIC:
        # an empty list must reach the API to clear the set
        payload = {"allowedAddresses": string_sequence_to_wire(list(allowed_addresses or []))}
        data = self._iaas_client.partial_update_nic(project_id, region, network_id, nic_id, payload)
        nic = NIC.from_wire(data)
        logger.info(f"Updated allowed addresses for NIC {nic_id} to {payload['allowedAddresses']}")
        return nic

    def close(self) -> None:
        self._iaas_client.close()
