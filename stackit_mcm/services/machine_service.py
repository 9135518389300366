"""
Machine Service - caller-side policies on top of StackitClient.

These are the decisions the driver makes about client results: how a machine
name maps to a server, when a 404 on delete counts as success, and how NIC
allowed addresses are reconciled. The client itself makes none of them.
"""

import logging
from typing import List, Optional

from ..clients import StackitClient
from ..errors import ServerNotFoundError, is_not_found
from ..models import Server

logger = logging.getLogger(__name__)

MACHINE_LABEL = "mcm.gardener.cloud/machine"


def find_server_by_name(client: StackitClient,
                        project_id: str,
                        region: str,
                        name: str) -> Optional[Server]:
    """
    Find the server created for a machine.

    Args:
        client: STACKIT client
        project_id: Project UUID
        region: Region
        name: Machine name (value of the machine label)

    Returns:
        The server, or None if no server carries the label

    Raises:
        ValueError: If more than one server carries the label
    """
    servers = client.list_servers(project_id, region, {MACHINE_LABEL: name})

    if len(servers) > 1:
        raise ValueError(f"{len(servers)} servers found for server name {name}")

    if servers:
        return servers[0]
    return None


def get_server_by_name(client: StackitClient, project_id: str, region: str, name: str) -> Server:
    """Like find_server_by_name, but raises ServerNotFoundError when missing."""
    server = find_server_by_name(client, project_id, region, name)
    if server is None:
        raise ServerNotFoundError(f"no server found for machine {name}")
    return server


def delete_server_if_exists(client: StackitClient, project_id: str, region: str, server_id: str) -> bool:
    """
    Delete a server, treating "already gone" as success.

    Returns:
        True if the server was deleted, False if it did not exist

    Raises:
        Any backend error other than not-found, unchanged
    """
    try:
        client.delete_server(project_id, region, server_id)
    except Exception as e:
        if is_not_found(e):
            logger.info(f"Server {server_id} not found, treating delete as done")
            return False
        raise
    return True


def ensure_allowed_addresses(client: StackitClient,
                             project_id: str,
                             region: str,
                             server_id: str,
                             allowed_addresses: List[str],
                             network_id: str = "",
                             nic_ids: Optional[List[str]] = None) -> int:
    """
    Make sure every address is allowed on the server's NICs.

    Only NICs in network_id or listed in nic_ids are touched; with neither
    given, every NIC of the server is. Existing addresses are kept and the
    missing ones appended; NICs that already allow everything are not
    updated.

    Args:
        client: STACKIT client
        project_id: Project UUID
        region: Region
        server_id: Server UUID
        allowed_addresses: Addresses/CIDRs that must be allowed
        network_id: Optional network restriction
        nic_ids: Optional NIC restriction

    Returns:
        Number of NICs updated

    Raises:
        LookupError: If the server has no NICs
    """
    if not allowed_addresses:
        return 0

    nics = client.get_nics_for_server(project_id, region, server_id)
    if not nics:
        raise LookupError(f"failed to find NIC for server {server_id}")

    restricted = bool(network_id) or bool(nic_ids)
    updated = 0

    for nic in nics:
        if restricted and nic.network_id != network_id and nic.id not in (nic_ids or []):
            continue

        addresses = list(nic.allowed_addresses)
        changed = False
        for address in allowed_addresses:
            if address not in addresses:
                addresses.append(address)
                changed = True

        if not changed:
            logger.debug(f"NIC {nic.id} already allows {allowed_addresses}")
            continue

        client.update_nic(project_id, region, nic.network_id, nic.id, addresses)
        logger.info(f"Updated allowed addresses for NIC {nic.id} to {addresses}")
        updated += 1

    return updated
