"""
Server and NIC read models - Value Object pattern.
Point-in-time snapshots decoded from IaaS API responses.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..converters import labels_from_wire, string_value


@dataclass(frozen=True)
class Server:
    """
    Immutable server snapshot.

    Attributes:
        id: Server UUID assigned by the backend
        name: Server name
        status: Backend lifecycle state (CREATING, ACTIVE, ...)
        labels: String-valued labels, None when the backend sent none
    """
    id: str
    name: str
    status: str
    labels: Optional[Dict[str, str]] = None

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> 'Server':
        return cls(
            id=string_value(data.get("id")),
            name=string_value(data.get("name")),
            status=string_value(data.get("status")),
            labels=labels_from_wire(data.get("labels")),
        )


@dataclass(frozen=True)
class NIC:
    """
    Immutable network interface snapshot.

    Attributes:
        id: NIC UUID
        network_id: UUID of the network the NIC belongs to
        allowed_addresses: Extra source addresses/CIDRs the NIC may send from
        ipv4: Primary IPv4 address, if any
        mac: MAC address, if any
    """
    id: str
    network_id: str
    allowed_addresses: List[str] = field(default_factory=list)
    ipv4: Optional[str] = None
    mac: Optional[str] = None

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> 'NIC':
        allowed = data.get("allowedAddresses") or []
        return cls(
            id=string_value(data.get("id")),
            network_id=string_value(data.get("networkId")),
            allowed_addresses=[address for address in allowed if isinstance(address, str)],
            ipv4=data.get("ipv4"),
            mac=data.get("mac"),
        )
