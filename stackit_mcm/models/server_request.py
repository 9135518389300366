"""
Create-server request model and its wire payload builder.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..converters import (
    box,
    put_ref,
    labels_to_wire,
    metadata_to_wire,
    string_sequence_to_wire,
    user_data_to_wire,
)


@dataclass(frozen=True)
class ServerNetworkingRequest:
    """
    Networking union: network_id (auto-create a NIC) or nic_ids (attach
    existing NICs). network_id wins when both are set.
    """
    network_id: str = ""
    nic_ids: Optional[List[str]] = None

    def to_wire(self) -> Dict[str, Any]:
        if self.network_id:
            return {"networkId": self.network_id}
        if self.nic_ids:
            return {"nicIds": string_sequence_to_wire(self.nic_ids)}
        # the API requires the networking object even when empty
        return {}


@dataclass(frozen=True)
class BootVolumeSourceRequest:
    type: str
    id: str


@dataclass(frozen=True)
class BootVolumeRequest:
    size: int = 0
    performance_class: str = ""
    delete_on_termination: Optional[bool] = None
    source: Optional[BootVolumeSourceRequest] = None

    def to_wire(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.size > 0:
            put_ref(payload, "size", box(self.size))
        if self.performance_class:
            put_ref(payload, "performanceClass", box(self.performance_class))
        if self.delete_on_termination is not None:
            put_ref(payload, "deleteOnTermination", box(self.delete_on_termination))
        if self.source is not None:
            payload["source"] = {"type": self.source.type, "id": self.source.id}
        return payload


@dataclass(frozen=True)
class AgentRequest:
    provisioned: Optional[bool] = None


@dataclass(frozen=True)
class CreateServerRequest:
    """
    Parameters for creating a server.

    Everything except name is passed through to the backend as-is. Empty
    strings and None are left out of the payload.
    """
    name: str
    machine_type: str = ""
    image_id: str = ""
    labels: Optional[Dict[str, str]] = None
    networking: Optional[ServerNetworkingRequest] = None
    security_groups: Optional[List[str]] = None
    user_data: str = ""
    boot_volume: Optional[BootVolumeRequest] = None
    volumes: Optional[List[str]] = None
    keypair_name: str = ""
    availability_zone: str = ""
    affinity_group: str = ""
    service_account_mails: Optional[List[str]] = None
    agent: Optional[AgentRequest] = None
    metadata: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        """Validate invariants"""
        if not self.name:
            raise ValueError("Server name cannot be empty")

    def to_wire(self) -> Dict[str, Any]:
        """Build the JSON payload for POST .../servers"""
        payload: Dict[str, Any] = {}
        put_ref(payload, "name", box(self.name))
        if self.machine_type:
            put_ref(payload, "machineType", box(self.machine_type))
        if self.image_id:
            put_ref(payload, "imageId", box(self.image_id))

        labels = labels_to_wire(self.labels)
        if labels is not None:
            payload["labels"] = labels

        if self.networking is not None:
            payload["networking"] = self.networking.to_wire()

        if self.security_groups:
            payload["securityGroups"] = string_sequence_to_wire(self.security_groups)

        user_data = user_data_to_wire(self.user_data)
        if user_data is not None:
            payload["userData"] = user_data

        if self.boot_volume is not None:
            payload["bootVolume"] = self.boot_volume.to_wire()
        if self.volumes:
            payload["volumes"] = string_sequence_to_wire(self.volumes)

        if self.keypair_name:
            put_ref(payload, "keypairName", box(self.keypair_name))
        if self.availability_zone:
            put_ref(payload, "availabilityZone", box(self.availability_zone))
        if self.affinity_group:
            put_ref(payload, "affinityGroup", box(self.affinity_group))
        if self.service_account_mails:
            payload["serviceAccountMails"] = string_sequence_to_wire(self.service_account_mails)

        if self.agent is not None:
            agent: Dict[str, Any] = {}
            if self.agent.provisioned is not None:
                put_ref(agent, "provisioned", box(self.agent.provisioned))
            payload["agent"] = agent

        metadata = metadata_to_wire(self.metadata)
        if metadata is not None:
            payload["metadata"] = metadata

        return payload
