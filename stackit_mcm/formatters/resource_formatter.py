"""
Resource formatter - Displays servers and NICs as list, table or JSON.
"""

import json
from dataclasses import asdict
from typing import List

from .base_formatter import OutputFormatter
from ..models import Server, NIC


class ResourceFormatter(OutputFormatter):
    """
    Formatter for server and NIC listings.

    Design Pattern: Strategy Pattern implementation
    """

    def __init__(self, output_format: str = "list"):
        """
        Initialize formatter.

        Args:
            output_format: Output format type ('list', 'table', 'json')
        """
        self.output_format = output_format

    def format_servers(self, servers: List[Server]) -> str:
        if self.output_format == "json":
            return json.dumps([asdict(s) for s in servers], indent=2)

        if not servers:
            return "No servers found."

        if self.output_format == "table":
            lines = ["\n{:<38} {:<30} {:<12}".format("ID", "NAME", "STATUS"), "=" * 80]
            for server in sorted(servers, key=lambda s: s.name):
                lines.append("{:<38} {:<30} {:<12}".format(server.id, server.name, server.status))
            return "\n".join(lines)

        lines = []
        for server in sorted(servers, key=lambda s: s.name):
            lines.append(f"- {server.name} ({server.id}) [{server.status}]")
            for key, value in sorted((server.labels or {}).items()):
                lines.append(f"    {key}={value}")
        return "\n".join(lines)

    def format_nics(self, nics: List[NIC]) -> str:
        if self.output_format == "json":
            return json.dumps([asdict(n) for n in nics], indent=2)

        if not nics:
            return "No network interfaces found."

        if self.output_format == "table":
            lines = ["\n{:<38} {:<38} {:<30}".format("NIC ID", "NETWORK ID", "ALLOWED ADDRESSES"), "=" * 106]
            for nic in nics:
                lines.append("{:<38} {:<38} {:<30}".format(
                    nic.id,
                    nic.network_id,
                    ",".join(nic.allowed_addresses) or "-"
                ))
            return "\n".join(lines)

        lines = []
        for nic in nics:
            lines.append(f"- {nic.id} (network {nic.network_id}, ipv4 {nic.ipv4 or '-'})")
            for address in nic.allowed_addresses:
                lines.append(f"    allowed: {address}")
        return "\n".join(lines)
