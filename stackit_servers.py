#!/usr/bin/env python3
"""
STACKIT Server Tool

Inspect and manage the servers a machine-controller-manager driver creates in
STACKIT, using the same client the driver uses.

Usage:
    python stackit_servers.py list --project <id> --region eu01
    python stackit_servers.py list --label mcm.gardener.cloud/machine=worker-1
    python stackit_servers.py get <server-id> --format json
    python stackit_servers.py delete <server-id>
    python stackit_servers.py nics <server-id>
    python stackit_servers.py allow <server-id> --address 10.0.0.0/24
    python stackit_servers.py list --secret shoot--foo/cloudprovider
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from stackit_mcm.clients import StackitClient
from stackit_mcm.config import KubernetesConfig, load_environment, setup_logging
from stackit_mcm.credentials import MachineSecretLoader
from stackit_mcm.errors import ClientCreationError
from stackit_mcm.formatters import ResourceFormatter
from stackit_mcm.repositories import ClientFactory, ClientKind
from stackit_mcm.services import (
    delete_server_if_exists,
    ensure_allowed_addresses,
    get_server_by_name,
)

logger = logging.getLogger(__name__)


def parse_labels(values: Optional[List[str]]) -> Optional[Dict[str, str]]:
    """Turn repeated key=value arguments into a label selector."""
    if not values:
        return None

    labels = {}
    for value in values:
        key, sep, label_value = value.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"invalid label '{value}', expected key=value")
        labels[key] = label_value
    return labels


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inspect and manage STACKIT servers and NICs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Credentials:
  --key-file PATH        service account key (or STACKIT_SERVICE_ACCOUNT_KEY_PATH)
  --secret NS/NAME       read project, region and key from a Kubernetes Secret
  STACKIT_NO_AUTH=true   talk to a mock endpoint without authentication
        """
    )

    parser.add_argument("--project", default=os.getenv("STACKIT_PROJECT_ID"), help="Project UUID")
    parser.add_argument("--region", default=os.getenv("STACKIT_REGION"), help="Region, e.g. eu01")
    parser.add_argument("--key-file", "-k", default=os.getenv("STACKIT_SERVICE_ACCOUNT_KEY_PATH"),
                        help="Path to serviceaccount.json")
    parser.add_argument("--secret", "-s", help="Kubernetes Secret holding the credentials (namespace/name)")
    parser.add_argument("--kubeconfig", default=KubernetesConfig.KUBECONFIG or None, help="Path to kubeconfig")
    parser.add_argument("--mock", action="store_true", help="Use the in-memory mock client")
    parser.add_argument("--format", "-f", choices=["list", "table", "json"], default="list",
                        help="Output format: list (default), table, or json")
    parser.add_argument("--env-file", "-e", help="Path to .env file")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List servers")
    list_parser.add_argument("--label", "-l", action="append", help="Label selector key=value (repeatable)")

    get_parser = subparsers.add_parser("get", help="Show one server")
    get_parser.add_argument("server_id", nargs="?", help="Server UUID")
    get_parser.add_argument("--name", help="Look up by machine name instead of ID")

    delete_parser = subparsers.add_parser("delete", help="Delete a server (no error if already gone)")
    delete_parser.add_argument("server_id", help="Server UUID")

    nics_parser = subparsers.add_parser("nics", help="List NICs of a server")
    nics_parser.add_argument("server_id", help="Server UUID")

    allow_parser = subparsers.add_parser("allow", help="Add allowed addresses to a server's NICs")
    allow_parser.add_argument("server_id", help="Server UUID")
    allow_parser.add_argument("--address", "-a", action="append", required=True,
                              help="Address or CIDR to allow (repeatable)")
    allow_parser.add_argument("--network-id", default="", help="Only touch NICs in this network")
    allow_parser.add_argument("--nic-id", action="append", help="Only touch these NICs (repeatable)")

    return parser


def resolve_credentials(args: argparse.Namespace) -> Tuple[str, str, str]:
    """
    Work out project, region and service account key.

    A Secret fills in whatever is not given on the command line.
    """
    project, region, key = args.project or "", args.region or "", ""

    if args.secret:
        namespace, _, name = args.secret.rpartition("/")
        loader = MachineSecretLoader(kubeconfig=args.kubeconfig, timeout=KubernetesConfig.TIMEOUT)
        secret = loader.load(
            namespace or KubernetesConfig.NAMESPACE,
            name,
            require_service_account_key=not args.mock
        )
        project = project or secret.project_id
        region = region or secret.region
        key = secret.service_account_key

    if args.key_file:
        key = Path(args.key_file).read_text()

    if not project or not region:
        raise ValueError("project and region are required (use --project/--region or --secret)")

    return project, region, key


def run(args: argparse.Namespace, client: StackitClient, project: str, region: str) -> str:
    """Execute one command and return its formatted output."""
    formatter = ResourceFormatter(output_format=args.format)

    if args.command == "list":
        servers = client.list_servers(project, region, parse_labels(args.label))
        return formatter.format_servers(servers)

    if args.command == "get":
        if args.name:
            server = get_server_by_name(client, project, region, args.name)
        elif args.server_id:
            server = client.get_server(project, region, args.server_id)
        else:
            raise ValueError("either a server ID or --name is required")
        return formatter.format_servers([server])

    if args.command == "delete":
        if delete_server_if_exists(client, project, region, args.server_id):
            return f"Server {args.server_id} deleted."
        return f"Server {args.server_id} not found, nothing to delete."

    if args.command == "nics":
        return formatter.format_nics(client.get_nics_for_server(project, region, args.server_id))

    if args.command == "allow":
        updated = ensure_allowed_addresses(
            client,
            project,
            region,
            args.server_id,
            args.address,
            network_id=args.network_id,
            nic_ids=args.nic_id
        )
        return f"Updated {updated} NIC(s)."

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    load_environment(args.env_file)
    setup_logging(verbose=args.verbose)

    try:
        project, region, key = resolve_credentials(args)
        kind = ClientKind.MOCK if args.mock else ClientKind.SDK
        client = ClientFactory.create_client(kind, key)
    except ClientCreationError as e:
        logger.error(f"Failed to initialize client: {e}")
        print(f"\n❌ Error initializing client: {e}")
        print("\nPlease check your service account key and STACKIT_* settings.")
        sys.exit(1)
    except (ValueError, LookupError, OSError) as e:
        logger.error(f"Failed to resolve credentials: {e}")
        print(f"\n❌ {e}")
        sys.exit(1)

    with client:
        try:
            print(run(args, client, project, region))
        except Exception as e:
            logger.error(f"Command '{args.command}' failed: {e}", exc_info=args.verbose)
            print(f"\n❌ {args.command} failed: {e}")
            sys.exit(1)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\nCancelled by user.")
        sys.exit(130)
