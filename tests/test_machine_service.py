"""Tests for the caller-side machine policies built on StackitClient."""

from unittest.mock import MagicMock, patch

import pytest

from stackit_mcm.clients import MockStackitClient, new_stackit_client
from stackit_mcm.config import StackitConfig
from stackit_mcm.errors import GenericOpenAPIError, ServerNotFoundError, TokenRequestError
from stackit_mcm.models import NIC, Server
from stackit_mcm.services import (
    MACHINE_LABEL,
    delete_server_if_exists,
    ensure_allowed_addresses,
    find_server_by_name,
    get_server_by_name,
)

PROJECT = "proj-1"
REGION = "eu01"


def _server(server_id: str, name: str) -> Server:
    return Server(id=server_id, name=name, status="ACTIVE", labels={MACHINE_LABEL: name})


class TestFindServerByName:
    def test_found(self):
        client = MockStackitClient(list_servers_func=lambda p, r, selector: [_server("1", "m1")])
        assert find_server_by_name(client, PROJECT, REGION, "m1").id == "1"

    def test_uses_machine_label(self):
        client = MagicMock()
        client.list_servers.return_value = []
        find_server_by_name(client, PROJECT, REGION, "m1")
        client.list_servers.assert_called_once_with(PROJECT, REGION, {MACHINE_LABEL: "m1"})

    def test_not_found(self):
        assert find_server_by_name(MockStackitClient(), PROJECT, REGION, "m1") is None

    def test_ambiguous(self):
        client = MockStackitClient(
            list_servers_func=lambda p, r, selector: [_server("1", "m1"), _server("2", "m1")]
        )
        with pytest.raises(ValueError, match="2 servers found"):
            find_server_by_name(client, PROJECT, REGION, "m1")

    def test_get_server_by_name_missing(self):
        with pytest.raises(ServerNotFoundError):
            get_server_by_name(MockStackitClient(), PROJECT, REGION, "m1")

    def test_get_server_by_name_found(self):
        client = MockStackitClient(list_servers_func=lambda p, r, selector: [_server("1", "m1")])
        assert get_server_by_name(client, PROJECT, REGION, "m1").name == "m1"


class TestDeleteServerIfExists:
    def test_deleted(self):
        assert delete_server_if_exists(MockStackitClient(), PROJECT, REGION, "s1") is True

    def test_already_gone(self):
        def delete_server(project_id, region, server_id):
            raise GenericOpenAPIError(404, "Not Found")

        client = MockStackitClient(delete_server_func=delete_server)
        assert delete_server_if_exists(client, PROJECT, REGION, "s1") is False

    def test_wrapped_not_found(self):
        def delete_server(project_id, region, server_id):
            try:
                raise GenericOpenAPIError(404, "Not Found")
            except GenericOpenAPIError as e:
                raise RuntimeError("delete failed") from e

        client = MockStackitClient(delete_server_func=delete_server)
        assert delete_server_if_exists(client, PROJECT, REGION, "s1") is False

    def test_other_errors_propagate(self):
        def delete_server(project_id, region, server_id):
            raise GenericOpenAPIError(500, "Internal Server Error")

        client = MockStackitClient(delete_server_func=delete_server)
        with pytest.raises(GenericOpenAPIError) as exc_info:
            delete_server_if_exists(client, PROJECT, REGION, "s1")
        assert exc_info.value.status_code == 500

    def test_token_endpoint_404_is_not_treated_as_gone(self, service_account_key, make_response):
        client = new_stackit_client(service_account_key, config=StackitConfig(token_endpoint="https://token.test/missing"))
        auth = client.iaas_client._session.auth
        send = MagicMock(side_effect=AssertionError("IaaS API must not be reached"))

        with patch.object(auth._token_session, "post", return_value=make_response(404, reason="Not Found")), \
                patch.object(client.iaas_client._session, "send", send):
            with pytest.raises(TokenRequestError):
                delete_server_if_exists(client, PROJECT, REGION, "s1")

        send.assert_not_called()


class TestEnsureAllowedAddresses:
    def setup_method(self):
        self.updates = []

    def _client(self, nics):
        def update_nic(project_id, region, network_id, nic_id, addresses):
            self.updates.append((network_id, nic_id, list(addresses)))
            return NIC(id=nic_id, network_id=network_id, allowed_addresses=list(addresses))

        return MockStackitClient(get_nics_func=lambda p, r, s: nics, update_nic_func=update_nic)

    def test_appends_missing_addresses(self):
        client = self._client([NIC(id="nic-1", network_id="net-1", allowed_addresses=["10.0.0.0/24"])])

        count = ensure_allowed_addresses(client, PROJECT, REGION, "s1", ["10.0.0.0/24", "10.1.0.0/16"])

        assert count == 1
        assert self.updates == [("net-1", "nic-1", ["10.0.0.0/24", "10.1.0.0/16"])]

    def test_nothing_to_do(self):
        client = self._client([NIC(id="nic-1", network_id="net-1", allowed_addresses=["10.0.0.0/24"])])
        assert ensure_allowed_addresses(client, PROJECT, REGION, "s1", ["10.0.0.0/24"]) == 0
        assert self.updates == []

    def test_no_addresses_requested(self):
        client = MagicMock()
        assert ensure_allowed_addresses(client, PROJECT, REGION, "s1", []) == 0
        client.get_nics_for_server.assert_not_called()

    def test_server_without_nics(self):
        with pytest.raises(LookupError):
            ensure_allowed_addresses(self._client([]), PROJECT, REGION, "s1", ["10.0.0.0/24"])

    def test_restricted_to_network(self):
        client = self._client([
            NIC(id="nic-1", network_id="net-1"),
            NIC(id="nic-2", network_id="net-2"),
        ])

        count = ensure_allowed_addresses(client, PROJECT, REGION, "s1", ["10.0.0.0/24"], network_id="net-2")

        assert count == 1
        assert self.updates == [("net-2", "nic-2", ["10.0.0.0/24"])]

    def test_restricted_to_nic_ids(self):
        client = self._client([
            NIC(id="nic-1", network_id="net-1"),
            NIC(id="nic-2", network_id="net-1"),
        ])

        count = ensure_allowed_addresses(client, PROJECT, REGION, "s1", ["10.0.0.0/24"], nic_ids=["nic-1"])

        assert count == 1
        assert self.updates[0][1] == "nic-1"

    def test_all_nics_without_restriction(self):
        client = self._client([
            NIC(id="nic-1", network_id="net-1"),
            NIC(id="nic-2", network_id="net-2"),
        ])
        assert ensure_allowed_addresses(client, PROJECT, REGION, "s1", ["10.0.0.0/24"]) == 2

    def test_repeated_address_is_added_once(self):
        client = self._client([NIC(id="nic-1", network_id="net-1")])

        count = ensure_allowed_addresses(client, PROJECT, REGION, "s1", ["10.0.0.0/8", "10.0.0.0/8"])

        assert count == 1
        assert self.updates == [("net-1", "nic-1", ["10.0.0.0/8"])]

    def test_repeated_existing_address_is_not_duplicated(self):
        client = self._client([NIC(id="nic-1", network_id="net-1", allowed_addresses=["10.0.0.0/8"])])

        ensure_allowed_addresses(client, PROJECT, REGION, "s1", ["10.1.0.0/16", "10.0.0.0/8", "10.1.0.0/16"])

        assert self.updates == [("net-1", "nic-1", ["10.0.0.0/8", "10.1.0.0/16"])]
