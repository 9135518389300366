"""Tests for ClientFactory."""

import pytest

from stackit_mcm.clients import MockStackitClient, SdkStackitClient
from stackit_mcm.config import StackitConfig
from stackit_mcm.errors import ClientCreationError
from stackit_mcm.repositories import ClientFactory, ClientKind


class TestClientFactory:
    def test_supported_kinds(self):
        kinds = ClientFactory.get_supported_kinds()
        assert ClientKind.SDK in kinds
        assert ClientKind.MOCK in kinds

    def test_mock(self):
        assert isinstance(ClientFactory.create_client(ClientKind.MOCK), MockStackitClient)

    def test_sdk_no_auth(self):
        client = ClientFactory.create_client(ClientKind.SDK, "", config=StackitConfig(no_auth=True))
        assert isinstance(client, SdkStackitClient)

    def test_sdk_bad_key(self):
        with pytest.raises(ClientCreationError):
            ClientFactory.create_client(ClientKind.SDK, "not-valid-json", config=StackitConfig())

    def test_new_instance_per_call(self):
        assert ClientFactory.create_client(ClientKind.MOCK) is not ClientFactory.create_client(ClientKind.MOCK)

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown client kind"):
            ClientFactory.create_client("bogus")

    def test_register_builder(self, monkeypatch):
        monkeypatch.setattr(ClientFactory, "_BUILDERS", dict(ClientFactory._BUILDERS))
        sentinel = MockStackitClient()
        ClientFactory.register_builder(ClientKind.MOCK, lambda key, config: sentinel)
        assert ClientFactory.create_client(ClientKind.MOCK) is sentinel
