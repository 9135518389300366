"""Tests for the low-level IaaS API handle."""

from unittest.mock import MagicMock, patch

import pytest

from stackit_mcm.iaas import GenericOpenAPIError, IaaSAPIClient

ENDPOINT = "https://iaas.test"
BASE = f"{ENDPOINT}/v2/projects/proj-1/regions/eu01"


@pytest.fixture
def api():
    return IaaSAPIClient(ENDPOINT + "/", timeout=12)


class TestRequests:
    def test_endpoint_trailing_slash_stripped(self, api):
        assert api.endpoint == ENDPOINT

    def test_unauthenticated_by_default(self, api):
        assert api.authenticated is False
        assert api._session.auth is None

    def test_default_headers(self, api):
        assert api._session.headers["Accept"] == "application/json"

    def test_get_server(self, api, make_response):
        with patch.object(api._session, "request", return_value=make_response(200, {"id": "s1"})) as request:
            assert api.get_server("proj-1", "eu01", "s1") == {"id": "s1"}

        request.assert_called_once_with("GET", f"{BASE}/servers/s1", params=None, json=None, timeout=12)

    def test_path_segments_are_quoted(self, api, make_response):
        with patch.object(api._session, "request", return_value=make_response(200, {})) as request:
            api.get_server("proj-1", "eu01", "a/b")

        assert request.call_args.args[1] == f"{BASE}/servers/a%2Fb"

    def test_create_server_sends_payload(self, api, make_response):
        with patch.object(api._session, "request", return_value=make_response(201, {"id": "s1"})) as request:
            api.create_server("proj-1", "eu01", {"name": "m"})

        assert request.call_args.args == ("POST", f"{BASE}/servers")
        assert request.call_args.kwargs["json"] == {"name": "m"}

    def test_delete_no_content(self, api, make_response):
        with patch.object(api._session, "request", return_value=make_response(204)) as request:
            assert api.delete_server("proj-1", "eu01", "s1") is None

        assert request.call_args.args == ("DELETE", f"{BASE}/servers/s1")

    def test_list_servers_with_selector(self, api, make_response):
        with patch.object(api._session, "request", return_value=make_response(200, {"items": []})) as request:
            api.list_servers("proj-1", "eu01", label_selector="app=web", details=True)

        assert request.call_args.kwargs["params"] == {"label_selector": "app=web", "details": "true"}

    def test_list_servers_empty_body(self, api, make_response):
        with patch.object(api._session, "request", return_value=make_response(200)):
            assert api.list_servers("proj-1", "eu01") == {}

    def test_list_server_nics(self, api, make_response):
        with patch.object(api._session, "request", return_value=make_response(200, {"items": []})) as request:
            api.list_server_nics("proj-1", "eu01", "s1")

        assert request.call_args.args == ("GET", f"{BASE}/servers/s1/nics")

    def test_partial_update_nic(self, api, make_response):
        with patch.object(api._session, "request", return_value=make_response(200, {"id": "nic-1"})) as request:
            api.partial_update_nic("proj-1", "eu01", "net-1", "nic-1", {"allowedAddresses": []})

        assert request.call_args.args == ("PATCH", f"{BASE}/networks/net-1/nics/nic-1")
        assert request.call_args.kwargs["json"] == {"allowedAddresses": []}


class TestErrors:
    @pytest.mark.parametrize("status", [400, 403, 404, 409, 500, 503])
    def test_non_2xx_raises(self, api, make_response, status):
        response = make_response(status, {"message": "nope"}, "Error")
        with patch.object(api._session, "request", return_value=response):
            with pytest.raises(GenericOpenAPIError) as exc_info:
                api.get_server("proj-1", "eu01", "s1")

        assert exc_info.value.status_code == status
        assert exc_info.value.error_message == "Error"
        assert b"nope" in exc_info.value.body


class TestClose:
    def test_closes_session_and_auth(self):
        auth = MagicMock()
        api = IaaSAPIClient(ENDPOINT, auth=auth)
        assert api.authenticated is True

        with patch.object(api._session, "close") as close:
            api.close()

        close.assert_called_once()
        auth.close.assert_called_once()
