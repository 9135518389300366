"""
STACKIT IaaS API handle.

One requests.Session bound to one endpoint and one set of credentials. Every
call is a single HTTP round-trip; non-2xx responses raise GenericOpenAPIError
and transport failures propagate as requests exceptions. No retries.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests
from requests.auth import AuthBase

from .exceptions import GenericOpenAPIError

logger = logging.getLogger(__name__)

API_VERSION = "v2"
USER_AGENT = "stackit-mcm-python"


class IaaSAPIClient:
    """Low-level client for the server and NIC endpoints of the IaaS API"""

    def __init__(self,
                 endpoint: str,
                 auth: Optional[AuthBase] = None,
                 timeout: int = 30,
                 verify: bool = True):
        """
        Initialize the API handle.

        Args:
            endpoint: Base URL, e.g. https://iaas.api.stackit.cloud
            auth: Optional requests auth hook (None for unauthenticated mode)
            timeout: Per-request timeout in seconds
            verify: Verify TLS certificates
        """
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self._auth = auth
        self._session = requests.Session()
        self._session.verify = verify
        self._session.auth = auth
        self._session.headers.update({
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        })

    @property
    def authenticated(self) -> bool:
        return self._auth is not None

    def _project_path(self, project_id: str, region: str, *parts: str) -> str:
        segments = [API_VERSION, "projects", project_id, "regions", region, *parts]
        return "/".join(quote(segment, safe="") for segment in segments)

    def _request(self,
                 method: str,
                 path: str,
                 params: Optional[Dict[str, str]] = None,
                 payload: Optional[Dict[str, Any]] = None) -> Optional[Any]:
        url = f"{self.endpoint}/{path}"
        logger.debug(f"{method} {url} params={params}")

        response = self._session.request(
            method,
            url,
            params=params,
            json=payload,
            timeout=self.timeout,
        )

        if not response.ok:
            logger.debug(f"{method} {url} returned {response.status_code}")
            raise GenericOpenAPIError(response.status_code, response.reason or "", response.content)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # ------------------------------------------------------------------
    # Servers
    # ------------------------------------------------------------------

    def create_server(self, project_id: str, region: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", self._project_path(project_id, region, "servers"), payload=payload) or {}

    def get_server(self, project_id: str, region: str, server_id: str) -> Dict[str, Any]:
        return self._request("GET", self._project_path(project_id, region, "servers", server_id)) or {}

    def delete_server(self, project_id: str, region: str, server_id: str) -> None:
        self._request("DELETE", self._project_path(project_id, region, "servers", server_id))

    def list_servers(self,
                     project_id: str,
                     region: str,
                     label_selector: Optional[str] = None,
                     details: bool = False) -> Dict[str, Any]:
        """
        List servers of a project.

        Args:
            project_id: Project UUID
            region: Region, e.g. eu01
            label_selector: Optional selector, e.g. "app=web,team=platform"
            details: Ask the API for full server details

        Returns:
            Raw response with an "items" list
        """
        params: Dict[str, str] = {}
        if label_selector:
            params["label_selector"] = label_selector
        if details:
            params["details"] = "true"
        return self._request("GET", self._project_path(project_id, region, "servers"), params=params or None) or {}

    # ------------------------------------------------------------------
    # Network interfaces
    # ------------------------------------------------------------------

    def list_server_nics(self, project_id: str, region: str, server_id: str) -> Dict[str, Any]:
        return self._request("GET", self._project_path(project_id, region, "servers", server_id, "nics")) or {}

    def partial_update_nic(self,
                           project_id: str,
                           region: str,
                           network_id: str,
                           nic_id: str,
                           payload: Dict[str, Any]) -> Dict[str, Any]:
        path = self._project_path(project_id, region, "networks", network_id, "nics", nic_id)
        return self._request("PATCH", path, payload=payload) or {}

    def close(self):
        """Close the underlying HTTP session"""
        self._session.close()
        if self._auth is not None and hasattr(self._auth, "close"):
            self._auth.close()
