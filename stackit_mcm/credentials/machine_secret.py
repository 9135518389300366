"""
Machine credentials stored in a Kubernetes Secret.

The machine-controller-manager hands the driver a Secret per MachineClass
holding the project, region and service account key. This module parses and
validates that Secret and can read it straight from a cluster with the
Kubernetes Python client.
"""

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from kubernetes import client, config
from kubernetes.client.rest import ApiException

logger = logging.getLogger(__name__)

PROJECT_ID_KEY = "project-id"
REGION_KEY = "region"
SERVICE_ACCOUNT_KEY = "serviceaccount.json"
NETWORK_ID_KEY = "networkId"
USER_DATA_KEY = "userData"

UUID_PATTERN = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")
REGION_PATTERN = re.compile(r"^[a-z]{2}\d{2}(-\d+)?$")


class SecretValidationError(ValueError):
    """Secret is missing fields or holds invalid values"""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("invalid machine secret:\n" + "\n".join(f"  - {e}" for e in errors))


@dataclass(frozen=True)
class MachineSecret:
    """
    Credentials and defaults from a machine Secret.

    Attributes:
        project_id: STACKIT project UUID
        region: STACKIT region (e.g. eu01)
        service_account_key: Content of serviceaccount.json
        network_id: Optional default network for new servers
        user_data: Optional default user data for new servers
    """
    project_id: str
    region: str
    service_account_key: str
    network_id: str = ""
    user_data: str = ""

    @classmethod
    def from_data(cls,
                  data: Dict[str, Union[str, bytes]],
                  encoded: bool = True,
                  require_service_account_key: bool = True) -> 'MachineSecret':
        """
        Build from Secret data.

        Args:
            data: Secret data map
            encoded: Values are base64 encoded (as in V1Secret.data)
            require_service_account_key: Fail when serviceaccount.json is
                missing (disable for unauthenticated local setups)

        Returns:
            Validated MachineSecret

        Raises:
            SecretValidationError: If required values are missing or invalid
        """
        values = {}
        undecodable = []
        for key, value in (data or {}).items():
            try:
                values[key] = _decode(value, encoded)
            except (binascii.Error, UnicodeDecodeError):
                undecodable.append(key)

        secret = cls(
            project_id=values.get(PROJECT_ID_KEY, "").strip(),
            region=values.get(REGION_KEY, "").strip(),
            service_account_key=values.get(SERVICE_ACCOUNT_KEY, ""),
            network_id=values.get(NETWORK_ID_KEY, "").strip(),
            user_data=values.get(USER_DATA_KEY, ""),
        )

        errors = [f"secret '{key}' is not valid base64-encoded UTF-8" for key in undecodable]
        # an undecodable field is reported once, not again as missing
        errors.extend(
            error for error in secret.validate(require_service_account_key)
            if not any(f"'{key}'" in error for key in undecodable)
        )
        if errors:
            raise SecretValidationError(errors)
        return secret

    def validate(self, require_service_account_key: bool = True) -> List[str]:
        """Return a list of validation errors (empty when valid)."""
        errors = []

        if not self.project_id:
            errors.append(f"secret must contain a non-empty '{PROJECT_ID_KEY}' field")
        elif not UUID_PATTERN.match(self.project_id):
            errors.append(f"secret '{PROJECT_ID_KEY}' must be a valid UUID")

        if not self.region:
            errors.append(f"secret must contain a non-empty '{REGION_KEY}' field")
        elif not REGION_PATTERN.match(self.region):
            errors.append(f"secret '{REGION_KEY}' has invalid format: {self.region}")

        if require_service_account_key and not self.service_account_key.strip():
            errors.append(f"secret must contain a non-empty '{SERVICE_ACCOUNT_KEY}' field")

        if self.network_id and not UUID_PATTERN.match(self.network_id):
            errors.append(f"secret '{NETWORK_ID_KEY}' must be a valid UUID")

        return errors


def _decode(value: Union[str, bytes, None], encoded: bool) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        raw = value
    else:
        raw = value.encode("utf-8")
    if encoded:
        raw = base64.b64decode(raw)
    return raw.decode("utf-8")


class MachineSecretLoader:
    """Reads machine Secrets from a Kubernetes cluster"""

    def __init__(self, kubeconfig: Optional[str] = None, timeout: int = 30):
        """
        Args:
            kubeconfig: Path to kubeconfig; in-cluster config is tried when
                no kubeconfig can be loaded
            timeout: Request timeout in seconds
        """
        self.kubeconfig = kubeconfig
        self.timeout = timeout
        self._core_api: Optional[client.CoreV1Api] = None

    def _api(self) -> client.CoreV1Api:
        if self._core_api is None:
            try:
                config.load_kube_config(config_file=self.kubeconfig or None)
            except config.ConfigException:
                logger.debug("No kubeconfig found, falling back to in-cluster configuration")
                config.load_incluster_config()
            self._core_api = client.CoreV1Api()
        return self._core_api

    def load(self, namespace: str, name: str, require_service_account_key: bool = True) -> MachineSecret:
        """
        Read and validate a machine Secret.

        Raises:
            LookupError: If the Secret does not exist
            ApiException: For any other Kubernetes API error
            SecretValidationError: If the Secret content is invalid
        """
        logger.info(f"Reading machine secret {namespace}/{name}")
        try:
            secret = self._api().read_namespaced_secret(
                name=name,
                namespace=namespace,
                _request_timeout=self.timeout
            )
        except ApiException as e:
            if e.status == 404:
                raise LookupError(f"secret {namespace}/{name} not found") from e
            logger.error(f"Kubernetes API error reading secret {namespace}/{name}: {e.status} - {e.reason}")
            raise

        return MachineSecret.from_data(
            secret.data or {},
            encoded=True,
            require_service_account_key=require_service_account_key
        )
