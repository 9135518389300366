"""
Service account key flow for the STACKIT API.

The key's private key signs a short-lived JWT assertion which is exchanged at
the token endpoint for an access token. The access token is cached and
refreshed lazily shortly before it expires.
"""

import base64
import json
import logging
import threading
import time
import uuid
from typing import Optional

import requests
from requests.auth import AuthBase
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from pydantic import ValidationError

from ..models.service_account import ServiceAccountKey
from .exceptions import ServiceAccountKeyError, TokenRequestError

logger = logging.getLogger(__name__)

JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"
ASSERTION_LIFETIME_SECONDS = 600
TOKEN_EXPIRY_LEEWAY_SECONDS = 5
DEFAULT_TOKEN_LIFETIME_SECONDS = 600


def parse_service_account_key(raw_key: str) -> ServiceAccountKey:
    """
    Parse and validate a service account key JSON document.

    Args:
        raw_key: Content of serviceaccount.json

    Returns:
        Validated ServiceAccountKey

    Raises:
        ServiceAccountKeyError: If the key is empty, not JSON, or incomplete
    """
    if not raw_key or not raw_key.strip():
        raise ServiceAccountKeyError("service account key is empty")

    try:
        data = json.loads(raw_key)
    except json.JSONDecodeError as e:
        raise ServiceAccountKeyError(f"service account key is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ServiceAccountKeyError("service account key must be a JSON object")

    try:
        return ServiceAccountKey.model_validate(data)
    except ValidationError as e:
        raise ServiceAccountKeyError(f"service account key is missing required fields: {e}") from e


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


class KeyFlowAuth(AuthBase):
    """
    requests auth hook that attaches a bearer token from the key flow.

    Safe to share across threads: token refresh is serialized by a lock.
    """

    def __init__(self, key: ServiceAccountKey, token_endpoint: str, timeout: int = 30):
        self._key = key
        self._token_endpoint = token_endpoint
        self._timeout = timeout
        self._private_key = self._load_private_key(key.credentials.private_key)
        self._token_session = requests.Session()
        self._access_token: Optional[str] = None
        self._expires_at = 0.0
        self._lock = threading.Lock()

    @staticmethod
    def _load_private_key(pem: str) -> rsa.RSAPrivateKey:
        try:
            private_key = serialization.load_pem_private_key(pem.encode("utf-8"), password=None)
        except (ValueError, TypeError) as e:
            raise ServiceAccountKeyError(f"invalid private key in service account key: {e}") from e
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise ServiceAccountKeyError("service account private key must be an RSA key")
        return private_key

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        request.headers["Authorization"] = f"Bearer {self.access_token()}"
        return request

    def access_token(self) -> str:
        """Return a valid access token, fetching a new one if needed."""
        with self._lock:
            if self._access_token and time.time() < self._expires_at - TOKEN_EXPIRY_LEEWAY_SECONDS:
                return self._access_token
            self._refresh()
            return self._access_token

    def build_assertion(self) -> str:
        """Create the RS512-signed JWT assertion for the token request."""
        credentials = self._key.credentials
        now = int(time.time())
        header = {"alg": "RS512", "typ": "JWT", "kid": credentials.kid}
        claims = {
            "iss": credentials.iss,
            "sub": credentials.sub,
            "aud": credentials.aud,
            "jti": str(uuid.uuid4()),
            "iat": now,
            "exp": now + ASSERTION_LIFETIME_SECONDS,
        }
        signing_input = ".".join([
            _b64url(json.dumps(header, separators=(",", ":")).encode("utf-8")),
            _b64url(json.dumps(claims, separators=(",", ":")).encode("utf-8")),
        ])
        signature = self._private_key.sign(signing_input.encode("ascii"), padding.PKCS1v15(), hashes.SHA512())
        return f"{signing_input}.{_b64url(signature)}"

    def _refresh(self):
        logger.debug(f"Requesting access token for service account key {self._key.id}")
        response = self._token_session.post(
            self._token_endpoint,
            data={"grant_type": JWT_BEARER_GRANT, "assertion": self.build_assertion()},
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            timeout=self._timeout,
        )
        if not response.ok:
            raise TokenRequestError(response.status_code, response.reason or "", response.content)

        try:
            data = response.json()
        except ValueError as e:
            raise TokenRequestError(response.status_code, "token response is not JSON", response.content) from e

        access_token = data.get("access_token") if isinstance(data, dict) else None
        if not access_token:
            raise TokenRequestError(response.status_code, "token response has no access_token", response.content)

        self._access_token = access_token
        self._expires_at = time.time() + float(data.get("expires_in") or DEFAULT_TOKEN_LIFETIME_SECONDS)
        logger.info("Obtained STACKIT access token")

    def close(self):
        self._token_session.close()
