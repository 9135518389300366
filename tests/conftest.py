"""Shared fixtures: clean STACKIT environment, throwaway service account keys,
and canned HTTP responses."""

import json

import pytest
import requests
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

STACKIT_ENV_VARS = (
    "STACKIT_NO_AUTH",
    "STACKIT_API_ENDPOINT",
    "STACKIT_TOKEN_ENDPOINT",
    "STACKIT_API_TIMEOUT",
    "STACKIT_INSECURE_SKIP_VERIFY",
    "STACKIT_PROJECT_ID",
    "STACKIT_REGION",
    "STACKIT_SERVICE_ACCOUNT_KEY_PATH",
)


@pytest.fixture(autouse=True)
def clean_stackit_env(monkeypatch):
    for name in STACKIT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def service_account_key_data(rsa_private_key) -> dict:
    private_pem = rsa_private_key.private_bytes(
        Encoding.PEM, PrivateFormat.PKCS8, NoEncryption()
    ).decode()
    public_pem = rsa_private_key.public_key().public_bytes(
        Encoding.PEM, PublicFormat.SubjectPublicKeyInfo
    ).decode()
    return {
        "id": "a1b2c3d4-0000-4000-8000-000000000001",
        "publicKey": public_pem,
        "createdAt": "2024-01-01T00:00:00Z",
        "keyType": "USER_MANAGED",
        "keyOrigin": "GENERATED",
        "keyAlgorithm": "RSA_2048",
        "active": True,
        "credentials": {
            "kid": "a1b2c3d4-0000-4000-8000-000000000001",
            "iss": "machine@sa.stackit.cloud",
            "sub": "a1b2c3d4-0000-4000-8000-000000000002",
            "aud": "https://stackit-service-account-prod.apps.01.cf.eu01.stackit.cloud",
            "privateKey": private_pem,
        },
    }


@pytest.fixture
def service_account_key(service_account_key_data) -> str:
    return json.dumps(service_account_key_data)


@pytest.fixture
def make_response():
    """Build a real requests.Response with a JSON (or empty) body."""

    def _make(status_code: int = 200, body=None, reason: str = "") -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        response.reason = reason
        response.url = "https://iaas.test"
        if body is None:
            response._content = b""
        elif isinstance(body, bytes):
            response._content = body
        else:
            response._content = json.dumps(body).encode("utf-8")
        return response

    return _make
