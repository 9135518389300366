"""
Typed errors raised by the IaaS API handle.
"""

from typing import Optional


class GenericOpenAPIError(Exception):
    """
    Error returned by the STACKIT API for any non-2xx response.

    Attributes:
        status_code: HTTP status code of the response
        error_message: Short description (HTTP reason or API message)
        body: Raw response body
    """

    def __init__(self, status_code: int, error_message: str = "", body: Optional[bytes] = None):
        self.status_code = status_code
        self.error_message = error_message
        self.body = body or b""
        super().__init__(status_code, error_message)

    def __str__(self) -> str:
        text = f"{self.status_code} {self.error_message}".strip()
        if self.body:
            text = f"{text}, body: {self.body.decode('utf-8', errors='replace')}"
        return text


class ServiceAccountKeyError(ValueError):
    """Service account key is empty, not JSON, incomplete, or unusable."""


class TokenRequestError(Exception):
    """
    Service account token exchange failed.

    Kept apart from GenericOpenAPIError: the status here belongs to the
    token endpoint, not to the server or NIC an operation targets.

    Attributes:
        status_code: HTTP status code of the token response (None if the
            response was unusable rather than rejected)
        error_message: Short description
        body: Raw response body
    """

    def __init__(self, status_code: Optional[int], error_message: str = "", body: Optional[bytes] = None):
        self.status_code = status_code
        self.error_message = error_message
        self.body = body or b""
        super().__init__(status_code, error_message)

    def __str__(self) -> str:
        text = f"token request failed: {self.status_code or ''} {self.error_message}".rstrip()
        if self.body:
            text = f"{text}, body: {self.body.decode('utf-8', errors='replace')}"
        return text
