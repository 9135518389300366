"""
Error types and the not-found classifier.

is_not_found() is the only place that decides whether a failure means
"the resource does not exist". It walks the exception chain built by
``raise ... from ...`` (and implicit exception context) looking for the
backend's typed GenericOpenAPIError; message text is never inspected.
"""

import logging
from typing import Iterator, Optional

from .iaas.exceptions import GenericOpenAPIError, ServiceAccountKeyError, TokenRequestError

logger = logging.getLogger(__name__)

HTTP_NOT_FOUND = 404


class ClientCreationError(Exception):
    """Raised when a STACKIT client cannot be constructed."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"failed to create STACKIT SDK client: {cause}")


class ServerNotFoundError(LookupError):
    """No server matched a lookup performed by a caller-side helper."""


def iter_error_chain(err: Optional[BaseException]) -> Iterator[BaseException]:
    """
    Yield err and every error it wraps, outermost first.

    Follows __cause__ when set, otherwise __context__ unless the context was
    suppressed with ``raise ... from None``. Stops on cycles.
    """
    seen = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        if err.__cause__ is not None:
            err = err.__cause__
        elif not err.__suppress_context__:
            err = err.__context__
        else:
            err = None


def is_not_found(err: Optional[BaseException]) -> bool:
    """
    Check whether an error chain carries a 404 from the STACKIT API.

    The first GenericOpenAPIError found in the chain decides the answer.

    Args:
        err: Any exception, possibly wrapped several times, or None

    Returns:
        True if the first API error in the chain has status code 404
    """
    for link in iter_error_chain(err):
        if isinstance(link, GenericOpenAPIError):
            return link.status_code == HTTP_NOT_FOUND
    return False


__all__ = [
    'GenericOpenAPIError',
    'ServiceAccountKeyError',
    'TokenRequestError',
    'ClientCreationError',
    'ServerNotFoundError',
    'iter_error_chain',
    'is_not_found',
]
