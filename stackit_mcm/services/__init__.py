"""
Caller-side services built on StackitClient.
"""

from .machine_service import (
    MACHINE_LABEL,
    find_server_by_name,
    get_server_by_name,
    delete_server_if_exists,
    ensure_allowed_addresses,
)

__all__ = [
    'MACHINE_LABEL',
    'find_server_by_name',
    'get_server_by_name',
    'delete_server_if_exists',
    'ensure_allowed_addresses',
]
