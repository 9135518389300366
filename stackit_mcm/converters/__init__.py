"""
Converters between provider-neutral attributes and the IaaS wire format.
"""

from .attributes import (
    Ref,
    box,
    put_ref,
    labels_to_wire,
    labels_from_wire,
    string_sequence_to_wire,
    metadata_to_wire,
    string_value,
    user_data_to_wire,
)

__all__ = [
    'Ref',
    'box',
    'put_ref',
    'labels_to_wire',
    'labels_from_wire',
    'string_sequence_to_wire',
    'metadata_to_wire',
    'string_value',
    'user_data_to_wire',
]
