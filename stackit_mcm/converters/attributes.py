"""
Attribute conversion between provider-neutral maps and the wire format.

On the wire a field is either absent (None, omitted from the JSON payload) or
present, and present-but-empty is not the same thing as absent: an empty
label selector means "explicitly nothing", an absent one means "no filter".
Every converter here maps None to None and never turns a present container
into None or the other way round.
"""

import base64
import copy
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Ref(Generic[T]):
    """Explicit reference to a value for fields that must be set on the wire."""
    value: T


def box(value: T) -> Ref[T]:
    """Return a reference owning a copy of value."""
    return Ref(copy.copy(value))


def put_ref(payload: Dict[str, Any], key: str, ref: Optional[Ref[Any]]):
    """Set payload[key] from a reference; absent references leave the key out."""
    if ref is not None:
        payload[key] = ref.value


def labels_to_wire(labels: Optional[Dict[str, str]]) -> Optional[Dict[str, Any]]:
    """
    Convert a label map to the wire's dynamic-value map.

    Args:
        labels: Label map or None

    Returns:
        None for None, otherwise a new dict with the same entries
    """
    if labels is None:
        return None
    return {key: value for key, value in labels.items()}


def labels_from_wire(labels: Optional[Dict[str, Any]]) -> Optional[Dict[str, str]]:
    """
    Convert a wire attribute map back to a label map.

    Only string values survive; numbers, booleans, nested structures and
    nulls are dropped without error.

    Args:
        labels: Wire map or None

    Returns:
        None for None, otherwise a dict of the string-valued entries
    """
    if labels is None:
        return None
    return {key: value for key, value in labels.items() if isinstance(value, str)}


def string_sequence_to_wire(values: Optional[List[str]]) -> Optional[List[str]]:
    """Wrap a string sequence; an empty list stays present."""
    if values is None:
        return None
    return values


def metadata_to_wire(metadata: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Pass metadata through to the wire.

    The caller's dict is shared with the payload, not copied; it must not be
    mutated after conversion.
    """
    if metadata is None:
        return None
    return metadata


def string_value(value: Optional[str]) -> str:
    """Unwrap an optional string, empty string when absent."""
    if value is None:
        return ""
    return value


def user_data_to_wire(user_data: Optional[str]) -> Optional[str]:
    """
    Encode plain-text user data for the API, which expects base64.

    The input is always encoded exactly once, even if it happens to look
    like base64 already.
    """
    if not user_data:
        return None
    return base64.b64encode(user_data.encode("utf-8")).decode("ascii")
