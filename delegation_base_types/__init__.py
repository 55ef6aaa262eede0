"""
Common definitions and types.
"""

from .base_types import (
    Address,
    Bytes,
    FixedSizeBytes,
    Hash,
    HexNumber,
    Number,
)
from .conversions import is_hex_string, to_bytes
from .json import to_json
from .pydantic import CamelModel
from .serialization import ABISerializable

__all__ = (
    "ABISerializable",
    "Address",
    "Bytes",
    "CamelModel",
    "FixedSizeBytes",
    "Hash",
    "HexNumber",
    "Number",
    "is_hex_string",
    "to_bytes",
    "to_json",
)
