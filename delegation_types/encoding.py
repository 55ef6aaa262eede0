"""
Canonical encoding and hashing primitives.

The ABI encoder and the hash function are plain callables so that hashing and encoding
functions can take them as keyword arguments; the defaults below wrap `eth_abi` and
Keccak-256.
"""

from typing import Any, Protocol, Sequence, Tuple

import eth_abi
from eth_abi.exceptions import DecodingError, EncodingError
from eth_abi.packed import encode_packed

from delegation_base_types import Bytes, Hash
from delegation_exceptions import EncodingTypeMismatchError


class Encoder(Protocol):
    """Encodes a list of values according to a list of ABI types."""

    def __call__(self, types: Sequence[str], values: Sequence[Any]) -> bytes:  # noqa: D102
        ...


class Decoder(Protocol):
    """Decodes a byte string according to a list of ABI types."""

    def __call__(self, types: Sequence[str], data: bytes) -> Tuple[Any, ...]:  # noqa: D102
        ...


class HashFunction(Protocol):
    """Fixed output cryptographic hash function."""

    def __call__(self, data: bytes) -> bytes:  # noqa: D102
        ...


def keccak256(data: bytes) -> Hash:
    """Calculate keccak256 hash of the given data."""
    return Bytes(data).keccak256()


def abi_encode(types: Sequence[str], values: Sequence[Any]) -> bytes:
    """ABI encode the values using the standard (non-packed) encoding."""
    try:
        return eth_abi.encode(list(types), list(values))
    except EncodingError as e:
        raise EncodingTypeMismatchError(f"Unable to encode values as {list(types)}: {e}") from e


def abi_encode_packed(types: Sequence[str], values: Sequence[Any]) -> bytes:
    """ABI encode the values using the non-standard packed encoding."""
    try:
        return encode_packed(list(types), list(values))
    except EncodingError as e:
        raise EncodingTypeMismatchError(
            f"Unable to packed-encode values as {list(types)}: {e}"
        ) from e


def abi_decode(types: Sequence[str], data: bytes) -> Tuple[Any, ...]:
    """Decode ABI encoded data."""
    try:
        return eth_abi.decode(list(types), bytes(data))
    except DecodingError as e:
        raise EncodingTypeMismatchError(f"Unable to decode data as {list(types)}: {e}") from e
