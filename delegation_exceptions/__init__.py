"""Exceptions raised by the delegation framework types."""

from .exceptions import (
    CaveatBuilderError,
    DelegationException,
    EmptyCaveatsError,
    EncodingTypeMismatchError,
    InvalidAddressError,
    InvalidDelegationChainError,
    MalformedSaltError,
    UnknownCaveatError,
)

__all__ = [
    "CaveatBuilderError",
    "DelegationException",
    "EmptyCaveatsError",
    "EncodingTypeMismatchError",
    "InvalidAddressError",
    "InvalidDelegationChainError",
    "MalformedSaltError",
    "UnknownCaveatError",
]
