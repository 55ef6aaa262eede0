"""
Error types raised while building, hashing and encoding delegations.
"""


class DelegationException(Exception):
    """
    Base class for all exceptions _expected_ to be thrown during normal
    operation.

    Subclasses must not derive from `ValueError`: pydantic validators re-raise any other
    exception type unchanged.
    """


class InvalidAddressError(DelegationException):
    """
    Thrown when an address fails format or EIP-55 checksum validation.
    """


class MalformedSaltError(DelegationException):
    """
    Thrown when a delegation salt is not a hexadecimal numeral.
    """


class EncodingTypeMismatchError(DelegationException):
    """
    Thrown when a value does not match the ABI type it is being encoded as.
    """


class InvalidDelegationChainError(DelegationException):
    """
    Thrown when the delegations of a chain are not linked to each other.
    """


class CaveatBuilderError(DelegationException):
    """
    Thrown when a caveat builder cannot produce the requested caveats.
    """


class UnknownCaveatError(CaveatBuilderError):
    """
    Thrown when a caveat name has no registered terms builder, or the
    environment has no enforcer for it.
    """


class EmptyCaveatsError(CaveatBuilderError):
    """
    Thrown when building an empty caveat list without explicitly allowing it.
    """
