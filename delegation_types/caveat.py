"""Caveat type and its packet hash, as computed by the on-chain delegation manager."""

from typing import ClassVar, List, Sequence

from pydantic import ConfigDict, Field

from delegation_base_types import ABISerializable, Address, Bytes, CamelModel, Hash

from .encoding import Encoder, HashFunction, abi_encode, keccak256

CAVEAT_TYPEHASH = keccak256(b"Caveat(address enforcer,bytes terms)")
"""Type hash of a caveat. `args` is not part of the signed type."""

CAVEAT_PACKET_HASH_ABI_TYPES = ["bytes32", "address", "bytes32"]


class Caveat(CamelModel, ABISerializable):
    """
    Restriction applied to a delegation, checked by the `enforcer` contract when the
    delegation is redeemed.

    `terms` are fixed when the delegation is signed, while `args` are supplied by the redeemer
    and are not covered by the delegation hash.
    """

    enforcer: Address
    terms: Bytes = Field(Bytes(b""))
    args: Bytes = Field(Bytes(b""))

    model_config = ConfigDict(frozen=True)

    abi_type: ClassVar[str] = "(address,bytes,bytes)"
    abi_fields: ClassVar[List[str]] = ["enforcer", "terms", "args"]


def get_caveat_packet_hash(
    caveat: Caveat,
    *,
    encoder: Encoder = abi_encode,
    hash_function: HashFunction = keccak256,
) -> Hash:
    """Return the packet hash of a single caveat."""
    encoded = encoder(
        CAVEAT_PACKET_HASH_ABI_TYPES,
        [bytes(CAVEAT_TYPEHASH), str(caveat.enforcer), bytes(hash_function(caveat.terms))],
    )
    return Hash(hash_function(encoded))


def get_caveat_array_packet_hash(
    caveats: Sequence[Caveat],
    *,
    encoder: Encoder = abi_encode,
    hash_function: HashFunction = keccak256,
) -> Hash:
    """
    Return the packet hash of an ordered list of caveats.

    This is the hash of the concatenated packet hashes of every caveat, so the order of the list
    is part of the result.
    """
    packet_hashes = b"".join(
        get_caveat_packet_hash(caveat, encoder=encoder, hash_function=hash_function)
        for caveat in caveats
    )
    return Hash(hash_function(packet_hashes))
