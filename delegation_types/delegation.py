"""
Delegation type, its struct form, and the canonical delegation hash.

A delegation grants the `delegate` the authority of the `delegator`, restricted by its caveats.
The `authority` of a delegation is either `ROOT_AUTHORITY` or the hash of the parent delegation
it is chained beneath.

The hash computed here must match the one recomputed on-chain by the delegation manager from the
same values, so the encoded layout and field order of `DELEGATION_HASH_ABI_TYPES` must not change.
"""

import logging
from typing import ClassVar, Dict, List, Type, TypeAlias

from pydantic import ConfigDict, Field, field_validator

from delegation_base_types import (
    ABISerializable,
    Address,
    Bytes,
    CamelModel,
    Hash,
    HexNumber,
    is_hex_string,
)
from delegation_base_types.conversions import BytesConvertible
from delegation_exceptions import MalformedSaltError

from .caveat import Caveat, get_caveat_array_packet_hash
from .caveat_builder import Caveats, resolve_caveats
from .encoding import Encoder, HashFunction, abi_encode, keccak256

logger = logging.getLogger(__name__)

ROOT_AUTHORITY = Hash("0x" + "ff" * 32)
"""Authority of a delegation that is not chained beneath a parent delegation."""

ANY_BENEFICIARY = Address("0x0000000000000000000000000000000000000a11")
"""Delegate of an open delegation, which can be redeemed by anyone."""

DELEGATION_TYPEHASH = Hash("0x88c1d2ecf185adf710588203a5f263f0ff61be0d33da39792cde19ba9aa4331e")
"""
Type hash of a delegation, `keccak256` of:

    Delegation(address delegate,address delegator,bytes32 authority,Caveat[] caveats,uint256 salt)Caveat(address enforcer,bytes terms)

The signature is not part of the type.
"""  # noqa: E501

DELEGATION_ABI_TYPE = "(address,address,bytes32,(address,bytes,bytes)[],uint256,bytes)"

DELEGATION_HASH_ABI_TYPES = ["bytes32", "address", "address", "bytes32", "bytes32", "uint256"]


def parse_salt(salt: str | int) -> int:
    """
    Parse the salt of a delegation from its hexadecimal transport form.

    The empty hex string (`0x`) is zero.
    """
    if isinstance(salt, bool):
        raise MalformedSaltError(f"Invalid salt {salt!r}")
    if isinstance(salt, int):
        if salt < 0:
            raise MalformedSaltError(f"Negative salt {salt}")
        return salt
    if not isinstance(salt, str) or not is_hex_string(salt):
        raise MalformedSaltError(f"Salt must be a 0x-prefixed hexadecimal string, got {salt!r}")
    if salt in ("0x", "0X"):
        return 0
    return int(salt, 16)


class DelegationStruct(CamelModel, ABISerializable):
    """
    Struct form of a delegation, as defined by the delegation manager contract.

    Unlike `Delegation`, the salt is a number and the authority is always set.
    """

    delegate: Address
    delegator: Address
    authority: Hash
    caveats: List[Caveat] = Field(default_factory=list)
    salt: HexNumber = Field(HexNumber(0))
    signature: Bytes = Field(Bytes(b""))

    model_config = ConfigDict(frozen=True)

    abi_type: ClassVar[str] = DELEGATION_ABI_TYPE
    abi_fields: ClassVar[List[str]] = [
        "delegate",
        "delegator",
        "authority",
        "caveats",
        "salt",
        "signature",
    ]
    abi_nested: ClassVar[Dict[str, Type[ABISerializable]]] = {"caveats": Caveat}


class Delegation(CamelModel):
    """
    Delegation of authority from the `delegator` to the `delegate`.

    Instances are immutable: signing produces a new instance through `with_signature`.
    """

    delegate: Address
    delegator: Address
    authority: Hash | None = None
    caveats: List[Caveat] = Field(default_factory=list)
    salt: str = "0x"
    signature: Bytes = Field(Bytes(b""))

    model_config = ConfigDict(frozen=True)

    @field_validator("salt", mode="before")
    @classmethod
    def validate_salt(cls, salt: str | int) -> str:
        """Normalize the salt to a lower case hex string."""
        value = parse_salt(salt)
        if isinstance(salt, str):
            return "0x" + salt[2:].lower()
        return hex(value)

    def to_struct(self) -> DelegationStruct:
        """Return the struct form of the delegation."""
        return to_delegation_struct(self)

    def hash(
        self,
        *,
        encoder: Encoder = abi_encode,
        hash_function: HashFunction = keccak256,
    ) -> Hash:
        """Return the canonical hash of the delegation."""
        return get_delegation_hash_offchain(self, encoder=encoder, hash_function=hash_function)

    def with_signature(self, signature: BytesConvertible) -> "Delegation":
        """Return a copy of the delegation carrying the given signature."""
        return self.copy(signature=Bytes(signature))


ParentDelegation: TypeAlias = Delegation | Hash | str | bytes | None
"""Parent of a delegation: none, the parent itself, or its precomputed hash."""


def to_delegation_struct(delegation: Delegation) -> DelegationStruct:
    """
    Convert a delegation to its struct form.

    Every address is normalized, a missing authority defaults to `ROOT_AUTHORITY`, and the salt
    is parsed into a number.
    """
    caveats = [
        Caveat(enforcer=Address(caveat.enforcer), terms=caveat.terms, args=caveat.args)
        for caveat in delegation.caveats
    ]
    return DelegationStruct(
        delegate=Address(delegation.delegate),
        delegator=Address(delegation.delegator),
        authority=ROOT_AUTHORITY if delegation.authority is None else delegation.authority,
        caveats=caveats,
        salt=HexNumber(parse_salt(delegation.salt)),
        signature=delegation.signature,
    )


def get_delegation_hash_offchain(
    delegation: Delegation,
    *,
    encoder: Encoder = abi_encode,
    hash_function: HashFunction = keccak256,
) -> Hash:
    """
    Return the canonical hash of a delegation, which is the digest signed by the delegator.

    The signature of the delegation is ignored.
    """
    delegation_struct = to_delegation_struct(delegation)
    caveats_hash = get_caveat_array_packet_hash(
        delegation_struct.caveats, encoder=encoder, hash_function=hash_function
    )
    encoded = encoder(
        DELEGATION_HASH_ABI_TYPES,
        [
            bytes(DELEGATION_TYPEHASH),
            str(delegation_struct.delegate),
            str(delegation_struct.delegator),
            bytes(delegation_struct.authority),
            bytes(caveats_hash),
            int(delegation_struct.salt),
        ],
    )
    delegation_hash = Hash(hash_function(encoded))
    logger.debug(
        f"Delegation {delegation_struct.delegator} -> {delegation_struct.delegate} "
        f"hashed to {delegation_hash}"
    )
    return delegation_hash


def resolve_authority(
    parent_delegation: ParentDelegation = None,
    *,
    encoder: Encoder = abi_encode,
    hash_function: HashFunction = keccak256,
) -> Hash:
    """
    Resolve the authority of a delegation from its parent.

    A parent given as a hash is trusted as is, while a parent delegation is hashed.
    """
    match parent_delegation:
        case None:
            return ROOT_AUTHORITY
        case Delegation():
            return get_delegation_hash_offchain(
                parent_delegation, encoder=encoder, hash_function=hash_function
            )
        case Hash():
            return parent_delegation
        case str() | bytes():
            return Hash(parent_delegation)
        case _:
            raise TypeError(f"Unsupported parent delegation type {type(parent_delegation)}")


def create_delegation(
    *,
    delegator: BytesConvertible | int,
    delegate: BytesConvertible | int,
    caveats: Caveats,
    parent_delegation: ParentDelegation = None,
) -> Delegation:
    """Create an unsigned delegation to a specific delegate."""
    return Delegation(
        delegate=Address(delegate),
        delegator=Address(delegator),
        authority=resolve_authority(parent_delegation),
        caveats=resolve_caveats(caveats),
        salt="0x",
        signature=Bytes(b""),
    )


def create_open_delegation(
    *,
    delegator: BytesConvertible | int,
    caveats: Caveats,
    parent_delegation: ParentDelegation = None,
) -> Delegation:
    """Create an unsigned delegation that can be redeemed by any delegate."""
    return Delegation(
        delegate=ANY_BENEFICIARY,
        delegator=Address(delegator),
        authority=resolve_authority(parent_delegation),
        caveats=resolve_caveats(caveats),
        salt="0x",
        signature=Bytes(b""),
    )
