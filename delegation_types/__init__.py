"""Delegation, caveat and permission context types."""

from .caveat import (
    CAVEAT_TYPEHASH,
    Caveat,
    get_caveat_array_packet_hash,
    get_caveat_packet_hash,
)
from .caveat_builder import CAVEAT_TERMS_BUILDERS, CaveatBuilder, Caveats, resolve_caveats
from .chain import verify_delegation_chain
from .delegation import (
    ANY_BENEFICIARY,
    DELEGATION_ABI_TYPE,
    DELEGATION_TYPEHASH,
    ROOT_AUTHORITY,
    Delegation,
    DelegationStruct,
    ParentDelegation,
    create_delegation,
    create_open_delegation,
    get_delegation_hash_offchain,
    parse_salt,
    resolve_authority,
    to_delegation_struct,
)
from .encoding import Decoder, Encoder, HashFunction, abi_decode, abi_encode, keccak256
from .permission_context import (
    decode_delegation,
    encode_delegation,
    encode_permission_contexts,
)

__all__ = (
    "ANY_BENEFICIARY",
    "CAVEAT_TERMS_BUILDERS",
    "CAVEAT_TYPEHASH",
    "Caveat",
    "CaveatBuilder",
    "Caveats",
    "DELEGATION_ABI_TYPE",
    "DELEGATION_TYPEHASH",
    "Decoder",
    "Delegation",
    "DelegationStruct",
    "Encoder",
    "HashFunction",
    "ParentDelegation",
    "ROOT_AUTHORITY",
    "abi_decode",
    "abi_encode",
    "create_delegation",
    "create_open_delegation",
    "decode_delegation",
    "encode_delegation",
    "encode_permission_contexts",
    "get_caveat_array_packet_hash",
    "get_caveat_packet_hash",
    "get_delegation_hash_offchain",
    "keccak256",
    "parse_salt",
    "resolve_authority",
    "resolve_caveats",
    "to_delegation_struct",
    "verify_delegation_chain",
)
