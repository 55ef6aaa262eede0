"""
Permission context encoding.

A permission context is the ABI encoding of a delegation chain, as an array of delegation
structs. Chains are ordered leaf to root: the first delegation is the one whose delegate redeems
the chain, and the last one carries `ROOT_AUTHORITY`. The order given by the caller is encoded as
is; use `verify_delegation_chain` to check it.
"""

import logging
from typing import List, Sequence

from delegation_base_types import Bytes
from delegation_base_types.conversions import BytesConvertible

from .delegation import DELEGATION_ABI_TYPE, Delegation, DelegationStruct, to_delegation_struct
from .encoding import Decoder, Encoder, abi_decode, abi_encode

logger = logging.getLogger(__name__)

PERMISSION_CONTEXT_ABI_TYPES = [f"{DELEGATION_ABI_TYPE}[]"]


def encode_delegation(
    delegations: Delegation | Sequence[Delegation],
    *,
    encoder: Encoder = abi_encode,
) -> Bytes:
    """ABI encode a delegation chain; a single delegation is encoded as a chain of one."""
    if isinstance(delegations, Delegation):
        delegations = [delegations]
    delegation_structs = [to_delegation_struct(delegation) for delegation in delegations]
    encoded = Bytes(
        encoder(
            PERMISSION_CONTEXT_ABI_TYPES,
            [[delegation_struct.to_abi_value() for delegation_struct in delegation_structs]],
        )
    )
    logger.debug(f"Encoded chain of {len(delegation_structs)} delegations ({len(encoded)} bytes)")
    return encoded


def encode_permission_contexts(
    delegation_chains: Sequence[Sequence[Delegation]],
    *,
    encoder: Encoder = abi_encode,
) -> List[Bytes]:
    """ABI encode each delegation chain into its permission context, keeping their order."""
    return [encode_delegation(chain, encoder=encoder) for chain in delegation_chains]


def decode_delegation(
    permission_context: BytesConvertible,
    *,
    decoder: Decoder = abi_decode,
) -> List[DelegationStruct]:
    """Decode a permission context back into the structs of its delegation chain."""
    (values,) = decoder(PERMISSION_CONTEXT_ABI_TYPES, Bytes(permission_context))
    return [DelegationStruct.from_abi_value(value) for value in values]
