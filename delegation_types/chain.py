"""Verification of the links between the delegations of a chain."""

from typing import List, Sequence

from delegation_base_types import Hash
from delegation_exceptions import InvalidDelegationChainError

from .delegation import ANY_BENEFICIARY, ROOT_AUTHORITY, Delegation
from .encoding import Encoder, HashFunction, abi_encode, keccak256


def verify_delegation_chain(
    delegations: Sequence[Delegation],
    *,
    encoder: Encoder = abi_encode,
    hash_function: HashFunction = keccak256,
) -> List[Hash]:
    """
    Verify that a leaf to root delegation chain is linked, and return the delegation hashes.

    For every delegation but the last, its authority must be the hash of the next delegation,
    and its delegator must be the delegate of the next delegation (unless that one is open).
    The last delegation must have the root authority.
    """
    if not delegations:
        raise InvalidDelegationChainError("Empty delegation chain")

    hashes = [
        delegation.hash(encoder=encoder, hash_function=hash_function)
        for delegation in delegations
    ]
    for i, delegation in enumerate(delegations):
        authority = ROOT_AUTHORITY if delegation.authority is None else delegation.authority
        if i == len(delegations) - 1:
            if authority != ROOT_AUTHORITY:
                raise InvalidDelegationChainError(
                    f"Delegation {i} is the root of the chain but has authority {authority}"
                )
            continue
        parent = delegations[i + 1]
        if authority != hashes[i + 1]:
            raise InvalidDelegationChainError(
                f"Authority of delegation {i} ({authority}) is not the hash of delegation "
                f"{i + 1} ({hashes[i + 1]})"
            )
        if parent.delegate != ANY_BENEFICIARY and delegation.delegator != parent.delegate:
            raise InvalidDelegationChainError(
                f"Delegator of delegation {i} ({delegation.delegator}) is not the delegate of "
                f"delegation {i + 1} ({parent.delegate})"
            )
    return hashes
