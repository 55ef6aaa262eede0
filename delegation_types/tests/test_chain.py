"""
Test suite for `delegation_types.chain` module.
"""

import pytest

from delegation_base_types import Hash
from delegation_exceptions import InvalidDelegationChainError

from ..chain import verify_delegation_chain
from ..delegation import Delegation, create_delegation, create_open_delegation
from .conftest import ALICE, BOB, CAROL


@pytest.fixture
def root() -> Delegation:
    """Root delegation from Alice to Bob."""
    return create_delegation(delegator=ALICE, delegate=BOB, caveats=[])


@pytest.fixture
def leaf(root: Delegation) -> Delegation:
    """Delegation from Bob to Carol, chained beneath the root delegation."""
    return create_delegation(delegator=BOB, delegate=CAROL, caveats=[], parent_delegation=root)


def test_verify_chain(root: Delegation, leaf: Delegation):
    """
    Test the verification of a linked chain ordered from leaf to root.
    """
    assert verify_delegation_chain([leaf, root]) == [leaf.hash(), root.hash()]
    assert verify_delegation_chain([root]) == [root.hash()]


def test_verify_chain_with_missing_authority():
    """
    Test that a delegation without authority is a root delegation.
    """
    assert verify_delegation_chain([Delegation(delegator=ALICE, delegate=BOB)])


def test_verify_chain_wrong_order(root: Delegation, leaf: Delegation):
    """
    Test that a chain ordered from root to leaf is rejected.
    """
    with pytest.raises(InvalidDelegationChainError):
        verify_delegation_chain([root, leaf])


def test_verify_chain_not_rooted(leaf: Delegation):
    """
    Test that the last delegation of a chain must have the root authority.
    """
    with pytest.raises(InvalidDelegationChainError):
        verify_delegation_chain([leaf])


def test_verify_chain_wrong_authority(root: Delegation):
    """
    Test that the authority of a delegation must be the hash of the next one.
    """
    leaf = create_delegation(
        delegator=BOB, delegate=CAROL, caveats=[], parent_delegation=Hash(1)
    )
    with pytest.raises(InvalidDelegationChainError):
        verify_delegation_chain([leaf, root])


def test_verify_chain_wrong_delegator(root: Delegation):
    """
    Test that the delegator of a delegation must be the delegate of the next one.
    """
    leaf = create_delegation(
        delegator=CAROL, delegate=ALICE, caveats=[], parent_delegation=root
    )
    with pytest.raises(InvalidDelegationChainError):
        verify_delegation_chain([leaf, root])


def test_verify_chain_open_parent():
    """
    Test that anyone can redelegate an open delegation.
    """
    root = create_open_delegation(delegator=ALICE, caveats=[])
    leaf = create_delegation(
        delegator=CAROL, delegate=BOB, caveats=[], parent_delegation=root
    )
    assert verify_delegation_chain([leaf, root]) == [leaf.hash(), root.hash()]


def test_verify_empty_chain():
    """
    Test that an empty chain is rejected.
    """
    with pytest.raises(InvalidDelegationChainError):
        verify_delegation_chain([])
