"""
Common fixtures for the delegation types tests.
"""

import pytest

from config import DelegationEnvironment
from delegation_base_types import Address

ALICE = Address("0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed")
BOB = Address("0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359")
CAROL = Address("0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB")
ENFORCER = Address("0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb")

ENFORCER_NAMES = [
    "AllowedTargetsEnforcer",
    "AllowedMethodsEnforcer",
    "ValueLteEnforcer",
    "LimitedCallsEnforcer",
    "TimestampEnforcer",
    "BlockNumberEnforcer",
    "NonceEnforcer",
    "RedeemerEnforcer",
    "NativeTokenTransferAmountEnforcer",
    "ERC20TransferAmountEnforcer",
    "IdEnforcer",
]


@pytest.fixture
def environment() -> DelegationEnvironment:
    """Return an environment with a distinct address for every known enforcer."""
    return DelegationEnvironment(
        caveat_enforcers={name: Address(0x1000 + i) for i, name in enumerate(ENFORCER_NAMES)}
    )
