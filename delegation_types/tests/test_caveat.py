"""
Test suite for `delegation_types.caveat` module.
"""

from ..caveat import (
    CAVEAT_TYPEHASH,
    Caveat,
    get_caveat_array_packet_hash,
    get_caveat_packet_hash,
)
from ..encoding import keccak256
from .conftest import ENFORCER


def test_caveat_packet_hash():
    """
    Test the packet hash of a caveat against its word by word encoding.
    """
    caveat = Caveat(enforcer=ENFORCER, terms="0x1234", args="0x5678")
    encoded = bytes(CAVEAT_TYPEHASH) + bytes(12) + bytes(ENFORCER) + bytes(keccak256(b"\x12\x34"))
    assert get_caveat_packet_hash(caveat) == keccak256(encoded)


def test_caveat_packet_hash_ignores_args():
    """
    Test that the args of a caveat are not part of its packet hash.
    """
    assert get_caveat_packet_hash(
        Caveat(enforcer=ENFORCER, terms="0x01", args="0x")
    ) == get_caveat_packet_hash(Caveat(enforcer=ENFORCER, terms="0x01", args="0xffff"))


def test_caveat_array_packet_hash():
    """
    Test the packet hash of a list of caveats.
    """
    first = Caveat(enforcer=ENFORCER, terms="0x01")
    second = Caveat(enforcer=ENFORCER, terms="0x02")

    assert get_caveat_array_packet_hash([]) == keccak256(b"")
    assert get_caveat_array_packet_hash([first]) == keccak256(get_caveat_packet_hash(first))
    assert get_caveat_array_packet_hash([first, second]) == keccak256(
        get_caveat_packet_hash(first) + get_caveat_packet_hash(second)
    )
    assert get_caveat_array_packet_hash([first, second]) != get_caveat_array_packet_hash(
        [second, first]
    )


def test_caveat_defaults():
    """
    Test that the terms and args of a caveat default to empty bytes.
    """
    caveat = Caveat(enforcer=ENFORCER)
    assert caveat.terms == b""
    assert caveat.args == b""
    assert caveat.to_abi_value() == (str(ENFORCER), b"", b"")
