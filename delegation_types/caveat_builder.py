"""
Caveat builder.

Turns a list of named restrictions into the ordered list of caveats of a delegation, encoding
the terms expected by each caveat enforcer contract of the delegation framework.
"""

from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Sequence, Tuple

from eth_utils import function_signature_to_4byte_selector

from config import DelegationEnvironment
from delegation_base_types import Address, Bytes, is_hex_string
from delegation_base_types.conversions import BytesConvertible
from delegation_exceptions import CaveatBuilderError, EmptyCaveatsError, UnknownCaveatError

from .caveat import Caveat
from .encoding import abi_encode_packed

CaveatTermsBuilder = Callable[..., bytes]

CAVEAT_TERMS_BUILDERS: Dict[str, Tuple[str, CaveatTermsBuilder]] = {}
"""Terms builders keyed by caveat name, with the name of the enforcer contract they target."""


def caveat_terms_builder(name: str, enforcer: str) -> Callable[[CaveatTermsBuilder], Any]:
    """Register a function that builds the terms of the `name` caveat."""

    def decorator(builder: CaveatTermsBuilder) -> CaveatTermsBuilder:
        CAVEAT_TERMS_BUILDERS[name] = (enforcer, builder)
        return builder

    return decorator


def to_selector(method: str | bytes) -> bytes:
    """
    Convert a method to its 4-byte selector.

    The method can be given as a selector (`0xa9059cbb`) or as a function signature
    (`transfer(address,uint256)`).
    """
    if isinstance(method, bytes):
        selector = bytes(method)
    elif is_hex_string(method):
        selector = bytes(Bytes(method))
    else:
        selector = function_signature_to_4byte_selector(method)
    if len(selector) != 4:
        raise CaveatBuilderError(f"Invalid method selector: {method!r}")
    return selector


def packed_addresses(addresses: Sequence[BytesConvertible | int]) -> bytes:
    """Concatenate the 20-byte representation of every address."""
    return abi_encode_packed(
        ["address"] * len(addresses), [str(Address(address)) for address in addresses]
    )


@caveat_terms_builder("allowedTargets", "AllowedTargetsEnforcer")
def allowed_targets(targets: Sequence[BytesConvertible | int]) -> bytes:
    """Restrict the addresses the delegate may call."""
    if not targets:
        raise CaveatBuilderError("allowedTargets requires at least one target")
    return packed_addresses(targets)


@caveat_terms_builder("allowedMethods", "AllowedMethodsEnforcer")
def allowed_methods(methods: Sequence[str | bytes]) -> bytes:
    """Restrict the methods the delegate may call."""
    if not methods:
        raise CaveatBuilderError("allowedMethods requires at least one method")
    return b"".join(to_selector(method) for method in methods)


@caveat_terms_builder("valueLte", "ValueLteEnforcer")
def value_lte(max_value: int) -> bytes:
    """Restrict the native token value of each call."""
    return abi_encode_packed(["uint256"], [max_value])


@caveat_terms_builder("limitedCalls", "LimitedCallsEnforcer")
def limited_calls(limit: int) -> bytes:
    """Restrict the number of times the delegation can be redeemed."""
    if limit <= 0:
        raise CaveatBuilderError(f"limitedCalls requires a positive limit, got {limit}")
    return abi_encode_packed(["uint256"], [limit])


@caveat_terms_builder("timestamp", "TimestampEnforcer")
def timestamp(after_threshold: int, before_threshold: int) -> bytes:
    """Restrict redemption to a time window; a zero threshold leaves that side open."""
    if before_threshold and after_threshold >= before_threshold:
        raise CaveatBuilderError("timestamp requires after_threshold < before_threshold")
    return abi_encode_packed(["uint128", "uint128"], [after_threshold, before_threshold])


@caveat_terms_builder("blockNumber", "BlockNumberEnforcer")
def block_number(after_threshold: int, before_threshold: int) -> bytes:
    """Restrict redemption to a block range; a zero threshold leaves that side open."""
    if before_threshold and after_threshold >= before_threshold:
        raise CaveatBuilderError("blockNumber requires after_threshold < before_threshold")
    return abi_encode_packed(["uint128", "uint128"], [after_threshold, before_threshold])


@caveat_terms_builder("nonce", "NonceEnforcer")
def nonce(nonce: int) -> bytes:
    """Bind the delegation to the delegator's current nonce in the enforcer."""
    return abi_encode_packed(["uint256"], [nonce])


@caveat_terms_builder("redeemer", "RedeemerEnforcer")
def redeemer(redeemers: Sequence[BytesConvertible | int]) -> bytes:
    """Restrict the addresses allowed to redeem the delegation."""
    if not redeemers:
        raise CaveatBuilderError("redeemer requires at least one redeemer")
    return packed_addresses(redeemers)


@caveat_terms_builder("nativeTokenTransferAmount", "NativeTokenTransferAmountEnforcer")
def native_token_transfer_amount(allowance: int) -> bytes:
    """Restrict the total native token amount that can be transferred."""
    return abi_encode_packed(["uint256"], [allowance])


@caveat_terms_builder("erc20TransferAmount", "ERC20TransferAmountEnforcer")
def erc20_transfer_amount(token: BytesConvertible | int, max_amount: int) -> bytes:
    """Restrict the total amount of an ERC-20 token that can be transferred."""
    return abi_encode_packed(["address", "uint256"], [str(Address(token)), max_amount])


@caveat_terms_builder("id", "IdEnforcer")
def id_(id: int) -> bytes:
    """Group delegations so that only one delegation per id can be redeemed."""
    return abi_encode_packed(["uint256"], [id])


class CaveatBuilder:
    """
    Accumulates caveats, in order, for a delegation.

    Named caveats are resolved to the enforcer contract of the given environment, e.g.:

        CaveatBuilder(environment).add_caveat("allowedTargets", [target]).add_caveat(
            "limitedCalls", 1
        ).build()
    """

    environment: DelegationEnvironment
    allow_empty_caveats: bool

    def __init__(
        self,
        environment: DelegationEnvironment | Mapping[str, Any],
        *,
        allow_empty_caveats: bool = False,
    ):
        """Initialize the builder for the given environment."""
        if not isinstance(environment, DelegationEnvironment):
            environment = DelegationEnvironment(caveat_enforcers=dict(environment))
        self.environment = environment
        self.allow_empty_caveats = allow_empty_caveats
        self._caveats: List[Caveat] = []

    def add_caveat(
        self, caveat: Caveat | Mapping[str, Any] | str, *args, **kwargs
    ) -> "CaveatBuilder":
        """
        Append a caveat.

        `caveat` is either a ready caveat, or the name of a registered caveat whose terms are
        built from the remaining arguments.
        """
        match caveat:
            case Caveat() | Mapping():
                if args or kwargs:
                    raise CaveatBuilderError("Extra arguments given with a ready caveat")
                if isinstance(caveat, Mapping):
                    caveat = Caveat.model_validate(dict(caveat))
                self._caveats.append(caveat)
            case str():
                if caveat not in CAVEAT_TERMS_BUILDERS:
                    raise UnknownCaveatError(f"Unknown caveat '{caveat}'")
                enforcer_name, terms_builder = CAVEAT_TERMS_BUILDERS[caveat]
                enforcer = self.environment.get_enforcer(enforcer_name)
                terms = terms_builder(*args, **kwargs)
                self._caveats.append(Caveat(enforcer=enforcer, terms=terms))
            case _:
                raise CaveatBuilderError(f"Unsupported caveat type {type(caveat)}")
        return self

    def build(self) -> List[Caveat]:
        """Return the ordered list of caveats."""
        if not self._caveats and not self.allow_empty_caveats:
            raise EmptyCaveatsError(
                "No caveats found. Set `allow_empty_caveats=True` to build an empty caveat list."
            )
        return list(self._caveats)


Caveats = CaveatBuilder | Sequence[Caveat | Mapping[str, Any]]


def resolve_caveats(caveats: Caveats) -> List[Caveat]:
    """Resolve a caveat builder, or a sequence of caveats, into an ordered list of caveats."""
    match caveats:
        case CaveatBuilder():
            return caveats.build()
        case _:
            return [Caveat.model_validate(caveat) for caveat in caveats]
