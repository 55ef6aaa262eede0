"""Basic type primitives used to define other types."""

from re import fullmatch
from typing import Any, ClassVar, SupportsBytes, Type, TypeVar

from Crypto.Hash import keccak
from eth_utils import is_checksum_address, to_checksum_address
from pydantic import GetCoreSchemaHandler
from pydantic_core.core_schema import (
    PlainValidatorFunctionSchema,
    no_info_plain_validator_function,
    to_string_ser_schema,
)

from delegation_exceptions import InvalidAddressError

from .conversions import (
    BytesConvertible,
    FixedSizeBytesConvertible,
    NumberConvertible,
    to_bytes,
    to_fixed_size_bytes,
    to_number,
)

N = TypeVar("N", bound="Number")


class ToStringSchema:
    """
    Type converter to add a simple pydantic schema that correctly
    parses and serializes the type.
    """

    @staticmethod
    def __get_pydantic_core_schema__(
        source_type: Any, handler: GetCoreSchemaHandler
    ) -> PlainValidatorFunctionSchema:
        """Call the class constructor without info and appends the serialization schema."""
        return no_info_plain_validator_function(
            source_type,
            serialization=to_string_ser_schema(),
        )


class Number(int, ToStringSchema):
    """Class that helps represent unbounded unsigned numbers."""

    def __new__(cls, input_number: NumberConvertible | N):
        """Create a new Number object."""
        i = to_number(input_number)
        if i < 0:
            raise ValueError(f"Value {i} is negative")
        return super(Number, cls).__new__(cls, i)

    def __str__(self) -> str:
        """Return the string representation of the number."""
        return str(int(self))

    def hex(self) -> str:
        """Return the hexadecimal representation of the number."""
        return hex(self)


class HexNumber(Number):
    """Class that helps represent an hexadecimal numbers."""

    def __str__(self) -> str:
        """Return the string representation of the number."""
        return self.hex()


class Bytes(bytes, ToStringSchema):
    """Class that helps represent bytes of variable length."""

    def __new__(cls, input_bytes: BytesConvertible = b""):
        """Create a new Bytes object."""
        if type(input_bytes) is cls:
            return input_bytes
        return super(Bytes, cls).__new__(cls, to_bytes(input_bytes))

    def __hash__(self) -> int:
        """Return the hash of the bytes."""
        return super(Bytes, self).__hash__()

    def __str__(self) -> str:
        """Return the hexadecimal representation of the bytes."""
        return self.hex()

    def hex(self, *args, **kwargs) -> str:
        """Return the hexadecimal representation of the bytes."""
        return "0x" + super().hex(*args, **kwargs)

    def keccak256(self) -> "Hash":
        """Return the keccak256 hash of the byte representation."""
        k = keccak.new(digest_bits=256)
        return Hash(k.update(bytes(self)).digest())


T = TypeVar("T", bound="FixedSizeBytes")


class FixedSizeBytes(Bytes):
    """Class that helps represent bytes of fixed length."""

    byte_length: ClassVar[int]

    def __class_getitem__(cls, length: int) -> Type["FixedSizeBytes"]:
        """Create a new FixedSizeBytes class with the given length."""

        class Sized(cls):  # type: ignore
            byte_length = length

        return Sized

    def __new__(
        cls,
        input_bytes: FixedSizeBytesConvertible | T,
        *,
        left_padding: bool = False,
        right_padding: bool = False,
    ):
        """Create a new FixedSizeBytes object."""
        if type(input_bytes) is cls:
            return input_bytes
        return super(FixedSizeBytes, cls).__new__(
            cls,
            to_fixed_size_bytes(
                input_bytes,
                cls.byte_length,
                left_padding=left_padding,
                right_padding=right_padding,
            ),
        )

    def __hash__(self) -> int:
        """Return the hash of the bytes."""
        return super(FixedSizeBytes, self).__hash__()

    def __eq__(self, other: object) -> bool:
        """
        Compare two FixedSizeBytes objects to be equal.

        Strings, integers and raw bytes are left-padded to the size of the type before being
        compared; values that cannot be converted are never equal.
        """
        if other is None:
            return False
        if not isinstance(other, FixedSizeBytes):
            if not isinstance(other, (str, int, bytes, SupportsBytes)):
                return NotImplemented
            try:
                other = to_fixed_size_bytes(other, self.byte_length, left_padding=True)
            except ValueError:
                return False
        return bytes(self) == bytes(other)

    def __ne__(self, other: object) -> bool:
        """Compare two FixedSizeBytes objects to be not equal."""
        equal = self.__eq__(other)
        if equal is NotImplemented:
            return equal
        return not equal


class Address(FixedSizeBytes[20]):  # type: ignore
    """
    Class that represents Ethereum addresses.

    Any textual input must be a `0x` prefixed, 40 character hexadecimal string; mixed-case input
    must carry a valid EIP-55 checksum. The textual representation is always checksummed.
    """

    def __new__(cls, input_bytes: "FixedSizeBytesConvertible | Address"):
        """Create a new Address object, raising `InvalidAddressError` on malformed input."""
        if type(input_bytes) is cls:
            return input_bytes
        if isinstance(input_bytes, str):
            if fullmatch(r"0[xX][0-9a-fA-F]{40}", input_bytes) is None:
                raise InvalidAddressError(f"Invalid address format: {input_bytes!r}")
            body = input_bytes[2:]
            if body != body.lower() and body != body.upper() and not is_checksum_address(
                input_bytes
            ):
                raise InvalidAddressError(f"Invalid address checksum: {input_bytes!r}")
        try:
            return super(Address, cls).__new__(cls, input_bytes)
        except ValueError as e:
            raise InvalidAddressError(f"Invalid address {input_bytes!r}: {e}") from e

    def hex(self, *args, **kwargs) -> str:
        """Return the EIP-55 checksummed representation of the address."""
        return to_checksum_address("0x" + bytes(self).hex())

    def __repr__(self) -> str:
        """Return the representation of the address."""
        return f"Address({self.hex()!r})"


class Hash(FixedSizeBytes[32]):  # type: ignore
    """Class that helps represent 32-byte hashes."""

    pass
