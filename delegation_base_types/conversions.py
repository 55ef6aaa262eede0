"""Common conversion methods."""

from re import fullmatch, sub
from typing import List, SupportsBytes, TypeAlias

BytesConvertible: TypeAlias = str | bytes | SupportsBytes | List[int]
FixedSizeBytesConvertible: TypeAlias = str | bytes | SupportsBytes | List[int] | int
NumberConvertible: TypeAlias = str | bytes | SupportsBytes | int


def has_hex_prefix(hex_string: str) -> bool:
    """Check if a hex string starts with the hex prefix (0x)."""
    return hex_string.startswith("0x") or hex_string.startswith("0X")


def remove_hex_prefix(hex_string: str) -> str:
    """Remove the 0x prefix from a hex string if present."""
    if has_hex_prefix(hex_string):
        return hex_string[len("0x") :]
    return hex_string


def is_hex_string(hex_string: str) -> bool:
    """
    Check if a string is a `0x` prefixed hexadecimal string.

    The empty body (`"0x"`) is considered valid.
    """
    return fullmatch(r"0[xX][0-9a-fA-F]*", hex_string) is not None


def to_bytes(input_bytes: BytesConvertible) -> bytes:
    """Convert multiple types into bytes."""
    if input_bytes is None:
        raise ValueError("Cannot convert `None` input to bytes")

    if (
        isinstance(input_bytes, SupportsBytes)
        or isinstance(input_bytes, bytes)
        or isinstance(input_bytes, list)
    ):
        return bytes(input_bytes)

    if isinstance(input_bytes, str):
        # We can have a hex representation of bytes with spaces for readability
        input_bytes = remove_hex_prefix(sub(r"\s+", "", input_bytes))
        if len(input_bytes) % 2 == 1:
            input_bytes = "0" + input_bytes
        return bytes.fromhex(input_bytes)

    raise ValueError(f"invalid type for `bytes`: {type(input_bytes)}")


def to_fixed_size_bytes(
    input_bytes: FixedSizeBytesConvertible,
    size: int,
    *,
    left_padding: bool = False,
    right_padding: bool = False,
) -> bytes:
    """
    Convert multiple types into fixed-size bytes.

    :param input_bytes: The input data to convert.
    :param size: The size of the output bytes.
    :param left_padding: Whether to allow left-padding of the input data bytes using zeros. If the
        input data is an integer, padding is always performed.
    :param right_padding: Whether to allow right-padding of the input data bytes using zeros. If
        the input data is an integer, padding is always performed.
    """
    if isinstance(input_bytes, int):
        if input_bytes < 0:
            raise ValueError(f"negative value {input_bytes} cannot be converted to bytes")
        try:
            return int.to_bytes(input_bytes, length=size, byteorder="big")
        except OverflowError as e:
            raise ValueError(f"value {input_bytes} is too large for {size} bytes") from e
    input_bytes = to_bytes(input_bytes)
    if len(input_bytes) > size:
        raise ValueError(f"input is too large for fixed size bytes: {len(input_bytes)} > {size}")
    if len(input_bytes) < size:
        if left_padding:
            return bytes(input_bytes).rjust(size, b"\x00")
        if right_padding:
            return bytes(input_bytes).ljust(size, b"\x00")
        raise ValueError(
            f"input is too small for fixed size bytes: {len(input_bytes)} < {size}\n"
            "Use `left_padding=True` or `right_padding=True` to allow padding."
        )
    return input_bytes


def to_number(input_number: NumberConvertible) -> int:
    """Convert multiple types into a number."""
    if isinstance(input_number, int):
        return input_number
    if isinstance(input_number, str):
        return int(input_number, 0)
    if isinstance(input_number, bytes) or isinstance(input_number, SupportsBytes):
        return int.from_bytes(input_number, byteorder="big")
    raise ValueError(f"invalid type for `number`: {type(input_number)}")
