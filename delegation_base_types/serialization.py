"""Delegation types for ABI serialization and encoding."""

from typing import Any, ClassVar, Dict, List, Sequence, Type, TypeVar

from .base_types import Address

S = TypeVar("S", bound="ABISerializable")


def to_serializable_element(v: Any) -> Any:
    """Return a serializable element that can be passed to `eth_abi.encode`."""
    if isinstance(v, Address):
        return str(v)
    elif isinstance(v, bytes):
        return bytes(v)
    elif isinstance(v, int):
        return int(v)
    elif isinstance(v, (list, tuple)):
        return [to_serializable_element(v) for v in v]
    elif isinstance(v, ABISerializable):
        return v.to_abi_value()
    raise ValueError(f"Unable to serialize element {v} of type {type(v)}.")


class ABISerializable:
    """
    Class that adds ABI tuple serialization to another class.

    The ABI tuple type of the object is given by `abi_type`, and `abi_fields` lists the
    attributes that make up the tuple, in order. Fields holding arrays of nested tuples are
    listed in `abi_nested` so that decoded values can be converted back into objects.
    """

    abi_type: ClassVar[str]
    abi_fields: ClassVar[List[str]]
    abi_nested: ClassVar[Dict[str, Type["ABISerializable"]]] = {}

    def get_abi_fields(self) -> List[str]:
        """
        Return an ordered list of field names to be included in the ABI tuple.

        By default, abi_fields class variable is used.
        """
        return self.abi_fields

    def to_abi_value(self) -> tuple:
        """Return an ABI serializable tuple that can be passed to `eth_abi.encode`."""
        values_list: List[Any] = []
        for field in self.get_abi_fields():
            assert hasattr(self, field), (
                f'Unable to abi serialize field "{field}" '
                f'in object type "{self.__class__.__name__}"'
            )
            try:
                values_list.append(to_serializable_element(getattr(self, field)))
            except ValueError as e:
                raise ValueError(
                    f'Unable to abi serialize field "{field}" '
                    f'in object type "{self.__class__.__name__}"'
                ) from e
        return tuple(values_list)

    @classmethod
    def from_abi_value(cls: Type[S], value: Sequence[Any]) -> S:
        """Instantiate the object from a decoded ABI tuple."""
        if len(value) != len(cls.abi_fields):
            raise ValueError(
                f"Expected {len(cls.abi_fields)} values to build {cls.__name__}, got {len(value)}"
            )
        kwargs: Dict[str, Any] = {}
        for field, v in zip(cls.abi_fields, value):
            if field in cls.abi_nested:
                v = [cls.abi_nested[field].from_abi_value(item) for item in v]
            kwargs[field] = v
        return cls(**kwargs)
