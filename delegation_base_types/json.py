"""
JSON form of the delegation models.
"""

from typing import Any, Sequence

from .pydantic import DelegationBaseModel


def to_json(value: DelegationBaseModel | Sequence[DelegationBaseModel] | Any) -> Any:
    """
    Convert a model, or a list of models such as a delegation chain, to JSON ready data.

    Values that are not models are converted to their string form, e.g. `Hash` to its hex.
    """
    match value:
        case DelegationBaseModel():
            return value.serialize(mode="json", by_alias=True)
        case list() | tuple():
            return [to_json(item) for item in value]
        case _:
            return str(value)
