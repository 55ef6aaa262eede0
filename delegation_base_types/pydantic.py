"""
Base pydantic models of the delegation types.

Every model serializes its hex primitives as strings, so the JSON form of a model is the
transport form expected by the delegation manager tooling (checksummed addresses, `0x`
prefixed byte strings and numbers).
"""

from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Model = TypeVar("Model", bound=BaseModel)


class DelegationBaseModel(BaseModel):
    """Base model for all delegation models."""

    def serialize(
        self,
        mode: Literal["json", "python"],
        by_alias: bool,
        exclude_none: bool = True,
    ) -> dict[str, Any]:
        """
        Dump the model, leaving out unset optional fields such as a missing authority.

        :param mode: `json` for JSON ready values, `python` to keep the typed values.
        :param by_alias: Whether to use the camel case field names.
        :param exclude_none: Whether to leave out fields with None values.
        """
        return self.model_dump(mode=mode, by_alias=by_alias, exclude_none=exclude_none)

    def __repr_args__(self):
        """Render hex primitives with their string form in the model representation."""
        for name in self.serialize(mode="python", by_alias=False):
            value = getattr(self, name)
            match value:
                case list() | dict() | BaseModel():
                    yield name, value
                case _:
                    yield name, str(value)


class CamelModel(DelegationBaseModel):
    """
    Model whose fields are read and written with camel case names.

    Fields can also be populated with their Python names, e.g. both `parentDelegation` and
    `parent_delegation` are accepted.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
    )

    def copy(self: Model, **kwargs) -> Model:  # type: ignore[override]
        """Return a validated copy of the model with the given fields replaced."""
        return self.__class__(**(self.model_dump(exclude_unset=True) | kwargs))
