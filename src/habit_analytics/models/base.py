"""Shared pydantic base for habit analytics models."""

from pydantic import BaseModel, ConfigDict


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys.

    Field names stay snake_case in Python; ``model_dump(by_alias=True)``
    produces the camelCase shape used by widget and watch exporters.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
