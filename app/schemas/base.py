"""Shared pydantic base: snake_case in Python, camelCase on the wire."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel, to_snake


class ApiModel(BaseModel):
    """
    Base for every request/response schema.

    Field names stay snake_case in Python; the alias generator exposes them as
    camelCase in JSON. Input is accepted under either name, and FastAPI
    serializes responses by alias.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def normalize_field_name(name: str) -> str:
    """Map an external field name (camelCase or snake_case) to its internal snake_case form."""
    return to_snake(name.strip())
