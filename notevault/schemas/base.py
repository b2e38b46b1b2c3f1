"""Shared base schema for camelCase JSON payloads."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing snake_case attributes as camelCase JSON keys.

    Input accepts either form; responses are rendered with the camelCase
    aliases (FastAPI serializes response models by alias).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
