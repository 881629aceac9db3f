from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints


class AliasedModel(BaseModel):
    """Base for payloads whose wire names collide with BaseModel attributes (``schema``)."""

    model_config = ConfigDict(populate_by_name=True, serialize_by_alias=True)


class OrderEntry(BaseModel):
    id: str
    order: int = Field(ge=0)


# Stripped before the length check.
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
