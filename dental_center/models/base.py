"""Shared pydantic base for clinic records."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Base(BaseModel):
    """Base class for all stored records; serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_storage(self) -> dict:
        """Return the JSON-ready payload written to storage."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def merged(self, changes: dict):
        """Return a validated copy with ``changes`` (field names) applied."""

        return type(self).model_validate({**self.model_dump(), **changes})
