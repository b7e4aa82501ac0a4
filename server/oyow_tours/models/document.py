"""Base class for documents stored in the document store."""

from datetime import datetime, timezone
from typing import Any, ClassVar, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# Whole prices stay integers on the wire
Amount = Union[int, float]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Document(BaseModel):
    """
    A stored document.

    Attributes are snake_case in Python and camelCase in the store and on
    the wire. The store identifier ``_id`` is always exposed as a string.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    collection: ClassVar[str]

    id: Optional[str] = Field(default=None, alias="_id")

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @classmethod
    def from_document(cls, document: dict[str, Any]):
        """Build the model from a raw store document."""
        return cls.model_validate(document)

    def to_document(self) -> dict[str, Any]:
        """Return the store representation, leaving ``_id`` to the store."""
        return self.model_dump(by_alias=True, exclude={"id"})

    def to_response(self) -> dict[str, Any]:
        """Return the JSON-ready wire representation."""
        return self.model_dump(mode="json", by_alias=True)
