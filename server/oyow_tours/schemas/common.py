"""Common Pydantic schemas."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for request/response bodies exchanged in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Violation(BaseModel):
    """Validation error violation."""

    path: str = Field(..., description="JSON path to the invalid field")
    message: str = Field(..., description="Validation error message")


class Problem(BaseModel):
    """RFC 9457 Problem Details response."""

    type: Optional[str] = Field(None, description="Problem type URI")
    title: str = Field(..., description="Short human-readable summary")
    status: int = Field(..., description="HTTP status code")
    detail: Optional[str] = Field(None, description="Human-readable explanation")
    instance: Optional[str] = Field(None, description="URI reference for this occurrence")
    violations: Optional[List[Violation]] = Field(None, description="Validation errors")


class Envelope(BaseModel):
    """``{success, data|message, count?}`` wrapper used by the destination endpoints."""

    success: bool = Field(..., description="Whether the operation succeeded")
    data: Optional[Any] = Field(None, description="Result payload")
    message: Optional[str] = Field(None, description="Human-readable outcome")
    count: Optional[int] = Field(None, description="Number of items in data, for listings")
    error: Optional[str] = Field(None, description="Underlying error, on failure")
    violations: Optional[List[Violation]] = Field(None, description="Validation errors, on a 400")

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
