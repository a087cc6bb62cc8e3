"""
Shared schema building blocks.

Dependencies: pydantic
System role: camelCase wire format and the error envelope
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys, populated by either name."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorBody(BaseModel):
    """Machine-readable code plus a human-readable message."""

    code: str = Field(description="Stable error code, e.g. NOT_FOUND")
    message: str = Field(description="Human-readable explanation")


class ErrorResponse(BaseModel):
    """Error envelope returned for every non-2xx response."""

    error: ErrorBody
