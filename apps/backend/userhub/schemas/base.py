"""Base schema classes and the response envelope."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseResponse(BaseModel):
    """Base for all response schemas: built from attributes, serialized in camelCase."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class ApiResponse(BaseModel):
    """Uniform JSON envelope used by every endpoint.

    Optional keys are omitted from the wire format when unset; success
    envelopes always carry ``data`` (possibly null).
    """

    success: bool
    message: str | None = None
    data: Any = None
    error: str | None = None
    errors: list[Any] | None = None
    timestamp: str
