"""Shared schema base classes and response envelopes."""

from datetime import datetime
from typing import Annotated, Any, Generic, TypeVar

from pydantic import AfterValidator, AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.services.enrichment import as_utc

T = TypeVar("T")

# SQLite hands back naive datetimes; everything stored is UTC.
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


def id_field(wire_name: str) -> Any:
    """Primary key exposed as ``<entity>Id`` in JSON, read from ``id`` on the model."""
    return Field(validation_alias=AliasChoices("id", wire_name), serialization_alias=wire_name)


def reject_null(value: Any) -> Any:
    """Field validator body for optional update fields backed by NOT NULL columns.

    Omitted fields never reach the validator; an explicit ``null`` does.
    """
    if value is None:
        raise ValueError("must not be null")
    return value


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Successful response envelope."""

    success: bool = True
    data: T


class MessageResponse(BaseModel):
    """Successful response carrying only a message."""

    success: bool = True
    message: str


class ErrorBody(BaseModel):
    """Error payload rendered verbatim by the client."""

    message: str
    details: list[Any] | None = None


class ErrorResponse(BaseModel):
    """Failed response envelope."""

    success: bool = False
    error: ErrorBody
