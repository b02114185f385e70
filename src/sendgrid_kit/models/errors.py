"""Error payloads returned by the SendGrid API."""

from typing import List, Optional

from pydantic import Field, field_validator

from .common import WireModel


class ErrorDescription(WireModel):
    """One entry of the ``errors`` array."""

    message: Optional[str] = None
    field: Optional[str] = None
    help: Optional[str] = None


class ErrorResponse(WireModel):
    """Body returned with any non-2xx status."""

    errors: List[ErrorDescription] = Field(default_factory=list)
    id: Optional[str] = None

    @field_validator("errors", mode="before")
    @classmethod
    def _null_errors(cls, value):
        return [] if value is None else value
