"""Shared building blocks for SendGrid wire models."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Annotated, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer


class WireModel(BaseModel):
    """Base class for every payload exchanged with the SendGrid API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class WireEnum(str, Enum):
    """String enum whose wire values are matched case-insensitively.

    SendGrid capitalizes some enumerations ("Queued", "Valid") in one
    endpoint and not in another, so lookups ignore case.
    """

    @classmethod
    def parse(cls, value: Any) -> "WireEnum":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value == wanted:
                    return member
        raise ValueError(f"{value!r} is not a valid {cls.__name__}")


def to_datetime(value: Any) -> Any:
    """Convert Unix epoch seconds to an aware UTC datetime."""
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        raise ValueError("expected Unix epoch seconds, got a boolean")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise ValueError(f"epoch seconds {value!r} out of range") from None
    raise ValueError(f"expected Unix epoch seconds, got {type(value).__name__}")


def to_epoch_seconds(value: Optional[datetime]) -> Optional[int]:
    """Convert a datetime to integer Unix epoch seconds."""
    if value is None:
        return None
    return int(value.timestamp())


# Dates travel as integer Unix epoch seconds in both directions.
EpochDatetime = Annotated[
    datetime,
    BeforeValidator(to_datetime),
    PlainSerializer(to_epoch_seconds, return_type=int),
]
