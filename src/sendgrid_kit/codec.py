"""JSON envelope encoding and decoding for SendGrid payloads."""

import logging
from typing import Type, TypeVar

import pydantic

from .exceptions import DecodeError, ProviderError
from .models.common import WireModel
from .models.errors import ErrorResponse

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=WireModel)


def encode(value: WireModel) -> bytes:
    """Serialize a payload to UTF-8 JSON.

    Wire aliases are used, unset optional fields are omitted and dates are
    written as Unix epoch seconds.

    Args:
        value: Payload to serialize

    Returns:
        JSON body bytes
    """
    return value.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


def decode(body: bytes, shape: Type[ModelT]) -> ModelT:
    """Deserialize a response body into the expected payload type.

    Args:
        body: Raw response body
        shape: Payload model the body must match

    Returns:
        Decoded payload

    Raises:
        DecodeError: If the body is empty, not JSON, or does not match ``shape``
    """
    if not body or not body.strip():
        raise DecodeError(f"Empty response body, expected {shape.__name__}")

    try:
        return shape.model_validate_json(body)
    except pydantic.ValidationError as e:
        raise DecodeError(
            f"Response body does not match {shape.__name__}: {e}", cause=e
        ) from e


def decode_error(status_code: int, body: bytes) -> ProviderError:
    """Build the error for a non-2xx response.

    Args:
        status_code: HTTP status of the response
        body: Raw response body

    Returns:
        ProviderError carrying the decoded error entries

    Raises:
        DecodeError: If the body holds no readable error payload
    """
    try:
        payload = decode(body, ErrorResponse)
    except DecodeError as e:
        logger.warning(f"SendGrid returned status {status_code} with an unreadable body")
        raise DecodeError(
            f"SendGrid returned status {status_code} without a readable error body",
            cause=e,
            status_code=status_code,
        ) from e

    return ProviderError(status_code, errors=payload.errors, error_id=payload.id)
