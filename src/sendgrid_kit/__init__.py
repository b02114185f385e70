"""Typed client for the SendGrid mail send and email validation APIs."""

__version__ = "0.1.0"

from .client import SendGridClient
from .bulk import BulkValidationJobManager, UploadResult
from .config import SendGridSettings, load_settings
from .exceptions import (
    ConfigurationError,
    DecodeError,
    ProviderError,
    SendGridKitError,
    TransportError,
    UploadSlotConsumedError,
    ValidationError,
)
from .logging import setup_logging, get_logger
from .transport import HTTPRequest, HTTPResponse, RequestsTransport, Timeouts, Transport

__all__ = [
    "SendGridClient",
    "BulkValidationJobManager",
    "UploadResult",
    "SendGridSettings",
    "load_settings",
    "ConfigurationError",
    "DecodeError",
    "ProviderError",
    "SendGridKitError",
    "TransportError",
    "UploadSlotConsumedError",
    "ValidationError",
    "setup_logging",
    "get_logger",
    "HTTPRequest",
    "HTTPResponse",
    "RequestsTransport",
    "Timeouts",
    "Transport",
]
