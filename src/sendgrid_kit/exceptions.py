"""Custom exceptions for sendgrid_kit."""

import traceback
from typing import List, Optional


class SendGridKitError(Exception):
    """Base exception for all sendgrid_kit errors."""

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        context: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.context = context or {}
        self.traceback_str = traceback.format_exc() if cause else None


class ConfigurationError(SendGridKitError):
    """Raised when configuration is invalid or a required credential is missing."""

    pass


class TransportError(SendGridKitError):
    """Raised when the HTTP exchange itself fails (connection, timeout, TLS)."""

    pass


class DecodeError(SendGridKitError):
    """Raised when a response body does not match the expected shape."""

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        context: Optional[dict] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, cause=cause, context=context)
        self.status_code = status_code


class ProviderError(SendGridKitError):
    """Raised when SendGrid rejects a request with a structured error body.

    ``message``, ``field`` and ``help`` describe the first reported error;
    ``errors`` keeps every entry and ``str(error)`` joins them all.
    """

    def __init__(
        self,
        status_code: int,
        errors: Optional[List] = None,
        error_id: Optional[str] = None,
    ):
        self.status_code = status_code
        self.errors = list(errors or [])
        self.error_id = error_id
        super().__init__(self._format_message())
        self.message = self.errors[0].message if self.errors else None

    @property
    def field(self) -> Optional[str]:
        """Field that generated the first error, when reported."""
        return self.errors[0].field if self.errors else None

    @property
    def help(self) -> Optional[str]:
        """Help text or documentation link for the first error, when reported."""
        return self.errors[0].help if self.errors else None

    def _format_message(self) -> str:
        if not self.errors:
            return f"SendGrid returned status {self.status_code} with no error details"

        parts = []
        for error in self.errors:
            text = error.message or "unknown error"
            if error.field:
                text = f"{text} (field: {error.field})"
            parts.append(text)
        return f"SendGrid returned status {self.status_code}: {'; '.join(parts)}"


class UploadSlotConsumedError(SendGridKitError):
    """Raised when an upload slot is used for more than one upload."""

    pass


class ValidationError(SendGridKitError):
    """Raised when a locally checked email address is malformed."""

    pass


def format_exception_chain(exception: Exception) -> str:
    """
    Format an exception chain for logging or display.

    Args:
        exception: The exception to format

    Returns:
        Formatted exception chain as a string
    """
    lines = []
    current = exception

    while current:
        if isinstance(current, SendGridKitError):
            lines.append(f"{type(current).__name__}: {current}")
            if current.context:
                lines.append(f"  Context: {current.context}")
            if isinstance(current, ProviderError):
                for error in current.errors:
                    if error.help:
                        lines.append(f"  Help: {error.help}")
            if current.cause:
                lines.append("  Caused by:")
                current = current.cause
            else:
                break
        else:
            lines.append(f"{type(current).__name__}: {str(current)}")
            break

    return "\n".join(lines)
