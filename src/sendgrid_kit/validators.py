"""Local email address checks."""

from typing import Tuple

from email_validator import EmailNotValidError, validate_email

from .exceptions import ValidationError


def validate_email_address(email: str) -> Tuple[bool, str]:
    """Check the syntax of an email address without any network lookup.

    Args:
        email: Email address to check

    Returns:
        Tuple of (is_valid, normalized address or error message)
    """
    try:
        valid = validate_email(email, check_deliverability=False)
        return True, valid.normalized
    except EmailNotValidError as e:
        return False, str(e)


def require_email_address(email: str) -> str:
    """Return the normalized address, or raise if its syntax is invalid.

    Raises:
        ValidationError: If the address is malformed
    """
    is_valid, result = validate_email_address(email)
    if not is_valid:
        raise ValidationError(f"Invalid email address {email!r}: {result}")
    return result
