"""Single address validation operation."""

import logging
from typing import Optional, Union

from .base import BaseOperation, Scope
from .codec import decode, encode
from .models.validation import (
    EmailValidationRequest,
    EmailValidationResponse,
    EmailValidationResult,
)
from .transport import RequestProfile

logger = logging.getLogger(__name__)


class EmailValidator(BaseOperation):
    """Validates one address at a time with the Email Address Validation API."""

    scope = Scope.EMAIL_VALIDATION

    @property
    def profile(self) -> RequestProfile:
        return RequestProfile(timeout=self.timeouts.metadata)

    def validate(
        self,
        request: Union[EmailValidationRequest, str],
        source: Optional[str] = None,
    ) -> EmailValidationResult:
        """Validate an email address.

        Args:
            request: Validation request, or a bare email address
            source: Provenance tag, used when ``request`` is a bare address

        Returns:
            EmailValidationResult with the verdict and checks

        Raises:
            ConfigurationError: If no email validation API key is configured
            TransportError: If the request could not be completed
            ProviderError: If SendGrid rejected the request
            DecodeError: If the response could not be decoded
        """
        self._require_api_key()
        if isinstance(request, str):
            request = EmailValidationRequest(email=request, source=source)

        response = self._execute(
            "POST", "/validations/email", self.profile, body=encode(request)
        )
        self._raise_for_error(response)

        result = decode(response.body, EmailValidationResponse).result
        logger.info(
            f"Validated {result.email}: {result.verdict.value} (score {result.score})",
            extra={"operation": "validate", "verdict": result.verdict.value},
        )
        return result
