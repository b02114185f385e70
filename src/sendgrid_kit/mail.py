"""Mail send operation."""

import logging
from typing import Optional

from .base import BaseOperation, Scope
from .codec import encode
from .models.mail import SendGridEmail
from .transport import RequestProfile

logger = logging.getLogger(__name__)


class MailSender(BaseOperation):
    """Sends email through the v3 mail send endpoint."""

    scope = Scope.MAIL_SEND

    @property
    def profile(self) -> RequestProfile:
        return RequestProfile(timeout=self.timeouts.metadata)

    def send(self, email: SendGridEmail) -> Optional[str]:
        """Send an email.

        Args:
            email: Email to send

        Returns:
            The X-Message-Id assigned by SendGrid, if it returned one

        Raises:
            ConfigurationError: If no mail send API key is configured
            TransportError: If the request could not be completed
            ProviderError: If SendGrid rejected the email
            DecodeError: If SendGrid rejected the email without a readable error
        """
        self._require_api_key()
        response = self._execute("POST", "/mail/send", self.profile, body=encode(email))

        if not response.is_success:
            logger.warning(
                f"SendGrid rejected mail send with status {response.status_code}",
                extra={"operation": "send", "status_code": response.status_code},
            )
            self._raise_for_error(response)

        message_id = response.header("X-Message-Id")
        logger.info(
            f"Email accepted by SendGrid for {len(email.personalizations)} "
            f"personalization(s) (status {response.status_code}, message_id: {message_id})",
            extra={"operation": "send", "message_id": message_id, "status_code": response.status_code},
        )
        return message_id
