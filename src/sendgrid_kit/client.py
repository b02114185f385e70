"""Client facade holding credentials, region and transport."""

import logging
from typing import TYPE_CHECKING, List, Optional, Union

from .base import base_url_for
from .bulk import BulkValidationJobManager, UploadResult
from .mail import MailSender
from .models.bulk import BulkValidationJob, FileType, JobSummary, UploadSlot
from .models.mail import SendGridEmail
from .models.validation import EmailValidationRequest, EmailValidationResult
from .transport import DEFAULT_USER_AGENT, RequestsTransport, Timeouts, Transport
from .validation import EmailValidator

if TYPE_CHECKING:
    from .config import SendGridSettings

logger = logging.getLogger(__name__)


class SendGridClient:
    """Typed client for the SendGrid mail send and email validation APIs.

    The client holds up to one credential per scope. Calls that need a
    missing credential raise ConfigurationError without touching the network.
    Calls share no mutable state beyond the transport. The default
    transport keeps one requests.Session per thread, so one instance can be
    used from several threads. An injected session is shared as given.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        validation_api_key: Optional[str] = None,
        for_eu: bool = False,
        transport: Optional[Transport] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeouts: Optional[Timeouts] = None,
    ):
        """Initialize the client.

        Args:
            api_key: Mail send API key
            validation_api_key: Email validation API key
            for_eu: Use the EU regional endpoint instead of the global one
            transport: Transport for HTTP exchanges (requests-based by default)
            user_agent: User-Agent sent with API calls
            timeouts: Per-call timeouts
        """
        self.base_url = base_url_for(for_eu)
        self.transport = transport or RequestsTransport()

        common = dict(
            transport=self.transport,
            base_url=self.base_url,
            user_agent=user_agent,
            timeouts=timeouts,
        )
        self.mail = MailSender(api_key, **common)
        self.validation = EmailValidator(validation_api_key, **common)
        self.bulk_validation = BulkValidationJobManager(validation_api_key, **common)

    @classmethod
    def from_settings(
        cls, settings: "SendGridSettings", transport: Optional[Transport] = None
    ) -> "SendGridClient":
        """Build a client from loaded settings."""
        if transport is None:
            transport = RequestsTransport(max_response_bytes=settings.max_response_bytes)
        return cls(
            api_key=settings.api_key,
            validation_api_key=settings.validation_api_key,
            for_eu=settings.for_eu,
            transport=transport,
            user_agent=settings.user_agent,
            timeouts=settings.timeouts.to_timeouts(),
        )

    def send(self, email: SendGridEmail) -> Optional[str]:
        """Send an email. See ``MailSender.send``."""
        return self.mail.send(email)

    def validate_email(
        self,
        request: Union[EmailValidationRequest, str],
        source: Optional[str] = None,
    ) -> EmailValidationResult:
        """Validate one address. See ``EmailValidator.validate``."""
        return self.validation.validate(request, source=source)

    def request_upload_slot(self, file_type: Union[FileType, str]) -> UploadSlot:
        return self.bulk_validation.request_upload_slot(file_type)

    def upload_file(self, file_data: bytes, slot: UploadSlot) -> UploadResult:
        return self.bulk_validation.upload_file(file_data, slot)

    def upload_bulk_validation_file(
        self, file_data: bytes, file_type: Union[FileType, str]
    ) -> UploadResult:
        return self.bulk_validation.upload_bulk_validation_file(file_data, file_type)

    def get_bulk_validation_job(self, job_id: str) -> BulkValidationJob:
        return self.bulk_validation.get_job(job_id)

    def list_bulk_validation_jobs(self) -> List[JobSummary]:
        return self.bulk_validation.list_jobs()

    def __repr__(self) -> str:
        return (
            f"SendGridClient(base_url={self.base_url!r}, "
            f"mail_send={self.mail.has_credential}, "
            f"email_validation={self.validation.has_credential})"
        )
