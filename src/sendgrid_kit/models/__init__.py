"""Typed payloads exchanged with the SendGrid API."""

from .common import EpochDatetime, WireEnum, WireModel
from .errors import ErrorDescription, ErrorResponse
from .delivery import (
    ClickTracking,
    Footer,
    GoogleAnalytics,
    MailSettings,
    OpenTracking,
    Setting,
    SubscriptionTracking,
    TrackingSettings,
)
from .mail import (
    AdvancedSuppressionManager,
    Disposition,
    EmailAddress,
    EmailAttachment,
    EmailContent,
    Personalization,
    SendGridEmail,
)
from .validation import (
    AdditionalChecks,
    DomainChecks,
    EmailValidationRequest,
    EmailValidationResponse,
    EmailValidationResult,
    LocalPartChecks,
    ValidationChecks,
    Verdict,
)
from .bulk import (
    SEGMENT_SIZE,
    BulkValidationJob,
    BulkValidationUploadRequest,
    FileType,
    FlatJobEnvelope,
    JobError,
    JobListResponse,
    JobStatus,
    JobSummary,
    NestedJobEnvelope,
    UploadHeader,
    UploadSlot,
)

__all__ = [
    "EpochDatetime",
    "WireEnum",
    "WireModel",
    "ErrorDescription",
    "ErrorResponse",
    "ClickTracking",
    "Footer",
    "GoogleAnalytics",
    "MailSettings",
    "OpenTracking",
    "Setting",
    "SubscriptionTracking",
    "TrackingSettings",
    "AdvancedSuppressionManager",
    "Disposition",
    "EmailAddress",
    "EmailAttachment",
    "EmailContent",
    "Personalization",
    "SendGridEmail",
    "AdditionalChecks",
    "DomainChecks",
    "EmailValidationRequest",
    "EmailValidationResponse",
    "EmailValidationResult",
    "LocalPartChecks",
    "ValidationChecks",
    "Verdict",
    "SEGMENT_SIZE",
    "BulkValidationJob",
    "BulkValidationUploadRequest",
    "FileType",
    "FlatJobEnvelope",
    "JobError",
    "JobListResponse",
    "JobStatus",
    "JobSummary",
    "NestedJobEnvelope",
    "UploadHeader",
    "UploadSlot",
]
