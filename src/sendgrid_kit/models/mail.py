"""Models for the mail send endpoint."""

import base64
from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import Field, model_validator

from .common import EpochDatetime, WireEnum, WireModel
from .delivery import MailSettings, TrackingSettings

# Caller-supplied dynamic template data. Parametrize with a pydantic model
# (``Personalization[MyData]``) to have its shape checked; unparametrized, any
# JSON-serializable value is accepted.
TemplateDataT = TypeVar("TemplateDataT")


class EmailAddress(WireModel):
    """An email address with an optional display name."""

    email: str
    name: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _from_string(cls, data):
        if isinstance(data, str):
            return {"email": data}
        return data


class EmailContent(WireModel):
    """One body part of the email."""

    type: str = "text/plain"
    value: str = Field(min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _from_string(cls, data):
        if isinstance(data, str):
            return {"type": "text/plain", "value": data}
        return data

    @classmethod
    def html(cls, value: str) -> "EmailContent":
        return cls(type="text/html", value=value)


class Disposition(WireEnum):
    """How an attachment is displayed."""

    INLINE = "inline"
    ATTACHMENT = "attachment"


class EmailAttachment(WireModel):
    """A file attached to the email, carried as base64 text."""

    content: str
    filename: str
    type: Optional[str] = None
    disposition: Optional[Disposition] = None
    content_id: Optional[str] = None

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        filename: str,
        type: Optional[str] = None,
        disposition: Optional[Disposition] = None,
        content_id: Optional[str] = None,
    ) -> "EmailAttachment":
        """Build an attachment from raw file bytes."""
        return cls(
            content=base64.b64encode(data).decode("ascii"),
            filename=filename,
            type=type,
            disposition=disposition,
            content_id=content_id,
        )


class AdvancedSuppressionManager(WireModel):
    """Unsubscribe group handling for the email."""

    group_id: int
    groups_to_display: Optional[List[int]] = None


class Personalization(WireModel, Generic[TemplateDataT]):
    """An envelope: who receives one message and how it is handled."""

    to: List[EmailAddress] = Field(min_length=1)
    cc: Optional[List[EmailAddress]] = None
    bcc: Optional[List[EmailAddress]] = None
    from_: Optional[EmailAddress] = Field(default=None, alias="from")
    subject: Optional[str] = None
    headers: Optional[Dict[str, str]] = None
    substitutions: Optional[Dict[str, str]] = None
    dynamic_template_data: Optional[TemplateDataT] = None
    custom_args: Optional[Dict[str, str]] = None
    send_at: Optional[EpochDatetime] = None


class SendGridEmail(WireModel, Generic[TemplateDataT]):
    """A complete mail send request."""

    personalizations: List[Personalization[TemplateDataT]] = Field(min_length=1)
    from_: EmailAddress = Field(alias="from")
    reply_to: Optional[EmailAddress] = None
    reply_to_list: Optional[List[EmailAddress]] = None
    subject: Optional[str] = None
    content: Optional[List[EmailContent]] = None
    attachments: Optional[List[EmailAttachment]] = None
    template_id: Optional[str] = None
    headers: Optional[Dict[str, str]] = None
    categories: Optional[List[str]] = None
    custom_args: Optional[Dict[str, str]] = None
    send_at: Optional[EpochDatetime] = None
    batch_id: Optional[str] = None
    asm: Optional[AdvancedSuppressionManager] = None
    ip_pool_name: Optional[str] = None
    mail_settings: Optional[MailSettings] = None
    tracking_settings: Optional[TrackingSettings] = None

    @model_validator(mode="after")
    def _single_reply_to(self):
        if self.reply_to is not None and self.reply_to_list is not None:
            raise ValueError("reply_to and reply_to_list are mutually exclusive")
        return self
