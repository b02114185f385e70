"""Mail and tracking settings carried by a send request."""

from typing import Optional

from pydantic import model_validator

from .common import WireModel


class Setting(WireModel):
    """A mail setting that is simply switched on or off."""

    enable: bool

    @model_validator(mode="before")
    @classmethod
    def _from_bool(cls, data):
        if isinstance(data, bool):
            return {"enable": data}
        return data


class Footer(WireModel):
    """The default footer included on every email."""

    enable: bool
    text: Optional[str] = None
    html: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _from_bool(cls, data):
        if isinstance(data, bool):
            return {"enable": data}
        return data


class MailSettings(WireModel):
    """Settings controlling how SendGrid handles the email."""

    bypass_list_management: Optional[Setting] = None
    bypass_spam_management: Optional[Setting] = None
    bypass_bounce_management: Optional[Setting] = None
    footer: Optional[Footer] = None
    sandbox_mode: Optional[Setting] = None


class ClickTracking(WireModel):
    enable: bool
    enable_text: Optional[bool] = None


class OpenTracking(WireModel):
    enable: bool
    substitution_tag: Optional[str] = None


class SubscriptionTracking(WireModel):
    enable: bool
    text: Optional[str] = None
    html: Optional[str] = None
    substitution_tag: Optional[str] = None


class GoogleAnalytics(WireModel):
    enable: bool
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_term: Optional[str] = None
    utm_content: Optional[str] = None
    utm_campaign: Optional[str] = None


class TrackingSettings(WireModel):
    """Settings for tracking how recipients interact with the email."""

    click_tracking: Optional[ClickTracking] = None
    open_tracking: Optional[OpenTracking] = None
    subscription_tracking: Optional[SubscriptionTracking] = None
    ganalytics: Optional[GoogleAnalytics] = None
