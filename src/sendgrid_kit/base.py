"""Base class shared by SendGrid operations."""

import logging
from enum import Enum
from typing import Optional

from .codec import decode_error
from .exceptions import ConfigurationError
from .transport import (
    DEFAULT_USER_AGENT,
    HTTPRequest,
    HTTPResponse,
    RequestProfile,
    Timeouts,
    Transport,
)

logger = logging.getLogger(__name__)

GLOBAL_BASE_URL = "https://api.sendgrid.com/v3"
EU_BASE_URL = "https://api.eu.sendgrid.com/v3"


def base_url_for(for_eu: bool = False) -> str:
    """Select the API base URL for global or EU regional accounts."""
    return EU_BASE_URL if for_eu else GLOBAL_BASE_URL


class Scope(str, Enum):
    """Credential scopes understood by SendGrid."""

    MAIL_SEND = "mail_send"
    EMAIL_VALIDATION = "email_validation"


class BaseOperation:
    """Common plumbing for operations bound to one credential scope."""

    scope: Scope

    def __init__(
        self,
        api_key: Optional[str],
        transport: Transport,
        base_url: str = GLOBAL_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeouts: Optional[Timeouts] = None,
    ):
        """Initialize the operation.

        Args:
            api_key: Bearer token for this operation's scope, or None if absent
            transport: Transport that performs the HTTP exchanges
            base_url: API base URL (global or EU)
            user_agent: User-Agent sent with every API call
            timeouts: Per-call timeouts
        """
        self._api_key = api_key or None
        self.transport = transport
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeouts = timeouts or Timeouts()

    @property
    def has_credential(self) -> bool:
        return self._api_key is not None

    def _require_api_key(self) -> str:
        """Return the credential for this scope.

        Raises:
            ConfigurationError: If no credential was configured
        """
        if self._api_key is None:
            raise ConfigurationError(
                f"No API key configured for the {self.scope.value} scope",
                context={"scope": self.scope.value},
            )
        return self._api_key

    def _execute(
        self,
        method: str,
        path: str,
        profile: RequestProfile,
        body: Optional[bytes] = None,
    ) -> HTTPResponse:
        """Send an authenticated API call.

        The credential is checked before anything touches the network.
        """
        api_key = self._require_api_key()
        request = HTTPRequest(
            method=method,
            url=f"{self.base_url}{path}",
            headers=profile.build_headers(api_key, self.user_agent),
            body=body,
            timeout=profile.timeout,
        )
        return self.transport.execute(request)

    @staticmethod
    def _raise_for_error(response: HTTPResponse) -> None:
        """Raise the decoded provider error for a non-2xx response."""
        if not response.is_success:
            raise decode_error(response.status_code, response.body)

    def __repr__(self) -> str:
        state = "configured" if self.has_credential else "missing"
        return f"{type(self).__name__}(base_url={self.base_url!r}, credential={state})"
