"""HTTP transport used by every SendGrid operation."""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple

import requests
from requests.structures import CaseInsensitiveDict
from urllib3.util import SKIP_HEADER

from . import __version__
from .exceptions import TransportError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"sendgrid-kit/{__version__}"

METADATA_TIMEOUT = 30.0
LISTING_TIMEOUT = 60.0
UPLOAD_TIMEOUT = 180.0

MAX_RESPONSE_BYTES = 1024 * 1024


@dataclass(frozen=True)
class RequestProfile:
    """Headers and timeout shared by every call of one operation class."""

    timeout: float = METADATA_TIMEOUT
    content_type: Optional[str] = "application/json"

    def build_headers(self, api_key: str, user_agent: str) -> List[Tuple[str, str]]:
        headers = [
            ("Authorization", f"Bearer {api_key}"),
            ("User-Agent", user_agent),
        ]
        if self.content_type:
            headers.append(("Content-Type", self.content_type))
        return headers


@dataclass(frozen=True)
class Timeouts:
    """Per-call timeouts in seconds."""

    metadata: float = METADATA_TIMEOUT
    listing: float = LISTING_TIMEOUT
    upload: float = UPLOAD_TIMEOUT


@dataclass
class HTTPRequest:
    """One outbound HTTP exchange."""

    method: str
    url: str
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: Optional[bytes] = None
    timeout: float = METADATA_TIMEOUT

    def header(self, name: str) -> Optional[str]:
        for key, value in self.headers:
            if key.lower() == name.lower():
                return value
        return None


@dataclass
class HTTPResponse:
    """Status, headers and body of a completed exchange."""

    status_code: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code <= 299

    def header(self, name: str) -> Optional[str]:
        for key, value in self.headers.items():
            if key.lower() == name.lower():
                return value
        return None


def redact_url(url: str) -> str:
    """Strip the query string, which carries signatures on pre-signed URLs."""
    return url.split("?", 1)[0]


class Transport(ABC):
    """Abstract base class for HTTP transports."""

    @abstractmethod
    def execute(self, request: HTTPRequest) -> HTTPResponse:
        """Perform one HTTP exchange.

        Args:
            request: Request to send

        Returns:
            HTTPResponse for any status code

        Raises:
            TransportError: If the exchange could not be completed
        """
        pass


class RequestsTransport(Transport):
    """Transport backed by ``requests``. Performs no retries.

    Requests go out with exactly the headers of the ``HTTPRequest`` plus the
    ones HTTP itself needs (Host, Content-Length). Session defaults and the
    User-Agent and Accept-Encoding that urllib3 would add are suppressed, so a
    pre-signed upload carries only the headers it was issued with.

    Without an injected session each thread gets its own ``requests.Session``.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        max_response_bytes: int = MAX_RESPONSE_BYTES,
    ):
        """Initialize the transport.

        Args:
            session: Session shared by every call (one per thread if omitted)
            max_response_bytes: Largest response body that will be read
        """
        self._session = session
        self._local = threading.local()
        self.max_response_bytes = max_response_bytes

    @property
    def session(self) -> requests.Session:
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    def execute(self, request: HTTPRequest) -> HTTPResponse:
        url = redact_url(request.url)
        logger.debug(f"{request.method} {url} (timeout {request.timeout}s)")

        try:
            response = self.session.request(
                request.method,
                request.url,
                headers=self._merge_headers(request.headers),
                data=request.body,
                timeout=request.timeout,
                stream=True,
            )
            try:
                body = self._read_body(response)
            finally:
                response.close()
        except requests.exceptions.Timeout as e:
            raise TransportError(
                f"{request.method} {url} timed out after {request.timeout}s", cause=e
            ) from e
        except requests.exceptions.SSLError as e:
            raise TransportError(f"TLS failure for {request.method} {url}: {e}", cause=e) from e
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Could not connect for {request.method} {url}: {e}", cause=e) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{request.method} {url} failed: {e}", cause=e) from e

        logger.debug(f"{request.method} {url} -> {response.status_code} ({len(body)} bytes)")
        return HTTPResponse(
            status_code=response.status_code,
            body=body,
            headers=dict(response.headers),
        )

    def _merge_headers(self, headers: List[Tuple[str, str]]) -> CaseInsensitiveDict:
        merged = CaseInsensitiveDict()
        for name, value in headers:
            if name in merged:
                merged[name] = f"{merged[name]}, {value}"
            else:
                merged[name] = value

        # None drops a session default; SKIP_HEADER stops urllib3 adding its own
        for name in self.session.headers:
            if name not in merged:
                merged[name] = None
        for name in ("User-Agent", "Accept-Encoding"):
            if not merged.get(name):
                merged[name] = SKIP_HEADER
        return merged

    def _read_body(self, response: requests.Response) -> bytes:
        chunks = []
        size = 0
        for chunk in response.iter_content(chunk_size=64 * 1024):
            size += len(chunk)
            if size > self.max_response_bytes:
                raise TransportError(
                    f"Response body exceeds {self.max_response_bytes} bytes",
                    context={"status_code": response.status_code},
                )
            chunks.append(chunk)
        return b"".join(chunks)
