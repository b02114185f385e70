"""Shared test fixtures."""

import json
import logging
import os
from typing import List

import pytest

from sendgrid_kit.client import SendGridClient
from sendgrid_kit.config import load_settings
from sendgrid_kit.transport import HTTPRequest, HTTPResponse, Transport


class FakeTransport(Transport):
    """Transport that records requests and replays queued responses."""

    def __init__(self, *responses: HTTPResponse):
        self.requests: List[HTTPRequest] = []
        self.responses = list(responses)

    def queue(self, status_code: int, body=b"", headers=None) -> "FakeTransport":
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode("utf-8")
        elif isinstance(body, str):
            body = body.encode("utf-8")
        self.responses.append(HTTPResponse(status_code, body, headers or {}))
        return self

    def execute(self, request: HTTPRequest) -> HTTPResponse:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        return self.responses.pop(0)

    @property
    def last_request(self) -> HTTPRequest:
        return self.requests[-1]

    def json_body(self, index: int = -1):
        return json.loads(self.requests[index].body)


@pytest.fixture
def transport():
    """Create an empty fake transport."""
    return FakeTransport()


@pytest.fixture
def client(transport):
    """Create a client holding both credentials."""
    return SendGridClient(
        api_key="SG.mail-key",
        validation_api_key="SG.validation-key",
        transport=transport,
    )


@pytest.fixture
def validation_result_payload():
    """A single address validation response as SendGrid returns it."""
    return {
        "result": {
            "email": "alice@example.com",
            "verdict": "Valid",
            "score": 0.93,
            "local": "alice",
            "host": "example.com",
            "checks": {
                "domain": {
                    "has_valid_address_syntax": True,
                    "has_mx_or_a_record": True,
                    "is_suspected_disposable_address": False,
                },
                "local_part": {"is_suspected_role_address": False},
                "additional": {
                    "has_known_bounces": False,
                    "has_suspected_bounces": False,
                },
            },
            "ip_address": "192.0.2.10",
            "source": "signup",
        }
    }


@pytest.fixture
def upload_slot_payload():
    """An upload slot response for job J1."""
    return {
        "job_id": "J1",
        "upload_uri": "https://upload.example.com/bucket/J1?X-Signature=abc",
        "upload_headers": [
            {"header": "x-amz-server-side-encryption", "value": "aws:kms"},
            {"header": "content-type", "value": "text/csv"},
        ],
    }


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep SENDGRID_ variables and cached settings out of every test."""
    for name in list(os.environ):
        if name.upper().startswith("SENDGRID_"):
            monkeypatch.delenv(name, raising=False)
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handlers installed by setup_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
