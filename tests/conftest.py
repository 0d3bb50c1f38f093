"""Pytest fixtures for the Common Sense client tests."""

import json

import pytest

from commonsense.api.core.authentication import CredentialPlacement, Credentials
from commonsense.api.core.config import ClientConfig, Platform
from commonsense.http_client import CommonSenseHTTPClient, HTTPResponse


class RecordingHTTP(CommonSenseHTTPClient):
    """Blocking transport stub that records calls and replays one response."""

    def __init__(self, response=None):
        self.calls = []
        self.response = response or HTTPResponse(200, "OK", json.dumps({"statusCode": 200, "count": 0, "response": []}))
        self.closed = False

    def get(self, url, *, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": dict(headers or {}), "timeout": timeout})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    def close(self):
        self.closed = True


@pytest.fixture
def credentials():
    return Credentials(client_id="client-123", app_id="app-456")


@pytest.fixture
def config(credentials):
    return ClientConfig(credentials=credentials, host="https://api.example.org", platform=Platform.EDUCATION)


@pytest.fixture
def query_config():
    return ClientConfig(
        credentials=Credentials(client_id="client-123", app_id="app-456", placement=CredentialPlacement.QUERY),
        host="https://api.example.org",
        platform=Platform.EDUCATION,
    )


@pytest.fixture
def http():
    return RecordingHTTP()


@pytest.fixture
def make_http():
    return RecordingHTTP
