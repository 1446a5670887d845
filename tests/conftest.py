"""Shared fixtures: a fake Productboard API behind httpx.MockTransport."""
import json

import httpx
import pytest

from productboard_core.client import ProductboardClient


class FakeApi:
    """Records every request and answers with ``responder(request)``."""

    def __init__(self, responder):
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def body(self, index: int = -1):
        return json.loads(self.requests[index].content)


@pytest.fixture(autouse=True)
def api_token(monkeypatch):
    monkeypatch.setenv("PRODUCTBOARD_API_TOKEN", "test-token")
    monkeypatch.delenv("PRODUCTBOARD_BASE_URL", raising=False)
    monkeypatch.delenv("PRODUCTBOARD_API_VERSION", raising=False)
    return "test-token"


@pytest.fixture
def fake_api():
    """Build (FakeApi, ProductboardClient) pairs from a responder function."""

    def factory(responder, settings=None):
        api = FakeApi(responder)
        return api, ProductboardClient(settings=settings, transport=httpx.MockTransport(api))

    return factory
