# Test Configuration
"""Shared fakes and fixtures for pipeline tests."""

import asyncio
import json
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import httpx
import pytest

from courier.delegate import RequestDelegate
from courier.events import EventBus, PipelineEvent
from courier.models.request_info import RequestInfo
from courier.models.transport import RawResponse, TransportCall

BASE_URL = "https://api.test"


class FakeTransport:
    """Records dispatched calls and answers with a canned response or error."""

    def __init__(
        self,
        status_code: int = 200,
        body: bytes = b'{"name": "x"}',
        error: Optional[Exception] = None,
        delay: float = 0,
    ):
        self.status_code = status_code
        self.body = body
        self.error = error
        self.delay = delay
        self.calls: List[TransportCall] = []
        self.cancelled = False

    async def dispatch(self, call: TransportCall) -> RawResponse:
        self.calls.append(call)
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.error is not None:
            raise self.error
        response = httpx.Response(self.status_code, content=self.body, request=call.request)
        return RawResponse(content=response.content, response=response)


class ItemDelegate(RequestDelegate[Dict[str, Any], Dict[str, Any], Dict[str, Any], str]):
    """``{"id": 7}`` -> ``GET /items/7`` -> ``{"name": ...}`` -> name."""

    def __init__(self, session: httpx.AsyncClient, log: Optional[List[str]] = None):
        self.session = session
        self.errors: List[Any] = []
        self.log = log if log is not None else []

    def build_request(self, descriptor, info):
        return {"id": descriptor["id"]}

    def build_transport_call(self, request, info):
        return TransportCall(
            session=self.session,
            request=self.session.build_request("GET", f"{BASE_URL}/items/{request['id']}"),
        )

    def parse_response(self, raw, info):
        return json.loads(raw.content)

    def extract_content(self, response, info):
        return response["name"]

    def on_error(self, error, info):
        self.errors.append(error)
        self.log.append("delegate")


@pytest.fixture
def session():
    """Stand-in client that only builds requests and never opens connections."""
    client = MagicMock(spec=httpx.AsyncClient)
    client.build_request.side_effect = lambda method, url, **kwargs: httpx.Request(method, url, **kwargs)
    return client


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def delegate(session):
    return ItemDelegate(session)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def recorded(bus):
    """Every event published on ``bus``, in delivery order."""
    events: List[PipelineEvent] = []
    bus.subscribe_all(events.append)
    return events


@pytest.fixture
def info():
    return RequestInfo(label="test")


def mock_client(handler) -> httpx.AsyncClient:
    """Client whose requests are answered by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
