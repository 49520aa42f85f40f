# Model Tests
"""Tests for RequestInfo, TransportCall and RawResponse."""

import dataclasses

import httpx
import pytest

from courier.models.request_info import IdentificationInfo, RequestInfo
from courier.models.transport import RawResponse, TransportCall


@pytest.fixture
def identification():
    return IdentificationInfo(module="courier", type="PipelineEngine", file="app.py", line=12, label="api")


class TestRequestInfo:
    """Test RequestInfo immutability and extension."""

    def test_unique_ids(self):
        assert RequestInfo().request_id != RequestInfo().request_id

    def test_frozen(self, info):
        with pytest.raises(dataclasses.FrozenInstanceError):
            info.label = "changed"

    def test_add_controller_returns_copy(self, info, identification):
        extended = info.add_controller(identification)

        assert extended is not info
        assert info.controllers == ()
        assert extended.controllers == (identification,)
        assert extended.request_id == info.request_id

    def test_add_source_appends(self, info):
        extended = info.add_source(["a"]).add_source(["b", "c"])
        assert extended.source == ("a", "b", "c")

    def test_child_of(self, info, identification):
        parent = info.add_controller(identification).add_source(["outer"])

        child = RequestInfo.child_of(parent, label="child")

        assert child.parent_id == parent.request_id
        assert child.request_id != parent.request_id
        assert child.controllers == parent.controllers
        assert child.source == ("outer",)
        assert child.label == "child"

    def test_correlation_id(self, info):
        assert info.correlation_id == str(info.request_id)

    def test_identification_str(self, identification):
        assert str(identification) == "courier.PipelineEngine (app.py:12) [api]"


class TestTransportModels:
    """Test TransportCall and RawResponse helpers."""

    def test_with_headers_leaves_original_untouched(self, session):
        call = TransportCall(session, session.build_request("POST", "https://api.test/items", json={"a": 1}))

        updated = call.with_headers({"X-Auth": "token"})

        assert "X-Auth" not in call.request.headers
        assert updated.request.headers["X-Auth"] == "token"
        assert updated.request.headers["Content-Type"] == "application/json"
        assert updated.session is session
        assert updated.method == "POST"
        assert updated.url == "https://api.test/items"

    def test_raw_response_properties(self):
        response = httpx.Response(201, headers={"X-Id": "1"}, content=b"{}")
        raw = RawResponse(content=response.content, response=response)

        assert raw.status_code == 201
        assert raw.headers["X-Id"] == "1"

    def test_session_fixture_builds_plain_requests(self, session):
        request = session.build_request("GET", "https://api.test/items/7", headers={"X-Id": "7"})

        assert isinstance(request, httpx.Request)
        assert request.headers["X-Id"] == "7"
        session.send.assert_not_called()
