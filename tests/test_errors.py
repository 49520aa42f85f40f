# Error Taxonomy Tests
"""Tests for pipeline error classification."""

import httpx
import pytest

from courier.errors import (
    ErrorPhase,
    NetworkFailure,
    PipelineError,
    PostprocessingFailure,
    PreprocessingFailure,
    UnexpectedStatusError,
    classify,
)
from courier.models.transport import TransportCall


class TestClassify:
    """Test classify()."""

    def test_preprocessing(self, info):
        cause = ValueError("bad descriptor")
        error = classify(ErrorPhase.PREPROCESSING, cause, info)

        assert isinstance(error, PreprocessingFailure)
        assert error.phase is ErrorPhase.PREPROCESSING
        assert error.cause is cause
        assert error.__cause__ is cause
        assert error.info is info

    def test_postprocessing(self):
        error = classify(ErrorPhase.POSTPROCESSING, KeyError("name"))
        assert isinstance(error, PostprocessingFailure)
        assert isinstance(error, PipelineError)

    def test_network_requires_call(self):
        with pytest.raises(ValueError):
            classify(ErrorPhase.NETWORK, OSError("down"))


class TestErrors:
    """Test error attributes."""

    def test_network_failure_carries_call(self, session):
        call = TransportCall(session, session.build_request("GET", "https://api.test/"))
        cause = httpx.ConnectError("Connection refused")

        error = NetworkFailure(cause, call)

        assert error.phase is ErrorPhase.NETWORK
        assert error.call is call
        assert "network failure" in str(error)

    def test_unexpected_status(self):
        response = httpx.Response(404)
        error = UnexpectedStatusError(404, response)

        assert isinstance(error, ValueError)
        assert error.status_code == 404
        assert error.response is response
        assert "404" in str(error)
