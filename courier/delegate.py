# Request Delegate Contract
"""
Base class for request shapes.

A ``RequestDelegate`` turns one kind of descriptor into a transport call and
turns the raw response back into domain content. Each implementation fixes
four type slots:

    DescriptorT  -> what the caller passes to ``PipelineEngine.send``
    RequestT     -> the built, shape-specific request
    ResponseT    -> the parsed response
    ContentT     -> the value returned to the caller

Every transform may raise; the engine classifies the exception by phase.
The transforms must not touch engine state, and ``on_error`` must not raise.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from courier.errors import PipelineError
from courier.models.request_info import RequestInfo
from courier.models.transport import RawResponse, TransportCall

DescriptorT = TypeVar("DescriptorT")
RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")
ContentT = TypeVar("ContentT")


class RequestDelegate(ABC, Generic[DescriptorT, RequestT, ResponseT, ContentT]):
    """Supplies the four transforms a pipeline run calls for one request shape."""

    @abstractmethod
    def build_request(self, descriptor: DescriptorT, info: RequestInfo) -> RequestT:
        """Build the shape-specific request from the caller's descriptor."""

    @abstractmethod
    def build_transport_call(self, request: RequestT, info: RequestInfo) -> TransportCall:
        """Resolve the client and concrete request to dispatch."""

    @abstractmethod
    def parse_response(self, raw: RawResponse, info: RequestInfo) -> ResponseT:
        """Decode the raw response."""

    @abstractmethod
    def extract_content(self, response: ResponseT, info: RequestInfo) -> ContentT:
        """Pull the caller-facing content out of the parsed response."""

    def on_error(self, error: PipelineError, info: RequestInfo) -> None:
        """Called once per terminal failure. Does nothing by default."""
