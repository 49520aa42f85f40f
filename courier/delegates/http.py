# HTTP Request Delegates
"""Base delegate for request shapes that build plain HTTP requests."""

from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from courier.config import settings
from courier.delegate import ContentT, DescriptorT, RequestDelegate, ResponseT
from courier.errors import UnexpectedStatusError
from courier.models.request_info import RequestInfo
from courier.models.transport import RawResponse, TransportCall
from courier.transport import get_default_session


@dataclass
class HTTPRequest:
    """Shape-neutral description of an HTTP request."""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    json: Any = None
    content: Optional[bytes] = None
    data: Optional[Dict[str, Any]] = None
    files: Optional[Dict[str, Any]] = None
    timeout: Optional[float] = None


class HTTPRequestDelegate(RequestDelegate[DescriptorT, HTTPRequest, ResponseT, ContentT]):
    """
    Builds an ``httpx.Request`` from an ``HTTPRequest``.

    Subclasses implement ``build_request``, ``decode`` and ``extract_content``.
    Responses with a status outside ``accepted_status`` fail post-processing
    with ``UnexpectedStatusError``.
    """

    accepted_status = range(200, 300)

    def session(self, request: HTTPRequest, info: RequestInfo) -> httpx.AsyncClient:
        """Client used to send ``request``. Defaults to the shared client."""
        return get_default_session()

    def default_headers(self, info: RequestInfo) -> Dict[str, str]:
        return {
            "User-Agent": settings.user_agent,
            settings.correlation_header: info.correlation_id,
        }

    def build_transport_call(self, request: HTTPRequest, info: RequestInfo) -> TransportCall:
        session = self.session(request, info)
        headers = self.default_headers(info)
        headers.update(request.headers)

        transport_request = session.build_request(
            request.method.upper(),
            request.url,
            headers=headers,
            params=request.params or None,
            json=request.json,
            content=request.content,
            data=request.data,
            files=request.files,
            timeout=request.timeout if request.timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )
        return TransportCall(session=session, request=transport_request)

    def parse_response(self, raw: RawResponse, info: RequestInfo) -> ResponseT:
        if raw.status_code not in self.accepted_status:
            raise UnexpectedStatusError(raw.status_code, raw.response)
        return self.decode(raw, info)

    @abstractmethod
    def decode(self, raw: RawResponse, info: RequestInfo) -> ResponseT:
        """Decode an accepted response body."""
