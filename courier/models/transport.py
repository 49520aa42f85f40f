# Transport Models
"""Values exchanged with the transport collaborator."""

from dataclasses import dataclass, replace
from typing import Mapping

import httpx


@dataclass(frozen=True)
class TransportCall:
    """A fully resolved call: the client to send with and the request to send."""
    session: httpx.AsyncClient
    request: httpx.Request

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def url(self) -> str:
        return str(self.request.url)

    def with_headers(self, headers: Mapping[str, str]) -> "TransportCall":
        """Copy of this call whose request carries ``headers`` on top of its own."""
        merged = httpx.Headers(self.request.headers)
        merged.update(headers)
        try:
            body = {"content": self.request.content}
        except httpx.RequestNotRead:
            body = {"stream": self.request.stream}
        request = httpx.Request(
            self.request.method,
            self.request.url,
            headers=merged,
            extensions=dict(self.request.extensions),
            **body,
        )
        return replace(self, request=request)


@dataclass(frozen=True)
class RawResponse:
    """Undecoded response body plus the response metadata it arrived with."""
    content: bytes
    response: httpx.Response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.response.headers
