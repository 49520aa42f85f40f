# JSON Request Delegates
"""Delegates for REST endpoints that answer with JSON."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict

from courier.delegate import ContentT, DescriptorT
from courier.delegates.http import HTTPRequest, HTTPRequestDelegate
from courier.models.request_info import RequestInfo
from courier.models.transport import RawResponse


@dataclass(frozen=True)
class JSONResponse:
    """Decoded JSON response."""
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    data: Any = None


class JSONRequestDelegate(HTTPRequestDelegate[DescriptorT, JSONResponse, ContentT]):
    """
    Decodes response bodies as JSON.

    An empty body decodes to ``None``; a malformed body raises
    ``json.JSONDecodeError`` (a post-processing failure).
    """

    def decode(self, raw: RawResponse, info: RequestInfo) -> JSONResponse:
        data = json.loads(raw.content) if raw.content else None
        return JSONResponse(
            status_code=raw.status_code,
            headers=dict(raw.headers),
            data=data,
        )

    def extract_content(self, response: JSONResponse, info: RequestInfo) -> ContentT:
        return response.data


class JSONCallDelegate(JSONRequestDelegate[HTTPRequest, Any]):
    """Sends an ``HTTPRequest`` descriptor as-is and returns the decoded JSON."""

    def build_request(self, descriptor: HTTPRequest, info: RequestInfo) -> HTTPRequest:
        if not descriptor.method or not descriptor.url:
            raise ValueError("HTTPRequest requires a method and a URL")
        return descriptor
