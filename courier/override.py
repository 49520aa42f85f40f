# Override Authority
"""
Cross-cutting hooks that may rewrite the value produced at every stage.

Subclass ``OverrideAuthority`` and override only the hooks you need; the
defaults return their input unchanged, so an engine with no authority (or an
authority with no overrides) behaves exactly like the delegate alone.

Example:
    class BearerAuth(OverrideAuthority):
        def __init__(self, token: str):
            self.token = token

        def transport_call(self, call, info):
            return call.with_headers({"Authorization": f"Bearer {self.token}"})

Hooks return replacements rather than mutating their input, so the
"unmodified" events keep showing what the delegate produced.
"""

from typing import Any

from courier.errors import PipelineError
from courier.models.request_info import RequestInfo
from courier.models.transport import RawResponse, TransportCall


class OverrideAuthority:
    """Identity implementation of every override hook."""

    def request(self, request: Any, info: RequestInfo) -> Any:
        return request

    def transport_call(self, call: TransportCall, info: RequestInfo) -> TransportCall:
        return call

    def raw_response(self, raw: RawResponse, info: RequestInfo) -> RawResponse:
        return raw

    def response(self, response: Any, info: RequestInfo) -> Any:
        return response

    def content(self, content: Any, info: RequestInfo) -> Any:
        return content

    def on_error(self, error: PipelineError, info: RequestInfo) -> None:
        return None
