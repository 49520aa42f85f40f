# Transport
"""
Transport collaborator: dispatches a resolved ``TransportCall``.

The engine calls ``dispatch`` exactly once per run and awaits it; anything it
raises (other than cancellation) is classified as a network failure.
"""

import logging
from typing import Optional, Protocol

import httpx

from courier.config import settings
from courier.models.transport import RawResponse, TransportCall

logger = logging.getLogger("courier.transport")

_default_session: Optional[httpx.AsyncClient] = None


def get_default_session() -> httpx.AsyncClient:
    """
    Get or create the shared HTTP client.

    The client is bound to the event loop that first uses it. Call
    ``close_default_session()`` before that loop ends (as ``cli.run`` does),
    otherwise sends from a later loop fail as network failures.
    """
    global _default_session
    if _default_session is None or _default_session.is_closed:
        kwargs = {}
        if settings.base_url:
            kwargs["base_url"] = settings.base_url
        _default_session = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.timeout),
            verify=settings.verify_ssl,
            **kwargs,
        )
        logger.debug("Created shared HTTP client")
    return _default_session


async def close_default_session() -> None:
    """Close the shared HTTP client."""
    global _default_session
    if _default_session and not _default_session.is_closed:
        await _default_session.aclose()
    _default_session = None


class Transport(Protocol):
    """Anything that can send a ``TransportCall`` and return the raw response."""

    async def dispatch(self, call: TransportCall) -> RawResponse:
        ...


class HTTPXTransport:
    """Sends calls with the ``httpx.AsyncClient`` carried by the call."""

    async def dispatch(self, call: TransportCall) -> RawResponse:
        response = await call.session.send(call.request)
        logger.debug(f"{call.method} {call.url} -> {response.status_code}")
        return RawResponse(content=response.content, response=response)
