# Log Handlers
"""
Log sinks fed from the event bus.

``attach_log_handler`` maps three stages onto consolidated ``LogRecord``s:

    transport_call -> request
    raw_response   -> response
    error          -> error

Handlers only observe; nothing here can change a run's outcome.
"""

import logging
from typing import List, Mapping, Optional, Protocol

import httpx

from courier.config import settings
from courier.events import EventBus, Stage
from courier.models.log_record import LogCategory, LogRecord, LogRecordConverter

SENSITIVE_HEADERS = frozenset({"authorization", "proxy-authorization", "cookie", "set-cookie", "x-api-key"})


class LogHandler(Protocol):
    """Receives consolidated log records."""

    def log(self, record: LogRecord) -> None:
        ...


def attach_log_handler(events: EventBus, handler: LogHandler) -> EventBus:
    """Subscribe ``handler`` to the request, response and error stages."""
    return (
        events
        .subscribe(Stage.TRANSPORT_CALL, lambda info, call: handler.log(LogRecord(info, LogCategory.REQUEST, call)))
        .subscribe(Stage.RAW_RESPONSE, lambda info, raw: handler.log(LogRecord(info, LogCategory.RESPONSE, raw)))
        .subscribe(Stage.ERROR, lambda info, error: handler.log(LogRecord(info, LogCategory.ERROR, error)))
    )


def _format_headers(headers: Mapping[str, str]) -> List[str]:
    lines = []
    for name, value in headers.items():
        if name.lower() in SENSITIVE_HEADERS:
            value = "***"
        lines.append(f"  {name}: {value}")
    return lines


def _format_body(body: bytes, limit: int) -> Optional[str]:
    if not body:
        return None
    text = body.decode("utf-8", errors="replace")
    if len(text) > limit:
        return f"{text[:limit]}... ({len(text) - limit} more characters)"
    return text


class TextLogRecordConverter:
    """Renders log records as multi-line, human-readable text."""

    def __init__(self, body_limit: Optional[int] = None):
        self.body_limit = body_limit if body_limit is not None else settings.log_body_limit

    def _header(self, record: LogRecord) -> List[str]:
        info = record.info
        title = f"[{record.category.value}] {info.correlation_id}"
        if info.label:
            title += f" ({info.label})"
        lines = [title]
        if info.parent_id:
            lines.append(f"  parent: {info.parent_id}")
        for controller in info.controllers:
            lines.append(f"  controller: {controller}")
        if info.source:
            lines.append(f"  source: {' > '.join(info.source)}")
        return lines

    def convert(self, record: LogRecord) -> str:
        lines = self._header(record)

        if record.category is LogCategory.REQUEST:
            call = record.details
            lines.append(f"{call.method} {call.url}")
            lines.extend(_format_headers(call.request.headers))
            try:
                body = _format_body(call.request.content, self.body_limit)
            except httpx.RequestNotRead:
                body = "<streaming body>"
            if body:
                lines.append(body)

        elif record.category is LogCategory.RESPONSE:
            raw = record.details
            response = raw.response
            lines.append(f"{response.status_code} {response.reason_phrase} ({len(raw.content)} bytes)")
            lines.extend(_format_headers(response.headers))
            body = _format_body(raw.content, self.body_limit)
            if body:
                lines.append(body)

        else:
            error = record.details
            lines.append(f"{error.phase.value} failure: {type(error.cause).__name__}: {error.cause}")
            call = getattr(error, "call", None)
            if call is not None:
                lines.append(f"  while sending {call.method} {call.url}")

        return "\n".join(lines)


class StdlibLogHandler:
    """Writes converted records to a standard-library logger."""

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        converter: Optional[LogRecordConverter] = None,
        request_level: int = logging.DEBUG,
        response_level: int = logging.INFO,
        error_level: int = logging.WARNING,
    ):
        self.logger = logger or logging.getLogger("courier.requests")
        self.converter = converter or TextLogRecordConverter()
        self._levels = {
            LogCategory.REQUEST: request_level,
            LogCategory.RESPONSE: response_level,
            LogCategory.ERROR: error_level,
        }

    def log(self, record: LogRecord) -> None:
        level = self._levels[record.category]
        if self.logger.isEnabledFor(level):
            self.logger.log(level, record.convert(self.converter))


class CollectingLogHandler:
    """Keeps every record in memory."""

    def __init__(self):
        self.records: List[LogRecord] = []

    def log(self, record: LogRecord) -> None:
        self.records.append(record)

    def for_request(self, correlation_id: str) -> List[LogRecord]:
        return [r for r in self.records if r.info.correlation_id == correlation_id]
