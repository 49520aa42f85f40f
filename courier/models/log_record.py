# Log Record Models
"""Consolidated log records built from pipeline events."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from courier.models.request_info import RequestInfo


class LogCategory(str, Enum):
    """What a log record describes."""
    REQUEST = "request"
    RESPONSE = "response"
    ERROR = "error"


@dataclass(frozen=True)
class LogRecord:
    """
    A RequestInfo snapshot paired with one category of detail.

    ``details`` is a ``TransportCall`` for requests, a ``RawResponse`` for
    responses and a ``PipelineError`` for errors.
    """
    info: RequestInfo
    category: LogCategory
    details: Any

    def convert(self, converter: "LogRecordConverter") -> str:
        return converter.convert(self)


class LogRecordConverter(Protocol):
    """Turns a log record into text."""

    def convert(self, record: LogRecord) -> str:
        ...
