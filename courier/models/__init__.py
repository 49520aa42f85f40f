# Courier Models
"""Data types threaded through pipeline runs."""

from .log_record import LogCategory, LogRecord, LogRecordConverter
from .request_info import IdentificationInfo, RequestInfo
from .transport import RawResponse, TransportCall

__all__ = [
    # Correlation
    "IdentificationInfo",
    "RequestInfo",
    # Transport values
    "TransportCall",
    "RawResponse",
    # Logging
    "LogCategory",
    "LogRecord",
    "LogRecordConverter",
]
