# Courier
"""Typed request pipeline with per-stage events and a single override authority."""

from .delegate import RequestDelegate
from .engine import PipelineEngine, RunState
from .errors import (
    ErrorPhase,
    NetworkFailure,
    PipelineError,
    PostprocessingFailure,
    PreprocessingFailure,
    UnexpectedStatusError,
)
from .events import Channel, EventBus, PipelineEvent, Stage
from .log_handlers import (
    CollectingLogHandler,
    LogHandler,
    StdlibLogHandler,
    TextLogRecordConverter,
    attach_log_handler,
)
from .models import (
    IdentificationInfo,
    LogCategory,
    LogRecord,
    RawResponse,
    RequestInfo,
    TransportCall,
)
from .override import OverrideAuthority
from .transport import HTTPXTransport, Transport

__version__ = "1.0.0"

__all__ = [
    # Engine
    "PipelineEngine",
    "RunState",
    # Contracts
    "RequestDelegate",
    "OverrideAuthority",
    "Transport",
    "HTTPXTransport",
    # Events
    "Channel",
    "EventBus",
    "PipelineEvent",
    "Stage",
    # Errors
    "ErrorPhase",
    "PipelineError",
    "PreprocessingFailure",
    "NetworkFailure",
    "PostprocessingFailure",
    "UnexpectedStatusError",
    # Models
    "IdentificationInfo",
    "RequestInfo",
    "TransportCall",
    "RawResponse",
    "LogCategory",
    "LogRecord",
    # Logging
    "LogHandler",
    "StdlibLogHandler",
    "CollectingLogHandler",
    "TextLogRecordConverter",
    "attach_log_handler",
]
