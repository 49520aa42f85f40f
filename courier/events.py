# Pipeline Event Bus
"""
Per-stage publish/subscribe channels for pipeline runs.

Each stage boundary has its own ``Channel``. Subscribers are plain callables
taking ``(info, value)``; they run inline, synchronously, in subscription
order. A subscriber that raises is logged and skipped so that its siblings
still receive the event and the run itself is unaffected.

``subscribe_all`` registers a callable that receives a ``PipelineEvent`` for
every stage, in pipeline order, after that stage's own subscribers.

Usage:
    bus = EventBus()
    bus.subscribe(Stage.TRANSPORT_CALL, lambda info, call: print(call.url))
    bus.on_error.subscribe(lambda info, error: alert(error))
    bus.subscribe_all(lambda event: trace.append(event.stage))
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Tuple

from courier.models.request_info import RequestInfo

logger = logging.getLogger("courier.events")


class Stage(str, Enum):
    """Stage boundaries, in the order their events fire."""
    DELEGATE = "delegate"
    UNMODIFIED_REQUEST = "unmodified_request"
    REQUEST = "request"
    UNMODIFIED_TRANSPORT_CALL = "unmodified_transport_call"
    TRANSPORT_CALL = "transport_call"
    RAW_RESPONSE = "raw_response"
    MODIFIED_RAW_RESPONSE = "modified_raw_response"
    RESPONSE = "response"
    MODIFIED_RESPONSE = "modified_response"
    CONTENT = "content"
    MODIFIED_CONTENT = "modified_content"
    ERROR = "error"


@dataclass(frozen=True)
class PipelineEvent:
    """One published event, as delivered to aggregated subscribers."""
    stage: Stage
    info: RequestInfo
    value: Any


Subscriber = Callable[[RequestInfo, Any], None]
EventSubscriber = Callable[[PipelineEvent], None]


def _deliver(callback: Callable, args: tuple, stage: Stage, info: RequestInfo) -> None:
    try:
        callback(*args)
    except Exception:
        logger.exception(
            f"[{info.correlation_id}] Subscriber {callback!r} failed on {stage.value}"
        )


class Channel:
    """Subscriber list for a single stage."""

    def __init__(self, stage: Stage):
        self.stage = stage
        self._subscribers: Tuple[Subscriber, ...] = ()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Subscriber) -> "Channel":
        with self._lock:
            self._subscribers = self._subscribers + (callback,)
        return self

    def unsubscribe(self, callback: Subscriber) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
            subscribers.remove(callback)
            self._subscribers = tuple(subscribers)

    def publish(self, info: RequestInfo, value: Any) -> None:
        for callback in self._subscribers:
            _deliver(callback, (info, value), self.stage, info)


class EventBus:
    """One ``Channel`` per stage plus an aggregated subscription."""

    def __init__(self):
        self._channels: Dict[Stage, Channel] = {stage: Channel(stage) for stage in Stage}
        self._all: Tuple[EventSubscriber, ...] = ()
        self._lock = threading.Lock()

        self.on_delegate = self._channels[Stage.DELEGATE]
        self.on_unmodified_request = self._channels[Stage.UNMODIFIED_REQUEST]
        self.on_request = self._channels[Stage.REQUEST]
        self.on_unmodified_transport_call = self._channels[Stage.UNMODIFIED_TRANSPORT_CALL]
        self.on_transport_call = self._channels[Stage.TRANSPORT_CALL]
        self.on_raw_response = self._channels[Stage.RAW_RESPONSE]
        self.on_modified_raw_response = self._channels[Stage.MODIFIED_RAW_RESPONSE]
        self.on_response = self._channels[Stage.RESPONSE]
        self.on_modified_response = self._channels[Stage.MODIFIED_RESPONSE]
        self.on_content = self._channels[Stage.CONTENT]
        self.on_modified_content = self._channels[Stage.MODIFIED_CONTENT]
        self.on_error = self._channels[Stage.ERROR]

    def channel(self, stage: Stage) -> Channel:
        return self._channels[Stage(stage)]

    def subscribe(self, stage: Stage, callback: Subscriber) -> "EventBus":
        """Register ``callback`` for one stage. Returns the bus for chaining."""
        self.channel(stage).subscribe(callback)
        return self

    def unsubscribe(self, stage: Stage, callback: Subscriber) -> None:
        self.channel(stage).unsubscribe(callback)

    def subscribe_all(self, callback: EventSubscriber) -> "EventBus":
        """Register ``callback`` for every stage of every run."""
        with self._lock:
            self._all = self._all + (callback,)
        return self

    def unsubscribe_all(self, callback: EventSubscriber) -> None:
        with self._lock:
            subscribers = list(self._all)
            subscribers.remove(callback)
            self._all = tuple(subscribers)

    def publish(self, stage: Stage, info: RequestInfo, value: Any) -> None:
        """Deliver one event to the stage's subscribers, then to aggregated ones."""
        stage = Stage(stage)
        self._channels[stage].publish(info, value)

        aggregated = self._all
        if aggregated:
            event = PipelineEvent(stage=stage, info=info, value=value)
            for callback in aggregated:
                _deliver(callback, (event,), stage, info)
