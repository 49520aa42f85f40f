# Pipeline Engine
"""
Runs a request descriptor through the fixed stage sequence.

For each delegate-produced value the engine:

    1. calls the delegate transform
    2. publishes the "unmodified" event
    3. calls the override authority's hook (identity when absent)
    4. publishes the post-override event

The only suspension point is the transport dispatch. A failure anywhere moves
the run to ``FAILED``: the delegate's ``on_error``, the override authority's
``on_error`` and the ``error`` event are notified, in that order, and the
classified ``PipelineError`` is raised to the caller.

Usage:
    engine = PipelineEngine(override=BearerAuth(token), label="catalog")
    engine.log_handler(StdlibLogHandler())
    item = await engine.send(ItemDelegate(), ItemQuery(id=7))
"""

import asyncio
import inspect
import logging
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from courier.delegate import ContentT, DescriptorT, RequestDelegate
from courier.errors import ErrorPhase, NetworkFailure, PipelineError, classify
from courier.events import EventBus, Stage
from courier.log_handlers import LogHandler, attach_log_handler
from courier.models.request_info import IdentificationInfo, RequestInfo
from courier.models.transport import RawResponse, TransportCall
from courier.override import OverrideAuthority
from courier.transport import HTTPXTransport, Transport

logger = logging.getLogger("courier.engine")


class RunState(str, Enum):
    """States of a single pipeline run."""
    STARTED = "started"
    BUILT = "built"
    REQUEST_OVERRIDDEN = "request_overridden"
    CALL_BUILT = "call_built"
    CALL_OVERRIDDEN = "call_overridden"
    DISPATCHED = "dispatched"
    RAW_RESPONSE_OVERRIDDEN = "raw_response_overridden"
    PARSED = "parsed"
    RESPONSE_OVERRIDDEN = "response_overridden"
    EXTRACTED = "extracted"
    CONTENT_OVERRIDDEN = "content_overridden"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class _Run:
    """State for one in-flight ``send``. Never shared between runs."""

    def __init__(
        self,
        delegate: RequestDelegate,
        info: RequestInfo,
        override: Optional[OverrideAuthority],
        events: EventBus,
        transport: Transport,
    ):
        self.delegate = delegate
        self.info = info
        self.override = override
        self.events = events
        self.transport = transport
        self.state = RunState.STARTED
        self.dispatched = False

    @property
    def phase(self) -> ErrorPhase:
        return ErrorPhase.POSTPROCESSING if self.dispatched else ErrorPhase.PREPROCESSING

    def _advance(self, state: RunState) -> None:
        logger.debug(f"[{self.info.correlation_id}] {self.state.value} -> {state.value}")
        self.state = state

    def _apply(self, func: Callable, value: Any) -> Any:
        try:
            return func(value, self.info)
        except Exception as e:
            raise classify(self.phase, e, self.info) from e

    def _override(self, hook_name: str, value: Any, stage: Stage, state: RunState) -> Any:
        if self.override is not None:
            value = self._apply(getattr(self.override, hook_name), value)
        self._advance(state)
        self.events.publish(stage, self.info, value)
        return value

    def _transform(
        self,
        func: Callable,
        value: Any,
        stage: Stage,
        state: RunState,
        hook_name: str,
        override_stage: Stage,
        override_state: RunState,
    ) -> Any:
        value = self._apply(func, value)
        self._advance(state)
        self.events.publish(stage, self.info, value)
        return self._override(hook_name, value, override_stage, override_state)

    async def _dispatch(self, call: TransportCall) -> RawResponse:
        try:
            raw = await self.transport.dispatch(call)
        except asyncio.CancelledError:
            self._advance(RunState.CANCELLED)
            raise
        except Exception as e:
            raise NetworkFailure(e, call, self.info) from e
        finally:
            self.dispatched = True
        self._advance(RunState.DISPATCHED)
        return raw

    def _notify(self, hook: Callable, error: PipelineError, owner: str) -> None:
        try:
            hook(error, self.info)
        except Exception:
            logger.exception(f"[{self.info.correlation_id}] {owner} on_error hook failed")

    def _fail(self, error: PipelineError) -> None:
        self._advance(RunState.FAILED)
        logger.warning(
            f"[{self.info.correlation_id}] Request failed ({error.phase.value}): {error.cause!r}"
        )
        self._notify(self.delegate.on_error, error, "delegate")
        if self.override is not None:
            self._notify(self.override.on_error, error, "override")
        self.events.publish(Stage.ERROR, self.info, error)

    async def execute(self, descriptor: Any) -> Any:
        delegate = self.delegate
        try:
            self.events.publish(Stage.DELEGATE, self.info, descriptor)
            request = self._transform(
                delegate.build_request, descriptor,
                Stage.UNMODIFIED_REQUEST, RunState.BUILT,
                "request", Stage.REQUEST, RunState.REQUEST_OVERRIDDEN,
            )
            call = self._transform(
                delegate.build_transport_call, request,
                Stage.UNMODIFIED_TRANSPORT_CALL, RunState.CALL_BUILT,
                "transport_call", Stage.TRANSPORT_CALL, RunState.CALL_OVERRIDDEN,
            )

            raw = await self._dispatch(call)
            self.events.publish(Stage.RAW_RESPONSE, self.info, raw)
            raw = self._override(
                "raw_response", raw,
                Stage.MODIFIED_RAW_RESPONSE, RunState.RAW_RESPONSE_OVERRIDDEN,
            )

            response = self._transform(
                delegate.parse_response, raw,
                Stage.RESPONSE, RunState.PARSED,
                "response", Stage.MODIFIED_RESPONSE, RunState.RESPONSE_OVERRIDDEN,
            )
            content = self._transform(
                delegate.extract_content, response,
                Stage.CONTENT, RunState.EXTRACTED,
                "content", Stage.MODIFIED_CONTENT, RunState.CONTENT_OVERRIDDEN,
            )
        except PipelineError as error:
            self._fail(error)
            raise

        self._advance(RunState.COMPLETED)
        return content


class PipelineEngine:
    """
    Executes request delegates through one uniform pipeline.

    Configuration (override authority, event bus, transport, identification)
    is fixed at construction; concurrent ``send`` calls share it read-only.
    Use ``with_override`` to derive an engine with a different authority.

    Args:
        override: Optional override authority applied to every run
        events: Event bus to publish on (a new one by default)
        transport: Transport collaborator (``HTTPXTransport`` by default)
        source: Source tags appended to every run's ``RequestInfo``
        label: Optional human label for this engine
        module, file, line: Identification attributes. ``file`` and ``line``
            default to the call site constructing the engine.
    """

    def __init__(
        self,
        override: Optional[OverrideAuthority] = None,
        events: Optional[EventBus] = None,
        transport: Optional[Transport] = None,
        source: Iterable[str] = (),
        label: Optional[str] = None,
        module: str = "courier",
        file: Optional[str] = None,
        line: Optional[int] = None,
    ):
        if file is None or line is None:
            frame = inspect.currentframe()
            caller = frame.f_back if frame is not None else None
            if caller is not None:
                file = file or caller.f_code.co_filename
                line = line or caller.f_lineno
            del frame, caller

        self._override = override
        self._events = events or EventBus()
        self._transport = transport or HTTPXTransport()
        self.source = tuple(source)
        self.identification = IdentificationInfo(
            module=module,
            type=type(self).__name__,
            file=file or "<unknown>",
            line=line or 0,
            label=label,
        )

    @property
    def override(self) -> Optional[OverrideAuthority]:
        return self._override

    @property
    def events(self) -> EventBus:
        return self._events

    @property
    def transport(self) -> Transport:
        return self._transport

    def with_override(self, override: Optional[OverrideAuthority]) -> "PipelineEngine":
        """Return an engine identical to this one but with ``override`` attached."""
        return type(self)(
            override=override,
            events=self._events,
            transport=self._transport,
            source=self.source,
            label=self.identification.label,
            module=self.identification.module,
            file=self.identification.file,
            line=self.identification.line,
        )

    def configure_events(self, configure: Callable[[EventBus], Any]) -> "PipelineEngine":
        """Let ``configure`` register subscribers on the bus. Returns the engine."""
        configure(self._events)
        return self

    def log_handler(self, handler: LogHandler) -> "PipelineEngine":
        """Forward request, response and error events to ``handler`` as log records."""
        attach_log_handler(self._events, handler)
        return self

    def request_info(
        self,
        label: Optional[str] = None,
        parent: Optional[RequestInfo] = None,
        source: Iterable[str] = (),
    ) -> RequestInfo:
        """Build the ``RequestInfo`` for a new run started by this engine."""
        info = RequestInfo.child_of(parent, label) if parent is not None else RequestInfo(label=label)
        return info.add_controller(self.identification).add_source(self.source).add_source(source)

    async def send(
        self,
        delegate: RequestDelegate[DescriptorT, Any, Any, ContentT],
        descriptor: DescriptorT,
        *,
        label: Optional[str] = None,
        parent: Optional[RequestInfo] = None,
        source: Iterable[str] = (),
    ) -> ContentT:
        """
        Run ``descriptor`` through ``delegate`` and return the extracted content.

        Args:
            delegate: Request shape implementation
            descriptor: Caller-supplied description of what to request
            label: Optional label recorded on the run's ``RequestInfo``
            parent: ``RequestInfo`` of an enclosing run when composing sends
            source: Extra source tags for this run

        Returns:
            The content produced by the delegate (after the override authority)

        Raises:
            PipelineError: ``PreprocessingFailure``, ``NetworkFailure`` or
                ``PostprocessingFailure`` wrapping the underlying cause
        """
        info = self.request_info(label=label, parent=parent, source=source)
        run = _Run(delegate, info, self._override, self._events, self._transport)
        return await run.execute(descriptor)
