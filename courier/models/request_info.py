# Request Info Models
"""Identification and correlation context threaded through a pipeline run."""

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Tuple
from uuid import UUID, uuid4


@dataclass(frozen=True)
class IdentificationInfo:
    """
    Identifies one engine instance (and the call site that built it).

    The values are opaque to the pipeline; they exist so that log sinks can
    tell which engine touched a run.

    Attributes:
        module: Package or module name that owns the engine
        type: Engine class name
        file: Source file of the construction site
        line: Source line of the construction site
        label: Optional human label
    """
    module: str
    type: str
    file: str
    line: int
    label: Optional[str] = None

    def __str__(self) -> str:
        location = f"{self.module}.{self.type} ({self.file}:{self.line})"
        if self.label:
            return f"{location} [{self.label}]"
        return location


@dataclass(frozen=True)
class RequestInfo:
    """
    Correlation context for a single ``send`` invocation.

    Instances are immutable. Only the engine produces extended copies,
    through ``add_controller`` and ``add_source``.
    """
    request_id: UUID = field(default_factory=uuid4)
    controllers: Tuple[IdentificationInfo, ...] = ()
    source: Tuple[str, ...] = ()
    label: Optional[str] = None
    parent_id: Optional[UUID] = None

    @classmethod
    def child_of(cls, parent: "RequestInfo", label: Optional[str] = None) -> "RequestInfo":
        """Start a new run that inherits the parent's controllers and sources."""
        return cls(
            controllers=parent.controllers,
            source=parent.source,
            label=label,
            parent_id=parent.request_id,
        )

    def add_controller(self, identification: IdentificationInfo) -> "RequestInfo":
        return replace(self, controllers=self.controllers + (identification,))

    def add_source(self, source: Iterable[str]) -> "RequestInfo":
        return replace(self, source=self.source + tuple(source))

    @property
    def correlation_id(self) -> str:
        return str(self.request_id)
