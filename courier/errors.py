# Pipeline Errors
"""
Error taxonomy for pipeline runs.

Every terminal failure is a ``PipelineError`` tagged with exactly one
``ErrorPhase``:

- ``PREPROCESSING``: raised by the delegate or override authority before the
  transport call (building the request or the transport call).
- ``NETWORK``: raised by the transport collaborator itself.
- ``POSTPROCESSING``: raised by the delegate or override authority after the
  transport call returned (parsing the response or extracting content).

The original exception is kept on ``cause`` and chained as ``__cause__``.
"""

from enum import Enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from courier.models.request_info import RequestInfo
    from courier.models.transport import TransportCall


class ErrorPhase(str, Enum):
    """Which side of the transport dispatch a failure occurred on."""
    PREPROCESSING = "preprocessing"
    NETWORK = "network"
    POSTPROCESSING = "postprocessing"


class PipelineError(RuntimeError):
    """Terminal failure of a pipeline run."""

    phase: ErrorPhase

    def __init__(
        self,
        cause: BaseException,
        info: Optional["RequestInfo"] = None,
    ):
        super().__init__(f"{self.phase.value} failure: {cause!r}")
        self.cause = cause
        self.info = info
        self.__cause__ = cause


class PreprocessingFailure(PipelineError):
    """Failure while building the request or the transport call."""
    phase = ErrorPhase.PREPROCESSING


class NetworkFailure(PipelineError):
    """Failure reported by the transport while dispatching ``call``."""
    phase = ErrorPhase.NETWORK

    def __init__(
        self,
        cause: BaseException,
        call: "TransportCall",
        info: Optional["RequestInfo"] = None,
    ):
        super().__init__(cause, info)
        self.call = call


class PostprocessingFailure(PipelineError):
    """Failure while parsing the response or extracting content."""
    phase = ErrorPhase.POSTPROCESSING


class UnexpectedStatusError(ValueError):
    """Raised by HTTP delegates when a response status is not accepted."""

    def __init__(self, status_code: int, response: Optional["httpx.Response"] = None):
        super().__init__(f"Unexpected HTTP status {status_code}")
        self.status_code = status_code
        self.response = response


def classify(phase: ErrorPhase, cause: BaseException, info: Optional["RequestInfo"] = None) -> PipelineError:
    """Wrap a delegate/override failure in the error class for ``phase``."""
    if phase is ErrorPhase.PREPROCESSING:
        return PreprocessingFailure(cause, info)
    if phase is ErrorPhase.POSTPROCESSING:
        return PostprocessingFailure(cause, info)
    raise ValueError("Network failures must be built with the failing TransportCall")
