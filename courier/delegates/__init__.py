# Request Shapes
"""Ready-made request delegates for HTTP, JSON and upload requests."""

from .http import HTTPRequest, HTTPRequestDelegate
from .json import JSONCallDelegate, JSONRequestDelegate, JSONResponse
from .upload import UploadDescriptor, UploadRequestDelegate

__all__ = [
    "HTTPRequest",
    "HTTPRequestDelegate",
    "JSONCallDelegate",
    "JSONRequestDelegate",
    "JSONResponse",
    "UploadDescriptor",
    "UploadRequestDelegate",
]
