# Upload Request Delegate
"""Multipart file uploads to endpoints that answer with JSON."""

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from courier.delegates.http import HTTPRequest
from courier.delegates.json import JSONRequestDelegate
from courier.models.request_info import RequestInfo


@dataclass(frozen=True)
class UploadDescriptor:
    """
    What to upload and where.

    Attributes:
        url: Target URL
        file: Raw bytes or a path to read
        field_name: Multipart field carrying the file
        filename: Name sent with the file (defaults to the path's name)
        content_type: MIME type (guessed from the filename when omitted)
        fields: Extra form fields
        headers: Extra request headers
        method: HTTP method
    """
    url: str
    file: Union[bytes, str, Path]
    field_name: str = "file"
    filename: Optional[str] = None
    content_type: Optional[str] = None
    fields: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    method: str = "POST"


def _detect_mime(filename: str) -> str:
    mime, _ = mimetypes.guess_type(filename)
    return mime or "application/octet-stream"


class UploadRequestDelegate(JSONRequestDelegate[UploadDescriptor, Any]):
    """Uploads one file as ``multipart/form-data``."""

    def build_request(self, descriptor: UploadDescriptor, info: RequestInfo) -> HTTPRequest:
        if isinstance(descriptor.file, (str, Path)):
            path = Path(descriptor.file)
            if not path.is_file():
                raise FileNotFoundError(f"Upload source not found: {path}")
            payload = path.read_bytes()
            filename = descriptor.filename or path.name
        else:
            payload = descriptor.file
            filename = descriptor.filename or "upload.bin"

        content_type = descriptor.content_type or _detect_mime(filename)
        return HTTPRequest(
            method=descriptor.method,
            url=descriptor.url,
            headers=dict(descriptor.headers),
            data=dict(descriptor.fields) or None,
            files={descriptor.field_name: (filename, payload, content_type)},
        )
