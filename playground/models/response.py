"""
Response Envelope Pydantic Models

Defines the JSON envelope every upload outcome is reported through,
and the Starlette response class that renders it.
"""

import mimetypes
import posixpath
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from starlette.responses import Response


def guess_mime_type(name: str) -> str:
    """
    Look up the MIME type registered for the extension of a file name.

    Args:
        name: File name (only its final extension is considered)

    Returns:
        str: MIME type, or an empty string when the extension is unknown
    """
    if not mimetypes.inited:
        mimetypes.init()

    ext = posixpath.splitext(name)[1]
    if not ext:
        return ""
    types_map = mimetypes.types_map
    return types_map.get(ext) or types_map.get(ext.lower(), "")


class FileInfo(BaseModel):
    """
    File information nested in a response envelope.

    Describes an uploaded file by its cleaned base name and the MIME type
    inferred from that name's extension.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        description="Base file name without any directory component",
    )
    mime_type: str = Field(
        default="",
        description="MIME type inferred from the extension, empty when unknown",
    )

    @classmethod
    def from_path(cls, raw_path: str) -> "FileInfo":
        """
        Build a FileInfo from an untrusted, client-supplied path.

        Both ``/`` and ``\\`` count as separators. The path is normalized and
        reduced to its final component; NUL characters are dropped. Empty
        paths and bare roots clean to ``"."``.

        Args:
            raw_path: File name or path as declared by the client

        Returns:
            FileInfo: Cleaned name plus the MIME type for its extension
        """
        path = raw_path.replace("\x00", "").replace("\\", "/")
        name = posixpath.basename(posixpath.normpath(path)) or "."
        return cls(name=name, mime_type=guess_mime_type(name))


class ResponseEnvelope(BaseModel):
    """
    Uniform JSON envelope for API responses.

    ``error`` and ``file`` are left out of the serialized form when they are
    ``None``. ``message`` is always written, even when empty.
    """

    status: int = Field(
        ...,
        ge=0,
        le=65535,
        description="HTTP status code of the response",
    )
    message: str = Field(
        default="",
        description="Human-readable outcome message",
    )
    error: Optional[str] = Field(
        default=None,
        description="Error description, set only on failure",
    )
    file: Optional[FileInfo] = Field(
        default=None,
        description="Information on the stored file, set only on success",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": 201,
                "message": "Created: file created",
                "file": {"name": "notes.txt", "mime_type": "text/plain"},
            }
        }
    }


def serialize(envelope: ResponseEnvelope) -> bytes:
    """Encode an envelope as UTF-8 JSON, omitting unset optional fields."""
    return envelope.model_dump_json(exclude_none=True).encode("utf-8")


def deserialize(data: bytes | str) -> ResponseEnvelope:
    """Decode an envelope from its JSON form."""
    return ResponseEnvelope.model_validate_json(data)


class EnvelopeResponse(Response):
    """JSON response carrying a ResponseEnvelope."""

    media_type = "application/json"

    def __init__(self, envelope: ResponseEnvelope, headers: Optional[dict] = None):
        merged = {"X-Content-Type-Options": "nosniff"}
        if headers:
            merged.update(headers)
        self.envelope = envelope
        super().__init__(content=envelope, status_code=envelope.status, headers=merged)

    def render(self, content: ResponseEnvelope) -> bytes:
        return serialize(content)


def error_response(error: str, status_code: int) -> EnvelopeResponse:
    """
    Build an error response holding only a status code and an error text.

    Args:
        error: Error description written to the ``error`` field
        status_code: HTTP status code of the response and of the envelope

    Returns:
        EnvelopeResponse: Response with JSON content type and nosniff header
    """
    return EnvelopeResponse(ResponseEnvelope(status=status_code, error=error))
