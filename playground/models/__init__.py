"""Pydantic models for API response schemas."""

from .response import (
    EnvelopeResponse,
    FileInfo,
    ResponseEnvelope,
    deserialize,
    error_response,
    guess_mime_type,
    serialize,
)

__all__ = [
    "EnvelopeResponse",
    "FileInfo",
    "ResponseEnvelope",
    "deserialize",
    "error_response",
    "guess_mime_type",
    "serialize",
]
