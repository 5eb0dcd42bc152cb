"""
Centralized error handling for the upload API.

Defines the upload error taxonomy and a middleware that turns anything
escaping a route into a JSON envelope.
"""

import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from playground.models.response import error_response

logger = logging.getLogger(__name__)


class UploadError(Exception):
    """Base exception for upload failures reported to the client."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class UnsupportedMediaTypeError(UploadError):
    """Raised when a content type maps to no known file extension."""

    def __init__(self, content_type: str):
        shown = content_type or "<none>"
        super().__init__(
            message=f"Unsupported media type: {shown}",
            status_code=415,
        )


class MalformedMultipartError(UploadError):
    """Raised when a multipart/form-data body cannot be parsed."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Malformed multipart body: {reason}",
            status_code=400,
        )


class MissingFieldError(UploadError):
    """Raised when the multipart body lacks the expected file field."""

    def __init__(self, field_name: str):
        super().__init__(
            message=f"Missing file field '{field_name}'",
            status_code=400,
        )


class InvalidFileNameError(UploadError):
    """Raised when a declared file name cleans to nothing usable."""

    def __init__(self, filename: str):
        super().__init__(
            message=f"Invalid file name: {filename!r}",
            status_code=400,
        )


class PayloadTooLargeError(UploadError):
    """Raised when an upload exceeds the configured size limit."""

    def __init__(self, limit: int):
        super().__init__(
            message=f"Upload exceeds the limit of {limit} bytes",
            status_code=413,
        )


class StorageError(UploadError):
    """Raised when the upload directory or file cannot be written."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Failed to store file: {reason}",
            status_code=500,
        )


class ClientDisconnectedError(UploadError):
    """Raised when the client goes away before the body was received."""

    def __init__(self):
        super().__init__(
            message="Client disconnected during upload",
            status_code=400,
        )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware that catches unhandled exceptions and returns envelope responses.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response

        except Exception as e:
            # Log full stack trace for unexpected errors
            logger.exception(f"Unhandled exception: {str(e)}")
            return error_response("Internal server error", 500)
