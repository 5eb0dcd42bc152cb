"""FastAPI middleware for request/response processing."""

from .error_handler import (
    ErrorHandlerMiddleware,
    UploadError,
    UnsupportedMediaTypeError,
    MalformedMultipartError,
    MissingFieldError,
    InvalidFileNameError,
    PayloadTooLargeError,
    StorageError,
    ClientDisconnectedError,
)

__all__ = [
    "ErrorHandlerMiddleware",
    "UploadError",
    "UnsupportedMediaTypeError",
    "MalformedMultipartError",
    "MissingFieldError",
    "InvalidFileNameError",
    "PayloadTooLargeError",
    "StorageError",
    "ClientDisconnectedError",
]
