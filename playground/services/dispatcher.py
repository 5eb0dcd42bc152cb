"""
Upload Dispatcher Service

Classifies upload requests by content type, stores their payload and
reports the outcome as a response envelope.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import AsyncIterator, List, Optional, Sequence

from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import ClientDisconnect, Request
from starlette.responses import Response

from playground.config import Settings
from playground.middleware.error_handler import (
    ClientDisconnectedError,
    InvalidFileNameError,
    MalformedMultipartError,
    MissingFieldError,
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
    UploadError,
)
from playground.models.response import (
    EnvelopeResponse,
    FileInfo,
    ResponseEnvelope,
    error_response,
)
from playground.services.content_typing import extension_for, is_multipart_form
from playground.services.file_storage import UploadStorage

logger = logging.getLogger(__name__)

CREATED_MESSAGE = f"{HTTPStatus.CREATED.phrase}: file created"

# Names that would resolve to the upload directory or its parent
RESERVED_NAMES = {"", ".", ".."}


class Outcome(str, Enum):
    """Whether a classifier took care of a request."""

    HANDLED = "handled"
    NOT_APPLICABLE = "not_applicable"


@dataclass(frozen=True)
class ClassifierResult:
    """Tagged result of running one classifier against a request."""

    outcome: Outcome
    envelope: Optional[ResponseEnvelope] = None

    @classmethod
    def handled(cls, envelope: ResponseEnvelope) -> "ClassifierResult":
        return cls(Outcome.HANDLED, envelope)

    @classmethod
    def not_applicable(cls) -> "ClassifierResult":
        return cls(Outcome.NOT_APPLICABLE)


def created_envelope(info: FileInfo) -> ResponseEnvelope:
    return ResponseEnvelope(
        status=HTTPStatus.CREATED.value,
        message=CREATED_MESSAGE,
        file=info,
    )


def check_declared_length(request: Request, max_size: Optional[int]) -> None:
    """
    Reject a request whose Content-Length already exceeds the upload limit.

    Raises:
        PayloadTooLargeError: If the declared length is above max_size
    """
    declared = request.headers.get("content-length")
    if max_size is None or declared is None or not declared.isdigit():
        return
    if int(declared) > max_size:
        logger.warning(f"Declared length {declared} exceeds limit {max_size}")
        raise PayloadTooLargeError(max_size)


async def read_chunks(file: UploadFile, chunk_size: int) -> AsyncIterator[bytes]:
    """Yield the content of an uploaded part in chunks."""
    while chunk := await file.read(chunk_size):
        yield chunk


class ContentClassifier(ABC):
    """
    A predicate over the request's Content-Type plus a handler.

    Subclasses implement ``applies_to`` and ``handle``; ``classify`` ties them
    together into a tagged result.
    """

    name = "base"

    def __init__(self, storage: UploadStorage, settings: Settings):
        self.storage = storage
        self.settings = settings

    @abstractmethod
    def applies_to(self, content_type: str) -> bool:
        """Check whether this classifier handles the given Content-Type."""

    @abstractmethod
    async def handle(self, request: Request) -> ResponseEnvelope:
        """
        Store the request payload.

        Returns:
            ResponseEnvelope: Success envelope for the stored file

        Raises:
            UploadError: For any failure, reported by the dispatcher
        """

    async def classify(self, request: Request) -> ClassifierResult:
        content_type = request.headers.get("content-type", "")
        if not self.applies_to(content_type):
            return ClassifierResult.not_applicable()
        logger.debug(f"Classifier {self.name} handles content type {content_type!r}")
        return ClassifierResult.handled(await self.handle(request))


class MultipartFormClassifier(ContentClassifier):
    """Handles multipart/form-data submissions carrying one file field."""

    name = "multipart"

    def applies_to(self, content_type: str) -> bool:
        return is_multipart_form(content_type)

    async def handle(self, request: Request) -> ResponseEnvelope:
        check_declared_length(request, self.settings.MAX_UPLOAD_SIZE)

        # Starlette spools file parts to a temporary file above 1MB
        try:
            form = await request.form()
        except MultiPartException as e:
            raise MalformedMultipartError(e.message)
        except HTTPException as e:
            raise MalformedMultipartError(str(e.detail))
        except ValueError as e:
            # python-multipart parse errors derive from ValueError
            raise MalformedMultipartError(str(e))

        try:
            field_name = self.settings.UPLOAD_FIELD_NAME
            part = form.get(field_name)
            if not isinstance(part, UploadFile):
                raise MissingFieldError(field_name)

            raw_name = part.filename or ""
            info = FileInfo.from_path(raw_name)
            if info.name in RESERVED_NAMES:
                raise InvalidFileNameError(raw_name)

            logger.info(f"Form upload started, filename: {raw_name!r}")
            await self.storage.save_stream(
                info.name, read_chunks(part, self.settings.CHUNK_SIZE)
            )
        finally:
            await form.close()

        return created_envelope(info)


class RawBodyClassifier(ContentClassifier):
    """Handles any non-form body, naming the file by a random token."""

    name = "raw"

    def applies_to(self, content_type: str) -> bool:
        return not is_multipart_form(content_type)

    async def handle(self, request: Request) -> ResponseEnvelope:
        content_type = request.headers.get("content-type", "")
        ext = extension_for(content_type)
        if ext is None:
            raise UnsupportedMediaTypeError(content_type)

        check_declared_length(request, self.settings.MAX_UPLOAD_SIZE)

        name = f"{uuid.uuid4().hex}{ext}"
        logger.info(f"Raw upload started, content type: {content_type!r}, target: {name}")
        await self.storage.save_stream(name, request.stream())

        return created_envelope(FileInfo.from_path(name))


class UploadDispatcher:
    """
    Runs upload requests through an ordered list of content classifiers.

    The first classifier reporting ``handled`` decides the response. Every
    UploadError raised on the way is turned into an error envelope here, so
    no failure leaves the request.
    """

    def __init__(
        self,
        settings: Settings,
        storage: Optional[UploadStorage] = None,
        classifiers: Optional[Sequence[ContentClassifier]] = None,
    ):
        self.settings = settings
        self.storage = storage or UploadStorage(
            settings.UPLOAD_DIR, max_size=settings.MAX_UPLOAD_SIZE
        )
        self.classifiers: List[ContentClassifier] = list(
            classifiers
            if classifiers is not None
            else (
                MultipartFormClassifier(self.storage, settings),
                RawBodyClassifier(self.storage, settings),
            )
        )

    async def dispatch(self, request: Request) -> Response:
        content_type = request.headers.get("content-type", "")
        try:
            try:
                for classifier in self.classifiers:
                    result = await classifier.classify(request)
                    if result.outcome is Outcome.HANDLED:
                        logger.info(f"Upload handled by {classifier.name} classifier")
                        return EnvelopeResponse(result.envelope)
            except ClientDisconnect:
                raise ClientDisconnectedError()
            raise UnsupportedMediaTypeError(content_type)

        except UploadError as e:
            logger.warning(f"Upload failed with {e.status_code}: {e.message}")
            return error_response(e.message, e.status_code)
