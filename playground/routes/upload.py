"""
Upload API Route

Handles the upload endpoint for form and raw binary uploads.
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from starlette.responses import Response

from playground.config import Settings
from playground.services.dispatcher import UploadDispatcher

logger = logging.getLogger(__name__)

UPLOAD_DESCRIPTION = """
Upload a file.

**Request bodies:**
- `multipart/form-data` with the file in the configured form field
  (default `inputFile`); the file keeps its (cleaned) client-side name.
- Any other content type: the raw body is stored under a random name with
  an extension matching the declared `Content-Type`.

**Response:** a JSON envelope. Other methods get `405 Method Not Allowed`.
"""


def create_upload_router(settings: Settings, dispatcher: UploadDispatcher) -> APIRouter:
    """
    Build the router exposing the upload endpoint.

    Args:
        settings: Settings providing the endpoint path
        dispatcher: Dispatcher handling POST requests

    Returns:
        APIRouter: Router with the upload endpoint registered
    """
    router = APIRouter()

    async def upload_file(request: Request) -> Response:
        return await dispatcher.dispatch(request)

    router.add_api_route(
        settings.UPLOAD_API_PATH,
        upload_file,
        methods=["POST"],
        summary="Upload File",
        description=UPLOAD_DESCRIPTION,
        responses={
            201: {
                "description": "File stored",
                "content": {
                    "application/json": {
                        "example": {
                            "status": 201,
                            "message": "Created: file created",
                            "file": {"name": "notes.txt", "mime_type": "text/plain"},
                        }
                    }
                },
            },
            400: {"description": "Malformed multipart body, missing field or bad file name"},
            405: {"description": "Method not allowed"},
            413: {"description": "Upload too large"},
            415: {"description": "Content type maps to no known file extension"},
            500: {"description": "Storage failure"},
        },
    )

    return router


async def method_not_allowed(request: Request) -> Response:
    """
    Answer any method other than POST on the upload path.

    Mounted as a route without a method list, so it matches every method the
    POST route leaves over, including non-standard ones.
    """
    logger.info(f"Rejected {request.method} on {request.url.path}")
    return PlainTextResponse(
        "Method not allowed", status_code=405, headers={"Allow": "POST"}
    )
