"""
Content Typing Service

Normalizes Content-Type headers and infers file extensions for raw uploads.
"""

import logging
import mimetypes
from typing import Optional

logger = logging.getLogger(__name__)

MULTIPART_FORM_DATA = "multipart/form-data"


def media_type(content_type: Optional[str]) -> str:
    """
    Reduce a Content-Type header value to its lower-cased media type.

    Parameters such as ``charset`` or ``boundary`` are dropped.

    Args:
        content_type: Raw header value, may be None

    Returns:
        str: Media type like ``text/plain``, empty when no header was sent
    """
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def is_multipart_form(content_type: Optional[str]) -> bool:
    """Check whether a Content-Type header declares multipart/form-data."""
    return media_type(content_type) == MULTIPART_FORM_DATA


def extension_for(content_type: Optional[str]) -> Optional[str]:
    """
    Pick a file extension for a declared content type.

    Among the extensions registered for the media type, the one equal to the
    subtype wins (``image/jpeg`` -> ``.jpeg``). Otherwise the registry's
    preferred extension is used, then the first registered one.

    Args:
        content_type: Raw Content-Type header value

    Returns:
        str: Extension including the leading dot, or None if nothing is registered
    """
    mtype = media_type(content_type)
    if not mtype or "/" not in mtype:
        return None

    candidates = mimetypes.guess_all_extensions(mtype)
    if not candidates:
        logger.debug(f"No extension registered for {mtype}")
        return None

    subtype = mtype.split("/", 1)[1]
    for ext in candidates:
        if ext[1:] == subtype:
            return ext

    return mimetypes.guess_extension(mtype) or candidates[0]
