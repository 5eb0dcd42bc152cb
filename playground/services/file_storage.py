"""
File Storage Service

Persists upload streams to the upload directory.
"""

import logging
from pathlib import Path
from typing import AsyncIterator, Optional

from playground.middleware.error_handler import PayloadTooLargeError, StorageError

logger = logging.getLogger(__name__)


class UploadStorage:
    """
    Writes uploaded content into a single flat upload directory.

    Handles:
    - Creating the upload directory on demand (idempotent, safe under concurrency)
    - Copying a chunked byte stream into a file with create-or-truncate semantics
    - Enforcing the upload size limit while copying

    Same-name uploads overwrite each other without locking. A copy that fails
    midway leaves the partial file on disk; no cleanup is attempted.
    """

    def __init__(self, upload_dir: str, max_size: Optional[int] = None):
        """
        Initialize UploadStorage.

        Args:
            upload_dir: Directory where uploaded files are stored
            max_size: Maximum number of bytes accepted per file (None: unlimited)
        """
        self.upload_dir = Path(upload_dir)
        self.max_size = max_size

    def ensure_upload_dir(self) -> Path:
        """
        Create the upload directory if it does not exist yet.

        An already existing directory counts as success.

        Returns:
            Path: The upload directory

        Raises:
            StorageError: If the directory cannot be created
        """
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create upload directory {self.upload_dir}: {e}")
            raise StorageError(str(self.upload_dir), e.strerror or str(e))
        return self.upload_dir

    def path_for(self, name: str) -> Path:
        """Return the target path of a cleaned file name."""
        return self.upload_dir / name

    async def save_stream(self, name: str, chunks: AsyncIterator[bytes]) -> Path:
        """
        Write a byte stream to ``<upload_dir>/<name>``.

        Args:
            name: Cleaned base file name
            chunks: Async iterator yielding the file content

        Returns:
            Path: Full path of the written file

        Raises:
            StorageError: If the directory or file cannot be written
            PayloadTooLargeError: If the stream exceeds max_size
        """
        self.ensure_upload_dir()
        file_path = self.path_for(name)

        written = 0
        try:
            # "wb" truncates, so a shorter overwrite leaves no stale bytes
            with open(file_path, "wb") as f:
                async for chunk in chunks:
                    written += len(chunk)
                    if self.max_size is not None and written > self.max_size:
                        logger.warning(
                            f"Upload to {file_path} exceeded {self.max_size} bytes"
                        )
                        raise PayloadTooLargeError(self.max_size)
                    f.write(chunk)
        except OSError as e:
            logger.error(f"Failed to write {file_path}: {e}")
            raise StorageError(str(file_path), e.strerror or str(e))

        logger.info(f"Saved {written} bytes to {file_path}")
        return file_path
