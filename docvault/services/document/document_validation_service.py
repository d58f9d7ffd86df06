"""
Document Validation Service - acceptance policy and staging of uploads.

This service handles the first phase of ingestion:
- Presence, content-type and declared-size checks before any write
- Streaming the payload into the staging area under the size ceiling
- Stored-name generation
"""

from typing import BinaryIO, Optional

from fastapi import UploadFile
from starlette.requests import ClientDisconnect

from docvault.core.exceptions import (
    MissingFileError,
    PayloadTooLargeError,
    StagingError,
    UnsupportedMediaTypeError,
    UploadIncompleteError,
)
from docvault.core.staging import generate_stored_name
from docvault.models.document import StagedPayload
from .document_base_service import DocumentBaseService


class DocumentValidator(DocumentBaseService):
    """Service enforcing the upload acceptance policy."""

    def _validate_declared(self, upload: Optional[UploadFile]) -> UploadFile:
        """
        Check what the upload declares about itself.

        Raises:
            MissingFileError: No file part or empty filename
            UnsupportedMediaTypeError: Content type is not the allowed one
            PayloadTooLargeError: Declared size is above the ceiling
        """
        if upload is None or not upload.filename:
            raise MissingFileError()

        if upload.content_type != self.allowed_content_type:
            self.logger.warning(
                "Upload rejected: unsupported content type",
                filename=upload.filename,
                content_type=upload.content_type,
            )
            raise UnsupportedMediaTypeError(
                upload.content_type, self.allowed_content_type
            )

        if upload.size is not None and upload.size > self.max_file_size:
            self.logger.warning(
                "Upload rejected: declared size too large",
                filename=upload.filename,
                size=upload.size,
                max_size=self.max_file_size,
            )
            raise PayloadTooLargeError(self.max_file_size, upload.size)

        return upload

    async def _read_chunk(self, upload: UploadFile) -> bytes:
        try:
            return await upload.read(self.chunk_size)
        except (OSError, ClientDisconnect) as e:
            self.logger.warning(
                "Upload stream ended abnormally",
                filename=upload.filename,
                error=str(e),
            )
            raise UploadIncompleteError() from e

    def _write_chunk(self, target: BinaryIO, chunk: bytes, stored_name: str) -> None:
        try:
            target.write(chunk)
        except OSError as e:
            self.logger.error(
                "Staging write failed", stored_name=stored_name, error=str(e)
            )
            raise StagingError(
                "Failed to write upload to staging area",
                details={"stored_name": stored_name},
            ) from e

    async def accept(self, upload: Optional[UploadFile]) -> StagedPayload:
        """
        Validate an upload and stream it into the staging area.

        Args:
            upload: Uploaded file, or None when the request carried none

        Returns:
            The fully staged payload

        Raises:
            MissingFileError, UnsupportedMediaTypeError, PayloadTooLargeError,
            UploadIncompleteError, StagingError
        """
        upload = self._validate_declared(upload)

        stored_name = generate_stored_name(upload.filename)
        size = 0

        try:
            await upload.seek(0)
        except (OSError, ClientDisconnect) as e:
            raise UploadIncompleteError() from e

        try:
            with self.staging.open_staged(stored_name) as target:
                while True:
                    chunk = await self._read_chunk(upload)
                    if not chunk:
                        break

                    size += len(chunk)
                    if size > self.max_file_size:
                        self.logger.warning(
                            "Upload rejected: size ceiling crossed while streaming",
                            filename=upload.filename,
                            received=size,
                            max_size=self.max_file_size,
                        )
                        raise PayloadTooLargeError(self.max_file_size)

                    self._write_chunk(target, chunk, stored_name)
        except OSError as e:
            self.logger.error(
                "Staging area unavailable", stored_name=stored_name, error=str(e)
            )
            raise StagingError(
                "Failed to stage upload", details={"stored_name": stored_name}
            ) from e

        staged = StagedPayload(
            stored_name=stored_name,
            original_name=upload.filename,
            content_type=upload.content_type,
            size=size,
            path=str(self.staging.path_for(stored_name)),
        )

        self.logger.info(
            "Upload staged",
            stored_name=stored_name,
            original_name=staged.original_name,
            size=size,
        )
        return staged
