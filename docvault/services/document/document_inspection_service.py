"""
Document Inspection Service - structural inspection of staged payloads.

Opens a staged PDF with pdfplumber and reports its page count. Parsing
runs in a worker thread. Never touches the record store.
"""

import asyncio
import io
from pathlib import Path
from typing import Optional

import pdfplumber

from docvault.core.exceptions import InspectionUnavailableError, StructuralParseError
from docvault.models.document import StagedPayload
from .document_base_service import DocumentBaseService


class StructuralInspector(DocumentBaseService):
    """Service extracting structural properties from staged payloads."""

    def _read_staged(self, staged: StagedPayload) -> bytes:
        try:
            return Path(staged.path).read_bytes()
        except OSError as e:
            self.logger.error(
                "Staged payload unreadable",
                stored_name=staged.stored_name,
                error=str(e),
            )
            raise InspectionUnavailableError(
                "Staged payload could not be read for inspection",
                stored_name=staged.stored_name,
            ) from e

    @staticmethod
    def _count_pages(content: bytes) -> int:
        with pdfplumber.open(io.BytesIO(content)) as pdf:
            return len(pdf.pages)

    async def inspect(self, staged: StagedPayload) -> Optional[int]:
        """
        Count the pages of a staged payload.

        Returns:
            Page count, or None when the document reports no pages

        Raises:
            StructuralParseError: Content is not a parseable document
            InspectionUnavailableError: Staged file missing or unreadable
        """
        content = await asyncio.to_thread(self._read_staged, staged)

        try:
            page_count = await asyncio.to_thread(self._count_pages, content)
        except Exception as e:
            self.logger.warning(
                "Staged payload failed structural inspection",
                stored_name=staged.stored_name,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise StructuralParseError(
                "Invalid PDF file", stored_name=staged.stored_name
            ) from e

        self.logger.info(
            "Staged payload inspected",
            stored_name=staged.stored_name,
            page_count=page_count,
        )
        return page_count or None
