"""
Document Service - Main orchestration facade for document ingestion and retrieval.

The service composes specialized services:
- DocumentValidator: acceptance policy and staging
- StructuralInspector: page count extraction
- LinkCoordinator: document creation and owner linking
- RetrievalGateway: reads, including paginated owner listings
"""

from typing import List, Optional

import structlog
from fastapi import UploadFile

from docvault.core.exceptions import OwnerNotFoundError, StructuralParseError
from docvault.models.document import Document
from docvault.models.schemas import (
    DocumentDetailResponse,
    DocumentPage,
    DocumentResponse,
    OwnerDetailResponse,
    PaginationParams,
)

from .document_base_service import DocumentBaseService
from .document_validation_service import DocumentValidator
from .document_inspection_service import StructuralInspector
from .document_link_service import LinkCoordinator
from .document_query_service import RetrievalGateway


class DocumentService(DocumentBaseService):
    """
    Main document service implementing facade pattern.

    Write path: validate and stage, inspect, link. Read paths delegate to
    the retrieval gateway.
    """

    def __init__(self, **kwargs):
        """Initialize the orchestration service with all specialized services."""
        super().__init__(**kwargs)

        shared = dict(store=self.store, staging=self.staging, settings=self.settings)
        self.validator = DocumentValidator(**shared)
        self.inspector = StructuralInspector(**shared)
        self.link_coordinator = LinkCoordinator(**shared)
        self.retrieval = RetrievalGateway(**shared)

    def _discard_rejected(self, stored_name: str, reason: str) -> None:
        if not self.settings.DISCARD_REJECTED_UPLOADS:
            return
        try:
            self.staging.discard(stored_name)
        except OSError as e:
            self.logger.warning(
                "Failed to discard rejected upload",
                stored_name=stored_name,
                reason=reason,
                error=str(e),
            )

    async def ingest_document(
        self, owner_id: str, upload: Optional[UploadFile]
    ) -> Document:
        """
        Run the full ingestion pipeline for one upload.

        Staged bytes are discarded after a parse failure or an unknown owner
        (when DISCARD_REJECTED_UPLOADS is on). After a partial link failure
        they are kept, since a document record references them.

        ``owner_id`` and, once staged, ``stored_name`` are bound to the
        logging context for every event the pipeline emits.
        """
        with structlog.contextvars.bound_contextvars(owner_id=owner_id):
            staged = await self.validator.accept(upload)

            with structlog.contextvars.bound_contextvars(stored_name=staged.stored_name):
                try:
                    page_count = await self.inspector.inspect(staged)
                except StructuralParseError:
                    self._discard_rejected(staged.stored_name, "structural_parse_error")
                    raise

                try:
                    document = await self.link_coordinator.link(
                        staged, page_count, owner_id
                    )
                except OwnerNotFoundError:
                    self._discard_rejected(staged.stored_name, "owner_not_found")
                    raise

                return document

    # ========================================
    # DELEGATED RETRIEVAL METHODS
    # ========================================

    async def get_document(self, document_id: str) -> DocumentDetailResponse:
        """Delegate to retrieval gateway."""
        return await self.retrieval.get_document(document_id)

    async def list_owner_documents(
        self, owner_id: str, params: PaginationParams
    ) -> DocumentPage:
        """Delegate to retrieval gateway."""
        return await self.retrieval.list_owner_documents(owner_id, params)

    async def list_all_documents(self) -> List[DocumentResponse]:
        """Delegate to retrieval gateway."""
        return await self.retrieval.list_all_documents()

    async def list_unlinked_documents(self) -> List[DocumentResponse]:
        """Delegate to retrieval gateway."""
        return await self.retrieval.list_unlinked_documents()

    async def get_owner_with_documents(self, owner_id: str) -> OwnerDetailResponse:
        """Delegate to retrieval gateway."""
        return await self.retrieval.get_owner_with_documents(owner_id)


# Global service instance
document_service = DocumentService()
