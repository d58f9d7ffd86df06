"""
Document Query Service - read paths over owners and documents.

Cross references (document -> owner name, owner -> documents) are
resolved on read, so a deleted owner shows up as a null owner name.
"""

from typing import List, Optional

from docvault.core.exceptions import DocumentNotFoundError, OwnerNotFoundError
from docvault.models.schemas import (
    DocumentDetailResponse,
    DocumentPage,
    DocumentResponse,
    OwnerDetailResponse,
    PaginationParams,
)
from .document_base_service import DocumentBaseService
from .document_pagination_service import PaginationEngine


class RetrievalGateway(DocumentBaseService):
    """Service for document and owner retrieval."""

    def __init__(self, pagination_engine: Optional[PaginationEngine] = None, **kwargs):
        super().__init__(**kwargs)
        self.pagination_engine = pagination_engine or PaginationEngine(
            store=self.store, staging=self.staging, settings=self.settings
        )

    async def get_document(self, document_id: str) -> DocumentDetailResponse:
        """
        Get a document with its owner's name.

        Raises:
            DocumentNotFoundError: If no document has this id
        """
        document = await self.store.get_document(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)

        owner = await self.store.get_owner(document.owner_id)
        return DocumentDetailResponse(
            **document.model_dump(exclude={"created_at"}),
            created_at=document.created_at,
            owner_name=owner.name if owner else None,
        )

    async def list_owner_documents(
        self, owner_id: str, params: PaginationParams
    ) -> DocumentPage:
        """Paginated documents of an owner; an unknown owner yields an empty page."""
        return await self.pagination_engine.paginate(owner_id, params)

    async def list_all_documents(self) -> List[DocumentResponse]:
        documents = await self.store.list_documents()
        return [DocumentResponse.model_validate(d) for d in documents]

    async def list_unlinked_documents(self) -> List[DocumentResponse]:
        """Documents missing from every owner's list."""
        documents = await self.store.list_unlinked_documents()
        if documents:
            self.logger.info("Unlinked documents found", count=len(documents))
        return [DocumentResponse.model_validate(d) for d in documents]

    async def get_owner_with_documents(self, owner_id: str) -> OwnerDetailResponse:
        """
        Get an owner with its linked documents in link order.

        Raises:
            OwnerNotFoundError: If no owner has this id
        """
        owner = await self.store.get_owner(owner_id)
        if owner is None:
            raise OwnerNotFoundError(owner_id)

        documents = await self.store.list_linked_documents(owner_id)
        return OwnerDetailResponse(
            id=owner.id,
            name=owner.name,
            document_ids=owner.document_ids,
            created_at=owner.created_at,
            documents=[DocumentResponse.model_validate(d) for d in documents],
        )
