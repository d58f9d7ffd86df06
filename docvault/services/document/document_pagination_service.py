"""
Document Pagination Service - stable windows over an owner's documents.

Count and window are two separate reads; under concurrent inserts they
may disagree by the number of documents created in between.
"""

from docvault.models.schemas import DocumentPage, DocumentResponse, PaginationParams
from .document_base_service import DocumentBaseService


class PaginationEngine(DocumentBaseService):
    """Service paginating an owner's documents in creation order."""

    async def paginate(self, owner_id: str, params: PaginationParams) -> DocumentPage:
        """
        Return one page of the owner's documents.

        A page past the end is empty but reports accurate totals.
        """
        total = await self.store.count_documents_by_owner(owner_id)

        documents = []
        offset = params.offset
        if offset < total:
            documents = await self.store.find_documents_by_owner(
                owner_id, offset, min(params.limit, total - offset)
            )

        self.logger.debug(
            "Owner documents paginated",
            owner_id=owner_id,
            page=params.page,
            limit=params.limit,
            total=total,
            returned=len(documents),
        )

        return DocumentPage(
            documents=[DocumentResponse.model_validate(d) for d in documents],
            total=total,
            page=params.page,
            limit=params.limit,
            total_pages=params.total_pages(total),
        )
