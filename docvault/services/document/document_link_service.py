"""
Document Link Service - two-step commit of a document and its owner link.

Step 1 persists the Document record (the durability point). Step 2 appends
its id to the owner's list. A failure in step 2 is reported as a partial
link failure; the document record from step 1 is kept.
"""

from typing import Optional
from uuid import uuid4

from docvault.core.exceptions import OwnerNotFoundError, PartialLinkFailureError
from docvault.models.document import Document, StagedPayload
from .document_base_service import DocumentBaseService


class LinkCoordinator(DocumentBaseService):
    """Service creating documents and linking them to their owner."""

    async def link(
        self, staged: StagedPayload, page_count: Optional[int], owner_id: str
    ) -> Document:
        """
        Create the document record and append it to the owner's list.

        Args:
            staged: Payload accepted by the validator
            page_count: Result of structural inspection
            owner_id: Owner the upload is for

        Returns:
            The created document

        Raises:
            OwnerNotFoundError: Owner does not exist; nothing was written
            PartialLinkFailureError: Document exists but is not in the owner's list
            StoreUnavailableError: Store failed before the document was written
        """
        owner = await self.store.get_owner(owner_id)
        if owner is None:
            self.logger.warning(
                "Upload rejected: owner not found",
                owner_id=owner_id,
                stored_name=staged.stored_name,
            )
            raise OwnerNotFoundError(owner_id)

        document = await self.store.create_document(
            Document.from_staged(staged, page_count, owner_id, str(uuid4()))
        )
        self.logger.info(
            "Document created",
            document_id=document.id,
            owner_id=owner_id,
            stored_name=document.stored_name,
            page_count=page_count,
        )

        try:
            linked = await self.store.append_document_to_owner(owner_id, document.id)
        except Exception as e:
            self.logger.error(
                "Partial link failure: document not added to owner list",
                document_id=document.id,
                owner_id=owner_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise PartialLinkFailureError(document.id, owner_id, str(e)) from e

        if not linked:
            self.logger.error(
                "Partial link failure: owner vanished before link",
                document_id=document.id,
                owner_id=owner_id,
            )
            raise PartialLinkFailureError(
                document.id, owner_id, "Owner no longer exists"
            )

        self.logger.info("Document linked", document_id=document.id, owner_id=owner_id)
        return document
