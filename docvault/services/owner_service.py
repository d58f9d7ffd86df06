from typing import List, Optional

from docvault.core.exceptions import OwnerNotFoundError
from docvault.core.logging import get_service_logger
from docvault.models.schemas import (
    OwnerCreate,
    OwnerDeleteResponse,
    OwnerDetailResponse,
    OwnerResponse,
)
from docvault.services.document.document_query_service import RetrievalGateway
from docvault.services.record_store import RecordStore, record_store

logger = get_service_logger("owner")


class OwnerService:
    """Service for owner lifecycle. Deleting an owner never deletes documents."""

    def __init__(
        self,
        store: Optional[RecordStore] = None,
        retrieval: Optional[RetrievalGateway] = None,
    ):
        self.logger = logger
        self.store = store or record_store
        self.retrieval = retrieval or RetrievalGateway(store=self.store)

    async def create_owner(self, owner_data: OwnerCreate) -> OwnerResponse:
        owner = await self.store.create_owner(owner_data.name)
        return OwnerResponse.model_validate(owner)

    async def list_owners(self) -> List[OwnerResponse]:
        owners = await self.store.list_owners()
        return [OwnerResponse.model_validate(o) for o in owners]

    async def get_owner(self, owner_id: str) -> OwnerDetailResponse:
        """
        Get an owner with its documents.

        Raises:
            OwnerNotFoundError: If owner not found
        """
        return await self.retrieval.get_owner_with_documents(owner_id)

    async def delete_owner(self, owner_id: str) -> OwnerDeleteResponse:
        """
        Delete an owner. Its documents stay readable by id.

        Raises:
            OwnerNotFoundError: If owner not found
        """
        if not await self.store.delete_owner(owner_id):
            raise OwnerNotFoundError(owner_id)

        return OwnerDeleteResponse(success=True, message="Owner deleted successfully")


# Global service instance
owner_service = OwnerService()
