"""
Record Store - persistence of owners, documents and owner document links.

All reads and writes go through the async SQLAlchemy session manager.
Infrastructure failures surface as StoreUnavailableError; absence is
reported as None / False, never as an exception.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Dict, List, Optional
from uuid import uuid4

from sqlalchemy import delete, exists, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from docvault.core.db_client import DatabaseManager, db
from docvault.core.exceptions import StoreUnavailableError
from docvault.core.logging import get_service_logger
from docvault.models.db_models import (
    DocumentModel,
    OwnerDocumentLinkModel,
    OwnerModel,
)
from docvault.models.document import Document
from docvault.models.owner import Owner


class RecordStore:
    """Typed access to the owners, documents and owner_documents tables."""

    def __init__(self, database: Optional[DatabaseManager] = None):
        self.db = database or db
        self.logger = get_service_logger("record_store")

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncGenerator[AsyncSession, None]:
        try:
            async with self.db.session() as session:
                yield session
        except (SQLAlchemyError, OSError) as e:
            self.logger.error(
                "Record store operation failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise StoreUnavailableError(
                f"Record store unavailable during {operation}", operation=operation
            ) from e

    @staticmethod
    async def _linked_ids(session: AsyncSession, owner_id: str) -> List[str]:
        result = await session.execute(
            select(OwnerDocumentLinkModel.document_id)
            .where(OwnerDocumentLinkModel.owner_id == owner_id)
            .order_by(OwnerDocumentLinkModel.seq)
        )
        return list(result.scalars().all())

    @staticmethod
    def _to_owner(model: OwnerModel, document_ids: List[str]) -> Owner:
        return Owner(
            id=model.id,
            name=model.name,
            document_ids=document_ids,
            created_at=model.created_at,
        )

    # ========================================
    # OWNERS
    # ========================================

    async def create_owner(self, name: str) -> Owner:
        async with self._session("create_owner") as session:
            model = OwnerModel(
                id=str(uuid4()), name=name, created_at=datetime.now(timezone.utc)
            )
            session.add(model)
            await session.flush()
            owner = self._to_owner(model, [])

        self.logger.info("Owner created", owner_id=owner.id)
        return owner

    async def get_owner(self, owner_id: str) -> Optional[Owner]:
        async with self._session("get_owner") as session:
            model = await session.get(OwnerModel, owner_id)
            if model is None:
                return None
            return self._to_owner(model, await self._linked_ids(session, owner_id))

    async def list_owners(self) -> List[Owner]:
        async with self._session("list_owners") as session:
            result = await session.execute(
                select(OwnerModel).order_by(OwnerModel.created_at, OwnerModel.id)
            )
            models = result.scalars().all()

            link_result = await session.execute(
                select(
                    OwnerDocumentLinkModel.owner_id, OwnerDocumentLinkModel.document_id
                ).order_by(OwnerDocumentLinkModel.seq)
            )
            links: Dict[str, List[str]] = {}
            for owner_id, document_id in link_result.all():
                links.setdefault(owner_id, []).append(document_id)

            return [self._to_owner(m, links.get(m.id, [])) for m in models]

    async def delete_owner(self, owner_id: str) -> bool:
        """Delete an owner and its link rows. Documents are left untouched."""
        async with self._session("delete_owner") as session:
            await session.execute(
                delete(OwnerDocumentLinkModel).where(
                    OwnerDocumentLinkModel.owner_id == owner_id
                )
            )
            result = await session.execute(
                delete(OwnerModel).where(OwnerModel.id == owner_id)
            )
            deleted = result.rowcount > 0

        if deleted:
            self.logger.info("Owner deleted", owner_id=owner_id)
        return deleted

    async def append_document_to_owner(self, owner_id: str, document_id: str) -> bool:
        """
        Add ``document_id`` to the end of the owner's list.

        A single row insert; appending an id that is already linked is a
        no-op. Returns False when the owner does not exist.
        """
        async with self._session("append_document_to_owner") as session:
            owner_exists = await session.scalar(
                select(exists().where(OwnerModel.id == owner_id))
            )
            if not owner_exists:
                return False

            already_linked = await session.scalar(
                select(
                    exists().where(
                        OwnerDocumentLinkModel.owner_id == owner_id,
                        OwnerDocumentLinkModel.document_id == document_id,
                    )
                )
            )
            if not already_linked:
                session.add(
                    OwnerDocumentLinkModel(owner_id=owner_id, document_id=document_id)
                )

        return True

    # ========================================
    # DOCUMENTS
    # ========================================

    async def create_document(self, document: Document) -> Document:
        async with self._session("create_document") as session:
            model = DocumentModel(**document.to_dict())
            session.add(model)
            await session.flush()
            created = Document.model_validate(model)

        return created

    async def get_document(self, document_id: str) -> Optional[Document]:
        async with self._session("get_document") as session:
            result = await session.execute(
                select(DocumentModel).where(DocumentModel.id == document_id)
            )
            model = result.scalar_one_or_none()
            return Document.model_validate(model) if model else None

    async def count_documents_by_owner(self, owner_id: str) -> int:
        async with self._session("count_documents_by_owner") as session:
            total = await session.scalar(
                select(func.count())
                .select_from(DocumentModel)
                .where(DocumentModel.owner_id == owner_id)
            )
            return total or 0

    async def find_documents_by_owner(
        self, owner_id: str, offset: int, limit: int
    ) -> List[Document]:
        """Window over an owner's documents in creation order."""
        async with self._session("find_documents_by_owner") as session:
            result = await session.execute(
                select(DocumentModel)
                .where(DocumentModel.owner_id == owner_id)
                .order_by(DocumentModel.seq)
                .offset(offset)
                .limit(limit)
            )
            return [Document.model_validate(m) for m in result.scalars().all()]

    async def list_documents(self) -> List[Document]:
        async with self._session("list_documents") as session:
            result = await session.execute(
                select(DocumentModel).order_by(DocumentModel.seq)
            )
            return [Document.model_validate(m) for m in result.scalars().all()]

    async def list_linked_documents(self, owner_id: str) -> List[Document]:
        """Documents referenced by the owner's list, in link order."""
        async with self._session("list_linked_documents") as session:
            result = await session.execute(
                select(DocumentModel)
                .join(
                    OwnerDocumentLinkModel,
                    OwnerDocumentLinkModel.document_id == DocumentModel.id,
                )
                .where(OwnerDocumentLinkModel.owner_id == owner_id)
                .order_by(OwnerDocumentLinkModel.seq)
            )
            return [Document.model_validate(m) for m in result.scalars().all()]

    async def list_unlinked_documents(self) -> List[Document]:
        """Documents that appear in no owner's list."""
        async with self._session("list_unlinked_documents") as session:
            linked = exists().where(
                OwnerDocumentLinkModel.document_id == DocumentModel.id
            )
            result = await session.execute(
                select(DocumentModel).where(~linked).order_by(DocumentModel.seq)
            )
            return [Document.model_validate(m) for m in result.scalars().all()]


# Global record store instance
record_store = RecordStore()
