"""
Document retrieval endpoints.

This module handles document reads:
- Listing all documents
- Paginated listing of an owner's documents
- Listing documents missing from every owner's list
- Single document retrieval with owner name
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from docvault.models.schemas import (
    DocumentDetailResponse,
    DocumentPage,
    DocumentResponse,
    PaginationParams,
)
from .common import get_document_dependencies, logger

router = APIRouter(prefix="/documents")


@router.get(
    "/all",
    response_model=List[DocumentResponse],
    summary="List All Documents",
    operation_id="listAllDocuments",
    description="List every document in creation order, without pagination.",
)
async def list_all_documents():
    """List all documents."""
    document_service = get_document_dependencies()["document_service"]
    return await document_service.list_all_documents()


@router.get(
    "/unlinked",
    response_model=List[DocumentResponse],
    summary="List Unlinked Documents",
    operation_id="listUnlinkedDocuments",
    description="""List documents that no owner's document list references.

These are documents whose owner link failed after creation, and documents
of owners that were deleted.""",
)
async def list_unlinked_documents():
    """List documents missing from every owner's list."""
    document_service = get_document_dependencies()["document_service"]
    return await document_service.list_unlinked_documents()


@router.get(
    "/owner/{owner_id}",
    response_model=DocumentPage,
    response_model_by_alias=True,
    summary="List Owner Documents",
    operation_id="listOwnerDocuments",
    description="""List an owner's documents in creation order, one page at a time.

**Query Parameters:**
- **page**: Page number (default 1). Missing, invalid or non-positive values use 1.
- **limit**: Page size (default 10). Missing, invalid or non-positive values use 10.

Leading digits are honoured, so `page=2abc` reads as page 2. An unknown owner
yields an empty page with `total` 0.""",
)
async def list_owner_documents(
    owner_id: str,
    page: Optional[str] = Query(None, description="Page number (starts from 1)"),
    limit: Optional[str] = Query(None, description="Items per page"),
):
    """Paginated list of an owner's documents."""
    document_service = get_document_dependencies()["document_service"]

    params = PaginationParams.from_query(page, limit)
    logger.debug(
        "Owner documents requested",
        owner_id=owner_id,
        raw_page=page,
        raw_limit=limit,
        page=params.page,
        limit=params.limit,
    )

    return await document_service.list_owner_documents(owner_id, params)


@router.get(
    "/{document_id}",
    response_model=DocumentDetailResponse,
    summary="Get Document",
    operation_id="getDocument",
    description="Get a document by ID, with the name of its owner (null if the owner was deleted).",
)
async def get_document(document_id: str):
    """Get a single document."""
    document_service = get_document_dependencies()["document_service"]
    return await document_service.get_document(document_id)
