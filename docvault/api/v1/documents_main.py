"""
Document API Router

This module aggregates all document-related endpoints from focused sub-modules:

- document_upload.py: Document ingestion
- document_retrieval.py: Listing and retrieval
- common.py: Shared utilities and dependencies
"""

from fastapi import APIRouter

from docvault.api.v1.documents_modules.document_upload import router as upload_router
from docvault.api.v1.documents_modules.document_retrieval import (
    router as retrieval_router,
)

router = APIRouter()

# Order matters: the retrieval router registers /all, /unlinked and
# /owner/{owner_id} before the generic /{document_id}
router.include_router(
    upload_router,
    tags=["Document Upload"],
)

router.include_router(
    retrieval_router,
    tags=["Document Retrieval"],
)
