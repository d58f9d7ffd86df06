"""
Document upload endpoints.

This module handles document ingestion:
- File upload with acceptance checks (content type, size)
- Structural inspection (page count)
- Creation of the document record and linking to its owner
"""

from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile, status

from docvault.core.config import settings
from docvault.models.schemas import DocumentResponse
from .common import (
    get_document_dependencies,
    log_operation_start,
    log_operation_success,
)

router = APIRouter(prefix="/documents")

_max_mb = settings.MAX_FILE_SIZE / (1024 * 1024)


@router.post(
    "",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload Document",
    operation_id="uploadDocument",
    description=f"""Upload a PDF document for an owner.

**Form Fields:**
- **file**: PDF file (`{settings.ALLOWED_CONTENT_TYPE}`, max {_max_mb:g}MB)
- **owner_id**: ID of the owner the document belongs to

**Example Request:**
```bash
curl -X POST "http://localhost:8000/api/v1/documents" \\
  -F "file=@report.pdf;type=application/pdf" \\
  -F "owner_id=0f8fad5b-d9cb-469f-a165-70867728950e"
```

**Error Responses:**
- **400 Bad Request**: No file uploaded, or upload interrupted
- **404 Not Found**: Owner does not exist
- **413 Payload Too Large**: File exceeds the size limit
- **415 Unsupported Media Type**: File is not a PDF
- **422 Unprocessable Entity**: File is not a parseable PDF
- **500 Internal Server Error**: Document stored but not linked to its owner
  (`PARTIAL_LINK_FAILURE`, details carry `document_id` and `owner_id`)""",
)
async def upload_document(
    owner_id: str = Form(..., description="Owner ID"),
    file: Optional[UploadFile] = File(None, description="PDF file to upload"),
):
    """Upload and link a document."""
    deps = get_document_dependencies()
    document_service = deps["document_service"]

    log_operation_start(
        "Document upload",
        owner_id=owner_id,
        filename=file.filename if file else None,
        content_type=file.content_type if file else None,
    )

    document = await document_service.ingest_document(owner_id, file)

    log_operation_success(
        "Document upload",
        owner_id=owner_id,
        document_id=document.id,
        page_count=document.page_count,
    )

    return DocumentResponse.model_validate(document)
