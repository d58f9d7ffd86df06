"""Document schemas for API responses."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from docvault.models.document import Document


class DocumentResponse(Document):
    """Document response schema for API responses."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "78258b82-db53-41a3-848a-ce45a32f99c7",
                "stored_name": "1736937000000-report.pdf",
                "original_name": "report.pdf",
                "content_type": "application/pdf",
                "size": 1048576,
                "page_count": 3,
                "owner_id": "0f8fad5b-d9cb-469f-a165-70867728950e",
                "created_at": "2025-01-15T10:30:00+00:00",
            }
        },
    )


class DocumentDetailResponse(DocumentResponse):
    """Single document with its owner's name resolved on read."""

    owner_name: Optional[str] = Field(
        None,
        description="Name of the owner, or null when the owner no longer exists",
        examples=["Alice"],
    )


class DocumentPage(BaseModel):
    """Schema for one page of an owner's documents.

    Page metadata is serialized as ``currentPage`` and ``totalPages``.
    """

    model_config = ConfigDict(populate_by_name=True)

    documents: List[DocumentResponse] = Field(
        ...,
        description="Documents in creation order",
    )
    total: int = Field(
        ...,
        ge=0,
        description="Total number of documents for the owner",
        examples=[15],
    )
    page: int = Field(
        ...,
        alias="currentPage",
        description="Current page number",
        examples=[2],
    )
    limit: int = Field(
        ...,
        description="Number of items per page",
        examples=[10],
    )
    total_pages: int = Field(
        ...,
        alias="totalPages",
        ge=0,
        description="Total number of pages",
        examples=[2],
    )

    @property
    def has_next(self) -> bool:
        """Check if there are more pages."""
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        """Check if there are previous pages."""
        return self.page > 1
