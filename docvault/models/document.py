from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class StagedPayload(BaseModel):
    """An upload that passed acceptance and is fully written to staging."""

    stored_name: str = Field(..., description="Server generated name in the staging area")
    original_name: str = Field(..., description="Name supplied by the uploader")
    content_type: str = Field(..., description="Declared MIME type")
    size: int = Field(..., ge=0, description="Bytes actually written")
    path: str = Field(..., description="Filesystem path of the staged file")


class Document(BaseModel):
    """Document record as held by the record store."""

    id: str = Field(..., description="Unique document identifier")
    stored_name: str = Field(..., description="Name of the staged payload")
    original_name: str = Field(..., description="Original filename as uploaded")
    content_type: str = Field(..., description="MIME type of the payload")
    size: int = Field(..., ge=0, description="File size in bytes")
    page_count: Optional[int] = Field(None, ge=0, description="Number of pages, if known")
    owner_id: str = Field(..., description="Owner the document was uploaded for")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When document was uploaded",
    )

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", when_used="json")
    def serialize_datetime(self, value: datetime) -> Optional[str]:
        """Serialize datetime fields to ISO format."""
        return value.isoformat() if value else None

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, stored_name='{self.stored_name}', owner_id='{self.owner_id}')>"

    @classmethod
    def from_staged(
        cls, staged: StagedPayload, page_count: Optional[int], owner_id: str, doc_id: str
    ) -> "Document":
        return cls(
            id=doc_id,
            stored_name=staged.stored_name,
            original_name=staged.original_name,
            content_type=staged.content_type,
            size=staged.size,
            page_count=page_count,
            owner_id=owner_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Column values for inserting the record."""
        return self.model_dump()
