"""Owner schemas for API requests and responses."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docvault.models.owner import Owner
from docvault.models.schemas.document import DocumentResponse


class OwnerCreate(BaseModel):
    """Schema for creating a new owner."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Owner name",
        examples=["Alice"],
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate owner name."""
        if not v or not v.strip():
            raise ValueError("Owner name cannot be empty")
        return v.strip()


class OwnerResponse(Owner):
    """Owner response schema for API responses."""

    model_config = ConfigDict(from_attributes=True)


class OwnerDetailResponse(OwnerResponse):
    """Owner together with its linked documents in link order."""

    documents: List[DocumentResponse] = Field(
        default_factory=list,
        description="Linked documents, resolved on read",
    )


class OwnerDeleteResponse(BaseModel):
    """Schema for owner deletion response."""

    success: bool = Field(..., description="Whether the owner was deleted", examples=[True])
    message: str = Field(
        ..., description="Human readable outcome", examples=["Owner deleted successfully"]
    )
