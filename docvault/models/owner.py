from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class Owner(BaseModel):
    """Owner with its ordered list of linked document ids."""

    id: str = Field(..., description="Unique owner identifier")
    name: str = Field(..., min_length=1, max_length=255, description="Owner name")
    document_ids: List[str] = Field(
        default_factory=list, description="Linked document ids in link order"
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When owner was created",
    )

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", when_used="json")
    def serialize_datetime(self, value: datetime) -> Optional[str]:
        """Serialize datetime fields to ISO format."""
        return value.isoformat() if value else None

    def __repr__(self) -> str:
        return f"<Owner(id={self.id}, name='{self.name}', documents={len(self.document_ids)})>"
