"""Pydantic schemas for API requests and responses.

This package contains all Pydantic models organized by domain:
- owner.py: Owner schemas
- document.py: Document schemas
- base.py: Base classes and pagination

Import from this module: `from docvault.models.schemas import OwnerResponse`
"""

# Base schemas
from docvault.models.schemas.base import PaginationParams, parse_leading_int

# Document schemas
from docvault.models.schemas.document import (
    DocumentResponse,
    DocumentDetailResponse,
    DocumentPage,
)

# Owner schemas
from docvault.models.schemas.owner import (
    OwnerCreate,
    OwnerResponse,
    OwnerDetailResponse,
    OwnerDeleteResponse,
)

__all__ = [
    "PaginationParams",
    "parse_leading_int",
    "DocumentResponse",
    "DocumentDetailResponse",
    "DocumentPage",
    "OwnerCreate",
    "OwnerResponse",
    "OwnerDetailResponse",
    "OwnerDeleteResponse",
]
