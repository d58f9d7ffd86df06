"""
Document services package.

Each service has a single responsibility:
- document_base_service: Shared configuration, store and staging access
- document_validation_service: Acceptance policy and staging (DocumentValidator)
- document_inspection_service: Page count extraction (StructuralInspector)
- document_link_service: Document creation and owner linking (LinkCoordinator)
- document_pagination_service: Owner document windows (PaginationEngine)
- document_query_service: Read paths (RetrievalGateway)
- document_service: Orchestration facade (main interface)
"""

from .document_service import DocumentService, document_service

__all__ = [
    "DocumentService",
    "document_service",
]
