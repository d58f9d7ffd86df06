"""
Document API modules.

Modules:
- document_upload: Document ingestion
- document_retrieval: Document listing and retrieval
- common: Shared utilities and dependencies
"""

__all__ = []
