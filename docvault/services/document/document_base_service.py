"""
Document Base Service - Common utilities and shared functionality.

This service provides the foundation for all document services with:
- Shared configuration and logging
- Record store and staging area access
"""

from typing import Optional

from docvault.core.config import Settings, settings as default_settings
from docvault.core.logging import get_service_logger
from docvault.core.staging import StagingArea, staging_area
from docvault.services.record_store import RecordStore, record_store


class DocumentBaseService:
    """Base service with common functionality shared across all document services."""

    def __init__(
        self,
        store: Optional[RecordStore] = None,
        staging: Optional[StagingArea] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize base service with common configuration."""
        self.logger = get_service_logger("document")
        self.settings = settings or default_settings

        self.store = store or record_store
        self.staging = staging or staging_area

        # Acceptance policy
        self.max_file_size = self.settings.MAX_FILE_SIZE
        self.allowed_content_type = self.settings.ALLOWED_CONTENT_TYPE
        self.chunk_size = self.settings.UPLOAD_CHUNK_SIZE
