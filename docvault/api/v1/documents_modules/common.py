"""
Shared utilities and dependencies for document API endpoints.

This module provides common functionality used across different document router modules.
"""

from typing import Dict, Any

from docvault.core.logging import get_api_logger
from docvault.services.document import document_service

# Shared logger instance
logger = get_api_logger()


def get_document_dependencies() -> Dict[str, Any]:
    """Get common dependencies for document endpoints."""
    return {"document_service": document_service, "logger": logger}


def log_operation_start(operation: str, **context) -> None:
    """Log the start of an operation consistently."""
    logger.info(f"{operation} started", **context)


def log_operation_success(operation: str, **context) -> None:
    """Log successful operation completion consistently."""
    logger.info(f"{operation} completed successfully", **context)
