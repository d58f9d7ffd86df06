import uuid
import traceback
from typing import Any, Dict, Optional
from fastapi import Request, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from docvault.core.config import settings
from docvault.core.logging import get_logger

logger = get_logger(__name__)


class DocVaultError(Exception):
    """Base exception for DocVault application."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)


# Upload validation errors (caller errors, never retried automatically)
class DocumentValidationError(DocVaultError):
    """An upload was rejected by the acceptance policy."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "VALIDATION_ERROR",
    ):
        super().__init__(message, error_code, details)


class MissingFileError(DocumentValidationError):
    """The request carried no file part."""

    def __init__(self, message: str = "No file uploaded"):
        super().__init__(message, error_code="MISSING_FILE")


class UnsupportedMediaTypeError(DocumentValidationError):
    """Declared content type is not the allowed one."""

    def __init__(self, content_type: Optional[str], allowed: str):
        super().__init__(
            f"Only {allowed} files are allowed",
            details={"content_type": content_type, "allowed_content_type": allowed},
            error_code="UNSUPPORTED_MEDIA_TYPE",
        )


class PayloadTooLargeError(DocumentValidationError):
    """Payload exceeds the configured byte ceiling."""

    def __init__(self, max_size: int, size: Optional[int] = None):
        details: Dict[str, Any] = {"max_size": max_size}
        if size is not None:
            details["size"] = size
        max_mb = max_size / (1024 * 1024)
        super().__init__(
            f"File size exceeds maximum limit of {max_mb:g}MB",
            details=details,
            error_code="PAYLOAD_TOO_LARGE",
        )


class UploadIncompleteError(DocumentValidationError):
    """The byte stream ended abnormally before the upload finished."""

    def __init__(self, message: str = "Upload was interrupted before completion"):
        super().__init__(message, error_code="UPLOAD_INCOMPLETE")


class StructuralParseError(DocVaultError):
    """Staged payload could not be parsed as a document."""

    def __init__(self, message: str, stored_name: Optional[str] = None):
        details = {"stored_name": stored_name} if stored_name else None
        super().__init__(message, "STRUCTURAL_PARSE_ERROR", details)


class InspectionUnavailableError(DocVaultError):
    """Staged payload could not be opened for inspection."""

    def __init__(self, message: str, stored_name: Optional[str] = None):
        details = {"stored_name": stored_name} if stored_name else None
        super().__init__(message, "INSPECTION_UNAVAILABLE", details)


class StagingError(DocVaultError):
    """Writing to the staging area failed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "STAGING_ERROR", details)


# Lookup errors
class NotFoundError(DocVaultError):
    """Requested record does not exist."""

    def __init__(
        self,
        message: str,
        error_code: str = "NOT_FOUND",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)


class OwnerNotFoundError(NotFoundError):
    """Owner not found error."""

    def __init__(self, owner_id: Optional[str] = None, message: str = "Owner not found"):
        details = {"owner_id": owner_id} if owner_id else None
        super().__init__(message, "OWNER_NOT_FOUND", details)


class DocumentNotFoundError(NotFoundError):
    """Document not found error."""

    def __init__(
        self, document_id: Optional[str] = None, message: str = "Document not found"
    ):
        details = {"document_id": document_id} if document_id else None
        super().__init__(message, "DOCUMENT_NOT_FOUND", details)


# Internal errors
class PartialLinkFailureError(DocVaultError):
    """Document record was persisted but the owner's list was not updated."""

    def __init__(self, document_id: str, owner_id: str, reason: str):
        super().__init__(
            "Document was stored but could not be linked to its owner",
            "PARTIAL_LINK_FAILURE",
            {"document_id": document_id, "owner_id": owner_id, "reason": reason},
        )
        self.document_id = document_id
        self.owner_id = owner_id


class StoreUnavailableError(DocVaultError):
    """Record store operation failed for infrastructural reasons."""

    def __init__(self, message: str, operation: Optional[str] = None):
        details = {"operation": operation} if operation else None
        super().__init__(message, "STORE_UNAVAILABLE", details)


STATUS_CODE_MAP = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "MISSING_FILE": status.HTTP_400_BAD_REQUEST,
    "UPLOAD_INCOMPLETE": status.HTTP_400_BAD_REQUEST,
    "UNSUPPORTED_MEDIA_TYPE": status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    "PAYLOAD_TOO_LARGE": status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    "STRUCTURAL_PARSE_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "OWNER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DOCUMENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "PARTIAL_LINK_FAILURE": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "STAGING_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "STORE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
    "INSPECTION_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def create_error_response(
    status_code: int,
    message: str,
    error_code: str = "INTERNAL_ERROR",
    details: Optional[Dict[str, Any]] = None,
    error_id: Optional[str] = None,
    request_path: Optional[str] = None,
) -> JSONResponse:
    """Create standardized error response."""

    error_id = error_id or str(uuid.uuid4())[:8]

    error_response = {
        "error": {
            "code": error_code,
            "message": message,
            "error_id": error_id,
        }
    }

    if details:
        error_response["error"]["details"] = details

    if request_path:
        error_response["error"]["path"] = request_path

    return JSONResponse(status_code=status_code, content=error_response)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    error_id = str(uuid.uuid4())[:8]

    logger.warning(
        "HTTP exception occurred",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
        method=request.method,
        error_id=error_id,
    )

    return create_error_response(
        status_code=exc.status_code,
        message=str(exc.detail),
        error_code="HTTP_ERROR",
        error_id=error_id,
        request_path=str(request.url.path),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors."""
    error_id = str(uuid.uuid4())[:8]

    logger.warning(
        "Validation exception occurred",
        errors=exc.errors(),
        path=request.url.path,
        method=request.method,
        error_id=error_id,
    )

    formatted_errors = []
    for error in exc.errors():
        formatted_errors.append(
            {
                "field": ".".join(str(x) for x in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
        )

    return create_error_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        message="Request validation failed",
        error_code="VALIDATION_ERROR",
        details={"validation_errors": formatted_errors},
        error_id=error_id,
        request_path=str(request.url.path),
    )


async def docvault_exception_handler(
    request: Request, exc: DocVaultError
) -> JSONResponse:
    """Handle custom application exceptions."""
    error_id = str(uuid.uuid4())[:8]

    status_code = STATUS_CODE_MAP.get(
        exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR
    )

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Application exception occurred",
        error_code=exc.error_code,
        message=exc.message,
        details=exc.details,
        path=request.url.path,
        method=request.method,
        error_id=error_id,
    )

    return create_error_response(
        status_code=status_code,
        message=exc.message,
        error_code=exc.error_code,
        details=exc.details,
        error_id=error_id,
        request_path=str(request.url.path),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other unhandled exceptions."""
    error_id = str(uuid.uuid4())[:8]

    logger.error(
        "Unhandled exception occurred",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
        error_id=error_id,
        exc_info=True,
    )

    if settings.is_development:
        details = {
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc().split("\n"),
        }
        message = str(exc)
    else:
        details = None
        message = "An unexpected error occurred"

    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message=message,
        error_code="INTERNAL_ERROR",
        details=details,
        error_id=error_id,
        request_path=str(request.url.path),
    )


def setup_exception_handlers(app):
    """Setup all exception handlers for the FastAPI app."""

    app.add_exception_handler(DocVaultError, docvault_exception_handler)

    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.add_exception_handler(Exception, general_exception_handler)
