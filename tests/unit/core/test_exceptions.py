"""
Unit tests for the exception hierarchy and error responses.
"""

import json

import pytest


class TestExceptionHierarchy:
    """Tests for DocVaultError subclasses."""

    @pytest.mark.unit
    def test_validation_errors_share_parent(self):
        from docvault.core.exceptions import (
            DocumentValidationError,
            MissingFileError,
            PayloadTooLargeError,
            UnsupportedMediaTypeError,
            UploadIncompleteError,
        )

        for error in (
            MissingFileError(),
            PayloadTooLargeError(5 * 1024 * 1024),
            UnsupportedMediaTypeError("text/plain", "application/pdf"),
            UploadIncompleteError(),
        ):
            assert isinstance(error, DocumentValidationError)

    @pytest.mark.unit
    def test_not_found_errors_share_parent(self):
        from docvault.core.exceptions import (
            DocumentNotFoundError,
            NotFoundError,
            OwnerNotFoundError,
        )

        assert isinstance(OwnerNotFoundError("o1"), NotFoundError)
        assert isinstance(DocumentNotFoundError("d1"), NotFoundError)
        assert OwnerNotFoundError("o1").details == {"owner_id": "o1"}

    @pytest.mark.unit
    def test_partial_link_failure_carries_ids(self):
        from docvault.core.exceptions import PartialLinkFailureError

        error = PartialLinkFailureError("doc-1", "owner-1", "boom")

        assert error.error_code == "PARTIAL_LINK_FAILURE"
        assert error.document_id == "doc-1"
        assert error.owner_id == "owner-1"
        assert error.details["document_id"] == "doc-1"
        assert error.details["owner_id"] == "owner-1"

    @pytest.mark.unit
    def test_payload_too_large_message(self):
        from docvault.core.exceptions import PayloadTooLargeError

        error = PayloadTooLargeError(5 * 1024 * 1024, size=6 * 1024 * 1024)

        assert "5MB" in error.message
        assert error.details["size"] == 6 * 1024 * 1024


class TestStatusCodeMap:
    """Tests for error code to HTTP status mapping."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "code,status_code",
        [
            ("MISSING_FILE", 400),
            ("UPLOAD_INCOMPLETE", 400),
            ("UNSUPPORTED_MEDIA_TYPE", 415),
            ("PAYLOAD_TOO_LARGE", 413),
            ("STRUCTURAL_PARSE_ERROR", 422),
            ("OWNER_NOT_FOUND", 404),
            ("DOCUMENT_NOT_FOUND", 404),
            ("PARTIAL_LINK_FAILURE", 500),
            ("STAGING_ERROR", 500),
            ("STORE_UNAVAILABLE", 503),
            ("INSPECTION_UNAVAILABLE", 503),
        ],
    )
    def test_status_for_code(self, code, status_code):
        from docvault.core.exceptions import STATUS_CODE_MAP

        assert STATUS_CODE_MAP[code] == status_code


class TestCreateErrorResponse:
    """Tests for the error envelope."""

    @pytest.mark.unit
    def test_envelope_shape(self):
        from docvault.core.exceptions import create_error_response

        response = create_error_response(
            status_code=404,
            message="Owner not found",
            error_code="OWNER_NOT_FOUND",
            details={"owner_id": "o1"},
            error_id="abcd1234",
            request_path="/api/v1/owners/o1",
        )

        body = json.loads(response.body)
        assert response.status_code == 404
        assert body == {
            "error": {
                "code": "OWNER_NOT_FOUND",
                "message": "Owner not found",
                "error_id": "abcd1234",
                "details": {"owner_id": "o1"},
                "path": "/api/v1/owners/o1",
            }
        }

    @pytest.mark.unit
    def test_envelope_omits_empty_details(self):
        from docvault.core.exceptions import create_error_response

        body = json.loads(create_error_response(400, "No file uploaded").body)

        assert "details" not in body["error"]
        assert len(body["error"]["error_id"]) == 8
