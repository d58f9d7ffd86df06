"""
Unit tests for the StructuralInspector.
"""

import pytest

from docvault.core.exceptions import InspectionUnavailableError, StructuralParseError
from docvault.models.document import StagedPayload


@pytest.fixture
def inspector(staging, mock_record_store):
    from docvault.services.document.document_inspection_service import StructuralInspector

    return StructuralInspector(store=mock_record_store, staging=staging)


def _stage(staging, name: str, data: bytes) -> StagedPayload:
    with staging.open_staged(name) as target:
        target.write(data)
    return StagedPayload(
        stored_name=name,
        original_name=name.split("-", 1)[1],
        content_type="application/pdf",
        size=len(data),
        path=str(staging.path_for(name)),
    )


class TestInspect:
    """Tests for page count extraction."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize("pages", [1, 3, 12])
    async def test_page_count(self, inspector, staging, pdf_factory, pages):
        staged = _stage(staging, f"1-doc{pages}.pdf", pdf_factory(pages))

        assert await inspector.inspect(staged) == pages

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_zero_pages_reported_as_none(self, inspector, staging, pdf_factory):
        staged = _stage(staging, "1-empty.pdf", pdf_factory(0))

        assert await inspector.inspect(staged) is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "data",
        [b"this is not a pdf", b"", b"%PDF-1.4\n%%EOF\n"],
    )
    async def test_malformed_payload(self, inspector, staging, data):
        staged = _stage(staging, "1-bad.pdf", data)

        with pytest.raises(StructuralParseError) as exc_info:
            await inspector.inspect(staged)

        assert exc_info.value.error_code == "STRUCTURAL_PARSE_ERROR"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_staged_file(self, inspector, staging):
        staged = StagedPayload(
            stored_name="1-gone.pdf",
            original_name="gone.pdf",
            content_type="application/pdf",
            size=10,
            path=str(staging.path_for("1-gone.pdf")),
        )

        with pytest.raises(InspectionUnavailableError):
            await inspector.inspect(staged)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_inspection_does_not_touch_store(
        self, inspector, staging, pdf_factory, mock_record_store
    ):
        staged = _stage(staging, "1-doc.pdf", pdf_factory(2))

        await inspector.inspect(staged)

        mock_record_store.create_document.assert_not_called()
        mock_record_store.append_document_to_owner.assert_not_called()
