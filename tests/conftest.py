"""
Pytest configuration and fixtures for the test suite.

This module provides shared fixtures for unit and integration tests.
"""

import io
import os
import shutil
import tempfile
import uuid
from pathlib import Path
from typing import Any, AsyncGenerator, Callable, Dict, Optional
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio
from faker import Faker
from httpx import AsyncClient, ASGITransport
from starlette.datastructures import Headers

# Set test environment before importing app modules
_TEST_ROOT = tempfile.mkdtemp(prefix="docvault-tests-")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault(
    "DATABASE_URL", f"sqlite+aiosqlite:///{_TEST_ROOT}/docvault-api.db"
)
os.environ.setdefault("STAGING_DIR", os.path.join(_TEST_ROOT, "uploads"))
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi import UploadFile  # noqa: E402

fake = Faker()


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (API)")
    config.addinivalue_line("markers", "db: Database tests")
    config.addinivalue_line("markers", "api: API endpoint tests")


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_TEST_ROOT, ignore_errors=True)


# =============================================================================
# PDF Payloads
# =============================================================================

def build_pdf(pages: int = 1) -> bytes:
    """Build a minimal, well-formed PDF with ``pages`` blank pages."""
    kids = " ".join(f"{3 + i} 0 R" for i in range(pages))
    objects = [
        "<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {pages} >>",
    ]
    objects.extend(
        "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Resources << >> >>"
        for _ in range(pages)
    )

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n{body}\nendobj\n".encode("latin-1")

    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode("latin-1")
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode("latin-1")
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode("latin-1")
    return bytes(out)


@pytest.fixture
def pdf_factory() -> Callable[[int], bytes]:
    """Build PDFs with a given number of pages."""
    return build_pdf


@pytest.fixture
def pdf_bytes() -> bytes:
    """A valid three page PDF."""
    return build_pdf(3)


@pytest.fixture
def upload_factory() -> Callable[..., UploadFile]:
    """Create UploadFile objects the way FastAPI hands them to endpoints."""

    def _make(
        data: bytes,
        filename: Optional[str] = "report.pdf",
        content_type: Optional[str] = "application/pdf",
        size: Any = "auto",
        stream: Optional[io.IOBase] = None,
    ) -> UploadFile:
        headers = Headers({"content-type": content_type}) if content_type else Headers({})
        return UploadFile(
            file=stream if stream is not None else io.BytesIO(data),
            filename=filename,
            size=len(data) if size == "auto" else size,
            headers=headers,
        )

    return _make


# =============================================================================
# Test Data Generators
# =============================================================================

@pytest.fixture
def owner_data() -> Dict[str, Any]:
    """Generate random owner data for testing."""
    return {"name": fake.name()}


@pytest.fixture
def document_data() -> Dict[str, Any]:
    """Generate random document data for testing."""
    original = fake.file_name(extension="pdf")
    return {
        "id": str(uuid.uuid4()),
        "stored_name": f"{fake.random_int(min=10**12, max=10**13)}-{original}",
        "original_name": original,
        "content_type": "application/pdf",
        "size": fake.random_int(min=1024, max=5 * 1024 * 1024),
        "page_count": fake.random_int(min=1, max=50),
        "owner_id": str(uuid.uuid4()),
    }


# =============================================================================
# Database and Storage Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def database(tmp_path: Path):
    """A DatabaseManager on a fresh SQLite file with all tables created."""
    from docvault.core.db_client import DatabaseManager

    manager = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'records.db'}")
    await manager.create_tables()
    yield manager
    await manager.close()


@pytest.fixture
def store(database):
    """RecordStore bound to the test database."""
    from docvault.services.record_store import RecordStore

    return RecordStore(database)


@pytest.fixture
def staging(tmp_path: Path):
    """StagingArea in a private temporary directory."""
    from docvault.core.staging import StagingArea

    area = StagingArea(str(tmp_path / "staging"))
    area.ensure_dir()
    return area


@pytest.fixture
def mock_record_store():
    """Create a mock RecordStore."""
    store = Mock()
    store.get_owner = AsyncMock()
    store.create_owner = AsyncMock()
    store.delete_owner = AsyncMock()
    store.list_owners = AsyncMock()
    store.create_document = AsyncMock()
    store.get_document = AsyncMock()
    store.append_document_to_owner = AsyncMock(return_value=True)
    store.count_documents_by_owner = AsyncMock(return_value=0)
    store.find_documents_by_owner = AsyncMock(return_value=[])
    store.list_documents = AsyncMock(return_value=[])
    store.list_linked_documents = AsyncMock(return_value=[])
    store.list_unlinked_documents = AsyncMock(return_value=[])
    return store


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture
def app():
    """Create a test FastAPI application instance."""
    # Import here to ensure test environment is set
    from docvault.main import app as fastapi_app
    return fastapi_app


@pytest_asyncio.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for API testing.

    ASGITransport does not run the lifespan, so tables and the staging
    directory are prepared here and reset afterwards.
    """
    from docvault.core.db_client import db
    from docvault.core.staging import staging_area

    staging_area.ensure_dir()
    await db.create_tables()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    await db.drop_tables()
    await db.close()
    shutil.rmtree(staging_area.root, ignore_errors=True)
