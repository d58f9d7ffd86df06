"""Service information and dependency checks.

``/health`` reports the database and the staging directory along with the
active upload policy. ``/ready`` uses the same checks, ``/live`` none.
"""

import os
import time
from typing import Any, Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from docvault.core.config import settings
from docvault.core.db_client import db
from docvault.core.logging import get_logger
from docvault.core.staging import staging_area

logger = get_logger(__name__)

router = APIRouter(tags=["Health"])

DB_CHECK_TIMEOUT = 5.0


async def _check_database() -> bool:
    try:
        return await db.test_connection(timeout=DB_CHECK_TIMEOUT)
    except Exception as e:
        logger.error("Database check raised", error=str(e))
        return False


def _check_staging() -> bool:
    root = staging_area.root
    return root.is_dir() and os.access(root, os.W_OK)


async def _run_checks() -> Dict[str, str]:
    return {
        "database": "ok" if await _check_database() else "unavailable",
        "staging": "ok" if _check_staging() else "unavailable",
    }


def _failed(checks: Dict[str, str]) -> list:
    return sorted(name for name, state in checks.items() if state != "ok")


@router.get("/")
async def root() -> Dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "docs": "/api-docs" if settings.DOCS_ENABLED else None,
        "health": "/health",
    }


@router.get("/health")
async def health_check():
    """Dependency checks plus the upload policy. 503 if any check fails."""
    checks = await _run_checks()
    failed = _failed(checks)
    body = {
        "status": "unhealthy" if failed else "healthy",
        "timestamp": time.time(),
        "version": settings.VERSION,
        "checks": checks,
        "upload_policy": {
            "content_type": settings.ALLOWED_CONTENT_TYPE,
            "max_file_size": settings.MAX_FILE_SIZE,
        },
    }

    if failed:
        logger.warning("Health check failed", failed=failed)
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)
    return body


@router.get("/ready")
async def readiness_check():
    """Readiness check. Ready only when every dependency check passes."""
    failed = _failed(await _run_checks())
    if failed:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"ready": False, "failed": failed, "timestamp": time.time()},
        )
    return {"ready": True, "timestamp": time.time()}


@router.get("/live")
async def liveness_check() -> Dict[str, Any]:
    """Liveness check."""
    return {"alive": True, "timestamp": time.time()}
