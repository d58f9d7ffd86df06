"""
Local staging area for uploaded payloads.

Payloads are written to a private ``.part`` file inside the staging
directory and hard-linked onto their stored name only once complete. A
stored name never refers to a partial payload and, once committed, is
never overwritten by another upload.
"""

import os
import re
import tempfile
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional

from docvault.core.config import settings
from docvault.core.logging import get_service_logger

logger = get_service_logger("staging")

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")

# Last millisecond prefix handed out by this process
_last_millis = 0
_millis_lock = threading.Lock()


def sanitize_filename(filename: Optional[str]) -> str:
    """Reduce a caller supplied name to a safe single path component."""
    name = os.path.basename((filename or "").replace("\\", "/")).strip()
    name = _UNSAFE_CHARS.sub("_", name).lstrip(".")
    return name or "upload"


def _next_millis() -> int:
    """Wall-clock milliseconds, strictly increasing within the process."""
    global _last_millis
    with _millis_lock:
        millis = max(int(time.time() * 1000), _last_millis + 1)
        _last_millis = millis
    return millis


def generate_stored_name(original_name: Optional[str]) -> str:
    """Build ``<epoch-millis>-<sanitized original>``."""
    return f"{_next_millis()}-{sanitize_filename(original_name)}"


class StagingArea:
    """Write-once directory of uploaded payloads addressed by stored name."""

    def __init__(self, root: Optional[str] = None):
        self.root = Path(root or settings.STAGING_DIR)

    def ensure_dir(self) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def path_for(self, stored_name: str) -> Path:
        return self.root / stored_name

    def exists(self, stored_name: str) -> bool:
        return self.path_for(stored_name).is_file()

    @contextmanager
    def open_staged(self, stored_name: str) -> Iterator[BinaryIO]:
        """
        Open a temporary file that becomes ``stored_name`` on clean exit.

        Any exception raised inside the block removes the temporary file
        and propagates unchanged. If ``stored_name`` is already taken the
        commit raises FileExistsError and the existing payload is kept.
        """
        self.ensure_dir()
        handle = tempfile.NamedTemporaryFile(
            dir=self.root, prefix=".", suffix=".part", delete=False
        )
        temp_path = handle.name
        try:
            with handle:
                yield handle
            try:
                os.link(temp_path, self.path_for(stored_name))
            except FileExistsError:
                logger.error("Stored name already taken", stored_name=stored_name)
                raise
            os.unlink(temp_path)
        except BaseException:
            try:
                os.unlink(temp_path)
            except FileNotFoundError:
                pass
            raise

        logger.debug("Payload committed to staging", stored_name=stored_name)

    def discard(self, stored_name: str) -> bool:
        """Remove a staged payload. Returns False if it was not there."""
        try:
            self.path_for(stored_name).unlink()
        except FileNotFoundError:
            return False

        logger.info("Staged payload discarded", stored_name=stored_name)
        return True


# Global staging area instance
staging_area = StagingArea()
