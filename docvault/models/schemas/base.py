"""Base schemas and pagination models.

This module contains base classes and common models used across
all schema modules.
"""

import math
import re
from typing import Any, Optional

from pydantic import BaseModel, Field

from docvault.core.config import settings

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def parse_leading_int(raw: Any) -> Optional[int]:
    """Parse the leading integer of a raw value, ``"2abc"`` gives 2.

    Returns None when the value has no leading integer.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw

    match = _LEADING_INT.match(str(raw))
    if not match:
        return None
    return int(match.group(1))


class PaginationParams(BaseModel):
    """Pagination parameters."""

    page: int = Field(
        default=1,
        ge=1,
        description="Page number (starts from 1)",
        examples=[1],
    )
    limit: int = Field(
        default=10,
        ge=1,
        description="Items per page",
        examples=[10],
    )

    @classmethod
    def from_query(
        cls,
        page: Any = None,
        limit: Any = None,
        default_limit: Optional[int] = None,
    ) -> "PaginationParams":
        """Build parameters from raw query values; never raises.

        Missing, unparseable or non-positive values fall back to page 1
        and the default page size.
        """
        default_limit = default_limit or settings.DEFAULT_PAGE_SIZE

        parsed_page = parse_leading_int(page)
        parsed_limit = parse_leading_int(limit)

        return cls(
            page=parsed_page if parsed_page and parsed_page > 0 else 1,
            limit=parsed_limit if parsed_limit and parsed_limit > 0 else default_limit,
        )

    @property
    def offset(self) -> int:
        """Calculate database offset."""
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        """Number of pages needed for ``total`` items (0 when empty)."""
        if total <= 0:
            return 0
        return math.ceil(total / self.limit)
