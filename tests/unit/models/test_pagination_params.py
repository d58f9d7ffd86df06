"""
Unit tests for pagination parameter parsing.

Raw query values are parsed leniently: leading digits count, anything
unusable falls back to the defaults, and nothing ever raises.
"""

import pytest

from docvault.models.schemas import PaginationParams, parse_leading_int


class TestParseLeadingInt:
    """Tests for leading integer extraction."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("2", 2),
            ("2abc", 2),
            ("  7 ", 7),
            ("-3", -3),
            ("+4", 4),
            ("1e3", 1),
            ("3.9", 3),
            ("0x10", 0),
            ("abc", None),
            ("", None),
            (None, None),
            (5, 5),
        ],
    )
    def test_parse(self, raw, expected):
        assert parse_leading_int(raw) == expected


class TestFromQuery:
    """Tests for PaginationParams.from_query."""

    @pytest.mark.unit
    def test_defaults_when_missing(self):
        params = PaginationParams.from_query(None, None)

        assert params.page == 1
        assert params.limit == 10

    @pytest.mark.unit
    @pytest.mark.parametrize("raw_page", ["0", "-1", "abc", "", " ", "NaN"])
    def test_invalid_page_falls_back_to_first(self, raw_page):
        assert PaginationParams.from_query(raw_page, "5").page == 1

    @pytest.mark.unit
    @pytest.mark.parametrize("raw_limit", ["0", "-20", "xyz", ""])
    def test_invalid_limit_falls_back_to_default(self, raw_limit):
        assert PaginationParams.from_query("2", raw_limit).limit == 10

    @pytest.mark.unit
    def test_leading_digits_honoured(self):
        params = PaginationParams.from_query("2abc", "5items")

        assert params.page == 2
        assert params.limit == 5

    @pytest.mark.unit
    def test_large_limit_not_clamped(self):
        assert PaginationParams.from_query("1", "500").limit == 500

    @pytest.mark.unit
    def test_explicit_default_limit(self):
        assert PaginationParams.from_query(None, None, default_limit=25).limit == 25

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw",
        ["\x00", "9" * 40, "-" * 5, "１２", "2 3", "[]", "{}", "%20", "\n\t"],
    )
    def test_never_raises(self, raw):
        params = PaginationParams.from_query(raw, raw)

        assert params.page >= 1
        assert params.limit >= 1


class TestWindowMath:
    """Tests for offset and total page computation."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "page,limit,offset",
        [(1, 10, 0), (2, 10, 10), (3, 5, 10)],
    )
    def test_offset(self, page, limit, offset):
        assert PaginationParams(page=page, limit=limit).offset == offset

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "total,limit,pages",
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (15, 10, 2), (15, 5, 3)],
    )
    def test_total_pages(self, total, limit, pages):
        assert PaginationParams(page=1, limit=limit).total_pages(total) == pages
