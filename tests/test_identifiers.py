"""Unit tests for pagesmith.pages.identifiers — normalization and derived names."""

import pytest

from pagesmith.engine.errors import PageValidationError
from pagesmith.pages.identifiers import (
    handler_name,
    is_valid,
    normalize,
    page_title,
    parent_of,
    require_valid,
    route_path,
    template_name,
)


class TestNormalize:
    def test_messy_input(self):
        assert normalize("  //Reports//Monthly/ ") == "reports/monthly"

    def test_simple(self):
        assert normalize("About") == "about"
        assert normalize("") == ""
        assert normalize("   ") == ""

    @pytest.mark.parametrize("raw", [
        "  //Reports//Monthly/ ",
        "About",
        "a///b////c",
        "/x/",
        "Mixed_Case/Sub_Page",
        "",
    ])
    def test_idempotent(self, raw):
        once = normalize(raw)
        assert normalize(once) == once


class TestIsValid:
    @pytest.mark.parametrize("page_id", [
        "about", "reports/monthly", "a1", "monthly_sales", "x/y/z", "A_b9",
    ])
    def test_valid(self, page_id):
        assert is_valid(page_id) is True

    @pytest.mark.parametrize("page_id", [
        "", "1abc", "a b", "a-b", "a/", "a//b", "_a", "a.b", "reports/9", "a/b!",
        "about\n", "a\n/b",
    ])
    def test_invalid(self, page_id):
        assert is_valid(page_id) is False

    def test_require_valid_returns_normalized(self):
        assert require_valid(" /Reports/Monthly ") == "reports/monthly"

    def test_require_valid_empty(self):
        with pytest.raises(PageValidationError, match="empty"):
            require_valid("  / ")

    def test_require_valid_bad_segment(self):
        with pytest.raises(PageValidationError) as exc_info:
            require_valid("reports/9x")
        assert exc_info.value.page_id == "reports/9x"
        assert exc_info.value.raw == "reports/9x"


class TestDerivedNames:
    def test_scenario(self):
        page_id = normalize("  //Reports//Monthly/ ")
        assert handler_name(page_id) == "reports_monthly"
        assert route_path(page_id) == "reports/monthly"

    def test_route_path_uses_hyphens(self):
        assert route_path("reports/monthly_sales") == "reports/monthly-sales"

    def test_template_name(self):
        assert template_name("reports/monthly", "core", ".html") == "core/reports/monthly.html"

    def test_page_title_uses_last_segment(self):
        assert page_title("reports/monthly_sales") == "Monthly Sales"
        assert page_title("about") == "About"

    def test_parent_of(self):
        assert parent_of("reports/monthly") == "reports"
        assert parent_of("a/b/c") == "a/b"
        assert parent_of("about") is None
