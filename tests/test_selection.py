"""Unit tests for pagesmith.pages.selection — names, indices and ranges."""

from pagesmith.pages.selection import parse_selection, resolve_token

PAGES = ["about", "contact", "reports", "reports/monthly", "team"]


class TestParseSelection:
    def test_inclusive_range(self):
        assert parse_selection("3-4", PAGES).page_ids == ["reports", "reports/monthly"]

    def test_range_duplicates_and_out_of_range(self):
        selection = parse_selection("3-4 4 9", PAGES)
        assert selection.page_ids == ["reports", "reports/monthly"]
        assert [token for token, _ in selection.skipped] == ["9"]
        assert "out of range" in selection.skipped[0][1]

    def test_mixed_names_and_indices(self):
        selection = parse_selection("Team, 1 /reports/Monthly/", PAGES)
        assert selection.page_ids == ["team", "about", "reports/monthly"]
        assert selection.skipped == []

    def test_names_not_listed_pass_through(self):
        assert parse_selection("ghost", PAGES).page_ids == ["ghost"]

    def test_range_partially_out_of_bounds(self):
        selection = parse_selection("4-7", PAGES)
        assert selection.page_ids == ["reports/monthly", "team"]
        assert [token for token, _ in selection.skipped] == ["6", "7"]

    def test_reversed_range_skipped(self):
        selection = parse_selection("4-2 1", PAGES)
        assert selection.page_ids == ["about"]
        assert selection.skipped == [("4-2", "empty range")]

    def test_invalid_tokens_skipped(self):
        selection = parse_selection("0 1abc a-b 2", PAGES)
        assert selection.page_ids == ["contact"]
        assert [token for token, _ in selection.skipped] == ["0", "1abc", "a-b"]

    def test_empty(self):
        selection = parse_selection("   ", PAGES)
        assert selection.page_ids == []
        assert selection.skipped == []


class TestResolveToken:
    def test_index(self):
        assert resolve_token("2", PAGES) == ("contact", "")

    def test_name(self):
        assert resolve_token(" Reports/Monthly ", PAGES) == ("reports/monthly", "")

    def test_bad(self):
        page_id, reason = resolve_token("6", PAGES)
        assert page_id is None
        assert "out of range" in reason
