"""Unit tests for pagesmith.pages.editor — line editing primitives."""

from pagesmith.pages import editor


VIEWS = [
    "import x\n",
    "\n",
    "\n",
    "@login_required\n",
    "def a(request):\n",
    "    return 1\n",
    "\n",
    "\n",
    "def b(request):\n",
    "    return 2\n",
]


class TestBlockBounds:
    def test_includes_decorators_and_trailing_blanks(self):
        assert editor.block_bounds(VIEWS, 4) == (3, 8)

    def test_block_at_end_of_file(self):
        assert editor.block_bounds(VIEWS, 8) == (8, 10)

    def test_remove_middle_block(self):
        start, end = editor.block_bounds(VIEWS, 4)
        assert editor.remove_range(VIEWS, start, end) == [
            "import x\n", "\n", "\n", "def b(request):\n", "    return 2\n",
        ]

    def test_remove_last_block_drops_dangling_blanks(self):
        start, end = editor.block_bounds(VIEWS, 8)
        assert editor.remove_range(VIEWS, start, end) == VIEWS[:6]

    def test_indented_lines_stay_in_block(self):
        lines = ["def a():\n", "    x = 1\n", "\n", "    return x\n", "# next\n"]
        assert editor.block_bounds(lines, 0) == (0, 4)


class TestInsertAndAppend:
    def test_insert_before_terminates_previous_line(self):
        lines = ["x = [\n", "]"]
        assert editor.insert_before(lines, 1, ["  y,"]) == ["x = [\n", "  y,\n", "]"]

    def test_insert_does_not_mutate_input(self):
        lines = ["a", "b\n"]
        editor.insert_before(lines, 1, ["c"])
        assert lines == ["a", "b\n"]

    def test_append_to_empty(self):
        assert editor.append_block([], ["def a():\n"]) == ["def a():\n"]

    def test_append_normalizes_separator(self):
        result = editor.append_block(["import x", "\n", "\n", "\n"], ["def a():\n"])
        assert result == ["import x\n", "\n", "\n", "def a():\n"]


class TestReplace:
    def test_replace_in_range_only_touches_range(self):
        lines = ["foo\n", "foo\n", "foo\n"]
        assert editor.replace_in_range(lines, 1, 2, "foo", "bar") == 1
        assert lines == ["foo\n", "bar\n", "foo\n"]

    def test_replace_region(self):
        text = "a\n<!-- s -->\nold\n<!-- e -->\nb\n"
        assert editor.replace_region(text, "<!-- s -->", "<!-- e -->", "new\n") == (
            "a\n<!-- s -->\nnew\n<!-- e -->\nb\n"
        )

    def test_replace_region_empty_body(self):
        text = "a\n<!-- s -->\nold\nolder\n<!-- e -->\nb"
        assert editor.replace_region(text, "<!-- s -->", "<!-- e -->", "") == (
            "a\n<!-- s -->\n<!-- e -->\nb"
        )

    def test_replace_region_matches_indented_markers(self):
        text = "  <!-- s -->\n  <!-- e -->\n"
        assert editor.replace_region(text, "<!-- s -->", "<!-- e -->", "  x\n") == (
            "  <!-- s -->\n  x\n  <!-- e -->\n"
        )

    def test_replace_region_missing_marker(self):
        assert editor.replace_region("a\n<!-- s -->\n", "<!-- s -->", "<!-- e -->", "x") is None
        assert editor.replace_region("<!-- e -->\n<!-- s -->\n", "<!-- s -->", "<!-- e -->", "x") is None
