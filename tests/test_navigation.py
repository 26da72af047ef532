"""Unit tests for pagesmith.pages.navigation — render and marker-region update."""

import re

import pytest

from pagesmith.pages.navigation import (
    NavStrategy,
    NavTarget,
    group_pages,
    render,
    update_navigation,
)

START = "<!-- pagesmith:nav:start -->"
END = "<!-- pagesmith:nav:end -->"


def _labels(markup):
    return re.findall(r">([^<>]+)</a>", markup)


@pytest.fixture
def target(tmp_path):
    return NavTarget(path=tmp_path / "nav.html", start_marker=START, end_marker=END)


class TestRender:
    PAGES = {"about", "reports", "reports/monthly", "reports/summary"}

    def test_grouping_and_order(self):
        markup = render(self.PAGES)
        assert _labels(markup) == ["Reports", "Reports", "Monthly", "Summary", "About"]
        assert markup.count('class="nav-item dropdown"') == 1
        assert markup.index("dropdown-menu") < markup.index("{% url 'reports' %}")
        assert markup.index("{% url 'reports_summary' %}") < markup.index("{% url 'about' %}")

    def test_root_entry_is_first_in_dropdown(self):
        lines = render(self.PAGES).splitlines()
        items = [l for l in lines if "dropdown-item" in l]
        assert "{% url 'reports' %}" in items[0]
        assert "{% url 'reports_monthly' %}" in items[1]
        assert "{% url 'reports_summary' %}" in items[2]

    def test_about_is_top_level_link(self):
        markup = render(self.PAGES)
        assert (
            '<li class="nav-item"><a class="nav-link" href="{% url \'about\' %}">About</a></li>'
            in markup
        )

    def test_group_without_root_page(self):
        markup = render({"reports/monthly"})
        assert _labels(markup) == ["Reports", "Monthly"]
        assert "{% url 'reports' %}" not in markup

    def test_groups_sorted_then_singles(self):
        markup = render({"zeta", "alpha", "shop/cart", "admin_tools/users"})
        assert _labels(markup) == ["Admin Tools", "Users", "Shop", "Cart", "Alpha", "Zeta"]

    def test_deep_page_labelled_by_last_segment(self):
        assert _labels(render({"reports/q1/monthly_sales"})) == ["Reports", "Monthly Sales"]

    def test_deterministic(self):
        pages = ["reports/summary", "about", "reports", "reports/monthly"]
        assert render(pages) == render(reversed(pages)) == render(set(pages))

    def test_empty(self):
        assert render([]) == ""

    def test_indent(self):
        assert all(line.startswith("    ") for line in render({"about"}, "    ").splitlines())

    def test_group_pages(self):
        assert group_pages(self.PAGES) == {"reports": ["reports/monthly", "reports/summary"]}


class TestUpdateNavigation:
    def test_replaces_between_markers(self, target):
        head = '<nav class="navbar">\n  <ul class="navbar-nav">\n'
        tail = "  </ul>\n</nav>\n"
        target.path.write_text(f"{head}    {START}\n    <li>stale</li>\n    {END}\n{tail}")

        result = update_navigation(target, ["about"])

        text = target.path.read_text()
        assert result.strategy is NavStrategy.REPLACED
        assert result.changed is True
        assert text.startswith(f"{head}    {START}\n")
        assert text.endswith(f"    {END}\n{tail}")
        assert "stale" not in text
        assert "    <li class=\"nav-item\"><a class=\"nav-link\" href=\"{% url 'about' %}\">About</a></li>\n" in text

    def test_second_update_is_noop(self, target):
        target.path.write_text(f"{START}\n{END}\n")
        update_navigation(target, ["about", "reports/monthly"])
        first = target.path.read_text()
        result = update_navigation(target, ["reports/monthly", "about"])
        assert result.changed is False
        assert target.path.read_text() == first

    def test_zero_pages_keeps_empty_markers(self, target):
        target.path.write_text(f"<ul>\n{START}\n<li>old</li>\n{END}\n</ul>\n")
        result = update_navigation(target, [])
        assert target.path.read_text() == f"<ul>\n{START}\n{END}\n</ul>\n"
        assert result.page_count == 0

    def test_inserts_after_nav_container(self, target):
        target.path.write_text('<nav>\n  <ul class="navbar-nav me-auto">\n  </ul>\n</nav>\n')
        result = update_navigation(target, ["about"])
        lines = target.path.read_text().splitlines()
        assert result.strategy is NavStrategy.INSERTED
        assert lines[1] == '  <ul class="navbar-nav me-auto">'
        assert lines[2] == f"    {START}"
        assert "{% url 'about' %}" in lines[3]
        assert lines[4] == f"    {END}"
        assert lines[5:] == ["  </ul>", "</nav>"]

        again = update_navigation(target, ["about"])
        assert again.strategy is NavStrategy.REPLACED
        assert again.changed is False

    def test_appends_as_last_resort(self, target):
        target.path.write_text("<div>\n</div>")
        result = update_navigation(target, [])
        assert result.strategy is NavStrategy.APPENDED
        assert target.path.read_text() == f"<div>\n</div>\n{START}\n{END}\n"

    def test_missing_file_is_created(self, target):
        result = update_navigation(target, ["about"])
        assert result.strategy is NavStrategy.APPENDED
        text = target.path.read_text()
        assert text.startswith(f"{START}\n")
        assert text.endswith(f"{END}\n")

    def test_end_marker_without_start_falls_back(self, target):
        target.path.write_text(f"{END}\n")
        result = update_navigation(target, [])
        assert result.strategy is NavStrategy.APPENDED
        assert target.path.read_text() == f"{END}\n{START}\n{END}\n"
