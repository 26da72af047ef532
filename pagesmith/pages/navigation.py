"""
Navigation renderer — regenerate the marker-delimited nav block.

``render`` is a pure function from a page set to Bootstrap 5 navbar items:

    pages {"about", "reports", "reports/monthly", "reports/summary"}

    <li class="nav-item dropdown">          ← group "reports", label "Reports"
      ...
        <li>…Reports</li>                   ← the group key is itself a page
        <li>…Monthly</li>
        <li>…Summary</li>
      ...
    </li>
    <li class="nav-item">…About</li>        ← ungrouped singles come last

``update_navigation`` writes that block into a NavTarget, owning everything
strictly between the two marker lines and nothing outside them.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List

from pagesmith.pages import editor
from pagesmith.pages.identifiers import handler_name, page_title, to_title

logger = logging.getLogger("pagesmith.pages.navigation")

INDENT = "  "


class NavStrategy(str, Enum):
    REPLACED = "replaced"    # markers found, region rewritten
    INSERTED = "inserted"    # markers added after the nav list opening tag
    APPENDED = "appended"    # markers added at end of file


@dataclass
class NavTarget:
    """Where a nav block lives: a file and the two sentinel lines around it."""

    path: Path
    start_marker: str
    end_marker: str
    container_pattern: str = r"<ul[^>]*\bnavbar-nav\b"


@dataclass
class NavUpdateResult:
    path: str
    strategy: NavStrategy
    changed: bool
    page_count: int


def group_pages(pages: Iterable[str]) -> Dict[str, List[str]]:
    """Map each group key (first segment of a nested page) to its sorted children."""
    groups: Dict[str, List[str]] = {}
    for page_id in sorted(set(pages)):
        parts = page_id.split("/")
        if len(parts) > 1:
            groups.setdefault(parts[0], []).append(page_id)
    return groups


def _link(page_id: str) -> str:
    return f"{{% url '{handler_name(page_id)}' %}}"


def _render_group(key: str, children: List[str], is_page: bool) -> List[str]:
    label = to_title(key)
    toggle_id = f"nav-{key.replace('_', '-')}"
    lines = [
        '<li class="nav-item dropdown">',
        f'{INDENT}<a class="nav-link dropdown-toggle" href="#" id="{toggle_id}" '
        f'role="button" data-bs-toggle="dropdown" aria-expanded="false">{label}</a>',
        f'{INDENT}<ul class="dropdown-menu" aria-labelledby="{toggle_id}">',
    ]
    entries = ([key] if is_page else []) + children
    for page_id in entries:
        item_label = label if page_id == key else page_title(page_id)
        lines.append(
            f'{INDENT * 2}<li><a class="dropdown-item" href="{_link(page_id)}">{item_label}</a></li>'
        )
    lines.append(f"{INDENT}</ul>")
    lines.append("</li>")
    return lines


def _render_single(page_id: str) -> List[str]:
    return [
        f'<li class="nav-item"><a class="nav-link" href="{_link(page_id)}">{page_title(page_id)}</a></li>'
    ]


def render(pages: Iterable[str], indent: str = "") -> str:
    """
    Render nav items for *pages*.

    Groups come first in key order, children sorted within each group, then
    ungrouped top-level pages in order. Returns "" for an empty page set.
    """
    page_set = set(pages)
    groups = group_pages(page_set)
    singles = sorted(p for p in page_set if "/" not in p and p not in groups)

    lines: List[str] = []
    for key in sorted(groups):
        lines.extend(_render_group(key, groups[key], key in page_set))
    for page_id in singles:
        lines.extend(_render_single(page_id))

    if not lines:
        return ""
    return "".join(f"{indent}{line}\n" for line in lines)


def _marker_block(target: NavTarget, body: str, indent: str) -> List[str]:
    return (
        [f"{indent}{target.start_marker}\n"]
        + editor.split_lines(body)
        + [f"{indent}{target.end_marker}\n"]
    )


def update_navigation(target: NavTarget, pages: Iterable[str]) -> NavUpdateResult:
    """
    Rewrite the nav block in *target* for *pages*.

    Strategy, in order: replace between existing markers; insert a marker
    block after the first line opening the nav list container; append a
    marker block at end of file (creating the file if needed).
    """
    page_list = sorted(set(pages))
    path = Path(target.path)
    original = path.read_text(encoding="utf-8") if path.exists() else ""
    lines = editor.split_lines(original)

    bounds = editor.marker_bounds(lines, target.start_marker, target.end_marker)
    if bounds is not None:
        indent = editor.leading_whitespace(lines[bounds[0]])
        updated = editor.replace_region(
            original, target.start_marker, target.end_marker, render(page_list, indent)
        )
        strategy = NavStrategy.REPLACED
    else:
        container = re.compile(target.container_pattern)
        index = editor.find_line(lines, lambda line: bool(container.search(line)))
        if index is not None:
            indent = editor.leading_whitespace(lines[index]) + INDENT
            block = _marker_block(target, render(page_list, indent), indent)
            updated = editor.join_lines(editor.insert_before(lines, index + 1, block))
            strategy = NavStrategy.INSERTED
        else:
            logger.warning(
                "No nav markers or nav list container in %s — appending nav block", path
            )
            if lines:
                lines[-1] = editor.ensure_newline(lines[-1])
            block = _marker_block(target, render(page_list), "")
            updated = editor.join_lines(lines + block)
            strategy = NavStrategy.APPENDED

    changed = updated != original
    if changed:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(updated, encoding="utf-8")
    return NavUpdateResult(
        path=str(path), strategy=strategy, changed=changed, page_count=len(page_list)
    )
