"""
Selection parsing for the delete and rename prompts.

A selection mixes page names, 1-based indices into the listed pages and
inclusive index ranges:

    "about 3-4, 9 reports/monthly"

Bad tokens are skipped with a reason; they never abort the rest.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from pagesmith.pages.identifiers import is_valid, normalize

_INDEX_RE = re.compile(r"^\d+$")
_RANGE_RE = re.compile(r"^(\d+)-(\d+)$")
_SPLIT_RE = re.compile(r"[\s,]+")


@dataclass
class Selection:
    page_ids: List[str] = field(default_factory=list)
    skipped: List[Tuple[str, str]] = field(default_factory=list)   # (token, reason)

    def add(self, page_id: str) -> None:
        if page_id not in self.page_ids:
            self.page_ids.append(page_id)


def resolve_token(token: str, pages: Sequence[str]) -> Tuple[Optional[str], str]:
    """
    Resolve a single name-or-index token.

    Returns ``(page_id, "")`` or ``(None, reason)``.
    """
    token = token.strip()
    if _INDEX_RE.match(token):
        index = int(token)
        if 1 <= index <= len(pages):
            return pages[index - 1], ""
        return None, f"index {index} out of range (1-{len(pages)})"
    page_id = normalize(token)
    if not is_valid(page_id):
        return None, "invalid page name"
    return page_id, ""


def parse_selection(text: str, pages: Sequence[str]) -> Selection:
    """Parse *text* against the listed *pages*, keeping first-seen order."""
    selection = Selection()
    for token in _SPLIT_RE.split(text.strip()):
        if not token:
            continue
        match = _RANGE_RE.match(token)
        if match:
            low, high = int(match.group(1)), int(match.group(2))
            if low > high:
                selection.skipped.append((token, "empty range"))
                continue
            for index in range(low, high + 1):
                page_id, reason = resolve_token(str(index), pages)
                if page_id is None:
                    selection.skipped.append((str(index), reason))
                else:
                    selection.add(page_id)
            continue
        page_id, reason = resolve_token(token, pages)
        if page_id is None:
            selection.skipped.append((token, reason))
        else:
            selection.add(page_id)
    return selection
