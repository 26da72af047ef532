"""
Page identifiers — normalization, validation and derived artifact names.

A page id is a ``/``-separated path such as ``reports/monthly``. Every other
name a page has (view function, route, template) is derived from it here.
The derivation helpers assume a valid, normalized id; call ``is_valid`` or
``require_valid`` first.
"""

from __future__ import annotations

import re
from typing import List, Optional

from pagesmith.engine.errors import PageValidationError

SEGMENT_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9_]*$")
_SLASHES_RE = re.compile(r"/{2,}")


def normalize(raw: str) -> str:
    """
    Canonicalize free-form input.

    Examples:
        normalize("  //Reports//Monthly/ ")  → "reports/monthly"
        normalize("About")                   → "about"
    """
    text = (raw or "").strip().strip("/").lower()
    return _SLASHES_RE.sub("/", text)


def is_valid(page_id: str) -> bool:
    """True when every segment matches ``^[a-zA-Z][a-zA-Z0-9_]*$``."""
    if not page_id:
        return False
    return all(SEGMENT_RE.fullmatch(seg) for seg in page_id.split("/"))


def require_valid(raw: str) -> str:
    """Normalize *raw* and raise PageValidationError if the result is invalid."""
    page_id = normalize(raw)
    if not page_id:
        raise PageValidationError("empty page name", raw=raw)
    if not is_valid(page_id):
        raise PageValidationError(
            f"invalid page name '{page_id}'",
            raw=raw,
            page_id=page_id,
        )
    return page_id


def segments(page_id: str) -> List[str]:
    return page_id.split("/")


def handler_name(page_id: str) -> str:
    """``reports/monthly`` → ``reports_monthly``. Also the route name."""
    return "_".join(segments(page_id))


def route_path(page_id: str) -> str:
    """``reports/monthly_sales`` → ``reports/monthly-sales``."""
    return "/".join(seg.replace("_", "-") for seg in segments(page_id))


def template_name(page_id: str, app_name: str, extension: str) -> str:
    """Template reference as rendered by a handler, e.g. ``core/reports/monthly.html``."""
    return f"{app_name}/{page_id}{extension}"


def last_segment(page_id: str) -> str:
    return segments(page_id)[-1]


def parent_of(page_id: str) -> Optional[str]:
    """``reports/monthly`` → ``reports``; None for a top-level page."""
    parts = segments(page_id)
    if len(parts) == 1:
        return None
    return "/".join(parts[:-1])


def to_title(name: str) -> str:
    """Convert snake_case to Title Case."""
    return name.replace("_", " ").title()


def page_title(page_id: str) -> str:
    """Human label from the last segment: ``reports/monthly_sales`` → ``Monthly Sales``."""
    return to_title(last_segment(page_id))
