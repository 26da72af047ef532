"""
Page enumerator — the template directory is the authoritative page list.

There is no cached index: every call walks the filesystem, so identical
directory contents always produce the identical sorted list.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from pagesmith.engine.config import DEFAULT_PROTECTED_PAGES
from pagesmith.pages.identifiers import is_valid, normalize

logger = logging.getLogger("pagesmith.pages.enumerator")


def list_pages(
    template_root: Path,
    extension: str = ".html",
    protected: Optional[Iterable[str]] = None,
    excluded: Iterable[str] = ("base", "nav"),
) -> List[str]:
    """
    Recover every page id under *template_root*.

    Templates whose relative path is not a canonical page id (upper case,
    dashes, spaces) are skipped with a warning.

    Args:
        template_root: Per-application template directory.
        extension: Template file extension, including the dot.
        protected: Page ids never listed (defaults to home/nav/footer/sidebar).
        excluded: Root-level layout fragments that are not pages.

    Returns:
        Sorted page ids such as ``["about", "reports", "reports/monthly"]``.
        A missing directory yields an empty list.
    """
    root = Path(template_root)
    if not root.is_dir():
        logger.debug("Template root %s does not exist — no pages", root)
        return []

    hidden = set(DEFAULT_PROTECTED_PAGES if protected is None else protected)
    hidden.update(excluded)

    pages = []
    for path in root.rglob(f"*{extension}"):
        if not path.is_file():
            continue
        relative = path.relative_to(root).as_posix()
        page_id = relative[: -len(extension)]
        if page_id in hidden:
            continue
        if page_id != normalize(page_id) or not is_valid(page_id):
            logger.warning("Skipping %s: '%s' is not a canonical page id", path, page_id)
            continue
        pages.append(page_id)
    return sorted(pages)

