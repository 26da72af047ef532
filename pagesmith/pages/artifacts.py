"""
Page artifact repositories — one per artifact kind.

Each repository answers "does this page's artifact exist?" and performs a
single mutation on its backing file. Repositories raise the Pagesmith error
hierarchy (PageConflictError, PageNotFoundError); the synthesizer turns those
into per-artifact results so a batch can continue.

Entries are found by exact string match on the derived name:
    handler registry — a line starting with ``def <handler_name>(``
    route registry   — a line containing ``views.<handler_name>,``
The trailing delimiter keeps ``reports`` from matching ``reports_monthly``.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pagesmith.engine.errors import PageConflictError, PageNotFoundError
from pagesmith.pages import editor
from pagesmith.pages.identifiers import (
    handler_name,
    page_title,
    route_path,
    template_name,
)

logger = logging.getLogger("pagesmith.pages.artifacts")

HANDLER = "handler"
TEMPLATE = "template"
ROUTE = "route"
PAGE = "page"

VIEWS_HEADER = "from django.shortcuts import render\n"


class Status(str, Enum):
    CREATED = "created"
    DELETED = "deleted"
    RENAMED = "renamed"
    EXISTS = "exists"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    REFUSED = "refused"
    INVALID = "invalid"
    SKIPPED = "skipped"


# Statuses that mean the user asked for something that could not be done
FAILURE_STATUSES = frozenset({Status.CONFLICT, Status.REFUSED, Status.INVALID})
CHANGE_STATUSES = frozenset({Status.CREATED, Status.DELETED, Status.RENAMED})


@dataclass
class ArtifactResult:
    """Outcome of one operation on one artifact of one page."""

    artifact: str            # handler | template | route | page
    page_id: str
    status: Status
    message: str = ""
    path: Optional[str] = None

    @property
    def changed(self) -> bool:
        return self.status in CHANGE_STATUSES

    @property
    def failed(self) -> bool:
        return self.status in FAILURE_STATUSES


def _read(path: Path) -> str:
    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8")


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


# ---------------------------------------------------------------------------
# Handler registry (views.py)
# ---------------------------------------------------------------------------

class HandlerRegistry:
    """View functions in the app's views module."""

    def __init__(self, path: Path, app_name: str, extension: str):
        self.path = Path(path)
        self.app_name = app_name
        self.extension = extension

    @staticmethod
    def _is_header(name: str):
        prefix = f"def {name}("
        return lambda line: line.startswith(prefix)

    def _locate(self, lines: List[str], page_id: str) -> Optional[int]:
        return editor.find_line(lines, self._is_header(handler_name(page_id)))

    def exists(self, page_id: str) -> bool:
        return self._locate(editor.split_lines(_read(self.path)), page_id) is not None

    def stub(self, page_id: str) -> List[str]:
        ref = template_name(page_id, self.app_name, self.extension)
        return [
            f"def {handler_name(page_id)}(request):\n",
            f"    return render(request, '{ref}')\n",
        ]

    def add(self, page_id: str) -> None:
        text = _read(self.path)
        lines = editor.split_lines(text or VIEWS_HEADER)
        if self._locate(lines, page_id) is not None:
            raise PageConflictError(
                f"Handler '{handler_name(page_id)}' already exists",
                page_id=page_id, artifact=HANDLER, path=str(self.path),
            )
        _write(self.path, editor.join_lines(editor.append_block(lines, self.stub(page_id))))

    def remove(self, page_id: str) -> None:
        lines = editor.split_lines(_read(self.path))
        header = self._locate(lines, page_id)
        if header is None:
            raise PageNotFoundError(
                f"Handler '{handler_name(page_id)}' not found",
                page_id=page_id, artifact=HANDLER, path=str(self.path),
            )
        start, end = editor.block_bounds(lines, header)
        _write(self.path, editor.join_lines(editor.remove_range(lines, start, end)))

    def rename(self, old_id: str, new_id: str) -> None:
        """Rewrite the header and template reference inside the old handler's block only."""
        lines = editor.split_lines(_read(self.path))
        header = self._locate(lines, old_id)
        if header is None:
            raise PageNotFoundError(
                f"Handler '{handler_name(old_id)}' not found",
                page_id=old_id, artifact=HANDLER, path=str(self.path),
            )
        if self._locate(lines, new_id) is not None:
            raise PageConflictError(
                f"Handler '{handler_name(new_id)}' already exists",
                page_id=old_id, artifact=HANDLER, path=str(self.path),
                destination=new_id,
            )
        start, end = editor.block_bounds(lines, header)
        editor.replace_in_range(
            lines, header, header + 1,
            f"def {handler_name(old_id)}(", f"def {handler_name(new_id)}(",
        )
        old_ref = template_name(old_id, self.app_name, self.extension)
        new_ref = template_name(new_id, self.app_name, self.extension)
        for quote in ("'", '"'):
            editor.replace_in_range(lines, start, end, f"{quote}{old_ref}{quote}", f"{quote}{new_ref}{quote}")
        _write(self.path, editor.join_lines(lines))


# ---------------------------------------------------------------------------
# Route registry (urls.py)
# ---------------------------------------------------------------------------

class RouteRegistry:
    """``path(...)`` entries in the app's urlpatterns list."""

    ANCHOR = "]"

    def __init__(self, path: Path):
        self.path = Path(path)

    @staticmethod
    def _is_entry(name: str):
        needle = f"views.{name},"
        return lambda line: needle in line

    def _locate(self, lines: List[str], page_id: str) -> Optional[int]:
        return editor.find_line(lines, self._is_entry(handler_name(page_id)))

    def _anchor(self, lines: List[str]) -> Optional[int]:
        return editor.find_last_line(lines, lambda line: line.strip() == self.ANCHOR)

    def exists(self, page_id: str) -> bool:
        return self._locate(editor.split_lines(_read(self.path)), page_id) is not None

    @staticmethod
    def entry(page_id: str) -> str:
        name = handler_name(page_id)
        return f"    path('{route_path(page_id)}/', views.{name}, name='{name}'),\n"

    def add(self, page_id: str) -> None:
        lines = editor.split_lines(_read(self.path))
        if self._locate(lines, page_id) is not None:
            raise PageConflictError(
                f"Route '{handler_name(page_id)}' already exists",
                page_id=page_id, artifact=ROUTE, path=str(self.path),
            )
        anchor = self._anchor(lines)
        if anchor is None:
            raise PageNotFoundError(
                f"No closing '{self.ANCHOR}' line in {self.path}",
                page_id=page_id, artifact=ROUTE, path=str(self.path),
            )
        _write(self.path, editor.join_lines(editor.insert_before(lines, anchor, [self.entry(page_id)])))

    def remove(self, page_id: str) -> None:
        lines = editor.split_lines(_read(self.path))
        index = self._locate(lines, page_id)
        if index is None:
            raise PageNotFoundError(
                f"Route '{handler_name(page_id)}' not found",
                page_id=page_id, artifact=ROUTE, path=str(self.path),
            )
        del lines[index]
        _write(self.path, editor.join_lines(lines))

    def rename(self, old_id: str, new_id: str) -> None:
        """Rewrite handler reference, route name and path on the entry line only."""
        lines = editor.split_lines(_read(self.path))
        index = self._locate(lines, old_id)
        if index is None:
            raise PageNotFoundError(
                f"Route '{handler_name(old_id)}' not found",
                page_id=old_id, artifact=ROUTE, path=str(self.path),
            )
        if self._locate(lines, new_id) is not None:
            raise PageConflictError(
                f"Route '{handler_name(new_id)}' already exists",
                page_id=old_id, artifact=ROUTE, path=str(self.path),
                destination=new_id,
            )
        old_name, new_name = handler_name(old_id), handler_name(new_id)
        old_path, new_path = route_path(old_id), route_path(new_id)
        line = lines[index].replace(f"views.{old_name},", f"views.{new_name},")
        for quote in ("'", '"'):
            line = line.replace(f"name={quote}{old_name}{quote}", f"name={quote}{new_name}{quote}")
            for tail in ("/", ""):
                line = line.replace(
                    f"({quote}{old_path}{tail}{quote}", f"({quote}{new_path}{tail}{quote}"
                )
        lines[index] = line
        _write(self.path, editor.join_lines(lines))


# ---------------------------------------------------------------------------
# Template store (templates/<app>/...)
# ---------------------------------------------------------------------------

class TemplateStore:
    """Template files under the per-application template root."""

    def __init__(self, root: Path, app_name: str, extension: str, base_template: str = "base"):
        self.root = Path(root)
        self.app_name = app_name
        self.extension = extension
        self.base_template = base_template

    def path_for(self, page_id: str) -> Path:
        *parents, leaf = page_id.split("/")
        return self.root.joinpath(*parents, leaf + self.extension)

    def exists(self, page_id: str) -> bool:
        return self.path_for(page_id).is_file()

    def stub(self, page_id: str) -> str:
        title = page_title(page_id)
        base = f"{self.app_name}/{self.base_template}{self.extension}"
        return (
            f"{{% extends '{base}' %}}\n"
            "\n"
            f"{{% block title %}}{title}{{% endblock %}}\n"
            "\n"
            "{% block content %}\n"
            f"<h1>{title}</h1>\n"
            "{% endblock %}\n"
        )

    def add(self, page_id: str) -> Path:
        path = self.path_for(page_id)
        if path.exists():
            raise PageConflictError(
                f"Template '{page_id}' already exists",
                page_id=page_id, artifact=TEMPLATE, path=str(path),
            )
        _write(path, self.stub(page_id))
        return path

    def remove(self, page_id: str) -> Path:
        path = self.path_for(page_id)
        if not path.is_file():
            raise PageNotFoundError(
                f"Template '{page_id}' not found",
                page_id=page_id, artifact=TEMPLATE, path=str(path),
            )
        path.unlink()
        self._prune(path.parent)
        return path

    def move(self, old_id: str, new_id: str) -> Path:
        source, target = self.path_for(old_id), self.path_for(new_id)
        if not source.is_file():
            raise PageNotFoundError(
                f"Template '{old_id}' not found",
                page_id=old_id, artifact=TEMPLATE, path=str(source),
            )
        if target.exists():
            raise PageConflictError(
                f"Template '{new_id}' already exists",
                page_id=old_id, artifact=TEMPLATE, path=str(target),
                destination=new_id,
            )
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(source), str(target))
        self._prune(source.parent)
        return target

    def _prune(self, directory: Path) -> None:
        """Remove empty directories between *directory* and the template root."""
        root = self.root.resolve()
        current = directory.resolve()
        while current != root and root in current.parents:
            try:
                current.rmdir()
            except OSError:
                break
            logger.debug("Removed empty template directory %s", current)
            current = current.parent
