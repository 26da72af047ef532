"""
Page Synthesizer — create, delete and rename the three artifacts of a page.

A page is a view function in views.py, a template file and a route in
urls.py. Every per-artifact operation is idempotent and independent:

    create_*  — CREATED, or EXISTS when already present (no change)
    delete_*  — DELETED, or NOT_FOUND when absent (no change)
    rename    — RENAMED, NOT_FOUND or CONFLICT per artifact

There is no transaction. A batch that stops half way leaves whatever was
already written, and each artifact's outcome is reported separately so the
user can see and repair a partial state. Protected pages are refused before
any file is touched.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from pagesmith.engine.config import ProjectConfig
from pagesmith.engine.errors import (
    PageConflictError,
    PageNotFoundError,
    PageValidationError,
    ProtectedPageError,
)
from pagesmith.engine.logging import log, log_navigation_event, log_page_event
from pagesmith.pages.artifacts import (
    HANDLER,
    PAGE,
    ROUTE,
    TEMPLATE,
    ArtifactResult,
    HandlerRegistry,
    RouteRegistry,
    Status,
    TemplateStore,
)
from pagesmith.pages.enumerator import list_pages
from pagesmith.pages.identifiers import handler_name, require_valid
from pagesmith.pages.navigation import NavTarget, NavUpdateResult, update_navigation

logger = logging.getLogger("pagesmith.pages.synthesizer")


class PageSynthesizer:
    """
    Page operations for one application.

    Usage:
        synth = PageSynthesizer.from_config(load_project_config())
        results = synth.create_page("reports/monthly")
        synth.refresh_navigation()
    """

    def __init__(
        self,
        handlers: HandlerRegistry,
        routes: RouteRegistry,
        templates: TemplateStore,
        nav_target: NavTarget,
        protected: Iterable[str],
        app_name: str = "core",
        excluded: Iterable[str] = ("base", "nav"),
    ):
        self.handlers = handlers
        self.routes = routes
        self.templates = templates
        self.nav_target = nav_target
        self.protected = frozenset(protected)
        self.app_name = app_name
        self.excluded = tuple(excluded)

    @classmethod
    def from_config(cls, config: ProjectConfig) -> "PageSynthesizer":
        app = config.app
        return cls(
            handlers=HandlerRegistry(config.views_path, app.name, app.template_extension),
            routes=RouteRegistry(config.urls_path),
            templates=TemplateStore(
                config.template_root, app.name, app.template_extension, app.base_template
            ),
            nav_target=NavTarget(
                path=config.nav_path,
                start_marker=config.navigation.start_marker,
                end_marker=config.navigation.end_marker,
                container_pattern=config.navigation.container_pattern,
            ),
            protected=config.protected,
            app_name=app.name,
            excluded=(app.base_template, app.nav_template),
        )

    # -----------------------------------------------------------------------
    # Enumeration
    # -----------------------------------------------------------------------

    def list_pages(self) -> List[str]:
        return list_pages(
            self.templates.root,
            self.templates.extension,
            protected=self.protected,
            excluded=self.excluded,
        )

    def is_protected(self, page_id: str) -> bool:
        """Protected pages and the layout fragments (base, nav) are never targets."""
        return page_id in self.protected or page_id in self.excluded

    def require_unprotected(self, page_id: str, artifact: str = PAGE) -> None:
        if self.is_protected(page_id):
            raise ProtectedPageError(
                f"'{page_id}' is a protected page", page_id=page_id, artifact=artifact,
            )

    # -----------------------------------------------------------------------
    # Reporting
    # -----------------------------------------------------------------------

    def _record(
        self,
        operation: str,
        result: ArtifactResult,
        new_page_id: Optional[str] = None,
    ) -> ArtifactResult:
        level = logging.WARNING if result.failed else logging.INFO
        logger.log(level, "%s %s '%s': %s", operation, result.artifact, result.page_id, result.message)
        log(log_page_event(
            operation=operation,
            page_id=result.page_id,
            artifact=result.artifact,
            status=result.status.value,
            app=self.app_name,
            message=result.message,
            path=result.path,
            new_page_id=new_page_id,
        ))
        return result

    def _refuse(self, operation: str, error: ProtectedPageError) -> ArtifactResult:
        return self._record(operation, ArtifactResult(
            error.artifact, error.page_id, Status.REFUSED, error.message,
        ))

    # -----------------------------------------------------------------------
    # Create
    # -----------------------------------------------------------------------

    def create_handler(self, page_id: str) -> ArtifactResult:
        path = str(self.handlers.path)
        try:
            self.handlers.add(page_id)
        except PageConflictError as e:
            return self._record("create", ArtifactResult(HANDLER, page_id, Status.EXISTS, e.message, path))
        return self._record("create", ArtifactResult(
            HANDLER, page_id, Status.CREATED, f"Added view {handler_name(page_id)}()", path,
        ))

    def create_template(self, page_id: str) -> ArtifactResult:
        path = str(self.templates.path_for(page_id))
        try:
            self.templates.add(page_id)
        except PageConflictError as e:
            return self._record("create", ArtifactResult(TEMPLATE, page_id, Status.EXISTS, e.message, path))
        return self._record("create", ArtifactResult(
            TEMPLATE, page_id, Status.CREATED, f"Wrote {path}", path,
        ))

    def create_route(self, page_id: str) -> ArtifactResult:
        path = str(self.routes.path)
        try:
            self.routes.add(page_id)
        except PageConflictError as e:
            return self._record("create", ArtifactResult(ROUTE, page_id, Status.EXISTS, e.message, path))
        except PageNotFoundError as e:
            return self._record("create", ArtifactResult(ROUTE, page_id, Status.SKIPPED, e.message, path))
        return self._record("create", ArtifactResult(
            ROUTE, page_id, Status.CREATED, f"Added route '{handler_name(page_id)}'", path,
        ))

    # -----------------------------------------------------------------------
    # Delete
    # -----------------------------------------------------------------------

    def delete_handler(self, page_id: str) -> ArtifactResult:
        path = str(self.handlers.path)
        try:
            self.require_unprotected(page_id, HANDLER)
            self.handlers.remove(page_id)
        except ProtectedPageError as e:
            return self._refuse("delete", e)
        except PageNotFoundError as e:
            return self._record("delete", ArtifactResult(HANDLER, page_id, Status.NOT_FOUND, e.message, path))
        return self._record("delete", ArtifactResult(
            HANDLER, page_id, Status.DELETED, f"Removed view {handler_name(page_id)}()", path,
        ))

    def delete_template(self, page_id: str) -> ArtifactResult:
        path = str(self.templates.path_for(page_id))
        try:
            self.require_unprotected(page_id, TEMPLATE)
            self.templates.remove(page_id)
        except ProtectedPageError as e:
            return self._refuse("delete", e)
        except PageNotFoundError as e:
            return self._record("delete", ArtifactResult(TEMPLATE, page_id, Status.NOT_FOUND, e.message, path))
        return self._record("delete", ArtifactResult(
            TEMPLATE, page_id, Status.DELETED, f"Removed {path}", path,
        ))

    def delete_route(self, page_id: str) -> ArtifactResult:
        path = str(self.routes.path)
        try:
            self.require_unprotected(page_id, ROUTE)
            self.routes.remove(page_id)
        except ProtectedPageError as e:
            return self._refuse("delete", e)
        except PageNotFoundError as e:
            return self._record("delete", ArtifactResult(ROUTE, page_id, Status.NOT_FOUND, e.message, path))
        return self._record("delete", ArtifactResult(
            ROUTE, page_id, Status.DELETED, f"Removed route '{handler_name(page_id)}'", path,
        ))

    # -----------------------------------------------------------------------
    # Page-level operations
    # -----------------------------------------------------------------------

    def _check(self, operation: str, raw: str) -> Tuple[str, Optional[ArtifactResult]]:
        """Normalize *raw*; return a single INVALID/REFUSED result if it cannot be used."""
        try:
            page_id = require_valid(raw)
            self.require_unprotected(page_id)
        except PageValidationError as e:
            return "", self._record(operation, ArtifactResult(
                PAGE, e.page_id or raw, Status.INVALID, e.message,
            ))
        except ProtectedPageError as e:
            return page_id, self._refuse(operation, e)
        return page_id, None

    def create_page(self, raw: str) -> List[ArtifactResult]:
        page_id, rejected = self._check("create", raw)
        if rejected:
            return [rejected]
        return [
            self.create_template(page_id),
            self.create_handler(page_id),
            self.create_route(page_id),
        ]

    def delete_page(self, raw: str) -> List[ArtifactResult]:
        page_id, rejected = self._check("delete", raw)
        if rejected:
            return [rejected]
        return [
            self.delete_handler(page_id),
            self.delete_template(page_id),
            self.delete_route(page_id),
        ]

    def rename(self, old_raw: str, new_raw: str) -> List[ArtifactResult]:
        """
        Rename a page's three artifacts from *old_raw* to *new_raw*.

        The template file is moved, preserving its content. Each artifact is
        updated independently; a missing artifact or an occupied destination
        is reported for that artifact alone.
        """
        old_id, rejected = self._check("rename", old_raw)
        if rejected:
            return [rejected]
        try:
            new_id = require_valid(new_raw)
        except PageValidationError as e:
            return [self._record("rename", ArtifactResult(
                PAGE, old_id, Status.INVALID, f"new name: {e.message}",
            ))]
        if new_id == old_id:
            return [self._record("rename", ArtifactResult(
                PAGE, old_id, Status.INVALID, "new name is the same as the old name",
            ))]
        try:
            self.require_unprotected(new_id)
        except ProtectedPageError as e:
            return [self._refuse("rename", e)]

        results = []
        steps = (
            (HANDLER, str(self.handlers.path), lambda: self.handlers.rename(old_id, new_id)),
            (TEMPLATE, str(self.templates.path_for(new_id)), lambda: self.templates.move(old_id, new_id)),
            (ROUTE, str(self.routes.path), lambda: self.routes.rename(old_id, new_id)),
        )
        for artifact, path, apply in steps:
            try:
                apply()
            except PageNotFoundError as e:
                result = ArtifactResult(artifact, old_id, Status.NOT_FOUND, e.message, e.path or path)
            except PageConflictError as e:
                result = ArtifactResult(artifact, old_id, Status.CONFLICT, e.message, e.path or path)
            else:
                result = ArtifactResult(artifact, old_id, Status.RENAMED, f"{old_id} → {new_id}", path)
            results.append(self._record("rename", result, new_page_id=new_id))
        return results

    # -----------------------------------------------------------------------
    # Navigation
    # -----------------------------------------------------------------------

    def refresh_navigation(self) -> NavUpdateResult:
        """Re-render the nav block from a fresh enumeration of the template root."""
        pages = self.list_pages()
        result = update_navigation(self.nav_target, pages)
        logger.info(
            "Navigation %s in %s (%d page(s), changed=%s)",
            result.strategy.value, result.path, result.page_count, result.changed,
        )
        log(log_navigation_event(
            path=result.path,
            strategy=result.strategy.value,
            page_count=result.page_count,
            changed=result.changed,
            app=self.app_name,
        ))
        return result
