"""
Pagesmith Error Hierarchy — Structured exceptions for page operations.

Repositories, require_valid and the protection guard raise these. The
synthesizer catches them and reports each as an ArtifactResult, so a batch
never stops on one page. Config loading raises PagesmithConfigError to the CLI.

Hierarchy:
    PagesmithError
    ├── PageValidationError   — Malformed or empty page identifier
    ├── PageNotFoundError     — Target artifact does not exist
    ├── PageConflictError     — Target already exists / destination occupied
    ├── ProtectedPageError    — Mutation of a protected page
    └── PagesmithConfigError  — Invalid pagesmith.yaml
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class PagesmithError(Exception):
    """
    Base error for all Pagesmith failures.
    All context is serializable to JSON for the operation log.
    """

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.page_id: Optional[str] = context.get("page_id")
        self.artifact: Optional[str] = context.get("artifact")
        self.path: Optional[str] = context.get("path")
        self.error_type: str = self.__class__.__name__
        self.context: Dict[str, Any] = context
        self.timestamp: str = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize error to a JSON-compatible dict."""
        return {
            "error_type": self.error_type,
            "message": self.message,
            "page_id": self.page_id,
            "artifact": self.artifact,
            "path": self.path,
            "timestamp": self.timestamp,
            "context": {
                k: str(v) for k, v in self.context.items()
                if k not in ("page_id", "artifact", "path")
            },
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)

    def __repr__(self) -> str:
        parts = [f"{self.error_type}: {self.message}"]
        if self.page_id:
            parts.append(f"page_id={self.page_id}")
        if self.artifact:
            parts.append(f"artifact={self.artifact}")
        return " | ".join(parts)


class PageValidationError(PagesmithError):
    """
    Page identifier failed validation.
    Carries the raw input alongside the normalized form.
    """

    def __init__(self, message: str, **context: Any):
        self.raw: Optional[str] = context.get("raw")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["raw"] = self.raw
        return d


class PageNotFoundError(PagesmithError):
    """Target artifact does not exist."""
    pass


class PageConflictError(PagesmithError):
    """Target already exists, or the rename destination is occupied."""

    def __init__(self, message: str, **context: Any):
        self.destination: Optional[str] = context.get("destination")
        super().__init__(message, **context)


class ProtectedPageError(PagesmithError):
    """Attempted delete/rename of a protected page."""
    pass


class PagesmithConfigError(PagesmithError):
    """Configuration error — invalid or unreadable pagesmith.yaml."""

    def __init__(self, message: str, **context: Any):
        self.validation_errors: Optional[list] = context.get("validation_errors")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["validation_errors"] = self.validation_errors
        return d
