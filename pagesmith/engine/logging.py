"""
Pagesmith Logging System — Structured JSON-lines operation log.

Implements:
- FileLogger: Per-object-type, per-category log files (daily rotation)
- Log entry builders for page, navigation and system events
- A module-level logger singleton (init_logging / log / shutdown_logging)

Every page operation outcome is appended to
``{log_dir}/{object_type}/{category}/{YYYY-MM-DD}.jsonl`` so that partial
states left by an interrupted batch can be traced afterwards. Writes are
synchronous: the tool is single-threaded and processes one command at a time.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger("pagesmith.engine.logging")

# Valid object types and their permitted categories
OBJECT_TYPE_CATEGORIES = {
    "pages": ["execution"],
    "navigation": ["execution"],
    "system": ["execution"],
}


class LogEntry:
    """A structured log entry destined for a specific file."""

    __slots__ = ("object_type", "category", "data")

    def __init__(self, object_type: str, category: str, data: Dict[str, Any]):
        self.object_type = object_type
        self.category = category
        self.data = data

    def to_json(self) -> str:
        return json.dumps(self.data, default=str, separators=(",", ":"))


class FileLogger:
    """
    Writes structured JSON log entries to per-object-type, per-category files.
    Files rotate daily: {log_dir}/{object_type}/{category}/{YYYY-MM-DD}.jsonl
    """

    def __init__(self, log_dir: str = ".pagesmith/logs"):
        self._log_dir = Path(log_dir)
        self._ensure_directories()

    def _ensure_directories(self) -> None:
        """Create the directory tree for all object types and categories."""
        for obj_type, categories in OBJECT_TYPE_CATEGORIES.items():
            for cat in categories:
                (self._log_dir / obj_type / cat).mkdir(parents=True, exist_ok=True)

    def write(self, entry: LogEntry) -> None:
        """Write a single log entry to the appropriate file."""
        file_path = self._resolve_path(entry.object_type, entry.category)
        with open(file_path, "a", encoding="utf-8") as f:
            f.write(entry.to_json())
            f.write("\n")

    def _resolve_path(self, object_type: str, category: str) -> Path:
        """Resolve the log file path for today's date."""
        if object_type not in OBJECT_TYPE_CATEGORIES:
            object_type = "system"
        today = date.today().isoformat()
        return self._log_dir / object_type / category / f"{today}.jsonl"

    @property
    def log_dir(self) -> Path:
        return self._log_dir

    def query(
        self,
        object_type: str,
        category: str = "execution",
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        filters: Optional[Dict[str, Any]] = None,
        limit: int = 500,
    ) -> List[Dict[str, Any]]:
        """
        Query log entries from JSONL files for a given object_type/category.

        Args:
            object_type: The object type folder (e.g. "pages", "navigation").
            category: The category folder.
            start_date: Earliest date to include (defaults to 7 days ago).
            end_date: Latest date to include (defaults to today).
            filters: Only entries matching ALL key/value pairs are returned.
            limit: Max number of entries to return.

        Returns:
            List of parsed log-entry dicts, oldest first.
        """
        if end_date is None:
            end_date = date.today()
        if start_date is None:
            start_date = end_date - timedelta(days=7)

        log_base = self._log_dir / object_type / category
        if not log_base.exists():
            return []

        # Newest files first so the limit keeps the most recent days
        per_day: List[List[Dict[str, Any]]] = []
        collected = 0
        current = end_date
        while current >= start_date and collected < limit:
            file_path = log_base / f"{current.isoformat()}.jsonl"
            if file_path.exists():
                entries = self._read_jsonl(file_path, filters)
                per_day.append(entries)
                collected += len(entries)
            current -= timedelta(days=1)

        results: List[Dict[str, Any]] = []
        for entries in reversed(per_day):
            results.extend(entries)
        return results[-limit:]

    @staticmethod
    def _read_jsonl(
        path: Path,
        filters: Optional[Dict[str, Any]],
    ) -> List[Dict[str, Any]]:
        """Read all matching entries from a .jsonl file."""
        entries: List[Dict[str, Any]] = []
        try:
            with open(path, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        data = json.loads(line)
                    except json.JSONDecodeError:
                        continue
                    if filters and not all(data.get(k) == v for k, v in filters.items()):
                        continue
                    entries.append(data)
        except OSError as exc:
            logger.warning("Could not read log file %s: %s", path, exc)
        return entries


# ---------------------------------------------------------------------------
# Log Entry Builders
# ---------------------------------------------------------------------------

def _base_entry(
    event: str,
    level: str,
    object_ref: str,
    app: Optional[str] = None,
    **extra: Any,
) -> Dict[str, Any]:
    """Build a base log entry with common fields."""
    entry: Dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "event": event,
        "object_ref": object_ref,
    }
    if app:
        entry["app"] = app
    entry.update(extra)
    return entry


def log_page_event(
    operation: str,
    page_id: str,
    artifact: str,
    status: str,
    app: Optional[str] = None,
    message: Optional[str] = None,
    path: Optional[str] = None,
    new_page_id: Optional[str] = None,
) -> LogEntry:
    """Build a page artifact operation entry (create/delete/rename outcome)."""
    level = "INFO" if status in ("created", "deleted", "renamed") else "WARNING"
    data = _base_entry(
        event=f"page_{operation}",
        level=level,
        object_ref=page_id,
        app=app,
        operation=operation,
        artifact=artifact,
        status=status,
    )
    if message:
        data["message"] = message
    if path:
        data["path"] = path
    if new_page_id:
        data["new_page_id"] = new_page_id
    return LogEntry("pages", "execution", data)


def log_navigation_event(
    path: str,
    strategy: str,
    page_count: int,
    changed: bool,
    app: Optional[str] = None,
) -> LogEntry:
    """Build a navigation re-render entry."""
    data = _base_entry(
        event="navigation_rendered",
        level="INFO",
        object_ref="navigation",
        app=app,
        path=path,
        strategy=strategy,
        page_count=page_count,
        changed=changed,
    )
    return LogEntry("navigation", "execution", data)


def log_system_event(
    event: str,
    level: str = "INFO",
    details: Optional[Dict[str, Any]] = None,
) -> LogEntry:
    """Build a system event log entry (init, config errors)."""
    data = _base_entry(
        event=event,
        level=level,
        object_ref="system",
    )
    if details:
        data["details"] = details
    return LogEntry("system", "execution", data)


# ---------------------------------------------------------------------------
# Convenience: Global File Logger Singleton
# ---------------------------------------------------------------------------

_global_logger: Optional[FileLogger] = None


def init_logging(log_dir: str = ".pagesmith/logs", level: str = "INFO") -> FileLogger:
    """Set the pagesmith logger level and open the global operation log."""
    global _global_logger
    logging.getLogger("pagesmith").setLevel(getattr(logging, level.upper(), logging.INFO))
    _global_logger = FileLogger(log_dir=log_dir)
    return _global_logger


def get_file_logger() -> Optional[FileLogger]:
    """Get the global operation log."""
    return _global_logger


def log(entry: LogEntry) -> bool:
    """Append an entry to the operation log. Returns False when logging is off."""
    if _global_logger is None:
        logger.debug("Operation log not initialized — entry dropped: %s", entry.data.get("event"))
        return False
    try:
        _global_logger.write(entry)
    except OSError as e:
        logger.error(f"Operation log write failed: {e}")
        return False
    return True


def shutdown_logging() -> None:
    """Drop the global operation log."""
    global _global_logger
    _global_logger = None
