"""
Pagesmith interactive menu — numbered command loop over a PageSynthesizer.

    1) Create page(s)       4) List pages
    2) Delete page(s)       5) Regenerate navigation
    3) Rename a page        6) Exit

One command is fully processed before the next prompt. Bad input prints a
message and returns to the menu; only Exit, EOF or Ctrl-C leave the loop.
Every batch that may have changed the page set ends with a nav re-render.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterable, List, Optional

from pagesmith.pages.artifacts import ArtifactResult, Status
from pagesmith.pages.identifiers import SEGMENT_RE, normalize, parent_of
from pagesmith.pages.navigation import NavUpdateResult
from pagesmith.pages.selection import parse_selection, resolve_token
from pagesmith.pages.synthesizer import PageSynthesizer

logger = logging.getLogger("pagesmith.menu")

STATUS_TAGS = {
    Status.CREATED: "OK",
    Status.DELETED: "OK",
    Status.RENAMED: "OK",
    Status.EXISTS: "SKIP",
    Status.NOT_FOUND: "WARN",
    Status.SKIPPED: "WARN",
    Status.CONFLICT: "WARN",
    Status.REFUSED: "ERROR",
    Status.INVALID: "ERROR",
}


class Command(int, Enum):
    CREATE = 1
    DELETE = 2
    RENAME = 3
    LIST = 4
    NAV = 5
    EXIT = 6


MENU_LABELS = {
    Command.CREATE: "Create page(s)",
    Command.DELETE: "Delete page(s)",
    Command.RENAME: "Rename a page",
    Command.LIST: "List pages",
    Command.NAV: "Regenerate navigation only",
    Command.EXIT: "Exit",
}


def format_result(result: ArtifactResult) -> str:
    tag = STATUS_TAGS.get(result.status, "INFO")
    return f"[{tag}] {result.artifact} '{result.page_id}': {result.message or result.status.value}"


def format_nav(result: NavUpdateResult) -> str:
    if not result.changed:
        return f"[OK] Navigation up to date ({result.page_count} page(s))"
    return f"[OK] Navigation {result.strategy.value} in {result.path} ({result.page_count} page(s))"


def format_pages(pages: List[str]) -> List[str]:
    if not pages:
        return ["  (no pages)"]
    width = len(str(len(pages)))
    return [f"  {i:>{width}}) {page_id}" for i, page_id in enumerate(pages, 1)]


class PageMenu:
    """Interactive loop. ``input_fn``/``print_fn`` are injectable for tests."""

    def __init__(
        self,
        synth: PageSynthesizer,
        input_fn: Optional[Callable[[str], str]] = None,
        print_fn: Optional[Callable[..., None]] = None,
    ):
        self.synth = synth
        self.input = input_fn or input
        self.print = print_fn or print

    def run(self) -> int:
        while True:
            self.show_menu()
            try:
                raw = self.input("▶ Choose an option: ").strip()
            except (EOFError, KeyboardInterrupt):
                self.print()
                return 0
            try:
                command = Command(int(raw))
            except ValueError:
                self.print(f"[ERROR] Unknown option '{raw}'. Enter 1-{len(Command)}.")
                continue
            try:
                if not self.dispatch(command):
                    return 0
            except (EOFError, KeyboardInterrupt):
                self.print("\n[INFO] Cancelled.")

    def show_menu(self) -> None:
        self.print()
        self.print("=" * 40)
        self.print("  Page Manager")
        self.print("=" * 40)
        for command in Command:
            self.print(f"  {command.value}) {MENU_LABELS[command]}")

    def dispatch(self, command: Command) -> bool:
        """Run one command. Returns False when the loop should stop."""
        if command is Command.EXIT:
            return False
        handlers = {
            Command.CREATE: self.do_create,
            Command.DELETE: self.do_delete,
            Command.RENAME: self.do_rename,
            Command.LIST: self.do_list,
            Command.NAV: self.do_nav,
        }
        handlers[command]()
        return True

    # -----------------------------------------------------------------------
    # Commands
    # -----------------------------------------------------------------------

    def report(self, results: Iterable[ArtifactResult]) -> None:
        for result in results:
            self.print(f"  {format_result(result)}")

    def do_list(self) -> None:
        pages = self.synth.list_pages()
        self.print(f"Pages ({len(pages)}):")
        for line in format_pages(pages):
            self.print(line)

    def do_nav(self) -> None:
        self.print(format_nav(self.synth.refresh_navigation()))

    def do_create(self) -> None:
        raw = self.input("▶ Page name(s), space separated (e.g. about reports/monthly): ")
        names = raw.split()
        if not names:
            self.print("[WARN] No page names given.")
            return
        for name in names:
            self.report(self.synth.create_page(name))
        self.do_nav()

    def do_delete(self) -> None:
        pages = self.synth.list_pages()
        self.do_list()
        if not pages:
            return
        raw = self.input("▶ Pages to delete (names, numbers or ranges like 2-4): ")
        selection = parse_selection(raw, pages)
        for token, reason in selection.skipped:
            self.print(f"  [WARN] Skipped '{token}': {reason}")
        if not selection.page_ids:
            self.print("[WARN] Nothing selected.")
            return

        self.print("Selected: " + ", ".join(selection.page_ids))
        answer = self.input(f"▶ Delete {len(selection.page_ids)} page(s)? [y/N]: ")
        if answer.strip().lower() != "y":
            self.print("[INFO] Delete cancelled.")
            return
        for page_id in selection.page_ids:
            self.report(self.synth.delete_page(page_id))
        self.do_nav()

    def do_rename(self) -> None:
        pages = self.synth.list_pages()
        self.do_list()
        if not pages:
            return
        old_id, reason = resolve_token(self.input("▶ Page to rename (name or number): "), pages)
        if old_id is None:
            self.print(f"[ERROR] {reason}")
            return
        if self.synth.is_protected(old_id):
            self.print(f"[ERROR] '{old_id}' is a protected page and cannot be renamed.")
            return

        new_name = self.input(f"▶ New name for '{old_id}' (no '/'): ").strip()
        if "/" in new_name:
            self.print("[ERROR] The new name must not contain '/'.")
            return
        new_name = normalize(new_name)
        if not SEGMENT_RE.fullmatch(new_name):
            self.print(f"[ERROR] Invalid name '{new_name}'.")
            return

        parent = parent_of(old_id)
        new_id = f"{parent}/{new_name}" if parent else new_name
        results = self.synth.rename(old_id, new_id)
        self.report(results)
        done = sum(1 for r in results if r.status is Status.RENAMED)
        if 0 < done < len(results):
            self.print(f"[WARN] Rename partially applied: {done} of {len(results)} artifacts updated.")
        self.do_nav()
