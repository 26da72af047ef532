"""
Pagesmith CLI — Page management commands for a generated web app.

Commands:
- pagesmith menu      — Interactive page manager (default)
- pagesmith init      — Write pagesmith.yaml and the app skeleton where missing
- pagesmith create    — Create one or more pages
- pagesmith delete    — Delete pages by name, number or range
- pagesmith rename    — Rename a page (template moved, view and route rewritten)
- pagesmith list      — List pages found in the template directory
- pagesmith nav       — Regenerate the navigation block only
- pagesmith history   — Show recent page operations from the operation log
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from pagesmith.engine.config import (
    CONFIG_FILENAME,
    ProjectConfig,
    load_project_config,
    render_default_config,
)
from pagesmith.engine.errors import PagesmithConfigError
from pagesmith.engine.logging import get_file_logger, init_logging, log, log_system_event

logger = logging.getLogger("pagesmith.cli")


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="pagesmith",
        description="Pagesmith — create, rename and delete pages in a web app",
    )
    parser.add_argument(
        "--config", help=f"Path to {CONFIG_FILENAME} (default: discovered from CWD)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # pagesmith menu
    subparsers.add_parser("menu", help="Interactive page manager")

    # pagesmith init
    init_parser = subparsers.add_parser("init", help="Write config and app skeleton")
    init_parser.add_argument("--app", default="core", help="App short name (default: core)")

    # pagesmith create
    create_parser = subparsers.add_parser("create", help="Create page(s)")
    create_parser.add_argument("pages", nargs="+", help="Page ids, e.g. about reports/monthly")

    # pagesmith delete
    delete_parser = subparsers.add_parser("delete", help="Delete page(s)")
    delete_parser.add_argument(
        "selection", nargs="+", help="Page names, list numbers or ranges (e.g. 2-4)"
    )
    delete_parser.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

    # pagesmith rename
    rename_parser = subparsers.add_parser("rename", help="Rename a page")
    rename_parser.add_argument("old", help="Current page id or list number")
    rename_parser.add_argument("new", help="New page id")

    # pagesmith list / nav
    subparsers.add_parser("list", help="List pages")
    subparsers.add_parser("nav", help="Regenerate navigation only")

    # pagesmith history
    history_parser = subparsers.add_parser("history", help="Show recent page operations")
    history_parser.add_argument("--days", type=int, default=7, help="Days to look back (default: 7)")
    history_parser.add_argument("--limit", type=int, default=50, help="Max entries (default: 50)")

    args = parser.parse_args(argv)

    if args.command == "init":
        return cmd_init(args)

    commands = {
        None: cmd_menu,
        "menu": cmd_menu,
        "create": cmd_create,
        "delete": cmd_delete,
        "rename": cmd_rename,
        "list": cmd_list,
        "nav": cmd_nav,
        "history": cmd_history,
    }
    return commands[args.command](args)


def _load_config(args: argparse.Namespace) -> Optional[ProjectConfig]:
    """Load config and start the operation log. Prints and returns None on error."""
    try:
        config = load_project_config(getattr(args, "config", None))
    except PagesmithConfigError as e:
        print(f"[ERROR] {e.message}")
        for detail in e.validation_errors or []:
            print(f"  - {detail}")
        return None
    if config.logging.enabled:
        init_logging(log_dir=str(config.log_dir), level=config.logging.level)
    return config


def _synthesizer(args: argparse.Namespace):
    from pagesmith.pages.synthesizer import PageSynthesizer

    config = _load_config(args)
    if config is None:
        return None
    return PageSynthesizer.from_config(config)


def _print_results(results) -> int:
    """Print per-artifact results. Returns 1 if any result is a failure."""
    from pagesmith.menu import format_result

    failed = 0
    for result in results:
        print(f"  {format_result(result)}")
        failed += result.failed
    return 1 if failed else 0


# ---------------------------------------------------------------------------
# pagesmith menu
# ---------------------------------------------------------------------------

def cmd_menu(args: argparse.Namespace) -> int:
    """Run the interactive page manager."""
    from pagesmith.menu import PageMenu

    synth = _synthesizer(args)
    if synth is None:
        return 1
    return PageMenu(synth).run()


# ---------------------------------------------------------------------------
# pagesmith create / delete / rename / list / nav
# ---------------------------------------------------------------------------

def cmd_create(args: argparse.Namespace) -> int:
    """Create each page, then re-render navigation once."""
    from pagesmith.menu import format_nav

    synth = _synthesizer(args)
    if synth is None:
        return 1
    status = 0
    for raw in args.pages:
        status |= _print_results(synth.create_page(raw))
    print(format_nav(synth.refresh_navigation()))
    return status


def cmd_delete(args: argparse.Namespace) -> int:
    """Delete the selected pages, then re-render navigation once."""
    from pagesmith.menu import format_nav
    from pagesmith.pages.selection import parse_selection

    synth = _synthesizer(args)
    if synth is None:
        return 1
    selection = parse_selection(" ".join(args.selection), synth.list_pages())
    for token, reason in selection.skipped:
        print(f"  [WARN] Skipped '{token}': {reason}")
    if not selection.page_ids:
        print("[WARN] Nothing selected.")
        return 0

    if not args.yes:
        answer = input(f"▶ Delete {', '.join(selection.page_ids)}? [y/N]: ")
        if answer.strip().lower() != "y":
            print("[INFO] Delete cancelled.")
            return 0

    status = 0
    for page_id in selection.page_ids:
        status |= _print_results(synth.delete_page(page_id))
    print(format_nav(synth.refresh_navigation()))
    return status


def cmd_rename(args: argparse.Namespace) -> int:
    """Rename one page; OLD may be a list number."""
    from pagesmith.menu import format_nav
    from pagesmith.pages.selection import resolve_token

    synth = _synthesizer(args)
    if synth is None:
        return 1
    old_id, reason = resolve_token(args.old, synth.list_pages())
    if old_id is None:
        print(f"[ERROR] {reason}")
        return 1
    status = _print_results(synth.rename(old_id, args.new))
    print(format_nav(synth.refresh_navigation()))
    return status


def cmd_list(args: argparse.Namespace) -> int:
    from pagesmith.menu import format_pages

    synth = _synthesizer(args)
    if synth is None:
        return 1
    pages = synth.list_pages()
    print(f"Pages ({len(pages)}):")
    for line in format_pages(pages):
        print(line)
    return 0


def cmd_nav(args: argparse.Namespace) -> int:
    from pagesmith.menu import format_nav

    synth = _synthesizer(args)
    if synth is None:
        return 1
    print(format_nav(synth.refresh_navigation()))
    return 0


# ---------------------------------------------------------------------------
# pagesmith history
# ---------------------------------------------------------------------------

def cmd_history(args: argparse.Namespace) -> int:
    """Print recent page operations, oldest first."""
    from datetime import date, timedelta

    config = _load_config(args)
    if config is None:
        return 1
    file_logger = get_file_logger()
    if file_logger is None:
        print("[WARN] Operation log is disabled (logging.enabled: false)")
        return 0

    entries = file_logger.query(
        "pages",
        "execution",
        start_date=date.today() - timedelta(days=max(args.days, 0)),
        limit=args.limit,
    )
    if not entries:
        print("[INFO] No page operations recorded.")
        return 0
    for entry in entries:
        target = entry.get("object_ref", "?")
        if entry.get("new_page_id"):
            target = f"{target} → {entry['new_page_id']}"
        print(
            f"{entry.get('timestamp', '')[:19]}  {entry.get('operation', '?'):<7} "
            f"{entry.get('artifact', '?'):<9} {entry.get('status', '?'):<10} {target}"
        )
    return 0


# ---------------------------------------------------------------------------
# pagesmith init
# ---------------------------------------------------------------------------

def _skeleton_files(config: ProjectConfig) -> List[Tuple[Path, str]]:
    """Files making up a minimal app the page tools can operate on."""
    app = config.app.name
    ext = config.app.template_extension
    nav = config.navigation
    return [
        (config.views_path,
         "from django.shortcuts import render\n"
         "\n"
         "\n"
         "def home(request):\n"
         f"    return render(request, '{app}/home{ext}')\n"),
        (config.urls_path,
         "from django.urls import path\n"
         "\n"
         "from . import views\n"
         "\n"
         "urlpatterns = [\n"
         "    path('', views.home, name='home'),\n"
         "]\n"),
        (config.base_path,
         "<!DOCTYPE html>\n"
         "<html lang=\"en\">\n"
         "<head>\n"
         "  <meta charset=\"utf-8\">\n"
         "  <title>{% block title %}" + config.app.name.title() + "{% endblock %}</title>\n"
         "</head>\n"
         "<body>\n"
         f"  {{% include '{app}/{config.app.nav_template}{ext}' %}}\n"
         "  <main class=\"container\">\n"
         "    {% block content %}{% endblock %}\n"
         "  </main>\n"
         "</body>\n"
         "</html>\n"),
        (config.nav_path,
         "<nav class=\"navbar navbar-expand-lg\">\n"
         "  <div class=\"container-fluid\">\n"
         "    <a class=\"navbar-brand\" href=\"{% url 'home' %}\">" + config.app.name.title() + "</a>\n"
         "    <ul class=\"navbar-nav\">\n"
         f"      {nav.start_marker}\n"
         f"      {nav.end_marker}\n"
         "    </ul>\n"
         "  </div>\n"
         "</nav>\n"),
        (config.template_root / f"home{ext}",
         f"{{% extends '{app}/{config.app.base_template}{ext}' %}}\n"
         "\n"
         "{% block content %}\n"
         "<h1>Home</h1>\n"
         "{% endblock %}\n"),
    ]


def cmd_init(args: argparse.Namespace) -> int:
    """Write pagesmith.yaml and any missing skeleton files. Safe to re-run."""
    app_name = args.app.lower().strip()
    if not app_name.isidentifier():
        print(f"[ERROR] Invalid app name '{app_name}'. Must be a valid Python identifier.")
        return 1

    config_path = Path(args.config) if args.config else Path.cwd() / CONFIG_FILENAME
    if config_path.exists():
        print(f"[SKIP] {config_path} already exists")
    else:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(render_default_config(app_name), encoding="utf-8")
        print(f"[OK] Wrote {config_path}")

    try:
        config = load_project_config(str(config_path))
    except PagesmithConfigError as e:
        print(f"[ERROR] {e.message}")
        return 1
    if config.logging.enabled:
        init_logging(log_dir=str(config.log_dir), level=config.logging.level)

    created = []
    for path, content in _skeleton_files(config):
        if path.exists():
            print(f"[SKIP] {path} already exists")
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        created.append(str(path))
        print(f"[OK] Created {path}")

    log(log_system_event("project_initialized", details={"app": config.app.name, "created": created}))
    print()
    print("Next steps:")
    print(f"  1. Include '{config.app.name}.urls' in your project's urls.py")
    print("  2. Run: pagesmith create about")
    return 0


if __name__ == "__main__":
    sys.exit(main())
