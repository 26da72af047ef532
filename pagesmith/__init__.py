"""
Pagesmith — page scaffolding for generated Django-style web apps.

A page is a view function, a template and a URL route derived from one
hierarchical page id (``reports/monthly``). Pagesmith creates, deletes,
renames and lists pages, and regenerates the navigation block from the
pages found on disk.
"""

__version__ = "1.0.0"
__all__ = ["engine", "pages", "menu", "cli"]
