"""
Pagesmith Test Suite — Shared fixtures and configuration.

Run:  pytest tests/ -v
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict

import pytest

NAV_HTML = (
    '<nav class="navbar">\n'
    '  <ul class="navbar-nav">\n'
    "    <!-- pagesmith:nav:start -->\n"
    "    <!-- pagesmith:nav:end -->\n"
    "  </ul>\n"
    "</nav>\n"
)


@pytest.fixture(autouse=True)
def _isolate_globals():
    """Reset the operation-log singleton and the pagesmith logger level between tests."""
    import logging

    import pagesmith.engine.logging as log_mod

    log_mod._global_logger = None
    yield
    log_mod._global_logger = None
    logging.getLogger("pagesmith").setLevel(logging.NOTSET)


@pytest.fixture
def project_root(tmp_path):
    """
    Create a minimal project with pagesmith.yaml and one app, ``core``.
    The operation log is disabled so tests only see the files they touch.
    Returns the root Path.
    """
    root = tmp_path / "project"
    root.mkdir()

    (root / "pagesmith.yaml").write_text(
        "app:\n"
        "  name: core\n"
        "logging:\n"
        "  enabled: false\n",
        encoding="utf-8",
    )

    app = root / "core"
    templates = app / "templates" / "core"
    templates.mkdir(parents=True)

    (app / "views.py").write_text(
        "from django.shortcuts import render\n"
        "\n"
        "\n"
        "def home(request):\n"
        "    return render(request, 'core/home.html')\n",
        encoding="utf-8",
    )
    (app / "urls.py").write_text(
        "from django.urls import path\n"
        "\n"
        "from . import views\n"
        "\n"
        "urlpatterns = [\n"
        "    path('', views.home, name='home'),\n"
        "]\n",
        encoding="utf-8",
    )
    (templates / "base.html").write_text(
        "<html><body>{% include 'core/nav.html' %}{% block content %}{% endblock %}</body></html>\n",
        encoding="utf-8",
    )
    (templates / "nav.html").write_text(NAV_HTML, encoding="utf-8")
    (templates / "home.html").write_text(
        "{% extends 'core/base.html' %}\n{% block content %}<h1>Home</h1>{% endblock %}\n",
        encoding="utf-8",
    )
    return root


@pytest.fixture
def config(project_root):
    from pagesmith.engine.config import load_project_config

    return load_project_config(str(project_root / "pagesmith.yaml"))


@pytest.fixture
def synth(config):
    from pagesmith.pages.synthesizer import PageSynthesizer

    return PageSynthesizer.from_config(config)


def _snapshot(root: Path) -> Dict[str, bytes]:
    """Every file under *root* mapped to its bytes."""
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def snapshot():
    """Callable returning ``{relative path: bytes}`` for a directory tree."""
    return _snapshot
