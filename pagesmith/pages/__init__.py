"""Pagesmith page management — identifiers, artifacts, navigation, enumeration."""

from pagesmith.pages.artifacts import ArtifactResult, Status  # noqa: F401
from pagesmith.pages.enumerator import list_pages  # noqa: F401
from pagesmith.pages.identifiers import is_valid, normalize  # noqa: F401
from pagesmith.pages.navigation import render, update_navigation  # noqa: F401
from pagesmith.pages.synthesizer import PageSynthesizer  # noqa: F401

__all__ = [
    "ArtifactResult",
    "Status",
    "list_pages",
    "is_valid",
    "normalize",
    "render",
    "update_navigation",
    "PageSynthesizer",
]
