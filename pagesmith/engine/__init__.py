"""Pagesmith Engine — Configuration, error hierarchy, operation logging."""

from pagesmith.engine.config import ProjectConfig, load_project_config  # noqa: F401
from pagesmith.engine.errors import PagesmithError  # noqa: F401

__all__ = [
    "ProjectConfig",
    "load_project_config",
    "PagesmithError",
]
