"""
Pagesmith Configuration — Load and validate pagesmith.yaml.

All paths in the file are relative to the directory holding pagesmith.yaml
(the project root). A missing file yields the defaults, which describe a
Django-style app named ``core``.

Usage:
    from pagesmith.engine.config import load_project_config
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from pagesmith.engine.errors import PagesmithConfigError

CONFIG_FILENAME = "pagesmith.yaml"

DEFAULT_PROTECTED_PAGES = ["home", "nav", "footer", "sidebar"]


# ---------------------------------------------------------------------------
# Pydantic models for pagesmith.yaml
# ---------------------------------------------------------------------------

class AppSettings(BaseModel):
    name: str = "core"
    views_file: Optional[str] = None
    urls_file: Optional[str] = None
    templates_dir: Optional[str] = None
    template_extension: str = ".html"
    base_template: str = "base"
    nav_template: str = "nav"
    protected_pages: List[str] = Field(
        default_factory=lambda: list(DEFAULT_PROTECTED_PAGES)
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip().lower()
        if not v.isidentifier():
            raise ValueError(f"app name must be a valid Python identifier, got '{v}'")
        return v

    @field_validator("template_extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("template_extension must not be empty")
        return v if v.startswith(".") else f".{v}"

    @field_validator("protected_pages")
    @classmethod
    def lower_protected(cls, v: List[str]) -> List[str]:
        return [p.strip().lower() for p in v if p.strip()]


class NavigationSettings(BaseModel):
    start_marker: str = "<!-- pagesmith:nav:start -->"
    end_marker: str = "<!-- pagesmith:nav:end -->"
    container_pattern: str = r"<ul[^>]*\bnavbar-nav\b"

    @field_validator("start_marker", "end_marker")
    @classmethod
    def validate_marker(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("navigation markers must not be empty")
        return v


class LoggingSettings(BaseModel):
    level: str = "INFO"
    directory: str = ".pagesmith/logs"
    enabled: bool = True

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"logging level must be a standard level name, got '{v}'")
        return v


class ProjectConfig(BaseModel):
    """Root model for pagesmith.yaml."""
    root: Path = Field(default_factory=Path.cwd)
    app: AppSettings = AppSettings()
    navigation: NavigationSettings = NavigationSettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def app_dir(self) -> Path:
        return self.root / self.app.name

    @property
    def views_path(self) -> Path:
        if self.app.views_file:
            return self.root / self.app.views_file
        return self.app_dir / "views.py"

    @property
    def urls_path(self) -> Path:
        if self.app.urls_file:
            return self.root / self.app.urls_file
        return self.app_dir / "urls.py"

    @property
    def templates_path(self) -> Path:
        """Template search root (the directory holding ``<app>/``)."""
        if self.app.templates_dir:
            return self.root / self.app.templates_dir
        return self.app_dir / "templates"

    @property
    def template_root(self) -> Path:
        """Per-application template directory — where pages live."""
        return self.templates_path / self.app.name

    @property
    def nav_path(self) -> Path:
        return self.template_root / f"{self.app.nav_template}{self.app.template_extension}"

    @property
    def base_path(self) -> Path:
        return self.template_root / f"{self.app.base_template}{self.app.template_extension}"

    @property
    def log_dir(self) -> Path:
        return self.root / self.logging.directory

    @property
    def protected(self) -> frozenset:
        return frozenset(self.app.protected_pages)


# ---------------------------------------------------------------------------
# Config Loading Functions
# ---------------------------------------------------------------------------

def find_project_root(start: Optional[Path] = None) -> Path:
    """Find the project root by walking up from *start* looking for pagesmith.yaml."""
    current = Path(start or Path.cwd()).resolve()
    for parent in [current, *current.parents]:
        if (parent / CONFIG_FILENAME).exists():
            return parent
    return current


def load_project_config(config_path: Optional[str] = None) -> ProjectConfig:
    """
    Load and validate pagesmith.yaml.

    Args:
        config_path: Explicit path to pagesmith.yaml. If None, auto-discovers.

    Returns:
        Validated ProjectConfig instance.

    Raises:
        PagesmithConfigError: the file is unreadable or fails validation.
    """
    if config_path is None:
        path = find_project_root() / CONFIG_FILENAME
    else:
        path = Path(config_path)

    root = path.resolve().parent
    if not path.exists():
        # Defaults when no config file
        return ProjectConfig(root=root)

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise PagesmithConfigError(f"Cannot read {path}: {e}", path=str(path)) from e

    if not isinstance(raw, dict):
        raise PagesmithConfigError(f"{path} must contain a mapping", path=str(path))

    config_data = {
        "root": root,
        "app": raw.get("app") or {},
        "navigation": raw.get("navigation") or {},
        "logging": raw.get("logging") or {},
    }

    try:
        return ProjectConfig(**config_data)
    except ValidationError as e:
        raise PagesmithConfigError(
            f"Invalid configuration in {path}",
            path=str(path),
            validation_errors=[err["msg"] for err in e.errors()],
        ) from e


def render_default_config(app_name: str = "core") -> str:
    """Return the text of a pagesmith.yaml describing *app_name* with defaults."""
    defaults = ProjectConfig(app=AppSettings(name=app_name))
    data: Dict[str, dict] = {
        "app": {
            "name": defaults.app.name,
            "views_file": f"{defaults.app.name}/views.py",
            "urls_file": f"{defaults.app.name}/urls.py",
            "templates_dir": f"{defaults.app.name}/templates",
            "template_extension": defaults.app.template_extension,
            "base_template": defaults.app.base_template,
            "nav_template": defaults.app.nav_template,
            "protected_pages": defaults.app.protected_pages,
        },
        "navigation": defaults.navigation.model_dump(),
        "logging": defaults.logging.model_dump(),
    }
    return yaml.safe_dump(data, sort_keys=False)
