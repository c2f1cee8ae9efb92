"""Rapid Scaffold configuration.

Centralised, typed settings for a scaffolding run.  Like the rest of the
package, settings are Pydantic v2 models so they are validated at
construction time and can be round-tripped through JSON or built from
environment variables.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field


DEFAULT_TEMPLATE_REPO = "https://github.com/mnisrei/test.git"
DEFAULT_PROJECT_NAME = "rapid-framework-fe"


class ExistingDestPolicy(str, Enum):
    """What the engine does with a destination that already has content."""

    PRESERVE_CACHE = "preserve-cache"
    CLEAN = "clean"
    FAIL = "fail"


class TemplateConfig(BaseModel):
    """Where the template snapshot comes from."""

    repo: str = Field(default=DEFAULT_TEMPLATE_REPO)
    ref: str | None = Field(default=None, description="Branch or tag; remote HEAD when unset")
    strategy: Literal["git", "archive"] = Field(default="git")
    archive_url: str | None = Field(
        default=None,
        description="Explicit .tar.gz URL; derived from ``repo`` for GitHub when unset",
    )
    timeout: int = Field(default=300, ge=10, description="Fetch timeout in seconds")


class BootstrapConfig(BaseModel):
    """How dependencies are installed and the dev server is launched."""

    package_manager: str = Field(default="pnpm")
    install_args: list[str] = Field(default_factory=lambda: ["install"])
    dev_args: list[str] = Field(default_factory=lambda: ["run", "dev"])
    install_timeout: int | None = Field(
        default=None, ge=10, description="Install timeout in seconds; unbounded when unset"
    )
    run_dev: bool = Field(default=False)
    skip_install: bool = Field(default=False)


class ScaffoldConfig(BaseModel):
    """Global configuration for one generator invocation."""

    default_project_name: str = Field(default=DEFAULT_PROJECT_NAME)
    policy: ExistingDestPolicy = Field(default=ExistingDestPolicy.PRESERVE_CACHE)
    dependency_cache_dir: str = Field(default="node_modules", min_length=1)
    template: TemplateConfig = Field(default_factory=TemplateConfig)
    bootstrap: BootstrapConfig = Field(default_factory=BootstrapConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.  Parent directories are created.

        Returns:
            The path where the file was written.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "ScaffoldConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            RAPID_PROJECT_NAME, RAPID_POLICY, RAPID_CACHE_DIR,
            RAPID_TEMPLATE_REPO, RAPID_TEMPLATE_REF, RAPID_FETCH_STRATEGY,
            RAPID_ARCHIVE_URL, RAPID_FETCH_TIMEOUT,
            RAPID_PACKAGE_MANAGER, RAPID_INSTALL_TIMEOUT, RAPID_RUN_DEV.
        """
        template_kwargs: dict[str, Any] = {}
        if os.environ.get("RAPID_TEMPLATE_REPO"):
            template_kwargs["repo"] = os.environ["RAPID_TEMPLATE_REPO"]
        if os.environ.get("RAPID_TEMPLATE_REF"):
            template_kwargs["ref"] = os.environ["RAPID_TEMPLATE_REF"]
        if os.environ.get("RAPID_FETCH_STRATEGY"):
            template_kwargs["strategy"] = os.environ["RAPID_FETCH_STRATEGY"]
        if os.environ.get("RAPID_ARCHIVE_URL"):
            template_kwargs["archive_url"] = os.environ["RAPID_ARCHIVE_URL"]
        if os.environ.get("RAPID_FETCH_TIMEOUT"):
            template_kwargs["timeout"] = int(os.environ["RAPID_FETCH_TIMEOUT"])

        bootstrap_kwargs: dict[str, Any] = {}
        if os.environ.get("RAPID_PACKAGE_MANAGER"):
            bootstrap_kwargs["package_manager"] = os.environ["RAPID_PACKAGE_MANAGER"]
        if os.environ.get("RAPID_INSTALL_TIMEOUT"):
            bootstrap_kwargs["install_timeout"] = int(os.environ["RAPID_INSTALL_TIMEOUT"])
        if os.environ.get("RAPID_RUN_DEV"):
            bootstrap_kwargs["run_dev"] = os.environ["RAPID_RUN_DEV"].lower() in ("1", "true", "yes")

        kwargs: dict[str, Any] = {}
        if os.environ.get("RAPID_PROJECT_NAME"):
            kwargs["default_project_name"] = os.environ["RAPID_PROJECT_NAME"]
        if os.environ.get("RAPID_POLICY"):
            kwargs["policy"] = ExistingDestPolicy(os.environ["RAPID_POLICY"])
        if os.environ.get("RAPID_CACHE_DIR"):
            kwargs["dependency_cache_dir"] = os.environ["RAPID_CACHE_DIR"]

        return cls(
            template=TemplateConfig(**template_kwargs),
            bootstrap=BootstrapConfig(**bootstrap_kwargs),
            **kwargs,
        )
