"""Interactive collection of the project name and design system."""

from __future__ import annotations

from pathlib import Path

from rich.prompt import Prompt

from .config import ExistingDestPolicy, ScaffoldConfig
from .errors import InvalidInputError
from .resolver import resolve
from .scaffolder.rules import variant_names
from .utils import console, is_empty_dir, print_warning


def ask_project_name(config: ScaffoldConfig, cwd: Path) -> str:
    """Ask for the project folder name until it resolves to a usable path.

    Under the ``fail`` policy a folder that already has content is refused
    and the question is asked again.
    """
    while True:
        name = Prompt.ask(
            "What is the name of your project folder?",
            default=config.default_project_name,
            console=console,
        )
        try:
            dest = resolve(name, cwd)
        except InvalidInputError as exc:
            print_warning(str(exc))
            continue
        if config.policy is ExistingDestPolicy.FAIL and dest.exists() and not is_empty_dir(dest):
            print_warning(f"This folder *{dest}* already exists")
            continue
        return name


def ask_variant() -> str:
    """Ask which design system to use."""
    choices = variant_names()
    return Prompt.ask(
        "Which design system would you like to use?",
        choices=choices,
        default=choices[0],
        console=console,
    )


def collect_answers(
    config: ScaffoldConfig,
    cwd: Path,
    project_name: str | None = None,
    variant: str | None = None,
) -> tuple[str, str]:
    """Return ``(project_name, variant)``, prompting only for missing values."""
    if project_name is None:
        project_name = ask_project_name(config, cwd)
    if variant is None:
        variant = ask_variant()
    return project_name, variant
