"""Rapid Scaffold run orchestrator.

Drives one generator run end to end:

1. RESOLVE   -- turn the project name into a destination and validate inputs.
2. FETCH     -- stage a history-less template snapshot in a temp directory.
3. SCAFFOLD  -- transplant the selected design system into the destination.
4. BOOTSTRAP -- install dependencies and optionally start the dev server.

Usage::

    rapid-scaffold my-app --variant antd
    rapid-scaffold                      # prompts for name and design system
    python -m rapid_scaffold.pipeline my-app --variant tailwind --skip-install
"""

from __future__ import annotations

import asyncio
import sys
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path

from .bootstrap import BootstrapRunner
from .config import ExistingDestPolicy, ScaffoldConfig
from .errors import ScaffoldError, SoftMissingWarning
from .prompt import collect_answers
from .resolver import resolve
from .scaffolder import ScaffoldEngine, ScaffoldReport, check_destination, get_variant
from .scaffolder.rules import variant_names
from .source import TemplateSource, make_source
from .utils import (
    console,
    format_duration,
    print_error,
    print_step_header,
    print_success,
    print_summary_table,
    print_warning,
)


# ---------------------------------------------------------------------------
# Run outcome
# ---------------------------------------------------------------------------


@dataclass
class RunOutcome:
    """Result of a run: success, or a failure tagged with its kind."""

    success: bool
    kind: str | None = None
    message: str = ""
    path: Path | None = None
    step: str = ""
    rule: str = ""
    cause: str = ""
    destination: Path | None = None
    variant: str | None = None
    warnings: list[SoftMissingWarning] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1

    @classmethod
    def from_error(cls, exc: ScaffoldError, **kwargs) -> "RunOutcome":
        """Build a failed outcome carrying the error's context."""
        return cls(
            success=False,
            kind=exc.kind,
            message=str(exc),
            path=exc.path,
            step=exc.step,
            rule=exc.rule,
            cause=f"{type(exc.cause).__name__}: {exc.cause}" if exc.cause else "",
            **kwargs,
        )


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class Pipeline:
    """Runs resolve, fetch, scaffold and bootstrap in order.

    Attributes:
        config: Run configuration.
        source: Template source used for the fetch stage.
        engine: Scaffold engine.
        bootstrap: Package-manager runner.
    """

    def __init__(
        self,
        config: ScaffoldConfig | None = None,
        source: TemplateSource | None = None,
        engine: ScaffoldEngine | None = None,
        bootstrap: BootstrapRunner | None = None,
    ) -> None:
        self.config = config or ScaffoldConfig()
        self.source = source or make_source(self.config.template)
        self.engine = engine or ScaffoldEngine(cache_dir=self.config.dependency_cache_dir)
        self.bootstrap = bootstrap or BootstrapRunner(self.config.bootstrap)

    async def run(
        self,
        project_name: str,
        variant: str,
        cwd: str | Path | None = None,
    ) -> RunOutcome:
        """Execute one run and report its outcome.

        Fatal errors never propagate; they become a failed :class:`RunOutcome`
        after a diagnostic has been printed.
        """
        started = time.monotonic()
        report: ScaffoldReport | None = None
        dest: Path | None = None

        try:
            # 1. Resolve and validate before anything is fetched or written
            print_step_header("Resolve")
            dest = resolve(project_name, cwd or Path.cwd())
            selected = get_variant(variant)
            check_destination(dest, self.config.policy)
            console.print(f"  [green]+[/green] {dest} ({selected.name})")

            with tempfile.TemporaryDirectory(prefix="rapid-scaffold-") as staging:
                # 2. Fetch
                print_step_header("Fetch template")
                template = await self.source.fetch(
                    self.config.template.repo, Path(staging) / "template"
                )
                console.print("  [green]+[/green] Template staged")

                # 3. Scaffold
                print_step_header("Scaffold", color="bright_green")
                report = await self.engine.scaffold(
                    template, selected, dest, self.config.policy
                )

            # 4. Bootstrap
            if not self.config.bootstrap.skip_install:
                print_step_header("Install dependencies", color="bright_yellow")
                await self.bootstrap.install(dest)
                print_success(f"{self.config.bootstrap.package_manager} install completed successfully.")

            outcome = self._finish(
                RunOutcome(success=True, destination=dest, variant=selected.name),
                report,
                started,
            )
            self._print_summary(outcome, report)

            if self.config.bootstrap.run_dev:
                print_step_header("Dev server", color="bright_magenta")
                await self.bootstrap.run_dev(dest)

        except ScaffoldError as exc:
            outcome = self._finish(
                RunOutcome.from_error(exc, destination=dest, variant=variant),
                report,
                started,
            )
            print_error(f"Error ({exc.kind}): {exc.describe()}")
            self._print_skipped(outcome.warnings)

        return outcome

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    @staticmethod
    def _finish(
        outcome: RunOutcome, report: ScaffoldReport | None, started: float
    ) -> RunOutcome:
        if report is not None:
            outcome.warnings = list(report.warnings)
        outcome.duration_seconds = time.monotonic() - started
        return outcome

    def _print_summary(self, outcome: RunOutcome, report: ScaffoldReport | None) -> None:
        data = {
            "Project": str(outcome.destination),
            "Design system": outcome.variant or "",
            "Relocated": str(len(report.relocated)) if report else "0",
            "Dependency cache": "preserved" if report and report.cache_preserved else "fresh",
            "Skipped": str(len(outcome.warnings)),
            "Duration": format_duration(outcome.duration_seconds),
        }
        print_summary_table(data, title="Scaffold Summary")
        self._print_skipped(outcome.warnings)

        pm = self.config.bootstrap.package_manager
        console.print("Next steps:")
        console.print(f"  cd {outcome.destination}")
        if self.config.bootstrap.skip_install:
            console.print(f"  {pm} {' '.join(self.config.bootstrap.install_args)}")
        console.print(f"  {pm} {' '.join(self.config.bootstrap.dev_args)}")

    @staticmethod
    def _print_skipped(warnings: list[SoftMissingWarning]) -> None:
        if not warnings:
            return
        print_warning(f"Skipped {len(warnings)} missing template piece(s):")
        for warning in warnings:
            print_warning(f"  - {warning}")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``rapid-scaffold``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="rapid-scaffold",
        description="Rapid Scaffold -- create a frontend project from the design-system template",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  rapid-scaffold\n"
            "  rapid-scaffold my-app --variant antd\n"
            "  rapid-scaffold my-app --variant tailwind --fetch archive --skip-install\n"
        ),
    )
    parser.add_argument("name", nargs="?", help="Project folder name (prompted when omitted)")
    parser.add_argument(
        "--variant", "-v",
        choices=variant_names(),
        help="Design system (prompted when omitted)",
    )
    parser.add_argument(
        "--policy",
        choices=[p.value for p in ExistingDestPolicy],
        help="What to do with an existing destination (default: preserve-cache)",
    )
    parser.add_argument("--template", help="Template repository URL")
    parser.add_argument("--ref", help="Template branch or tag")
    parser.add_argument("--fetch", choices=["git", "archive"], help="Template fetch strategy")
    parser.add_argument("--package-manager", help="Package manager executable (default: pnpm)")
    parser.add_argument("--run-dev", action="store_true", help="Start the dev server after install")
    parser.add_argument("--skip-install", action="store_true", help="Do not install dependencies")
    parser.add_argument("--config", type=Path, help="Load settings from a JSON config file")

    args = parser.parse_args(argv)

    try:
        config = ScaffoldConfig.load(args.config) if args.config else ScaffoldConfig.from_env()
    except (OSError, ValueError) as exc:
        console.print(f"[bold red]Error:[/bold red] Invalid configuration: {exc}")
        sys.exit(1)

    if args.policy:
        config.policy = ExistingDestPolicy(args.policy)
    if args.template:
        config.template.repo = args.template
    if args.ref:
        config.template.ref = args.ref
    if args.fetch:
        config.template.strategy = args.fetch
    if args.package_manager:
        config.bootstrap.package_manager = args.package_manager
    if args.run_dev:
        config.bootstrap.run_dev = True
    if args.skip_install:
        config.bootstrap.skip_install = True

    cwd = Path.cwd()
    try:
        project_name, variant = collect_answers(config, cwd, args.name, args.variant)
    except (KeyboardInterrupt, EOFError):
        console.print("\nInterrupted by user")
        sys.exit(130)

    pipeline = Pipeline(config)
    try:
        outcome = asyncio.run(pipeline.run(project_name, variant, cwd=cwd))
    except KeyboardInterrupt:
        console.print("\nInterrupted by user")
        sys.exit(130)

    if outcome.success:
        console.print("[bold green]Project created successfully![/bold green]")
    else:
        console.print("[bold red]Scaffolding failed.[/bold red]")
    sys.exit(outcome.exit_code)


if __name__ == "__main__":
    main()
