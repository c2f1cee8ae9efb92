"""The scaffold engine.

Takes a staged template tree and a selected design-system variant and
assembles the final project layout in six strictly ordered steps:

1. Ensure the destination exists and apply the existing-destination policy.
2. Copy the shared skeleton, filtering out every variant folder and every
   file a later step places explicitly.
3. Relocate the active variant's pieces per :data:`RELOCATION_RULES`.
4. Install the variant's ``package.json`` at the project root.
5. Sweep any variant folder out of the destination.
6. Remove generator-internal files.

All validation happens before step 1, so a rejected run never touches the
destination.  The template tree is only ever read.
"""

from __future__ import annotations

import asyncio
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ..config import ExistingDestPolicy
from ..errors import InvalidInputError, RelocationError, SoftMissingWarning
from ..utils import console, print_warning
from .policy import check_destination, prepare_destination
from .rules import (
    CANONICAL_DIRS,
    GENERATOR_FILES,
    GENERATOR_METADATA,
    MANIFEST_NAME,
    RELOCATION_RULES,
    REQUIRED_SKELETON,
    VCS_METADATA_DIRS,
    RelocationRule,
    Variant,
    get_variant,
    variant_folders,
)


@dataclass
class ScaffoldReport:
    """What a successful scaffold produced."""

    destination: Path
    variant: Variant
    relocated: list[str] = field(default_factory=list)
    warnings: list[SoftMissingWarning] = field(default_factory=list)
    cache_preserved: bool = False


def make_skeleton_filter(
    template_root: Path, cache_dir: str = "node_modules"
) -> Callable[[str, list[str]], set[str]]:
    """Build the ``ignore`` callable used for the skeleton copy.

    Variant folders and version-control metadata are skipped at every depth.
    At the template root the manifest, the generator's own files and the
    dependency cache are skipped as well.
    """
    root = os.path.abspath(template_root)
    everywhere = variant_folders() | frozenset(VCS_METADATA_DIRS)
    at_root = frozenset(
        (MANIFEST_NAME, cache_dir, *GENERATOR_FILES, *GENERATOR_METADATA)
    )

    def _ignore(directory: str, names: list[str]) -> set[str]:
        skipped = {n for n in names if n in everywhere}
        if os.path.abspath(directory) == root:
            skipped.update(n for n in names if n in at_root)
        return skipped

    return _ignore


class ScaffoldEngine:
    """Transplants one variant of a template tree into a project directory.

    Args:
        rules: Relocation rule table; defaults to :data:`RELOCATION_RULES`.
        cache_dir: Name of the dependency cache directory.
    """

    def __init__(
        self,
        rules: tuple[RelocationRule, ...] = RELOCATION_RULES,
        cache_dir: str = "node_modules",
    ) -> None:
        self.rules = rules
        self.cache_dir = cache_dir

    # -- Public API --------------------------------------------------------

    async def scaffold(
        self,
        template_tree: str | Path,
        variant: str | Variant,
        dest_path: str | Path,
        policy: ExistingDestPolicy = ExistingDestPolicy.PRESERVE_CACHE,
    ) -> ScaffoldReport:
        """Assemble the project at *dest_path* from *template_tree*.

        Args:
            template_tree: Root of the staged template snapshot.
            variant: Variant name or :class:`Variant`.
            dest_path: Project directory; created if absent.
            policy: What to do when *dest_path* already has content.

        Returns:
            A :class:`ScaffoldReport` listing relocations and soft-missing
            warnings.

        Raises:
            InvalidInputError: Unknown variant or template without its shared
                skeleton, or a destination that overlaps the template
                tree.  Raised before any destination mutation.
            DestinationConflictError: *dest_path* cannot be used under
                *policy*.  Raised before any destination mutation.
            RelocationError: A filesystem operation failed mid-run.
        """
        template_root = Path(template_tree).resolve()
        dest = Path(dest_path)

        # Pre-flight: nothing below may touch the destination until all pass.
        selected = get_variant(variant)
        self._check_template(template_root)
        self._check_overlap(template_root, dest)
        check_destination(dest, policy)

        report = ScaffoldReport(destination=dest, variant=selected)
        variant_dir = selected.source_dir(template_root)

        # 1. Prepare destination
        console.print(f"  [dim]Preparing {dest} ({policy.value})[/dim]")
        report.cache_preserved = await asyncio.to_thread(
            prepare_destination, dest, policy, self.cache_dir
        )

        # 2. Shared skeleton, variant folders filtered out during the copy
        console.print("  [dim]Copying shared skeleton[/dim]")
        await self._guarded(
            "copy-skeleton",
            "",
            template_root,
            shutil.copytree,
            template_root,
            dest,
            ignore=make_skeleton_filter(template_root, self.cache_dir),
            symlinks=True,
            dirs_exist_ok=True,
        )

        # 3. Relocation rules
        console.print(f"  [dim]Relocating {selected.name} assets[/dim]")
        for rel in CANONICAL_DIRS:
            await self._guarded(
                "relocate", "", dest / rel, (dest / rel).mkdir, parents=True, exist_ok=True
            )
        if variant_dir.is_dir():
            for rule in self.rules:
                await self._apply_rule(rule, variant_dir, dest, report)
        else:
            self._soft_missing(
                report, "variant", variant_dir, f"{selected.folder} is missing from the template"
            )

        # 4. Variant manifest is authoritative for dependencies
        await self._install_manifest(template_root, variant_dir, dest, report)

        # 5. No variant folder may survive anywhere in the destination
        await self._guarded("remove-variants", "", dest, self._sweep_variant_folders, dest)

        # 6. Generator-internal files never ship
        await self._guarded("remove-generator-files", "", dest, self._remove_generator_files, dest)

        return report

    # -- Pre-flight --------------------------------------------------------

    @staticmethod
    def _check_template(template_root: Path) -> None:
        if not template_root.is_dir():
            raise InvalidInputError(
                "Template tree does not exist.", path=template_root, step="preflight"
            )
        missing = [name for name in REQUIRED_SKELETON if not (template_root / name).is_dir()]
        if missing:
            raise InvalidInputError(
                f"Template is missing its shared skeleton: {', '.join(missing)}",
                path=template_root,
                step="preflight",
            )

    @staticmethod
    def _check_overlap(template_root: Path, dest: Path) -> None:
        target = dest.resolve()
        if (
            target == template_root
            or target.is_relative_to(template_root)
            or template_root.is_relative_to(target)
        ):
            raise InvalidInputError(
                "Destination and template tree overlap.",
                path=target,
                step="preflight",
            )

    # -- Steps -------------------------------------------------------------

    async def _apply_rule(
        self,
        rule: RelocationRule,
        variant_dir: Path,
        dest: Path,
        report: ScaffoldReport,
    ) -> None:
        source = rule.find_source(variant_dir)
        if source is None:
            if rule.optional:
                console.print(f"  [dim]No {rule.key} shipped; skipping[/dim]")
            else:
                self._soft_missing(
                    report,
                    rule.key,
                    variant_dir / rule.sources[0],
                    f"{' / '.join(rule.sources)} not found in {variant_dir.name}",
                )
            return

        target = rule.destination_for(source, dest)
        await self._guarded("relocate", rule.key, source, _copy_entry, source, target)
        report.relocated.append(target.relative_to(dest).as_posix())
        console.print(f"  [green]+[/green] {rule.key} -> {target.relative_to(dest).as_posix()}")

    async def _install_manifest(
        self,
        template_root: Path,
        variant_dir: Path,
        dest: Path,
        report: ScaffoldReport,
    ) -> None:
        manifest = variant_dir / MANIFEST_NAME
        if not manifest.is_file():
            self._soft_missing(
                report,
                "manifest",
                manifest,
                f"{MANIFEST_NAME} not found in {variant_dir.name}; using the template root manifest",
            )
            manifest = template_root / MANIFEST_NAME
            if not manifest.is_file():
                self._soft_missing(
                    report, "manifest", manifest, f"template has no root {MANIFEST_NAME} either"
                )
                return

        await self._guarded(
            "install-manifest", "manifest", manifest, _copy_entry, manifest, dest / MANIFEST_NAME
        )
        report.relocated.append(MANIFEST_NAME)
        console.print(f"  [green]+[/green] manifest -> {MANIFEST_NAME}")

    def _sweep_variant_folders(self, dest: Path) -> None:
        folders = variant_folders()
        for current, dirnames, _ in os.walk(dest):
            if os.path.abspath(current) == os.path.abspath(dest) and self.cache_dir in dirnames:
                dirnames.remove(self.cache_dir)
            for name in [d for d in dirnames if d in folders]:
                path = Path(current) / name
                if path.is_symlink():
                    path.unlink()
                else:
                    shutil.rmtree(path)
                dirnames.remove(name)
                console.print(f"  [dim]Removed variant folder {path.relative_to(dest)}[/dim]")

    @staticmethod
    def _remove_generator_files(dest: Path) -> None:
        for name in GENERATOR_FILES:
            path = dest / name
            if path.is_file() or path.is_symlink():
                path.unlink()
                console.print(f"  [dim]Removed generator file {name}[/dim]")

    # -- Helpers -----------------------------------------------------------

    @staticmethod
    def _soft_missing(report: ScaffoldReport, rule: str, path: Path, message: str) -> None:
        warning = SoftMissingWarning(rule=rule, path=path, message=message)
        report.warnings.append(warning)
        print_warning(f"  ! {warning}")

    @staticmethod
    async def _guarded(step: str, rule: str, path: Path, func, *args, **kwargs):
        """Run a blocking filesystem call, converting ``OSError`` to ``RelocationError``."""
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except OSError as exc:
            raise RelocationError(
                f"Step {step!r} failed: {exc}",
                path=getattr(exc, "filename", None) or path,
                step=step,
                rule=rule,
                cause=exc,
            ) from exc


def _copy_entry(source: Path, target: Path) -> None:
    """Copy a file or directory to *target*, creating parent directories."""
    target.parent.mkdir(parents=True, exist_ok=True)
    if source.is_dir():
        shutil.copytree(source, target, symlinks=True, dirs_exist_ok=True)
    else:
        shutil.copy2(source, target)
