"""Design-system variants and the relocation rule table.

The template ships one ``src/components-<Variant>`` folder per design
system.  Scaffolding keeps exactly one of them and relocates its pieces into
a canonical layout described by :data:`RELOCATION_RULES`.  Supporting a new
design system means adding a row to :data:`VARIANTS`; the engine itself has
no per-variant branches.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..errors import InvalidInputError


# Directory inside the template that holds the variant folders.
VARIANTS_PARENT = "src"


@dataclass(frozen=True)
class Variant:
    """A selectable design system and its folder in the template."""

    name: str
    folder: str

    def source_dir(self, template_root: Path) -> Path:
        """Return the variant's folder inside *template_root*."""
        return template_root / VARIANTS_PARENT / self.folder


@dataclass(frozen=True)
class RelocationRule:
    """Maps a piece of the active variant folder to its canonical home.

    Attributes:
        key: Short identifier used in warnings and errors.
        sources: Candidate names inside the variant folder; the first one
            that exists is used.
        destination: Path relative to the project root.  ``{name}`` is
            replaced by the matched source name.
        optional: Absent optional sources are skipped without a warning.
    """

    key: str
    sources: tuple[str, ...]
    destination: str
    optional: bool = False

    def find_source(self, variant_dir: Path) -> Path | None:
        """Return the first existing source candidate, or ``None``."""
        for candidate in self.sources:
            path = variant_dir / candidate
            if path.exists():
                return path
        return None

    def destination_for(self, source: Path, project_root: Path) -> Path:
        """Return the absolute destination for a matched *source*."""
        return project_root / self.destination.format(name=source.name)


VARIANTS: tuple[Variant, ...] = (
    Variant(name="material-ui", folder="components-materialUi"),
    Variant(name="antd", folder="components-antd"),
    Variant(name="tailwind", folder="components-tailwind"),
)

RELOCATION_RULES: tuple[RelocationRule, ...] = (
    RelocationRule("hooks", ("hook",), "src/hooks"),
    RelocationRule("components", ("components",), "src/components/components"),
    RelocationRule("pages", ("pages",), "src/components/pages"),
    RelocationRule("shared-components", ("shared-components",), "src/components/shared-components"),
    RelocationRule("theme", ("Themes", "Theme"), "src/utils/Theme"),
    RelocationRule("app-entry", ("App.tsx", "App.jsx", "App.ts", "App.js"), "src/{name}"),
    RelocationRule(
        "lockfile",
        ("pnpm-lock.yaml", "package-lock.json", "yarn.lock"),
        "{name}",
        optional=True,
    ),
)

# Directories that exist in every scaffolded project, even when the variant
# contributes nothing to them.
CANONICAL_DIRS: tuple[str, ...] = ("src/hooks", "src/components", "src/utils")

# Shared skeleton entries the template must provide.
REQUIRED_SKELETON: tuple[str, ...] = ("src", "public")

MANIFEST_NAME = "package.json"

# Files at the template root that belong to the generator, not the project.
GENERATOR_FILES: tuple[str, ...] = ("index.js",)
GENERATOR_METADATA: tuple[str, ...] = ("pnpm-lock.yaml", "package-lock.json", "yarn.lock")

VCS_METADATA_DIRS: tuple[str, ...] = (".git",)


def variant_names() -> list[str]:
    """Return the names of all selectable variants, in display order."""
    return [v.name for v in VARIANTS]


def variant_folders() -> frozenset[str]:
    """Return the folder names of all variants."""
    return frozenset(v.folder for v in VARIANTS)


def get_variant(variant: str | Variant) -> Variant:
    """Look up a variant by name.

    Raises:
        InvalidInputError: If *variant* is not one of :data:`VARIANTS`.
    """
    if isinstance(variant, Variant):
        if variant in VARIANTS:
            return variant
        name = variant.name
    else:
        name = (variant or "").strip()
        for candidate in VARIANTS:
            if candidate.name == name:
                return candidate
    raise InvalidInputError(
        f"Unknown design system {name!r}. Choose one of: {', '.join(variant_names())}."
    )
