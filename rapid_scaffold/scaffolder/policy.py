"""Existing-destination handling.

Re-running the generator against a folder it already populated must not
force a full dependency reinstall, so the default policy clears everything
except the dependency cache.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from ..config import ExistingDestPolicy
from ..errors import DestinationConflictError, RelocationError
from ..utils import is_empty_dir


def check_destination(dest: Path, policy: ExistingDestPolicy) -> None:
    """Validate *dest* against *policy* without touching the filesystem.

    Raises:
        DestinationConflictError: If *dest* exists but is not a directory, or
            if it is non-empty under the ``fail`` policy.
    """
    if not dest.exists() and not dest.is_symlink():
        return
    if not dest.is_dir():
        raise DestinationConflictError(
            "Destination exists and is not a directory.", path=dest, step="preflight"
        )
    if policy is ExistingDestPolicy.FAIL and not is_empty_dir(dest):
        raise DestinationConflictError(
            "Destination already exists and is not empty.", path=dest, step="preflight"
        )


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def prepare_destination(
    dest: Path,
    policy: ExistingDestPolicy,
    cache_dir: str = "node_modules",
) -> bool:
    """Create or clear *dest* according to *policy*.

    Args:
        dest: Project directory.
        policy: Existing-destination policy.  Callers run
            :func:`check_destination` first.
        cache_dir: Name of the dependency cache directory kept under the
            ``preserve-cache`` policy.

    Returns:
        ``True`` if a dependency cache was found and preserved.

    Raises:
        RelocationError: If an entry cannot be created or removed.
    """
    try:
        if not dest.exists():
            dest.mkdir(parents=True)
            return False

        preserved = False
        for entry in list(dest.iterdir()):
            if policy is ExistingDestPolicy.PRESERVE_CACHE and entry.name == cache_dir:
                preserved = True
                continue
            _remove(entry)
        return preserved
    except OSError as exc:
        raise RelocationError(
            f"Could not prepare destination: {exc}",
            path=getattr(exc, "filename", None) or dest,
            step="prepare-destination",
            cause=exc,
        ) from exc
