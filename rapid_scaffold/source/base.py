"""Template source interface and shared post-fetch cleanup."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Protocol

from ..errors import FetchError
from ..scaffolder.rules import VCS_METADATA_DIRS


class TemplateSource(Protocol):
    """Anything that can stage a template snapshot into a local directory."""

    async def fetch(self, remote_ref: str, dest: str | Path) -> Path: ...


def strip_vcs_metadata(root: Path) -> None:
    """Remove version-control metadata from the top of a fetched tree.

    Raises:
        FetchError: If the fetched tree is missing or the metadata cannot be
            removed.
    """
    if not root.is_dir():
        raise FetchError("Fetch produced no template directory.", path=root, step="fetch")
    for name in VCS_METADATA_DIRS:
        path = root / name
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            elif path.exists() or path.is_symlink():
                path.unlink()
        except OSError as exc:
            raise FetchError(
                f"Could not remove {name} from the template: {exc}",
                path=path,
                step="fetch",
                cause=exc,
            ) from exc
