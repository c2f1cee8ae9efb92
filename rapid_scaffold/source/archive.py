"""Template snapshots downloaded as ``.tar.gz`` archives.

Useful where no ``git`` binary is available.  Hosting providers wrap the
archive contents in a single ``<repo>-<ref>/`` folder; that wrapper is
removed so the staged tree looks exactly like a clone.
"""

from __future__ import annotations

import asyncio
import io
import re
import shutil
import tarfile
import tempfile
from pathlib import Path

import httpx

from ..errors import FetchError
from ..utils import console
from .base import strip_vcs_metadata

_GITHUB_REPO = re.compile(r"^https://github\.com/(?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$")


def archive_url_for(remote_ref: str, ref: str | None = None) -> str:
    """Derive a tarball URL for *remote_ref*.

    GitHub repository URLs map to their ``/archive/<ref>.tar.gz`` endpoint.
    URLs that already point at a ``.tar.gz`` are returned unchanged.

    Raises:
        FetchError: If no archive URL can be derived.
    """
    if remote_ref.endswith((".tar.gz", ".tgz")):
        return remote_ref
    match = _GITHUB_REPO.match(remote_ref)
    if match is None:
        raise FetchError(
            f"Cannot derive an archive URL from {remote_ref!r}; set an explicit archive URL.",
            step="fetch",
        )
    return f"https://github.com/{match['owner']}/{match['repo']}/archive/{ref or 'HEAD'}.tar.gz"


def extract_archive(data: bytes, dest: Path) -> None:
    """Extract a gzipped tarball into *dest*, unwrapping a single root folder."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.TemporaryDirectory(dir=dest.parent, prefix=".extract-") as tmp:
        staging = Path(tmp)
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as archive:
            archive.extractall(staging, filter="data")

        entries = list(staging.iterdir())
        root = entries[0] if len(entries) == 1 and entries[0].is_dir() else staging

        if dest.exists():
            dest.rmdir()
        if root is staging:
            dest.mkdir()
            for entry in entries:
                shutil.move(str(entry), str(dest / entry.name))
        else:
            shutil.move(str(root), str(dest))


class ArchiveTemplateSource:
    """Fetches a template snapshot over HTTPS with ``httpx``.

    Args:
        ref: Branch or tag used when deriving a GitHub archive URL.
        archive_url: Explicit archive URL; overrides derivation.
        timeout: Download timeout in seconds.
        transport: Optional ``httpx`` transport (tests inject a mock).
    """

    def __init__(
        self,
        ref: str | None = None,
        archive_url: str | None = None,
        timeout: float = 300.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.ref = ref
        self.archive_url = archive_url
        self.timeout = timeout
        self.transport = transport

    async def fetch(self, remote_ref: str, dest: str | Path) -> Path:
        """Download and extract the snapshot for *remote_ref* into *dest*.

        Raises:
            FetchError: On HTTP failure or an unreadable archive.
        """
        dest = Path(dest)
        url = self.archive_url or archive_url_for(remote_ref, self.ref)
        console.print(f"  [cyan]Downloading[/cyan] {url}...")

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=15.0),
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                data = response.content
        except httpx.HTTPError as exc:
            raise FetchError(
                f"Template download failed: {exc}", command=f"GET {url}", step="fetch", cause=exc
            ) from exc

        try:
            await asyncio.to_thread(extract_archive, data, dest)
        except (tarfile.TarError, OSError) as exc:
            raise FetchError(
                f"Template archive could not be extracted: {exc}",
                path=dest,
                step="fetch",
                cause=exc,
            ) from exc

        await asyncio.to_thread(strip_vcs_metadata, dest)
        return dest
