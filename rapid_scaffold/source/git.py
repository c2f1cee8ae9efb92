"""Shallow git snapshots of the template repository."""

from __future__ import annotations

import asyncio
from pathlib import Path

from ..errors import FetchError
from ..utils import console
from .base import strip_vcs_metadata


async def _run_git(
    *args: str,
    cwd: str | Path | None = None,
    timeout: float = 300.0,
) -> tuple[str, str]:
    """Run a git command asynchronously and return (stdout, stderr).

    Raises FetchError if git is missing, times out, or exits non-zero.
    """
    cmd = ["git"] + list(args)
    cmd_str = " ".join(cmd)

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(cwd) if cwd else None,
        )
    except FileNotFoundError as exc:
        raise FetchError(
            "git is not installed or not on PATH.", command=cmd_str, step="fetch", cause=exc
        ) from exc

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise FetchError(
            f"Git command timed out after {timeout}s: {cmd_str}",
            command=cmd_str,
            step="fetch",
        )

    stdout = stdout_bytes.decode("utf-8", errors="replace").strip()
    stderr = stderr_bytes.decode("utf-8", errors="replace").strip()

    if process.returncode != 0:
        raise FetchError(
            f"Git command failed (exit {process.returncode}): {cmd_str}\n{stderr}",
            command=cmd_str,
            stderr=stderr,
            step="fetch",
        )

    return stdout, stderr


class GitTemplateSource:
    """Fetches a depth-1 clone and strips its history.

    Args:
        ref: Branch or tag to clone; the remote's default branch when ``None``.
        timeout: Clone timeout in seconds.
    """

    def __init__(self, ref: str | None = None, timeout: float = 300.0) -> None:
        self.ref = ref
        self.timeout = timeout

    async def fetch(self, remote_ref: str, dest: str | Path) -> Path:
        """Clone *remote_ref* into *dest* and remove ``.git``.

        Returns:
            The populated template directory.

        Raises:
            FetchError: If the clone fails.
        """
        dest = Path(dest)
        args = ["clone", "--depth", "1", "--single-branch"]
        if self.ref:
            args += ["--branch", self.ref]
        args += [remote_ref, str(dest)]

        console.print(f"  [cyan]Cloning[/cyan] {remote_ref} (depth 1)...")
        await _run_git(*args, timeout=self.timeout)
        await asyncio.to_thread(strip_vcs_metadata, dest)
        return dest
