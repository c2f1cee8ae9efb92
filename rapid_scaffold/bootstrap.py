"""Dependency installation and dev-server launch for a scaffolded project.

The package manager runs with the terminal attached so its own output is
what the user sees.  Its exit status is the only thing inspected.
"""

from __future__ import annotations

from pathlib import Path

from .config import BootstrapConfig
from .errors import BootstrapError
from .utils import console, run_command


class BootstrapRunner:
    """Runs the configured package manager inside a project directory."""

    def __init__(self, config: BootstrapConfig | None = None) -> None:
        self.config = config or BootstrapConfig()

    async def install(self, dest_path: str | Path) -> int:
        """Install dependencies in *dest_path*.

        Returns:
            The exit status (always ``0``; failures raise).

        Raises:
            BootstrapError: Non-zero exit, missing executable, or timeout.
        """
        cmd = [self.config.package_manager, *self.config.install_args]
        return await self._run(cmd, Path(dest_path), self.config.install_timeout, "install")

    async def run_dev(self, dest_path: str | Path) -> int:
        """Launch the project's dev server and wait for it to exit."""
        cmd = [self.config.package_manager, *self.config.dev_args]
        return await self._run(cmd, Path(dest_path), None, "dev-server")

    async def _run(self, cmd: list[str], cwd: Path, timeout: int | None, step: str) -> int:
        cmd_str = " ".join(cmd)
        console.print(f"[cyan]Running[/cyan] [bold]{cmd_str}[/bold] in {cwd}")
        try:
            returncode, _, _ = await run_command(cmd, cwd=cwd, timeout=timeout, capture=False)
        except FileNotFoundError as exc:
            raise BootstrapError(
                f"{cmd[0]} is not installed or not on PATH.",
                command=cmd_str,
                path=cwd,
                step=step,
                cause=exc,
            ) from exc
        except TimeoutError as exc:
            raise BootstrapError(str(exc), command=cmd_str, path=cwd, step=step, cause=exc) from exc

        if returncode != 0:
            raise BootstrapError(
                f"{cmd_str} failed (exit {returncode})",
                command=cmd_str,
                exit_code=returncode,
                path=cwd,
                step=step,
            )
        return returncode
