"""Shared pytest fixtures for the Rapid Scaffold test suite.

Provides reusable fixtures for:
- A synthetic template tree shaped like the real design-system template
- Temporary destination directories
- Mock subprocess helpers
- A real local git repository holding the template (integration tests)
"""

from __future__ import annotations

import json
import subprocess
from collections.abc import Callable, Iterable
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest


# ---------------------------------------------------------------------------
# Template layout
# ---------------------------------------------------------------------------

VARIANT_FOLDERS: dict[str, str] = {
    "material-ui": "components-materialUi",
    "antd": "components-antd",
    "tailwind": "components-tailwind",
}

SKELETON_FILES: dict[str, str] = {
    "index.js": "#!/usr/bin/env node\n// generator entry point\n",
    "package.json": json.dumps({"name": "rapid-framework-generator", "bin": "index.js"}),
    "pnpm-lock.yaml": "lockfileVersion: '9.0'\n# generator lockfile\n",
    "index.html": "<!doctype html>\n<div id=\"root\"></div>\n",
    "LICENSE": "MIT\n",
    "README.md": "# Rapid Framework\n",
    "tsconfig.json": "{}\n",
    "tsconfig.node.json": "{}\n",
    "vite.config.ts": "export default {}\n",
    "public/vite.svg": "<svg/>\n",
    "src/main.tsx": "import App from './App'\n",
    "src/index.css": "body {}\n",
    "src/assets/react.svg": "<svg/>\n",
}


def _variant_files(variant: str) -> dict[str, str]:
    return {
        "hook/useToggle.ts": f"// {variant} hook\n",
        "components/Button.tsx": f"// {variant} button\n",
        "pages/Home.tsx": f"// {variant} home\n",
        "shared-components/Layout.tsx": f"// {variant} layout\n",
        "Themes/theme.ts": f"// {variant} theme\n",
        "App.tsx": f"// {variant} app\n",
        "package.json": json.dumps({"name": f"{variant}-app", "dependencies": {variant: "*"}}),
    }


def relative_paths(root: Path) -> set[str]:
    """Return every file and directory below *root* as POSIX relative paths."""
    return {p.relative_to(root).as_posix() for p in root.rglob("*")}


def build_template(root: Path, without: Iterable[str] = ()) -> Path:
    """Write a template tree under *root*.

    *without* lists template-relative paths to leave out, e.g.
    ``"src/components-tailwind/Themes/theme.ts"`` or a whole directory prefix
    such as ``"src/components-antd/"``.
    """
    omitted = tuple(without)
    files = dict(SKELETON_FILES)
    for variant, folder in VARIANT_FOLDERS.items():
        for rel, content in _variant_files(variant).items():
            files[f"src/{folder}/{rel}"] = content

    for rel, content in files.items():
        if any(rel == o or rel.startswith(o) for o in omitted):
            continue
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_template(tmp_path: Path) -> Callable[..., Path]:
    """Factory building a template tree in a fresh directory."""
    counter = {"n": 0}

    def factory(without: Iterable[str] = ()) -> Path:
        counter["n"] += 1
        return build_template(tmp_path / f"template-{counter['n']}", without)

    return factory


@pytest.fixture
def template_tree(make_template) -> Path:
    """A complete template tree with all three variants."""
    return make_template()


@pytest.fixture
def dest_dir(tmp_path: Path) -> Path:
    """Destination path for a scaffolded project (not created)."""
    return tmp_path / "work" / "my-app"


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


# ---------------------------------------------------------------------------
# Git
# ---------------------------------------------------------------------------

@pytest.fixture
def template_git_repo(tmp_path: Path) -> Path:
    """A real git repository whose working tree is the template.

    Used by integration tests that exercise an actual ``git clone``.
    """
    repo_dir = build_template(tmp_path / "template-repo")
    subprocess.run(["git", "init"], cwd=repo_dir, check=True, capture_output=True)
    subprocess.run(
        ["git", "config", "user.email", "test@rapid-scaffold.local"],
        cwd=repo_dir, check=True, capture_output=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Rapid Scaffold Test"],
        cwd=repo_dir, check=True, capture_output=True,
    )
    subprocess.run(
        ["git", "config", "commit.gpgsign", "false"],
        cwd=repo_dir, check=True, capture_output=True,
    )
    subprocess.run(["git", "add", "."], cwd=repo_dir, check=True, capture_output=True)
    subprocess.run(
        ["git", "commit", "-m", "Initial template"],
        cwd=repo_dir, check=True, capture_output=True,
    )
    yield repo_dir
