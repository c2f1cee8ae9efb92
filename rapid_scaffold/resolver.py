"""Turns a user-supplied project name into an absolute destination path."""

from __future__ import annotations

import os
from pathlib import Path

from .errors import InvalidInputError


def resolve(name_input: str, cwd: str | Path) -> Path:
    """Resolve *name_input* against *cwd*.

    ``~`` is expanded and ``.``/``..`` segments are collapsed lexically;
    symlinks are not followed and existence is not checked.

    Raises:
        InvalidInputError: If the name is empty, or if it resolves to *cwd*,
            one of its ancestors, or a filesystem root.  Scaffolding into any
            of those would clear the caller's own working tree.
    """
    name = (name_input or "").strip()
    if not name:
        raise InvalidInputError("Project name must not be empty.")

    base = Path(os.path.normpath(os.path.abspath(os.path.expanduser(str(cwd)))))
    target = Path(os.path.normpath(os.path.join(base, os.path.expanduser(name))))

    if target == Path(target.anchor):
        raise InvalidInputError(
            f"Project name {name_input!r} resolves to a filesystem root.", path=target
        )
    if target == base or target in base.parents:
        raise InvalidInputError(
            f"Project name {name_input!r} resolves to the current directory "
            "or one of its parents.",
            path=target,
        )
    return target
