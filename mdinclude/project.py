"""Locate the project root used to shorten paths in generated comments.

Generated comments and error backtraces name files relative to the root of
the git checkout that contains them, so output is stable regardless of where
the checkout lives on disk.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

from .errors import ProjectRootError


def locate_project_root(cwd: Path | None = None) -> Path:
    """Return the top-level directory of the git checkout containing ``cwd``.

    Parameters
    ----------
    cwd : Path, optional
        Directory to start from; defaults to the process working directory.

    Returns
    -------
    Path
        Absolute path reported by ``git rev-parse --show-toplevel``.

    Raises
    ------
    ProjectRootError
        If git is not installed or ``cwd`` is not inside a git checkout.
    """
    git = shutil.which("git")
    if not git:
        msg = "Unable to locate 'git' on PATH; pass project_root explicitly."
        raise ProjectRootError(msg)
    result = subprocess.run(  # noqa: S603 - fixed argument vector
        [git, "rev-parse", "--show-toplevel"],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=False,
    )
    if result.returncode != 0:
        msg = (
            "mdinclude must run inside a git project: the working directory or "
            "one of its parents must contain a .git directory."
        )
        raise ProjectRootError(msg)
    return Path(result.stdout.strip())


def path_in_project(path: Path | str, root: Path | None) -> str:
    """Return ``path`` relative to ``root`` when possible, otherwise unchanged."""
    text = os.fspath(path)
    if root is None:
        return text
    try:
        return Path(text).relative_to(root).as_posix()
    except ValueError:
        return text


__all__ = ["locate_project_root", "path_in_project"]
