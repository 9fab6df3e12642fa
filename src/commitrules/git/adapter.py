"""Git subprocess wrapper — repository and hook directory discovery."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


def git(*args: str, cwd: Optional[Path] = None, timeout: int = 30) -> str:
    """Run ``git <args>`` in *cwd* and return its stripped stdout."""
    command = ["git", *args]
    try:
        proc = subprocess.run(
            command,
            cwd=cwd or Path.cwd(),
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"{' '.join(command)} timed out after {timeout}s")

    if proc.returncode != 0:
        detail = proc.stderr.strip() or f"exit status {proc.returncode}"
        raise GitError(f"{' '.join(command)} failed: {detail}")
    return proc.stdout.strip()


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the top-level directory of the working tree containing *cwd*."""
    return Path(git("rev-parse", "--show-toplevel", cwd=cwd))


def get_hooks_dir(repo_root: Path) -> Path:
    """Return the directory git runs hooks from.

    Honours ``core.hooksPath`` and linked worktrees; git reports the path
    relative to *repo_root* unless it is absolute.
    """
    return repo_root / git("rev-parse", "--git-path", "hooks", cwd=repo_root)
