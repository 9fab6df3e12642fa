"""Commit-msg hook installer — commitrules install / uninstall.

git runs ``commit-msg`` with one argument, the path of the file holding the
proposed message, and aborts the commit when the hook exits non-zero. The
installed script hands that path straight to ``commitrules check`` so the
hook's exit status is the validation verdict.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from commitrules.git.adapter import GitError, get_hooks_dir

HOOK_NAME = "commit-msg"
MARKER = "# commitrules-hook"

HOOK_SCRIPT = f"""\
#!/bin/sh
{MARKER}
# git passes the commit message file as $1. Remove with: commitrules uninstall
if ! command -v commitrules >/dev/null 2>&1; then
    echo "commitrules: not found on PATH, commit message not checked" >&2
    exit 0
fi
exec commitrules check "$1"
"""


@dataclass(frozen=True)
class CommitMsgHook:
    """The ``commit-msg`` hook file of one repository."""

    path: Path

    @classmethod
    def for_repo(cls, repo_root: Path) -> "CommitMsgHook":
        return cls(get_hooks_dir(repo_root) / HOOK_NAME)

    def read(self) -> str:
        """Current script text, or ``""`` when no hook is installed."""
        try:
            return self.path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return ""

    @property
    def exists(self) -> bool:
        return self.path.is_file()

    @property
    def is_managed(self) -> bool:
        """True when the hook was written by commitrules."""
        return MARKER in self.read().splitlines()

    def write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(HOOK_SCRIPT, encoding="utf-8")
        try:
            self.path.chmod(0o755)
        except OSError:
            pass  # Windows has no exec bit


def install_hook(repo_root: Path, *, force: bool = False) -> Tuple[bool, str]:
    """Install commitrules as the repository's commit-msg hook.

    Returns (success, message). A hook written by another tool is only
    replaced with *force*.
    """
    try:
        hook = CommitMsgHook.for_repo(repo_root)
    except GitError as exc:
        return False, f"Not a git repository: {repo_root} ({exc})"

    if hook.is_managed:
        return True, f"commitrules {HOOK_NAME} hook is already installed at {hook.path}"
    if hook.exists and not force:
        return (
            False,
            f"A {HOOK_NAME} hook already exists at {hook.path}. "
            "Use --force to replace it, or call 'commitrules check \"$1\"' from it.",
        )

    hook.write()
    return True, f"Installed commitrules {HOOK_NAME} hook at {hook.path}"


def uninstall_hook(repo_root: Path) -> Tuple[bool, str]:
    """Remove the commit-msg hook if commitrules installed it.

    Returns (success, message).
    """
    try:
        hook = CommitMsgHook.for_repo(repo_root)
    except GitError as exc:
        return False, f"Not a git repository: {repo_root} ({exc})"

    if not hook.exists:
        return True, f"No {HOOK_NAME} hook at {hook.path}, nothing to remove."
    if not hook.is_managed:
        return False, f"{hook.path} was not installed by commitrules; leaving it in place."

    hook.path.unlink()
    return True, f"Removed commitrules {HOOK_NAME} hook from {hook.path}"
