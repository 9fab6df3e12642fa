"""Git interface layer."""

from commitrules.git.adapter import GitError, get_hooks_dir, get_repo_root

__all__ = ["GitError", "get_hooks_dir", "get_repo_root"]
