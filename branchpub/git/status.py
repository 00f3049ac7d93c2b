"""Git status operations."""

from pathlib import Path

from branchpub.git.runner import run_git, GitResult


def get_status_porcelain(worktree: Path) -> GitResult:
    """Get git status in porcelain format.

    Returns the full GitResult; callers must tell a failed query
    apart from a clean tree.
    """
    return run_git(["status", "--porcelain"], worktree)
