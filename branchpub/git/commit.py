"""Git commit operations."""

from pathlib import Path

from branchpub.git.runner import run_git, GitResult


def unstage_all(worktree: Path) -> GitResult:
    """Unstage everything in the index. The working tree is untouched."""
    return run_git(["reset"], worktree)


def stage_all(worktree: Path) -> GitResult:
    """Stage all changes (new, modified, deleted)."""
    return run_git(["add", "-A", "."], worktree)


def create_commit(worktree: Path, message: str) -> GitResult:
    """Create a commit with the given message."""
    return run_git(["commit", "-m", message], worktree)


def commit_empty(worktree: Path, message: str) -> GitResult:
    """Create a commit that records no file changes."""
    return run_git(["commit", "--allow-empty", "-m", message], worktree)


def reset_index_to(worktree: Path, ref: str) -> GitResult:
    """Move the current branch and index to ref, leaving files on disk alone."""
    return run_git(["reset", "--mixed", "--quiet", ref], worktree)
